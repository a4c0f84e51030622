"""
Tests de la configuración basada en pydantic-settings.
"""

import pytest
from pydantic import ValidationError

from weather_api.config import ApiConfig


class TestApiConfig:
    """Valores por defecto y variables WEATHER_API_*."""

    def test_defaults(self, monkeypatch):
        """Sin variables de entorno se usan los valores por defecto."""
        monkeypatch.delenv("WEATHER_API_PORT", raising=False)
        monkeypatch.delenv("WEATHER_API_LOG_LEVEL", raising=False)

        config = ApiConfig(_env_file=None)

        assert config.port == 4000
        assert config.decimal_places == 2
        assert config.invalid_date == "Invalid Date"

    def test_env_overrides(self, monkeypatch):
        """Las variables con prefijo WEATHER_API_ sobrescriben los campos."""
        monkeypatch.setenv("WEATHER_API_PORT", "5000")
        monkeypatch.setenv("WEATHER_API_HOST", "127.0.0.1")
        monkeypatch.setenv("WEATHER_API_DECIMAL_PLACES", "3")

        config = ApiConfig(_env_file=None)

        assert config.port == 5000
        assert config.host == "127.0.0.1"
        assert config.decimal_places == 3

    def test_log_level_is_uppercased(self, monkeypatch):
        """El nivel de log se normaliza a mayúsculas."""
        monkeypatch.setenv("WEATHER_API_LOG_LEVEL", "debug")

        assert ApiConfig(_env_file=None).log_level == "DEBUG"

    def test_invalid_port_is_rejected(self, monkeypatch):
        """Un puerto no entero falla con un error de validación tipado."""
        monkeypatch.setenv("WEATHER_API_PORT", "abc")

        with pytest.raises(ValidationError):
            ApiConfig(_env_file=None)

    def test_env_file_is_read(self, tmp_path, monkeypatch):
        """Los valores también se leen desde un archivo .env."""
        monkeypatch.delenv("WEATHER_API_PORT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("WEATHER_API_PORT=4100\n")

        assert ApiConfig(_env_file=env_file).port == 4100

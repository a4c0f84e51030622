"""
Configuración centralizada para la API de Sensores Meteorológicos.
Define metadatos del servicio, precisión numérica y formato de fechas.

Cada campo puede sobrescribirse con una variable de entorno (o en `.env`)
con prefijo WEATHER_API_, por ejemplo WEATHER_API_PORT=5000.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiConfig(BaseSettings):
    """Configuración completa del servicio de ingesta."""
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    # Metadatos expuestos por /api/status y /
    api_version: str = "1.0.0"
    docs_version: str = "2.0.0"

    # Normalización
    decimal_places: int = 2
    unknown_mode: str = "desconocido"

    # Formato explícito (UTC) que reemplaza al toLocaleString dependiente del servidor
    display_format: str = "%Y-%m-%d %H:%M:%S UTC"
    # Fecha mostrada cuando el timestamp del cliente no es interpretable
    invalid_date: str = "Invalid Date"

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_API_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


# Instancia global de configuración (puede ser sobrescrita)
config = ApiConfig()

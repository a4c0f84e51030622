"""
Fixtures de pytest compartidas por los tests de la Weather API.
"""

import pytest
from fastapi.testclient import TestClient

from weather_api.api import app
from weather_api.config import ApiConfig
from weather_api.handler import SensorIngestionHandler


@pytest.fixture
def client():
    """TestClient que devuelve los 500 en lugar de relanzar la excepción."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def handler():
    """Handler con la configuración por defecto."""
    return SensorIngestionHandler(ApiConfig())


@pytest.fixture
def valid_payload():
    """Payload típico del simulador."""
    return {
        "sensor_id": "S1",
        "temperatura": 23.456,
        "humedad": 60.1,
        "presion": 1013.25,
        "alerta": 1,
        "modo": "auto",
    }

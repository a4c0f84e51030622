"""
Tests de la estación meteorológica virtual.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from sensors.weather_sensor import AlertLevel, StationConfig, WeatherSensorAgent
from weather_api.handler import SensorIngestionHandler


@pytest.fixture
def agent():
    """Agente sin envío al API y sin espera entre lecturas."""
    return WeatherSensorAgent(StationConfig(sensor_id="TEST_01", interval_seconds=0))


class TestReadingGeneration:
    """Lecturas generadas por la estación."""

    def test_reading_structure(self, agent):
        """Cada lectura tiene los campos que espera /api/sensores."""
        reading = agent.generate_reading()

        assert set(reading) == {
            "sensor_id", "timestamp", "temperatura", "humedad", "presion", "alerta", "modo"
        }
        assert reading["sensor_id"] == "TEST_01"
        assert reading["modo"] == "auto"
        assert isinstance(reading["timestamp"], int)
        assert reading["alerta"] in (0, 1, 2)
        assert 0.0 <= reading["humedad"] <= 100.0

    def test_readings_pass_ingestion(self, agent):
        """Las lecturas del simulador siempre pasan la validación."""
        handler = SensorIngestionHandler()

        for _ in range(20):
            status_code, body = handler.handle(agent.generate_reading())
            assert status_code == 200
            assert body["sensor_id"] == "TEST_01"

    def test_statistics_are_counted(self, agent):
        """El contador de lecturas avanza con cada lectura."""
        agent.generate_reading()
        agent.generate_reading()

        assert agent.total_readings == 2
        assert agent.step == 2

    @pytest.mark.parametrize("temperature,expected", [
        (20.0, AlertLevel.NORMAL),
        (30.0, AlertLevel.WARNING),
        (34.9, AlertLevel.WARNING),
        (35.0, AlertLevel.CRITICAL),
    ])
    def test_alert_thresholds(self, agent, temperature, expected):
        """El nivel de alerta sigue los umbrales de temperatura."""
        assert agent._determine_alert(temperature) == expected


class TestSending:
    """Envío de lecturas al endpoint de ingesta."""

    def test_simulation_only_does_not_post(self, agent):
        """En modo simulación no se hace ninguna petición."""
        with patch("sensors.weather_sensor.requests.post") as mock_post:
            assert agent._send_to_api({"sensor_id": "TEST_01"}) is None
            mock_post.assert_not_called()

    def test_posts_to_endpoint(self):
        """Con send_to_api la lectura se envía como JSON."""
        agent = WeatherSensorAgent(StationConfig(send_to_api=True))

        with patch("sensors.weather_sensor.requests.post") as mock_post:
            mock_post.return_value = MagicMock(status_code=200, ok=True)
            payload = agent.generate_reading()

            assert agent._send_to_api(payload) == 200
            mock_post.assert_called_once_with(
                "http://localhost:4000/api/sensores", json=payload, timeout=5
            )
            assert agent.total_sent == 1

    def test_rejected_post_is_counted(self):
        """Una respuesta de error cuenta como envío fallido."""
        agent = WeatherSensorAgent(StationConfig(send_to_api=True))

        with patch("sensors.weather_sensor.requests.post") as mock_post:
            mock_post.return_value = MagicMock(status_code=400, ok=False)

            assert agent._send_to_api({}) == 400
            assert agent.total_failed == 1

    def test_connection_error_is_reported(self):
        """Un error de conexión no detiene la estación."""
        agent = WeatherSensorAgent(StationConfig(send_to_api=True))

        with patch("sensors.weather_sensor.requests.post") as mock_post:
            mock_post.side_effect = requests.exceptions.ConnectionError("sin conexión")

            assert agent._send_to_api({}) is None
            assert agent.total_failed == 1


class TestRunLoop:
    """Ejecución continua y callbacks."""

    def test_run_once_notifies_callbacks(self, agent):
        """Los callbacks reciben cada payload generado."""
        received = []
        agent.register_callback(received.append)

        payload = agent.run_once()

        assert received == [payload]

    def test_run_stops_when_flag_is_cleared(self, agent):
        """El bucle continuo termina cuando running pasa a False."""
        received = []

        def stop_after_three(payload):
            received.append(payload)
            if len(received) == 3:
                agent.running = False

        agent.register_callback(stop_after_three)

        agent.run()

        assert len(received) == 3
        assert agent.total_readings == 3
        assert agent.start_time is not None

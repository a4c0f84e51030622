#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                 🌦️ Sensor Ingestion Handler - Weather API                    ║
║                    Validación y normalización de lecturas                     ║
╚══════════════════════════════════════════════════════════════════════════════╝

Handler de POST /api/sensores. Recibe el payload ya decodificado, valida
los campos mínimos, normaliza las medidas a 2 decimales y construye el
acuse de recibo.

Author: Weather-API Team
Project: API de Sensores Meteorológicos
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from weather_api.config import ApiConfig, config as default_config
from weather_api.models import IngestionResult, SensorReading
from weather_api.normalization import (
    CoercionError,
    from_epoch_ms,
    normalize_measurement,
    to_display,
    to_iso,
    utc_now,
)


logger = logging.getLogger("weather_api.handler")


class SensorIngestionHandler:
    """
    🌦️ Handler de ingesta de lecturas meteorológicas.

    Payload esperado del simulador:
        {
            "sensor_id": "ESTACION_01",
            "timestamp": 1735725600000,
            "temperatura": 23.4567,
            "humedad": "60.1",
            "presion": 1013.25,
            "alerta": 1,
            "modo": "auto"
        }

    Los errores de coerción (texto no numérico) no se capturan aquí:
    se propagan hasta el manejador de errores de la API, que responde 500.

    Example:
        >>> handler = SensorIngestionHandler()
        >>> status_code, body = handler.handle({"sensor_id": "S1", "temperatura": 20})
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or default_config

    def validate(self, raw_data: Any) -> bool:
        """
        Verifica los campos mínimos del payload.

        Args:
            raw_data: Cuerpo JSON decodificado

        Returns:
            True si hay sensor_id y la clave temperatura existe (0 y null son válidos)
        """
        if not isinstance(raw_data, dict):
            return False

        if not raw_data.get("sensor_id"):
            return False

        return "temperatura" in raw_data

    def normalize_data(self, raw_data: Dict[str, Any]) -> SensorReading:
        """
        Transforma el payload validado en una SensorReading.

        Raises:
            CoercionError: Si alguna medida no es numérica
        """
        places = self.config.decimal_places
        client_timestamp = raw_data.get("timestamp")

        measured_at = self._derive_measured_at(client_timestamp)

        return SensorReading(
            sensor_id=raw_data["sensor_id"],
            temperatura=normalize_measurement(raw_data["temperatura"], places),
            humedad=normalize_measurement(raw_data.get("humedad"), places),
            presion=normalize_measurement(raw_data.get("presion"), places),
            measured_at=measured_at,
            timestamp=client_timestamp,
            alerta=raw_data.get("alerta"),
            modo=raw_data.get("modo"),
        )

    def process(self, raw_data: Any) -> IngestionResult:
        """Valida y normaliza, devolviendo el resultado tipado."""
        if not self.validate(raw_data):
            logger.warning(f"⚠️  Datos incompletos: {raw_data}")
            return IngestionResult.rejected()

        reading = self.normalize_data(raw_data)
        client_date = self._display_date(reading)
        self._log_reading(reading, client_date)

        return IngestionResult.accepted(
            reading,
            client_date=client_date,
            server_time=to_iso(utc_now()),
            values_rounded_to=self.config.decimal_places,
        )

    def handle(self, raw_data: Any) -> Tuple[int, Dict[str, Any]]:
        """
        Punto de entrada del endpoint.

        Returns:
            Tupla (status_code, cuerpo) con 200 o 400
        """
        result = self.process(raw_data)
        return result.status_code, result.to_dict()

    def _derive_measured_at(self, client_timestamp: Any) -> Optional[datetime]:
        """
        Instante de la lectura a partir del timestamp del cliente.

        Sin timestamp se usa el reloj del servidor. Un timestamp no numérico
        o fuera de rango no invalida la lectura: se devuelve None.
        """
        if client_timestamp is None:
            return utc_now()
        try:
            return from_epoch_ms(client_timestamp)
        except (CoercionError, OverflowError) as e:
            logger.warning(f"⚠️  Timestamp no interpretable {client_timestamp!r}: {e}")
            return None

    def _display_date(self, reading: SensorReading) -> str:
        if reading.measured_at is None:
            return self.config.invalid_date
        return to_display(reading.measured_at, self.config.display_format)

    def _log_reading(self, reading: SensorReading, client_date: str) -> None:
        """Registra en detalle cada campo recibido."""
        logger.info("📋 Detalles del sensor:")
        logger.info(f"✅ Sensor ID: {reading.sensor_id}")
        logger.info(f"⏰ Timestamp recibido: {reading.timestamp}")
        logger.info(f"⏰ Fecha convertida: {client_date}")
        logger.info(f"🌡️  Temperatura: {reading.temperatura}°C")
        logger.info(f"💧 Humedad: {reading.humedad}%")
        logger.info(f"📊 Presión: {reading.presion} hPa")
        logger.info(f"⚠️  Nivel de alerta: {reading.alerta}")
        logger.info(f"🔧 Modo: {reading.modo or self.config.unknown_mode}")

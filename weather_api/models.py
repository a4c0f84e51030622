#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                 📊 Data Models - API de Sensores Meteorológicos              ║
║                       Lecturas entrantes y acuses de recibo                   ║
╚══════════════════════════════════════════════════════════════════════════════╝

Modelos de datos de la ingesta. Cada instancia vive solo durante la
petición que la crea: no hay persistencia ni estado compartido.

Author: Weather-API Team
Project: API de Sensores Meteorológicos
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union


# Valor de medida tal como llega en el payload: número o texto numérico
NumericOrText = Union[int, float, str]

# Lista documental: se reporta completa aunque el gate solo exija sensor_id y temperatura
REQUIRED_FIELDS: List[str] = ["sensor_id", "temperatura", "humedad", "presion"]

MEASUREMENT_FIELDS = ("temperatura", "humedad", "presion")


@dataclass
class SensorReading:
    """
    🌡️ Lectura normalizada de una estación meteorológica.

    Attributes:
        sensor_id: Identificador opaco del sensor
        temperatura: Temperatura redondeada (None si llegó como null)
        humedad: Humedad redondeada (None si no se envió)
        presion: Presión redondeada (None si no se envió)
        measured_at: Instante de la lectura (None si el timestamp no es interpretable)
        timestamp: Valor crudo enviado por el cliente (epoch ms)
        alerta: Nivel de alerta 0-2, sin interpretar
        modo: Modo de operación libre
    """
    sensor_id: Any
    temperatura: Optional[float]
    measured_at: Optional[datetime]
    humedad: Optional[float] = None
    presion: Optional[float] = None
    timestamp: Optional[Any] = None
    alerta: Optional[Any] = None
    modo: Optional[Any] = None

    @property
    def has_client_timestamp(self) -> bool:
        return self.timestamp is not None

    def measurements(self) -> Dict[str, Any]:
        """Bloque data_received del acuse de recibo."""
        return {
            "temperatura": self.temperatura,
            "humedad": self.humedad,
            "presion": self.presion,
            "alerta": self.alerta,
            "modo": self.modo,
        }


@dataclass
class IngestionResult:
    """
    📨 Resultado de procesar un payload de /api/sensores.

    Un resultado exitoso lleva la lectura normalizada y las marcas de
    tiempo del servidor; uno fallido solo el error y los campos requeridos.
    """
    success: bool
    reading: Optional[SensorReading] = None
    error: Optional[str] = None
    required_fields: List[str] = field(default_factory=list)
    client_date: Optional[str] = None
    server_time: Optional[str] = None
    values_rounded_to: int = 2

    @classmethod
    def rejected(cls, error: str = "Datos incompletos") -> "IngestionResult":
        return cls(success=False, error=error, required_fields=list(REQUIRED_FIELDS))

    @classmethod
    def accepted(
        cls,
        reading: SensorReading,
        client_date: str,
        server_time: str,
        values_rounded_to: int = 2,
    ) -> "IngestionResult":
        return cls(
            success=True,
            reading=reading,
            client_date=client_date,
            server_time=server_time,
            values_rounded_to=values_rounded_to,
        )

    @property
    def status_code(self) -> int:
        return 200 if self.success else 400

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte el resultado al cuerpo JSON de la respuesta.

        Returns:
            Diccionario serializable con el acuse de recibo o el error
        """
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "required_fields": self.required_fields,
            }

        reading = self.reading
        return {
            "success": True,
            "message": "Datos recibidos correctamente",
            "server_time": self.server_time,
            "client_timestamp": reading.timestamp,
            "client_date": self.client_date,
            "sensor_id": reading.sensor_id,
            "data_received": reading.measurements(),
            "alert_level": reading.alerta,
            "processing": {
                "received_at": self.server_time,
                "processing_time_ms": 0,
                "values_rounded_to": self.values_rounded_to,
            },
        }

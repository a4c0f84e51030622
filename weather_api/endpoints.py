"""
Endpoints secundarios: status, test, timestamp, raíz y respuestas de error.
Cada función es pura: depende solo de su entrada y del instante recibido.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from .config import ApiConfig, config as default_config
from .models import MEASUREMENT_FIELDS
from .normalization import round_if_number, to_display, to_epoch_ms, to_iso, utc_now


AVAILABLE_ROUTES: List[str] = [
    "GET /",
    "GET /api/status",
    "GET /api/timestamp",
    "POST /api/sensores",
    "POST /api/test",
]


def status_payload(now: Optional[datetime] = None, config: Optional[ApiConfig] = None) -> Dict[str, Any]:
    """Metadatos del servicio y hora actual."""
    config = config or default_config
    now = now or utc_now()
    return {
        "success": True,
        "message": "Servidor API funcionando correctamente",
        "timestamp": to_iso(now),
        "timestamp_ms": to_epoch_ms(now),
        "version": config.api_version,
        "endpoints": {
            "POST": "/api/sensores",
            "GET": "/api/status",
        },
        "note": "Los timestamps deben enviarse en milisegundos desde 1970",
    }


def echo_payload(
    body: Dict[str, Any],
    now: Optional[datetime] = None,
    config: Optional[ApiConfig] = None,
) -> Dict[str, Any]:
    """
    Eco del payload recibido.

    Solo redondea temperatura, humedad y presión cuando ya son numéricas;
    sin coerción de texto ni validación.
    """
    config = config or default_config
    now = now or utc_now()

    rounded_body = dict(body)
    for name in MEASUREMENT_FIELDS:
        if name in rounded_body:
            rounded_body[name] = round_if_number(rounded_body[name], config.decimal_places)

    return {
        "success": True,
        "message": "Test POST exitoso",
        "received_data": rounded_body,
        "server_time": to_iso(now),
        "server_timestamp_ms": to_epoch_ms(now),
        "note": f"Valores redondeados a {config.decimal_places} decimales automáticamente",
    }


def timestamp_payload(now: Optional[datetime] = None, config: Optional[ApiConfig] = None) -> Dict[str, Any]:
    """Hora actual en cuatro representaciones derivadas de una sola lectura del reloj."""
    config = config or default_config
    now = now or utc_now()
    timestamp_ms = to_epoch_ms(now)
    return {
        "current_time": to_iso(now),
        "timestamp_ms": timestamp_ms,
        "timestamp_seconds": timestamp_ms // 1000,
        "locale_string": to_display(now, config.display_format),
        "note": "Usar timestamp_ms para enviar datos",
    }


def root_payload(config: Optional[ApiConfig] = None) -> Dict[str, Any]:
    """Documentación estática de la API."""
    config = config or default_config
    return {
        "message": "API de Sensores Meteorológicos",
        "version": config.docs_version,
        "timestamp_format": "milisegundos desde 1970-01-01",
        "decimal_precision": f"{config.decimal_places} decimales",
        "documentation": {
            "endpoints": [
                {
                    "method": "POST",
                    "path": "/api/sensores",
                    "description": "Enviar datos del sensor",
                    "body_format": {
                        "sensor_id": "string (requerido)",
                        "timestamp": "number (milisegundos desde 1970)",
                        "temperatura": "number (2 decimales)",
                        "humedad": "number (2 decimales)",
                        "presion": "number (2 decimales)",
                        "alerta": "number (0-2)",
                        "modo": "string",
                    },
                },
                {
                    "method": "GET",
                    "path": "/api/status",
                    "description": "Verificar estado del servidor",
                },
                {
                    "method": "POST",
                    "path": "/api/test",
                    "description": "Endpoint de prueba",
                },
                {
                    "method": "GET",
                    "path": "/api/timestamp",
                    "description": "Obtener timestamp actual del servidor",
                },
            ]
        },
    }


def not_found_payload() -> Dict[str, Any]:
    return {
        "success": False,
        "error": "Ruta no encontrada",
        "available_routes": list(AVAILABLE_ROUTES),
    }


def error_payload(exc: BaseException, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "success": False,
        "error": "Error interno del servidor",
        "message": str(exc),
        "timestamp": to_iso(now or utc_now()),
    }

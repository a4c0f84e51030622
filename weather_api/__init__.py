"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                  🌦️ Weather API - Ingesta de Telemetría 🌦️                   ║
║                     API de Sensores Meteorológicos                           ║
╚══════════════════════════════════════════════════════════════════════════════╝

Servicio HTTP sin estado que recibe lecturas de estaciones meteorológicas
(temperatura, humedad, presión, alerta, modo), las valida, las normaliza a
2 decimales y devuelve un acuse de recibo estructurado.

Módulos:
- config: Configuración del servicio
- models: Dataclasses de lectura y resultado
- normalization: Coerción numérica, redondeo y marcas de tiempo
- handler: Handler de POST /api/sensores
- endpoints: Status, test, timestamp y documentación
- api: Aplicación FastAPI
"""

from .config import ApiConfig, config
from .models import IngestionResult, NumericOrText, REQUIRED_FIELDS, SensorReading
from .normalization import CoercionError
from .handler import SensorIngestionHandler

__all__ = [
    "ApiConfig",
    "config",
    "IngestionResult",
    "NumericOrText",
    "REQUIRED_FIELDS",
    "SensorReading",
    "CoercionError",
    "SensorIngestionHandler",
]

__version__ = "2.0.0"

#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                 🌦️ Weather Sensor API - Ingesta de Telemetría                ║
║                          HTTP Endpoint (puerto 4000)                          ║
╚══════════════════════════════════════════════════════════════════════════════╝

API FastAPI que recibe lecturas de estaciones meteorológicas, las valida,
redondea las medidas a 2 decimales y devuelve un acuse de recibo.

Usage:
    python -m weather_api.api

    o con uvicorn:
    uvicorn weather_api.api:app --reload --port 4000

Author: Weather-API Team
Project: API de Sensores Meteorológicos
"""

import argparse
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_api.config import config
from weather_api.endpoints import (
    AVAILABLE_ROUTES,
    echo_payload,
    error_payload,
    not_found_payload,
    root_payload,
    status_payload,
    timestamp_payload,
)
from weather_api.handler import SensorIngestionHandler
from weather_api.normalization import to_iso, utc_now


# Configuración de logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s | %(levelname)s | %(message)s"
)
logger = logging.getLogger("weather_api.api")


# ═══════════════════════════════════════════════════════════════════════════════
# FastAPI App
# ═══════════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="🌦️ API de Sensores Meteorológicos",
    description="Ingesta de telemetría de estaciones meteorológicas",
    version=config.docs_version,
)

# CORS para desarrollo
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

handler = SensorIngestionHandler(config)


# ═══════════════════════════════════════════════════════════════════════════════
# Pydantic Models
# ═══════════════════════════════════════════════════════════════════════════════

class StatusResponse(BaseModel):
    """Respuesta de /api/status."""
    success: bool
    message: str
    timestamp: str
    timestamp_ms: int
    version: str
    endpoints: Dict[str, str]
    note: str


class TimestampResponse(BaseModel):
    """Hora del servidor en cuatro formatos."""
    current_time: str
    timestamp_ms: int
    timestamp_seconds: int
    locale_string: str
    note: str


# ═══════════════════════════════════════════════════════════════════════════════
# Middleware & Error Handlers
# ═══════════════════════════════════════════════════════════════════════════════

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Registra método y ruta de cada petición."""
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Rutas desconocidas (o método no soportado) responden 404 con la lista de rutas."""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=not_found_payload())
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Frontera genérica de errores: cualquier excepción no capturada es un 500."""
    logger.exception(f"❌ Error en el servidor: {exc}")
    return JSONResponse(status_code=500, content=error_payload(exc))


# ═══════════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════════

@app.get("/", tags=["Health"])
async def root():
    """Documentación estática de la API."""
    return root_payload(config)


@app.get("/api/status", response_model=StatusResponse, tags=["Health"])
async def api_status():
    """Verifica que el servidor funciona."""
    return status_payload(config=config)


@app.post("/api/sensores", tags=["Ingestion"])
async def receive_sensor_data(payload: Dict[str, Any]):
    """
    🌡️ Endpoint principal de ingesta de lecturas meteorológicas.

    Args:
        payload: Diccionario JSON con sensor_id, timestamp, temperatura,
            humedad, presion, alerta y modo

    Returns:
        200 con el acuse de recibo, o 400 si faltan campos
    """
    logger.info(f"📥 Datos recibidos: {payload}")
    status_code, body = handler.handle(payload)
    return JSONResponse(status_code=status_code, content=body)


@app.post("/api/test", tags=["Debug"])
async def echo_test_data(payload: Dict[str, Any]):
    """Eco del payload con redondeo de las medidas numéricas."""
    logger.info(f"🧪 Test POST recibido: {payload}")
    return echo_payload(payload, config=config)


@app.get("/api/timestamp", response_model=TimestampResponse, tags=["Health"])
async def api_timestamp():
    """Hora actual del servidor."""
    return timestamp_payload(config=config)


# ═══════════════════════════════════════════════════════════════════════════════
# Main Entry Point
# ═══════════════════════════════════════════════════════════════════════════════

def _log_banner(host: str, port: int) -> None:
    base_url = f"http://localhost:{port}"
    logger.info("=" * 50)
    logger.info(f"🚀 Servidor API ejecutándose en: http://{host}:{port}")
    logger.info(f"📅 Servidor iniciado: {to_iso(utc_now())}")
    logger.info("📊 Endpoints disponibles:")
    for route in AVAILABLE_ROUTES:
        method, path = route.split(" ", 1)
        logger.info(f"   {method:<5} {base_url}{path}")
    logger.info("=" * 50)
    logger.info("📡 Esperando datos del simulador...")
    logger.info(f"📝 Nota: Los valores se redondean automáticamente a {config.decimal_places} decimales")
    logger.info("⏰ Timestamps deben enviarse en milisegundos")
    logger.info("=" * 50)


def main():
    """Punto de entrada principal del servidor."""
    import uvicorn

    parser = argparse.ArgumentParser(
        description="🌦️ API de Sensores Meteorológicos"
    )
    parser.add_argument("--host", default=config.host, help=f"Interfaz de escucha (default: {config.host})")
    parser.add_argument("--port", type=int, default=config.port, help=f"Puerto (default: {config.port})")
    parser.add_argument("--reload", action="store_true", help="Recarga automática (desarrollo)")
    args = parser.parse_args()

    _log_banner(args.host, args.port)

    uvicorn.run(
        "weather_api.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()

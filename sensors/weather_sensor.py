#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                      🌦️ Weather Station Simulator 🌦️                         ║
║               Estación meteorológica virtual para la Weather API             ║
╚══════════════════════════════════════════════════════════════════════════════╝

Agente que genera lecturas meteorológicas en tiempo real (temperatura,
humedad y presión) y las envía a POST /api/sensores con el timestamp en
milisegundos desde 1970.

Author: Weather-API Team
Project: API de Sensores Meteorológicos
"""

import requests
import time
import random
import math
import argparse
from datetime import datetime
from typing import Callable, Optional
from dataclasses import dataclass
from enum import IntEnum


class AlertLevel(IntEnum):
    """Niveles de alerta enviados en el campo `alerta`."""
    NORMAL = 0
    WARNING = 1
    CRITICAL = 2


@dataclass
class StationConfig:
    """Configuración de la estación virtual."""
    sensor_id: str = "ESTACION_01"
    mode: str = "auto"

    # Onda diaria de temperatura
    base_temp: float = 22.0
    amplitude: float = 8.0
    noise_range: float = 1.0
    wave_period: float = 60.0  # Lecturas por ciclo completo

    # Humedad y presión
    base_humidity: float = 60.0
    humidity_per_degree: float = 1.5
    base_pressure: float = 1013.25
    pressure_noise: float = 2.0

    # Umbrales de alerta (temperatura)
    warning_threshold: float = 30.0
    critical_threshold: float = 35.0

    # Conexión
    api_endpoint: str = "http://localhost:4000/api/sensores"
    interval_seconds: float = 2.0
    send_to_api: bool = False  # Solo simulación por defecto


class WeatherSensorAgent:
    """
    🤖 Estación meteorológica virtual.

    La temperatura sigue una onda senoidal con ruido gaussiano; la humedad
    baja cuando sube la temperatura y la presión oscila alrededor de la
    presión a nivel del mar. Las medidas se envían con decimales extra
    para que la API las redondee.
    """

    def __init__(self, config: Optional[StationConfig] = None):
        self.config = config or StationConfig()
        self.step = 0
        self.running = False
        self._callbacks: list[Callable] = []

        # Estadísticas
        self.total_readings = 0
        self.total_sent = 0
        self.total_failed = 0
        self.start_time: Optional[datetime] = None

    def _generate_temperature(self) -> float:
        """Temperatura según la onda diaria más ruido."""
        wave_value = math.sin(self.step / self.config.wave_period * 2 * math.pi)
        temperature = self.config.base_temp + (self.config.amplitude * wave_value)
        return temperature + random.gauss(0, self.config.noise_range / 2)

    def _generate_humidity(self, temperature: float) -> float:
        """Humedad relativa inversa a la temperatura, acotada a 0-100%."""
        delta = (temperature - self.config.base_temp) * self.config.humidity_per_degree
        humidity = self.config.base_humidity - delta + random.uniform(-2, 2)
        return min(100.0, max(0.0, humidity))

    def _generate_pressure(self) -> float:
        return self.config.base_pressure + random.gauss(0, self.config.pressure_noise / 2)

    def _determine_alert(self, temperature: float) -> AlertLevel:
        """Nivel de alerta basado en la temperatura."""
        if temperature >= self.config.critical_threshold:
            return AlertLevel.CRITICAL
        elif temperature >= self.config.warning_threshold:
            return AlertLevel.WARNING
        return AlertLevel.NORMAL

    def generate_reading(self) -> dict:
        """
        Genera una lectura completa de la estación.

        Returns:
            Diccionario con la estructura esperada por POST /api/sensores
        """
        temperature = self._generate_temperature()

        self.total_readings += 1
        self.step += 1

        return {
            "sensor_id": self.config.sensor_id,
            "timestamp": int(time.time() * 1000),
            "temperatura": round(temperature, 4),
            "humedad": round(self._generate_humidity(temperature), 4),
            "presion": round(self._generate_pressure(), 4),
            "alerta": int(self._determine_alert(temperature)),
            "modo": self.config.mode,
        }

    def _send_to_api(self, payload: dict) -> Optional[int]:
        """Envía los datos al endpoint configurado."""
        if not self.config.send_to_api:
            return None

        try:
            response = requests.post(
                self.config.api_endpoint,
                json=payload,
                timeout=5
            )
        except requests.exceptions.RequestException as e:
            self.total_failed += 1
            print(f"⚠️  Error enviando datos: {e}")
            return None

        if response.ok:
            self.total_sent += 1
        else:
            self.total_failed += 1
        return response.status_code

    def _format_output(self, payload: dict) -> str:
        """Formatea la salida para la consola."""
        alert = AlertLevel(payload["alerta"])
        timestamp = datetime.fromtimestamp(payload["timestamp"] / 1000).strftime("%H:%M:%S")

        if alert == AlertLevel.CRITICAL:
            indicator = "🔴"
            color = "\033[91m"  # Rojo
        elif alert == AlertLevel.WARNING:
            indicator = "🟡"
            color = "\033[93m"  # Amarillo
        else:
            indicator = "🟢"
            color = "\033[92m"  # Verde

        reset = "\033[0m"

        return (
            f"{indicator} [{timestamp}] "
            f"{color}{payload['temperatura']:6.2f}°C{reset} | "
            f"{payload['humedad']:5.1f}% | "
            f"{payload['presion']:7.2f} hPa | "
            f"Alerta: {color}{alert.name:8}{reset} | "
            f"Sensor: {payload['sensor_id']}"
        )

    def run_once(self) -> dict:
        """Ejecuta una sola lectura y retorna el payload."""
        payload = self.generate_reading()
        status_code = self._send_to_api(payload)

        print(self._format_output(payload))

        if status_code:
            print(f"   └─> API Response: {status_code}")

        # Notificar a callbacks registrados
        for callback in self._callbacks:
            callback(payload)

        return payload

    def run(self):
        """Ejecuta la estación en modo continuo."""
        self.running = True
        self.start_time = datetime.now()

        print(self._get_banner())
        print(f"📡 Endpoint: {self.config.api_endpoint}")
        print(f"🔄 Intervalo: {self.config.interval_seconds}s")
        print(f"📊 Modo API: {'Activo' if self.config.send_to_api else 'Solo simulación'}")
        print("─" * 70 + "\n")

        try:
            while self.running:
                self.run_once()
                time.sleep(self.config.interval_seconds)
        except KeyboardInterrupt:
            self.stop()

    def stop(self):
        """Detiene la estación."""
        self.running = False
        print("\n" + "─" * 70)
        print(self._get_stats())
        print("─" * 70)
        print("👋 Estación meteorológica detenida.\n")

    def register_callback(self, callback: Callable):
        """Registra un callback que se ejecutará en cada lectura."""
        self._callbacks.append(callback)

    def _get_banner(self) -> str:
        return """
╔══════════════════════════════════════════════════════════════════════════════╗
║                      🌦️ Weather Station Simulator v1.0                       ║
║                 Estación virtual para la API de Sensores                     ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

    def _get_stats(self) -> str:
        """Retorna las estadísticas de la sesión."""
        runtime = datetime.now() - self.start_time if self.start_time else "N/A"

        return f"""
📊 ESTADÍSTICAS DE SESIÓN
   ├─ Lecturas totales: {self.total_readings}
   ├─ Enviadas con éxito: {self.total_sent}
   ├─ Envíos fallidos: {self.total_failed}
   └─ Tiempo de ejecución: {runtime}
"""


def main():
    """Punto de entrada principal del script."""
    parser = argparse.ArgumentParser(
        description="🌦️ Estación meteorológica virtual para la Weather API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos de uso:
  python -m sensors.weather_sensor                  # Modo simulación básico
  python -m sensors.weather_sensor --send-api       # Enviar datos al API
  python -m sensors.weather_sensor --interval 1     # Lecturas cada segundo
  python -m sensors.weather_sensor --count 10       # Solo 10 lecturas
        """
    )

    parser.add_argument(
        "--sensor-id",
        default="ESTACION_01",
        help="ID del sensor (default: ESTACION_01)"
    )
    parser.add_argument(
        "--mode",
        default="auto",
        help="Modo de operación enviado en el campo modo (default: auto)"
    )
    parser.add_argument(
        "--endpoint",
        default="http://localhost:4000/api/sensores",
        help="URL del endpoint de ingesta"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=2.0,
        help="Intervalo entre lecturas en segundos (default: 2)"
    )
    parser.add_argument(
        "--send-api",
        action="store_true",
        help="Activar envío real al API (por defecto solo simulación)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=0,
        help="Número de lecturas a generar; 0 = continuo (default: 0)"
    )
    parser.add_argument(
        "--base-temp",
        type=float,
        default=22.0,
        help="Temperatura base de la onda (default: 22)"
    )

    args = parser.parse_args()

    config = StationConfig(
        sensor_id=args.sensor_id,
        mode=args.mode,
        api_endpoint=args.endpoint,
        interval_seconds=args.interval,
        send_to_api=args.send_api,
        base_temp=args.base_temp,
    )

    agent = WeatherSensorAgent(config)

    if args.count > 0:
        for _ in range(args.count):
            agent.run_once()
            time.sleep(config.interval_seconds)
        return

    agent.run()


if __name__ == "__main__":
    main()

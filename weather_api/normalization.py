"""
Normalización numérica y de marcas de tiempo.

Contrato de redondeo: half-up (lejos de cero) sobre la representación
decimal más corta del float, es decir 2.675 -> 2.68 y -1.005 -> -1.01.
"""

import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from .models import NumericOrText


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
FRACTIONLESS_LIMIT = 2.0 ** 52


class CoercionError(ValueError):
    """Excepción cuando un valor no puede convertirse a número."""
    pass


def is_number(value: Any) -> bool:
    """True para int/float reales (bool queda fuera)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_numeric(value: NumericOrText) -> float:
    """
    Convierte un número o texto numérico a float finito.

    Args:
        value: Número o texto como "23.4567"

    Returns:
        Valor como float

    Raises:
        CoercionError: Si el valor no es numérico, es booleano o no es finito
    """
    if is_number(value):
        try:
            number = float(value)
        except OverflowError as e:
            raise CoercionError(f"Valor numérico fuera de rango: {value!r}") from e
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise CoercionError(f"Valor no numérico: {value!r}") from e
    else:
        raise CoercionError(f"Tipo no numérico: {type(value).__name__}")

    if not math.isfinite(number):
        raise CoercionError(f"Valor no finito: {value!r}")
    return number


def round_measurement(value: float, places: int = 2) -> float:
    """Redondea a `places` decimales con ROUND_HALF_UP."""
    # Por encima de 2**52 un float no tiene parte fraccionaria
    if abs(value) >= FRACTIONLESS_LIMIT:
        return value
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    # + 0.0 convierte -0.0 en 0.0
    return float(rounded) + 0.0


def normalize_measurement(value: Optional[NumericOrText], places: int = 2) -> Optional[float]:
    """
    Coerciona y redondea un campo de medida.

    Los valores ausentes (None) se conservan como None en lugar de NaN.
    """
    if value is None:
        return None
    return round_measurement(coerce_numeric(value), places)


def round_if_number(value: Any, places: int = 2) -> Any:
    """Redondea solo si ya es numérico; cualquier otro valor pasa intacto."""
    if isinstance(value, float) and math.isfinite(value):
        return round_measurement(value, places)
    # Los enteros ya tienen precisión exacta
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# Marcas de tiempo
# ═══════════════════════════════════════════════════════════════════════════════

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def from_epoch_ms(timestamp_ms: NumericOrText) -> datetime:
    """
    Interpreta milisegundos desde 1970 como instante UTC.

    Raises:
        CoercionError: Si el valor no es numérico
        OverflowError: Si el instante queda fuera del rango de datetime
    """
    return EPOCH + timedelta(milliseconds=coerce_numeric(timestamp_ms))


def to_epoch_ms(moment: datetime) -> int:
    return (moment - EPOCH) // timedelta(milliseconds=1)


def to_iso(moment: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z (2025-01-01T10:00:00.000Z)."""
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def to_display(moment: datetime, fmt: str) -> str:
    """Cadena legible en UTC con un formato explícito."""
    return moment.astimezone(timezone.utc).strftime(fmt)

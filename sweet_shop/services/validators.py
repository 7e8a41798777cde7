# ==============================================================================
# VALIDACIONES DE ENTRADA
# ==============================================================================
# Funciones puras de normalización y validación usadas por los servicios.
# Los errores se acumulan por campo y se lanzan juntos como ValidationFailed.
# ==============================================================================

import math
import re
from typing import Any, Dict, List, Optional

from sweet_shop.services.errors import ValidationFailed


EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
ID_REGEX = re.compile(r"^[0-9a-f]{32}$")

MIN_PASSWORD_LENGTH = 6


class FieldErrors:
    """Acumulador de errores de validación {field, message}."""

    def __init__(self):
        self.items: List[Dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self.items.append({'field': field, 'message': message})

    def raise_if_any(self) -> None:
        if self.items:
            raise ValidationFailed(errors=self.items)


def normalize_email(value: Any) -> str:
    return str(value or '').strip().lower()


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    normalized = normalize_email(value)
    return bool(normalized and EMAIL_REGEX.match(normalized))


def clean_text(value: Any) -> Optional[str]:
    """Recorta espacios; None se mantiene como None."""
    if value is None:
        return None
    return str(value).strip()


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(ID_REGEX.match(value))


def to_number(value: Any) -> Optional[float]:
    """
    Convierte a float aceptando números JSON o strings numéricos.

    Returns:
        El valor como float, o None si no es un número finito
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_integer(value: Any) -> Optional[int]:
    """
    Convierte a int; rechaza decimales con parte fraccionaria (2.5)
    pero acepta 2.0 y "2".
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def require_quantity(value: Any, minimum: int = 1) -> int:
    """
    Valida la cantidad de una compra o reposición.

    Raises:
        ValidationFailed: si no es un entero >= minimum
    """
    quantity = to_integer(value)
    if quantity is None or quantity < minimum:
        raise ValidationFailed(errors=[{
            'field': 'quantity',
            'message': f'Quantity must be at least {minimum}',
        }])
    return quantity

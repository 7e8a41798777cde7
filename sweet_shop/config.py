# ==============================================================================
# CONFIGURACIÓN
# ==============================================================================
# Todo se lee de variables de entorno (o de un archivo .env en desarrollo).
#
# JWT_SECRET: En producción DEBE definirse via variable de entorno
# Comando: export JWT_SECRET="tu_clave_secreta_muy_larga_y_aleatoria"
# ==============================================================================

import logging
import os
import re
from datetime import timedelta
from typing import Any, Dict

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

BASE = os.path.dirname(os.path.abspath(__file__))

_DEFAULT_SECRET = "sweet_shop_dev_secret_change_in_production"
_EXPIRE_PATTERN = re.compile(r"^\s*(\d+)\s*([dhms]?)\s*$")
_EXPIRE_UNITS = {'d': 'days', 'h': 'hours', 'm': 'minutes', 's': 'seconds', '': 'seconds'}


def parse_expiry(value: str) -> timedelta:
    """
    Convierte "7d", "12h", "30m", "45s" o "3600" en un timedelta.

    Raises:
        ValueError: formato no reconocido
    """
    match = _EXPIRE_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Formato de expiración inválido: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_EXPIRE_UNITS[unit]: int(amount)})


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def load_config(overrides: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Construye la configuración de la app.

    Args:
        overrides: Valores que tienen prioridad sobre el entorno (tests)

    Returns:
        Diccionario listo para app.config.update()
    """
    secret = os.environ.get("JWT_SECRET")
    production = _env_flag("PRODUCTION_MODE", "0")

    config = {
        'PRODUCTION_MODE': production,
        'JWT_SECRET_KEY': secret or _DEFAULT_SECRET,
        'JWT_ACCESS_TOKEN_EXPIRES': parse_expiry(os.environ.get("JWT_EXPIRE", "7d")),
        'DATA_DIR': os.environ.get("SWEET_SHOP_DATA_DIR", os.path.join(BASE, 'data')),
        'LOG_DIR': os.environ.get("SWEET_SHOP_LOG_DIR", os.path.join(BASE, 'logs')),
        'ENABLE_PROFILING': _env_flag("ENABLE_PROFILING", "1"),
        'CORS_ORIGINS': [
            o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
        ] or ["*"],
        'PORT': int(os.environ.get("PORT", "5000")),
        'LOG_LEVEL': os.environ.get("LOG_LEVEL", "INFO").upper(),
    }
    if overrides:
        config.update(overrides)

    if config['PRODUCTION_MODE'] and config['JWT_SECRET_KEY'] == _DEFAULT_SECRET:
        logger.warning("PRODUCTION_MODE activo sin JWT_SECRET definida")
        logger.warning("Define la variable de entorno para mayor seguridad")

    return config

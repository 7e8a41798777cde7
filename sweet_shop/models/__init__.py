# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio usando dataclasses, independientes de la
# persistencia (JSON ahora, cualquier otra base de datos después).
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    UserRole,
    RequestIdentity,
    VALID_ROLES,

    # Inventario
    Sweet,
    SweetCategory,
    VALID_CATEGORIES,

    # Utilidades
    new_id,
    utc_now,
)

__all__ = [
    'User',
    'UserRole',
    'RequestIdentity',
    'VALID_ROLES',
    'Sweet',
    'SweetCategory',
    'VALID_CATEGORIES',
    'new_id',
    'utc_now',
]

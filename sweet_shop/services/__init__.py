# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la aplicación.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones sobre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (blueprints) solo llaman a servicios
# 4. Los servicios NO conocen el tipo de almacenamiento
# 5. Los errores se lanzan como excepciones de services.errors
#
# ESTRUCTURA:
# ├── errors.py             → Taxonomía de errores (status HTTP incluido)
# ├── validators.py         → Normalización y validación de entrada
# ├── auth_service.py       → Registro, login, tokens
# └── inventory_service.py  → Dulces, búsqueda, compras y reposiciones
# ==============================================================================

from sweet_shop.services.errors import (
    ShopError,
    ValidationFailed,
    InsufficientStock,
    Unauthenticated,
    InvalidCredentials,
    InvalidToken,
    Forbidden,
    NotFound,
    Conflict,
    DuplicateEmail,
)
from sweet_shop.services.auth_service import AuthService
from sweet_shop.services.inventory_service import InventoryService

__all__ = [
    'ShopError',
    'ValidationFailed',
    'InsufficientStock',
    'Unauthenticated',
    'InvalidCredentials',
    'InvalidToken',
    'Forbidden',
    'NotFound',
    'Conflict',
    'DuplicateEmail',
    'AuthService',
    'InventoryService',
]

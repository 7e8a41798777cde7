# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (actualmente JSON).
# Cuando se migre a otra base de datos, solo hay que modificar esta capa.
#
# ESTRUCTURA:
# ├── interfaces.py         → Protocolos (contratos que usan los servicios)
# ├── base.py               → Clases base JSON (BaseRepository, DictRepository)
# ├── user_repository.py    → Acceso a users.json
# └── sweet_repository.py   → Acceso a sweets.json
# ==============================================================================

from .interfaces import IUserRepository, ISweetRepository
from .base import BaseRepository, DictRepository
from .user_repository import UserRepository
from .sweet_repository import SweetRepository

__all__ = [
    # Interfaces
    'IUserRepository',
    'ISweetRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',

    # Implementaciones JSON
    'UserRepository',
    'SweetRepository',
]

# ==============================================================================
# CONTROL DE ACCESO - Decoradores para rutas
# ==============================================================================
# Flujo por petición:
#   sin token               → 401 "Access token is required"
#   token inválido/expirado → 401 "Invalid or expired token"
#   usuario ya no existe    → 401 "Invalid token"
#   ruta admin y rol ≠ admin→ 403 "Admin access required"
#   en otro caso            → handler(..., identity=RequestIdentity)
#
# La identidad se pasa EXPLÍCITAMENTE como argumento `identity` al handler;
# no se guarda en session ni en variables globales.
# ==============================================================================

from functools import wraps
from typing import Optional

from flask import request

from sweet_shop.app_container import get_container
from sweet_shop.services.errors import Forbidden, Unauthenticated


def get_bearer_token() -> Optional[str]:
    """Extrae el token de `Authorization: Bearer <token>`."""
    header = request.headers.get('Authorization', '')
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == 'bearer':
        return parts[1]
    return None


def token_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            raise Unauthenticated('Access token is required')
        identity = get_container().auth_service.resolve_identity(token)
        return f(*args, identity=identity, **kwargs)
    return wrapper


def admin_required(f):
    """Exige token válido Y rol admin. El rol se verifica antes de tocar datos."""
    @token_required
    @wraps(f)
    def wrapper(*args, identity, **kwargs):
        if not identity.is_admin:
            raise Forbidden('Admin access required')
        return f(*args, identity=identity, **kwargs)
    return wrapper

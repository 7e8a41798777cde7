# ==============================================================================
# ERRORES DE NEGOCIO
# ==============================================================================
# Los servicios lanzan estas excepciones; los errorhandlers registrados en
# main.create_app() las convierten en {"success": false, "message": ...}
# con el código HTTP de `status_code`.
# ==============================================================================

from typing import Any, Dict, List, Optional


class ShopError(Exception):
    """Excepción base de la aplicación."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: str = None, errors: Optional[List[Dict[str, str]]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'success': False, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationFailed(ShopError):
    """Entrada mal formada."""
    status_code = 400
    default_message = 'Validation failed'


class InsufficientStock(ShopError):
    """Se pidió más cantidad de la disponible."""
    status_code = 400
    default_message = 'Insufficient stock'


class Unauthenticated(ShopError):
    status_code = 401
    default_message = 'Access token is required'


class InvalidCredentials(Unauthenticated):
    """Email desconocido o contraseña incorrecta (mismo mensaje en ambos casos)."""
    default_message = 'Invalid credentials'


class InvalidToken(Unauthenticated):
    """Firma inválida o token expirado."""
    default_message = 'Invalid or expired token'


class Forbidden(ShopError):
    status_code = 403
    default_message = 'Admin access required'


class NotFound(ShopError):
    status_code = 404
    default_message = 'Not found'


class Conflict(ShopError):
    status_code = 409
    default_message = 'Conflict'


class DuplicateEmail(Conflict):
    default_message = 'User with this email already exists'

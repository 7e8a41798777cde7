# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Contratos que todo repositorio debe cumplir. Los servicios dependen de
# estas interfaces, NO de las implementaciones JSON concretas:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Cambiar JSON → otra base de datos solo requiere nueva implementación
#
# 2. TESTING
#    - Fácil crear dobles en memoria que implementen estas interfaces
#
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class IUserRepository(Protocol):
    """Interfaz para el repositorio de usuarios."""

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene un usuario por ID."""
        ...

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Obtiene un usuario por email (ya normalizado)."""
        ...

    def email_exists(self, email: str) -> bool:
        """Verifica si un email ya está registrado."""
        ...

    def create_user(self, record: Dict[str, Any]) -> bool:
        """Crea un usuario. False si el email ya existía."""
        ...


@runtime_checkable
class ISweetRepository(Protocol):
    """Interfaz para el repositorio de inventario."""

    def get_sweet(self, sweet_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene un dulce por ID."""
        ...

    def list_sweets(self) -> List[Dict[str, Any]]:
        """Todos los dulces, del más reciente al más antiguo."""
        ...

    def create_sweet(self, record: Dict[str, Any]) -> None:
        """Crea un dulce."""
        ...

    def update_sweet(self, sweet_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Actualiza campos de un dulce. None si no existe."""
        ...

    def delete_sweet(self, sweet_id: str) -> Optional[Dict[str, Any]]:
        """Elimina un dulce. None si no existía."""
        ...

    def apply_quantity_delta(
        self,
        sweet_id: str,
        delta: int,
        updated_at: str
    ) -> Tuple[Optional[Dict[str, Any]], bool]:
        """
        Suma `delta` al stock en UNA sola operación atómica.
        Retorna (registro, aplicado); aplicado=False si el stock quedaría negativo.
        """
        ...

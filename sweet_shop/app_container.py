# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (cada app tiene su propio contenedor y carpeta de datos)
#   - Migración gradual (cambiar repos sin tocar servicios)
#
# Para cambiar el almacenamiento JSON por otra base de datos:
#   1. Crear clases que implementen IUserRepository / ISweetRepository
#   2. Instanciarlas aquí en lugar de UserRepository / SweetRepository
#   3. Los servicios NO requieren cambios
# ==============================================================================

import os
from datetime import timedelta
from typing import Optional

from flask import Flask, current_app

from sweet_shop.repositories import SweetRepository, UserRepository
from sweet_shop.services import AuthService, InventoryService
from sweet_shop.services.auth_service import DEFAULT_TOKEN_EXPIRES


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Una instancia por app Flask (en app.extensions); dentro de ella, una
    única instancia de cada repositorio y servicio.

    Uso:
        init_container(app)
        inventory_service = get_container().inventory_service
    """

    def __init__(self, base_path: str = None, token_expires: timedelta = None):
        """
        Args:
            base_path: Carpeta de los archivos JSON
            token_expires: Validez de los tokens emitidos
        """
        self._base_path = base_path or os.path.join(
            os.path.dirname(os.path.abspath(__file__)), 'data'
        )
        self._token_expires = token_expires or DEFAULT_TOKEN_EXPIRES

        # Inicialización diferida (lazy loading)
        self._user_repo: Optional[UserRepository] = None
        self._sweet_repo: Optional[SweetRepository] = None
        self._auth_service: Optional[AuthService] = None
        self._inventory_service: Optional[InventoryService] = None

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def user_repo(self) -> UserRepository:
        """Repositorio de usuarios (una por contenedor)."""
        if self._user_repo is None:
            self._user_repo = UserRepository(self._base_path)
        return self._user_repo

    @property
    def sweet_repo(self) -> SweetRepository:
        """Repositorio de inventario (una por contenedor)."""
        if self._sweet_repo is None:
            self._sweet_repo = SweetRepository(self._base_path)
        return self._sweet_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def auth_service(self) -> AuthService:
        """Servicio de autenticación (una por contenedor)."""
        if self._auth_service is None:
            self._auth_service = AuthService(self.user_repo, self._token_expires)
        return self._auth_service

    @property
    def inventory_service(self) -> InventoryService:
        """Servicio de inventario (una por contenedor)."""
        if self._inventory_service is None:
            self._inventory_service = InventoryService(self.sweet_repo)
        return self._inventory_service


EXTENSION_KEY = 'sweet_shop'


def init_container(app: Flask) -> AppContainer:
    """
    Crea el contenedor de `app` a partir de su configuración.

    Cada app queda ligada a su propia carpeta de datos, aunque convivan
    varias en el mismo proceso.
    """
    container = AppContainer(app.config['DATA_DIR'], app.config['JWT_ACCESS_TOKEN_EXPIRES'])
    app.extensions[EXTENSION_KEY] = container
    return container


def get_container() -> AppContainer:
    """Contenedor de la app Flask activa (requiere contexto de aplicación)."""
    return current_app.extensions[EXTENSION_KEY]

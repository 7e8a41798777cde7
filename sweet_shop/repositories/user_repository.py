# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula todo el acceso a users.json
# Los usuarios se almacenan como diccionario: {user_id: {email, password, ...}}
# ==============================================================================

import os
from typing import Any, Dict, Optional

from sweet_shop.repositories.base import DictRepository


class UserRepository(DictRepository):
    """
    Repositorio para gestión de usuarios.

    Formato de datos en users.json:
    {
        "3f2a...": {
            "id": "3f2a...",
            "email": "ana@example.com",
            "password": "scrypt:32768:8:1$...",
            "name": "Ana",
            "role": "user",
            "created_at": "...",
            "updated_at": "..."
        }
    }
    """

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Carpeta donde viven los archivos JSON
        """
        file_path = os.path.join(base_path, 'users.json')
        super().__init__(file_path)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.get_by_id(user_id)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Busca un usuario por email exacto.

        Args:
            email: Email ya normalizado (minúsculas, sin espacios)
        """
        for record in self.get_all().values():
            if record.get('email') == email:
                return record
        return None

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def create_user(self, record: Dict[str, Any]) -> bool:
        """
        Crea un nuevo usuario.

        La verificación de unicidad del email y la escritura ocurren en la
        misma transacción.

        Returns:
            True si se creó, False si el email ya existía
        """
        with self.transaction():
            if self.email_exists(record['email']):
                return False
            self.insert(record['id'], record)
            return True

    # NOTA: La validación de credenciales se hace SOLO en AuthService
    # usando check_password_hash. El repositorio solo maneja persistencia.

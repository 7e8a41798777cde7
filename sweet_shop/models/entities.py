# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia.
#
# Formatos:
#   - to_dict()  → persistencia (snake_case)
#   - to_json()  → respuesta HTTP (camelCase, lo que consume el frontend)
# ==============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
import uuid


# ==============================================================================
# ENUMERACIONES - Roles y categorías válidas
# ==============================================================================

class UserRole(str, Enum):
    """Roles de usuario disponibles en el sistema."""
    USER = "user"
    ADMIN = "admin"


class SweetCategory(str, Enum):
    """Categorías de dulces aceptadas por el inventario."""
    CHOCOLATE = "chocolate"
    CANDY = "candy"
    GUM = "gum"
    LOLLIPOP = "lollipop"
    OTHER = "other"


VALID_ROLES = frozenset(r.value for r in UserRole)
VALID_CATEGORIES = frozenset(c.value for c in SweetCategory)


def utc_now() -> str:
    """Timestamp ISO-8601 en UTC (precisión de milisegundos)."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds')


def new_id() -> str:
    """Genera un ID opaco de 32 caracteres hexadecimales."""
    return uuid.uuid4().hex


# ==============================================================================
# ENTIDADES DE USUARIO
# ==============================================================================

@dataclass
class User:
    """
    Representa un usuario del sistema.

    Attributes:
        id: Identificador único
        email: Email normalizado (único)
        password_hash: Hash de la contraseña (nunca almacenar en texto plano)
        name: Nombre visible
        role: Rol del usuario que define sus permisos
        created_at / updated_at: Timestamps ISO-8601
    """
    id: str
    email: str
    password_hash: str
    name: str
    role: UserRole = UserRole.USER
    created_at: str = ''
    updated_at: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'id': self.id,
            'email': self.email,
            'password': self.password_hash,
            'name': self.name,
            'role': self.role.value if isinstance(self.role, Enum) else self.role,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def to_json(self) -> Dict[str, Any]:
        """Representación pública: NUNCA incluye el hash de la contraseña."""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role.value if isinstance(self.role, Enum) else self.role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde diccionario."""
        try:
            role = UserRole(data.get('role', 'user'))
        except ValueError:
            role = UserRole.USER
        return cls(
            id=data.get('id', ''),
            email=data.get('email', ''),
            password_hash=data.get('password', ''),
            name=data.get('name', ''),
            role=role,
            created_at=data.get('created_at', ''),
            updated_at=data.get('updated_at', ''),
        )


@dataclass(frozen=True)
class RequestIdentity:
    """
    Identidad resuelta a partir del token de una petición.
    Se pasa explícitamente a cada handler (no vive en estado global).
    """
    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


# ==============================================================================
# ENTIDADES DE INVENTARIO
# ==============================================================================

@dataclass
class Sweet:
    """
    Producto del inventario (un dulce).

    Attributes:
        id: Identificador único
        name: Nombre del dulce
        category: Una de VALID_CATEGORIES
        price: Precio unitario (>= 0)
        quantity: Stock disponible (>= 0, nunca negativo)
        description: Descripción opcional
        image_url: URL de imagen opcional
    """
    id: str
    name: str
    category: str
    price: float
    quantity: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: str = ''
    updated_at: str = ''

    @property
    def in_stock(self) -> bool:
        """Hay al menos una unidad disponible."""
        return self.quantity > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia JSON."""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'price': self.price,
            'quantity': self.quantity,
            'description': self.description,
            'image_url': self.image_url,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def to_json(self) -> Dict[str, Any]:
        """Convierte al formato de la API."""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'price': self.price,
            'quantity': self.quantity,
            'description': self.description,
            'imageUrl': self.image_url,
            'inStock': self.in_stock,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sweet':
        """Crea instancia desde diccionario (formato JSON de almacenamiento)."""
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            category=data.get('category', SweetCategory.OTHER.value),
            price=data.get('price', 0.0),
            quantity=data.get('quantity', 0),
            description=data.get('description'),
            image_url=data.get('image_url'),
            created_at=data.get('created_at', ''),
            updated_at=data.get('updated_at', ''),
        )

# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con dulces y stock.
#
# INVARIANTES:
# - quantity y price nunca son negativos
# - Una compra es todo-o-nada: si no hay stock suficiente no se descuenta nada
# - La verificación de stock y el descuento son UNA operación del repositorio
#   (apply_quantity_delta), no lectura + escritura separadas
# ==============================================================================

import logging
from typing import Any, Dict, List, Optional

from sweet_shop.models import Sweet, VALID_CATEGORIES, new_id, utc_now
from sweet_shop.repositories.interfaces import ISweetRepository
from sweet_shop.services.errors import InsufficientStock, NotFound, ValidationFailed
from sweet_shop.services.validators import (
    FieldErrors,
    clean_text,
    is_valid_id,
    require_quantity,
    to_integer,
    to_number,
)

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Servicio para gestión de inventario.

    Responsabilidades:
    - CRUD de dulces
    - Búsqueda por nombre, categoría y rango de precio
    - Control de stock (compras y reposiciones)
    """

    # Campos que un admin puede modificar vía update
    ALLOWED_FIELDS = ('name', 'category', 'price', 'quantity', 'description', 'imageUrl')

    def __init__(self, sweet_repo: ISweetRepository):
        """
        Args:
            sweet_repo: Repositorio de inventario
        """
        self.sweet_repo = sweet_repo

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_sweets(self) -> List[Sweet]:
        """Todos los dulces, del más reciente al más antiguo."""
        return [Sweet.from_dict(r) for r in self.sweet_repo.list_sweets()]

    def get_sweet(self, sweet_id: str) -> Sweet:
        """
        Raises:
            ValidationFailed: ID mal formado
            NotFound: el dulce no existe
        """
        self._check_id(sweet_id)
        record = self.sweet_repo.get_sweet(sweet_id)
        if not record:
            raise NotFound('Sweet not found')
        return Sweet.from_dict(record)

    def search(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Any = None,
        max_price: Any = None
    ) -> List[Sweet]:
        """
        Busca dulces.

        - name / category: subcadena, sin distinguir mayúsculas
        - min_price / max_price: rango inclusivo

        Los filtros vacíos se ignoran.

        Raises:
            ValidationFailed: precios no numéricos o negativos
        """
        errors = FieldErrors()
        low = self._parse_price_filter(min_price, 'minPrice', errors)
        high = self._parse_price_filter(max_price, 'maxPrice', errors)
        errors.raise_if_any()

        name_q = (name or '').strip().lower()
        category_q = (category or '').strip().lower()

        results = []
        for sweet in self.list_sweets():
            if name_q and name_q not in sweet.name.lower():
                continue
            if category_q and category_q not in sweet.category.lower():
                continue
            if low is not None and sweet.price < low:
                continue
            if high is not None and sweet.price > high:
                continue
            results.append(sweet)
        return results

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_sweet(self, payload: Dict[str, Any], user: str = None) -> Sweet:
        """
        Crea un dulce nuevo.

        Args:
            payload: {name, category, price, quantity, description?, imageUrl?}
            user: Email del admin (para el log)

        Raises:
            ValidationFailed: campos faltantes o inválidos
        """
        fields = self._validate_fields(payload, partial=False)
        now = utc_now()
        sweet = Sweet(
            id=new_id(),
            name=fields['name'],
            category=fields['category'],
            price=fields['price'],
            quantity=fields['quantity'],
            description=fields.get('description'),
            image_url=fields.get('image_url'),
            created_at=now,
            updated_at=now,
        )
        self.sweet_repo.create_sweet(sweet.to_dict())
        logger.info("Dulce creado por %s: %s (%s)", user or '-', sweet.name, sweet.id)
        return sweet

    def update_sweet(self, sweet_id: str, payload: Dict[str, Any], user: str = None) -> Sweet:
        """
        Actualiza datos de un dulce.

        Solo se aplican ALLOWED_FIELDS; id, timestamps y campos desconocidos
        se ignoran. Los campos presentes se validan con las reglas de creación.

        Raises:
            ValidationFailed: ID mal formado o campos inválidos
            NotFound: el dulce no existe
        """
        self._check_id(sweet_id)
        filtered = {k: v for k, v in (payload or {}).items() if k in self.ALLOWED_FIELDS}
        fields = self._validate_fields(filtered, partial=True)
        fields['updated_at'] = utc_now()

        record = self.sweet_repo.update_sweet(sweet_id, fields)
        if record is None:
            raise NotFound('Sweet not found')

        logger.info("Dulce %s actualizado por %s: %s", sweet_id, user or '-', sorted(fields))
        return Sweet.from_dict(record)

    def delete_sweet(self, sweet_id: str, user: str = None) -> Sweet:
        """
        Elimina un dulce.

        Returns:
            El dulce eliminado

        Raises:
            ValidationFailed: ID mal formado
            NotFound: el dulce no existe
        """
        self._check_id(sweet_id)
        removed = self.sweet_repo.delete_sweet(sweet_id)
        if removed is None:
            raise NotFound('Sweet not found')
        logger.info("Dulce %s eliminado por %s", sweet_id, user or '-')
        return Sweet.from_dict(removed)

    # =========================================================================
    # OPERACIONES DE STOCK
    # =========================================================================

    def purchase(self, sweet_id: str, quantity: Any, user: str = None) -> Sweet:
        """
        Compra `quantity` unidades (descuenta stock).

        Todo-o-nada: si la cantidad pedida supera el stock, el stock
        queda intacto.

        Raises:
            ValidationFailed: cantidad < 1 o ID mal formado
            NotFound: el dulce no existe
            InsufficientStock: no hay stock suficiente
        """
        quantity = require_quantity(quantity)
        self._check_id(sweet_id)

        record, applied = self.sweet_repo.apply_quantity_delta(sweet_id, -quantity, utc_now())
        if record is None:
            raise NotFound('Sweet not found')
        if not applied:
            available = record.get('quantity', 0)
            raise InsufficientStock(
                f'Insufficient stock. Available: {available}, Requested: {quantity}'
            )

        logger.info("Compra de %s x%d por %s (quedan %d)",
                    sweet_id, quantity, user or '-', record['quantity'])
        return Sweet.from_dict(record)

    def restock(self, sweet_id: str, quantity: Any, user: str = None) -> Sweet:
        """
        Repone `quantity` unidades (incrementa stock).

        Raises:
            ValidationFailed: cantidad < 1 o ID mal formado
            NotFound: el dulce no existe
        """
        quantity = require_quantity(quantity)
        self._check_id(sweet_id)

        record, _ = self.sweet_repo.apply_quantity_delta(sweet_id, quantity, utc_now())
        if record is None:
            raise NotFound('Sweet not found')

        logger.info("Reposición de %s +%d por %s (total %d)",
                    sweet_id, quantity, user or '-', record['quantity'])
        return Sweet.from_dict(record)

    # =========================================================================
    # VALIDACIÓN
    # =========================================================================

    def _check_id(self, sweet_id: str) -> None:
        if not is_valid_id(sweet_id):
            raise ValidationFailed('Invalid sweet ID format')

    def _parse_price_filter(self, value: Any, field: str, errors: FieldErrors) -> Optional[float]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        number = to_number(value)
        if number is None or number < 0:
            errors.add(field, f'{field} must be a positive number')
            return None
        return number

    def _validate_fields(self, payload: Dict[str, Any], partial: bool) -> Dict[str, Any]:
        """
        Valida y normaliza los campos de un dulce.

        Args:
            payload: Datos recibidos (claves de la API)
            partial: True en updates (solo se validan los campos presentes)

        Returns:
            Campos normalizados con claves de almacenamiento
        """
        errors = FieldErrors()
        fields: Dict[str, Any] = {}

        def present(key: str) -> bool:
            return not partial or key in payload

        if present('name'):
            name = payload.get('name')
            if not isinstance(name, str) or not name.strip():
                errors.add('name', 'Name is required')
            else:
                fields['name'] = name.strip()

        if present('category'):
            category = payload.get('category')
            if not isinstance(category, str) or category not in VALID_CATEGORIES:
                errors.add('category', 'Invalid category')
            else:
                fields['category'] = category

        if present('price'):
            price = to_number(payload.get('price'))
            if price is None or price < 0:
                errors.add('price', 'Price must be a positive number')
            else:
                fields['price'] = price

        if present('quantity'):
            quantity = to_integer(payload.get('quantity'))
            if quantity is None or quantity < 0:
                errors.add('quantity', 'Quantity must be a non-negative integer')
            else:
                fields['quantity'] = quantity

        if 'description' in payload:
            fields['description'] = clean_text(payload.get('description'))
        if 'imageUrl' in payload:
            fields['image_url'] = clean_text(payload.get('imageUrl')) or None

        errors.raise_if_any()
        return fields

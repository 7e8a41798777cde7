# ==============================================================================
# REPOSITORIO DE INVENTARIO
# ==============================================================================
# Encapsula todo el acceso a sweets.json
# El inventario se almacena como diccionario: {sweet_id: {datos_del_dulce}}
# El orden de las claves es el orden de creación.
# ==============================================================================

import os
from typing import Any, Dict, List, Optional, Tuple

from sweet_shop.repositories.base import DictRepository


class SweetRepository(DictRepository):
    """
    Repositorio para gestión del inventario de dulces.

    Formato de datos en sweets.json:
    {
        "9c1e...": {
            "id": "9c1e...",
            "name": "Chocolate Bar",
            "category": "chocolate",
            "price": 2.5,
            "quantity": 100,
            "description": null,
            "image_url": null,
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
        file_path = os.path.join(base_path, 'sweets.json')
        super().__init__(file_path)

    def get_sweet(self, sweet_id: str) -> Optional[Dict[str, Any]]:
        return self.get_by_id(sweet_id)

    def list_sweets(self) -> List[Dict[str, Any]]:
        """
        Obtiene todos los dulces, del más reciente al más antiguo.

        Returns:
            Lista de registros (copias)
        """
        return [dict(record) for record in reversed(list(self.get_all().values()))]

    def create_sweet(self, record: Dict[str, Any]) -> None:
        self.insert(record['id'], record)

    def update_sweet(self, sweet_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.update(sweet_id, updates)

    def delete_sweet(self, sweet_id: str) -> Optional[Dict[str, Any]]:
        return self.delete(sweet_id)

    def apply_quantity_delta(
        self,
        sweet_id: str,
        delta: int,
        updated_at: str
    ) -> Tuple[Optional[Dict[str, Any]], bool]:
        """
        Modifica el stock de un dulce de forma atómica.

        La lectura, la verificación de suficiencia y la escritura ocurren
        dentro de la misma transacción: dos compras concurrentes nunca leen
        el mismo stock "viejo".

        Args:
            sweet_id: ID del dulce
            delta: Cambio en cantidad (positivo = reposición, negativo = compra)
            updated_at: Timestamp a registrar si se aplica el cambio

        Returns:
            Tupla (registro, aplicado):
              - (None, False) si el dulce no existe
              - (registro_sin_cambios, False) si el stock quedaría negativo
              - (registro_actualizado, True) si se aplicó
        """
        with self.transaction():
            data = self.get_all()
            record = data.get(sweet_id)
            if record is None:
                return None, False

            new_quantity = int(record.get('quantity', 0)) + delta
            if new_quantity < 0:
                return dict(record), False

            record['quantity'] = new_quantity
            record['updated_at'] = updated_at
            self._write_raw(data)
            return dict(record), True

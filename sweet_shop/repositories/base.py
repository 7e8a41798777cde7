# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================

import json
import os
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.
    Proporciona lectura/escritura de archivos JSON con manejo de
    concurrencia mediante un lock re-entrante.

    Las operaciones de lectura-verificación-escritura de las subclases se
    ejecutan dentro de `transaction()`, de modo que ninguna otra escritura
    puede intercalarse entre la lectura y la escritura.
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo (y su carpeta) con datos vacíos si no existe."""
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.file_path):
            self._write_raw(self._empty_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.
        Debe ser implementado por cada repositorio concreto.
        """

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Sección crítica: serializa lectura + escritura sobre el archivo."""
        with self._file_lock:
            yield

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Returns:
            Datos parseados del JSON (estructura vacía si está corrupto)
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (json.JSONDecodeError, FileNotFoundError):
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON.

        Escribe primero a un temporal y luego lo renombra, así un lector
        nunca ve un archivo a medio escribir.

        Raises:
            OSError: Si hay error de escritura
        """
        with self._file_lock:
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise


class DictRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como diccionario.
    El ID es la clave del diccionario y el orden de inserción se conserva.

    Ejemplo: sweets.json -> {"<id>": {...}, "<id>": {...}}
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        """Obtiene todos los registros."""
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un registro por su ID.

        Returns:
            Datos del registro o None si no existe
        """
        return self.get_all().get(record_id)

    def insert(self, record_id: str, record_data: Dict[str, Any]) -> None:
        """Agrega (o reemplaza) un registro."""
        with self.transaction():
            data = self.get_all()
            data[record_id] = record_data
            self._write_raw(data)

    def update(self, record_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Mezcla `updates` sobre un registro existente.

        Returns:
            Registro actualizado o None si no existía
        """
        with self.transaction():
            data = self.get_all()
            record = data.get(record_id)
            if record is None:
                return None
            record.update(updates)
            self._write_raw(data)
            return record

    def delete(self, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Elimina un registro.

        Returns:
            Datos del registro eliminado o None si no existía
        """
        with self.transaction():
            data = self.get_all()
            removed = data.pop(record_id, None)
            if removed is not None:
                self._write_raw(data)
            return removed

    def count(self) -> int:
        return len(self.get_all())

# ==============================================================================
# REPOSITORIO BASE - Almacenamiento clave-valor y acceso común
# ==============================================================================

import copy
import json
import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from dolce_pos.repositories.interfaces import IKeyValueStorage

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')


class JsonFileStorage:
    """
    Almacenamiento en disco: un archivo <clave>.json por clave.

    Las escrituras son atómicas (archivo temporal + os.replace) y protegidas
    por un lock de clase. Un archivo corrupto se trata como ausente.
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Directorio donde se guardan los archivos JSON
        """
        self.base_path = base_path
        os.makedirs(base_path, exist_ok=True)

    def _path(self, key: str) -> str:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Clave de almacenamiento inválida: {key!r}")
        return os.path.join(self.base_path, f"{key}.json")

    def load(self, key: str) -> Optional[Any]:
        """
        Lee el documento de una clave.

        Returns:
            Datos parseados o None si no existe o está corrupto
        """
        path = self._path(key)
        with self._file_lock:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return None
            except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
                logger.warning("[STORAGE] No se pudo leer %s: %s", path, e)
                return None

    def save(self, key: str, value: Any) -> None:
        """
        Escribe el documento de una clave.

        Raises:
            OSError: si hay error de escritura
        """
        path = self._path(key)
        with self._file_lock:
            temp_path = path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(value, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, path)
            except Exception:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise


class MemoryStorage:
    """
    Almacenamiento en memoria. Guarda copias profundas para que los
    documentos leídos no compartan referencias con el estado vivo.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class KeyRepository(ABC):
    """
    Clase base para repositorios que viven bajo una sola clave.

    Los datos ilegibles se reemplazan por _default_data(): un fallo de
    lectura nunca debe impedir el arranque.
    """

    key: str = ''

    def __init__(self, storage: IKeyValueStorage, key: Optional[str] = None):
        """
        Args:
            storage: Almacenamiento inyectado
            key: Clave a usar (por defecto la de la clase)
        """
        self.storage = storage
        if key:
            self.key = key

    @abstractmethod
    def _default_data(self) -> Any:
        """
        Datos a usar cuando no hay nada guardado o no se puede leer.
        Debe ser implementado por cada repositorio concreto.
        """
        pass

    def _read_raw(self) -> Any:
        raw = self.storage.load(self.key)
        if raw is None:
            return self._default_data()
        return raw

    def _write_raw(self, data: Any) -> None:
        self.storage.save(self.key, data)

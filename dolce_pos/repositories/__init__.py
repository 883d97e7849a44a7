# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia.
#
# ESTRUCTURA:
# ├── interfaces.py             → Protocolos (contratos)
# ├── base.py                   → JsonFileStorage, MemoryStorage, KeyRepository
# ├── inventory_repository.py   → Menú de productos
# ├── sales_repository.py       → Libro de ventas
# └── settings_repository.py    → Tasa de cambio y logo
# ==============================================================================

from .interfaces import (
    IKeyValueStorage,
    IInventoryRepository,
    ISalesRepository,
    ISettingsRepository,
)

from .base import JsonFileStorage, MemoryStorage, KeyRepository
from .inventory_repository import InventoryRepository
from .sales_repository import SalesRepository
from .settings_repository import SettingsRepository

__all__ = [
    # Interfaces
    'IKeyValueStorage',
    'IInventoryRepository',
    'ISalesRepository',
    'ISettingsRepository',

    # Almacenamiento y base
    'JsonFileStorage',
    'MemoryStorage',
    'KeyRepository',

    # Implementaciones
    'InventoryRepository',
    'SalesRepository',
    'SettingsRepository',
]

# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Los servicios dependen de estos protocolos, no de implementaciones concretas.
# El almacenamiento es una frontera inyectada: archivos JSON en producción,
# memoria en los tests. Cualquier otro backend (SQLite, Redis) solo necesita
# implementar IKeyValueStorage.
#
# ==============================================================================

from typing import Any, List, Optional, Protocol, runtime_checkable

from dolce_pos.models import Product, Sale


@runtime_checkable
class IKeyValueStorage(Protocol):
    """
    Almacenamiento clave-valor de documentos JSON.

    load() retorna None cuando la clave no existe o su contenido no se puede
    leer; nunca lanza por datos corruptos.
    """

    def load(self, key: str) -> Optional[Any]:
        """Lee el documento guardado bajo una clave."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Guarda (reemplaza) el documento de una clave."""
        ...


@runtime_checkable
class IInventoryRepository(Protocol):
    """Interfaz para el repositorio del menú."""

    def load(self) -> List[Product]:
        ...

    def save(self, products: List[Product]) -> None:
        ...


@runtime_checkable
class ISalesRepository(Protocol):
    """Interfaz para el repositorio de ventas (más recientes primero)."""

    def load(self) -> List[Sale]:
        ...

    def save(self, sales: List[Sale]) -> None:
        ...


@runtime_checkable
class ISettingsRepository(Protocol):
    """Interfaz para tasa de cambio y logo."""

    def get_exchange_rate(self) -> float:
        ...

    def set_exchange_rate(self, rate: float) -> None:
        ...

    def get_logo(self) -> str:
        ...

    def set_logo(self, logo: str) -> None:
        ...

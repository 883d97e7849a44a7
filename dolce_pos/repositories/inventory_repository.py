# ==============================================================================
# REPOSITORIO DE INVENTARIO
# ==============================================================================
# Encapsula el acceso a la clave del menú.
# El menú se guarda como lista: [{producto1}, {producto2}, ...]
# ==============================================================================

import copy
import logging
from typing import Any, Dict, List

from dolce_pos import config
from dolce_pos.models import Product
from dolce_pos.repositories.base import KeyRepository

logger = logging.getLogger(__name__)


class InventoryRepository(KeyRepository):
    """
    Repositorio del menú de productos.

    Formato guardado:
    [
        {"id": "1", "name": "Chicha Tradicional", "priceUSD": 2.5,
         "category": "Chichas", "description": "..."},
        ...
    ]
    """

    key = config.INVENTORY_KEY

    def _default_data(self) -> List[Dict[str, Any]]:
        """Menú inicial del negocio."""
        return copy.deepcopy(config.INITIAL_PRODUCTS)

    def _defaults(self) -> List[Product]:
        return [Product.from_dict(p) for p in self._default_data()]

    def load(self) -> List[Product]:
        """
        Carga el menú completo.

        Returns:
            Lista de productos; el menú inicial si lo guardado no es válido
        """
        raw = self._read_raw()
        if not isinstance(raw, list):
            logger.warning("[INVENTARIO] Formato inválido, usando menú inicial")
            return self._defaults()
        try:
            return [Product.from_dict(p) for p in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("[INVENTARIO] Datos corruptos (%s), usando menú inicial", e)
            return self._defaults()

    def save(self, products: List[Product]) -> None:
        """
        Guarda el menú completo (reemplazo total).

        Args:
            products: Lista completa de productos
        """
        self._write_raw([p.to_dict() for p in products])

# ==============================================================================
# REPOSITORIO DE VENTAS
# ==============================================================================
# Encapsula el acceso a la clave de ventas.
# Las ventas se guardan como lista, la más reciente primero.
# ==============================================================================

import logging
from typing import Any, Dict, List

from dolce_pos import config
from dolce_pos.models import Sale
from dolce_pos.repositories.base import KeyRepository

logger = logging.getLogger(__name__)


class SalesRepository(KeyRepository):
    """
    Repositorio del libro de ventas.

    Formato guardado:
    [
        {
            "id": "...",
            "timestamp": 1735689600000,
            "items": [{"productId": "1", "name": "...", "quantity": 2,
                       "priceUSD": 2.5, "totalUSD": 5.0}],
            "totalUSD": 5.0,
            "totalVES": 227.5,
            "exchangeRate": 45.5,
            "paymentMethod": "PAGO_MOVIL",
            "reference": "0123"
        }
    ]
    """

    key = config.SALES_KEY

    def _default_data(self) -> List[Dict[str, Any]]:
        return []

    def load(self) -> List[Sale]:
        """
        Carga todas las ventas.

        Returns:
            Lista de ventas; vacía si lo guardado no es válido
        """
        raw = self._read_raw()
        if not isinstance(raw, list):
            logger.warning("[VENTAS] Formato inválido, iniciando sin ventas")
            return []
        try:
            return [Sale.from_dict(s) for s in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("[VENTAS] Datos corruptos (%s), iniciando sin ventas", e)
            return []

    def save(self, sales: List[Sale]) -> None:
        """
        Guarda todas las ventas.

        Args:
            sales: Lista completa, más reciente primero
        """
        self._write_raw([s.to_dict() for s in sales])

# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Registro, consulta y eliminación de ventas, y filtros del historial.
# Una venta registrada nunca se edita: solo puede eliminarse.
# ==============================================================================

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from dolce_pos.models import HistoryStats, PaymentMethod, Sale, SaleItem
from dolce_pos.repositories.interfaces import ISalesRepository

logger = logging.getLogger(__name__)

ALL_METHODS = 'ALL'


def parse_filter_date(value: Any) -> Optional[date]:
    """
    Convierte un límite de fecha del filtro.

    Acepta date, datetime o 'YYYY-MM-DD'. Vacío o ilegible = sin límite.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        logger.warning("[VENTAS] Fecha de filtro ignorada: %r", value)
        return None


def matches_search(sale: Sale, query: str) -> bool:
    """Búsqueda sin distinguir mayúsculas en nombres de ítems y referencia."""
    if not query:
        return True
    needle = query.lower()
    if any(needle in item.name.lower() for item in sale.items):
        return True
    return bool(sale.reference) and needle in sale.reference.lower()


def history_stats(sales: Iterable[Sale]) -> HistoryStats:
    """Totales de un conjunto de ventas para la vista de historial."""
    stats = HistoryStats()
    for sale in sales:
        stats.total_usd += sale.total_usd
        stats.total_ves += sale.total_ves
        stats.count += 1
    return stats


class SalesService:
    """
    Servicio para gestión de ventas.

    Responsabilidades:
    - Crear la venta a partir de las líneas del carrito
    - Mantener el libro de ventas (más reciente primero)
    - Filtrar el historial
    """

    def __init__(self, sales_repo: ISalesRepository):
        """
        Inicializa el servicio y carga el libro de ventas.

        Args:
            sales_repo: Repositorio de ventas
        """
        self.sales_repo = sales_repo
        self._sales: List[Sale] = sales_repo.load()

    def _persist(self) -> None:
        """Guarda el libro. Un fallo de escritura no deshace la venta en memoria."""
        try:
            self.sales_repo.save(self._sales)
        except OSError as e:
            logger.error("[VENTAS] No se pudo guardar el libro de ventas: %s", e)

    # =========================================================================
    # CREACIÓN Y BAJA
    # =========================================================================

    def create_sale_from_cart(
        self,
        cart_items: List[Dict[str, Any]],
        payment_method: PaymentMethod,
        exchange_rate: float,
        reference: Optional[str] = None
    ) -> Sale:
        """
        Registra una venta con las líneas del carrito.
        Esta es la ÚNICA función que crea ventas.

        Args:
            cart_items: Líneas del carrito (formato de to_dict de SaleItem)
            payment_method: Método de pago
            exchange_rate: Tasa vigente, se copia a la venta
            reference: Referencia (solo se conserva con PAGO_MOVIL)

        Returns:
            La venta registrada
        """
        if not cart_items:
            raise ValueError('No se puede registrar una venta sin ítems')

        items = [SaleItem.from_dict(row) for row in cart_items]
        reference = (reference or '').strip() or None
        sale = Sale.create(items, exchange_rate, payment_method, reference)

        self._sales.insert(0, sale)
        self._persist()
        logger.info(
            "[VENTA] %s registrada: %.2f USD / %.2f VES (%s)",
            sale.id, sale.total_usd, sale.total_ves, sale.payment_method.value
        )
        return sale

    def delete_sale(self, sale_id: str) -> bool:
        """
        Elimina una venta del libro.

        Returns:
            True si existía
        """
        for index, sale in enumerate(self._sales):
            if sale.id == sale_id:
                del self._sales[index]
                self._persist()
                logger.info("[VENTA] %s eliminada", sale_id)
                return True
        return False

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_sales(self) -> List[Sale]:
        return list(self._sales)

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        for sale in self._sales:
            if sale.id == sale_id:
                return sale
        return None

    def search_sales(
        self,
        query: str = '',
        method: Any = ALL_METHODS,
        start_date: Any = None,
        end_date: Any = None
    ) -> List[Sale]:
        """
        Filtro del historial. Todos los criterios se combinan con Y.

        Args:
            query: Texto a buscar en ítems o referencia
            method: Método de pago o 'ALL'
            start_date: Fecha inicial inclusiva (fecha local)
            end_date: Fecha final inclusiva (fecha local)

        Returns:
            Ventas que cumplen todos los criterios, en el orden del libro
        """
        query = (query or '').strip()

        wanted_method = None
        if method and str(method).upper() != ALL_METHODS:
            wanted_method = PaymentMethod.parse(method)
            if wanted_method is None:
                return []

        start = parse_filter_date(start_date)
        end = parse_filter_date(end_date)

        result = []
        for sale in self._sales:
            if not matches_search(sale, query):
                continue
            if wanted_method and sale.payment_method != wanted_method:
                continue
            sale_day = sale.local_date
            if start and sale_day < start:
                continue
            if end and sale_day > end:
                continue
            result.append(sale)
        return result

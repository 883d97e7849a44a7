# ==============================================================================
# CONTENEDOR DE LA APLICACIÓN - Estado y servicios
# ==============================================================================
# Dueño único del estado del puesto: menú, ventas, tasa, logo y vista actual.
# El almacenamiento se inyecta, así los tests usan memoria y producción
# usa archivos JSON sin tocar los servicios.
# ==============================================================================

import logging
from datetime import date
from typing import Any, Callable, Dict, MutableMapping, Optional

from dolce_pos import config
from dolce_pos.models import PaymentMethod, View
from dolce_pos.repositories import (
    IKeyValueStorage,
    InventoryRepository,
    JsonFileStorage,
    SalesRepository,
    SettingsRepository,
)
from dolce_pos.services import (
    CartService,
    DescriptionService,
    InventoryService,
    SalesService,
    SettingsService,
)
from dolce_pos.services import currency_service, stats_service
from dolce_pos.services.sales_service import history_stats

logger = logging.getLogger(__name__)


class AppContainer:
    """
    Contenedor de dependencias y estado de la aplicación.

    Uso:
        container = AppContainer(storage=MemoryStorage())
        container.inventory_service.create_product('Chicha', 2.5)
        cart = container.create_cart_service({})
    """

    _instance: Optional['AppContainer'] = None

    def __init__(
        self,
        base_path: Optional[str] = None,
        storage: Optional[IKeyValueStorage] = None,
        description_service: Optional[DescriptionService] = None
    ):
        """
        Inicializa el contenedor.

        Args:
            base_path: Directorio de datos (si no se inyecta storage)
            storage: Almacenamiento clave-valor a usar
            description_service: Generador de descripciones
        """
        self._base_path = base_path or config.DATA_DIR
        self.storage = storage if storage is not None else JsonFileStorage(self._base_path)
        self.current_view = View.POS

        # Repositorios
        self.inventory_repo = InventoryRepository(self.storage)
        self.sales_repo = SalesRepository(self.storage)
        self.settings_repo = SettingsRepository(self.storage)

        # Servicios
        self.inventory_service = InventoryService(self.inventory_repo)
        self.sales_service = SalesService(self.sales_repo)
        self.settings_service = SettingsService(self.settings_repo)
        self.description_service = description_service or DescriptionService(
            api_key=config.GEMINI_API_KEY
        )

        logger.info(
            "[APP] Estado cargado: %d productos, %d ventas, tasa %s",
            len(self.inventory_service.get_all_products()),
            len(self.sales_service.get_all_sales()),
            self.settings_service.exchange_rate,
        )

    # =========================================================================
    # ESTADO
    # =========================================================================

    @property
    def exchange_rate(self) -> float:
        return self.settings_service.exchange_rate

    @property
    def logo(self) -> str:
        return self.settings_service.logo

    def update_exchange_rate(self, raw: Any) -> Dict[str, Any]:
        return self.settings_service.update_exchange_rate(raw)

    def update_logo(self, logo: Any) -> Dict[str, Any]:
        return self.settings_service.update_logo(logo)

    def create_cart_service(self, store: Optional[MutableMapping[str, Any]] = None) -> CartService:
        """Carrito ligado a un diccionario (la sesión del usuario en la API)."""
        return CartService(self.sales_service, self.settings_service, store)

    async def generate_description(self, product_name: str) -> str:
        return await self.description_service.generate(product_name)

    def daily_close(self, today: Optional[date] = None):
        return stats_service.daily_close(self.sales_service.get_all_sales(), today)

    def daily_report(self, today: Optional[date] = None) -> str:
        return stats_service.render_daily_report(self.daily_close(today))

    # =========================================================================
    # VISTAS
    # =========================================================================

    def navigate(self, view: Any) -> View:
        """
        Cambia la vista actual.

        Raises:
            ValueError: si la vista no existe
        """
        self.current_view = View(view)
        return self.current_view

    def render_view(self, view: Any = None, **params: Any) -> Dict[str, Any]:
        """
        Modelo de datos de una vista (la vista actual por defecto).

        Raises:
            ValueError: si la vista no existe
        """
        view = View(view) if view is not None else self.current_view
        builder = _VIEW_BUILDERS[view]
        model = builder(self, **params)
        model['view'] = view.value
        model['exchangeRate'] = self.exchange_rate
        return model

    def _build_pos_view(self, category: Optional[str] = None,
                        cart_store: Optional[MutableMapping[str, Any]] = None,
                        **_: Any) -> Dict[str, Any]:
        model = {
            'categories': self.inventory_service.get_categories(),
            'activeCategory': category or 'All',
            'products': [p.to_dict() for p in self.inventory_service.filter_by_category(category)],
            'paymentMethods': [{'value': m.value, 'label': m.label} for m in PaymentMethod],
        }
        if cart_store is not None:
            model['cart'] = self.create_cart_service(cart_store).get_cart()
        return model

    def _build_inventory_view(self, **_: Any) -> Dict[str, Any]:
        return {
            'categories': self.inventory_service.get_categories(),
            'products': [p.to_dict() for p in self.inventory_service.get_all_products()],
            'logo': self.logo,
        }

    def _build_sales_view(self, q: str = '', method: str = 'ALL',
                          start: Optional[str] = None, end: Optional[str] = None,
                          **_: Any) -> Dict[str, Any]:
        sales = self.sales_service.search_sales(q, method, start, end)
        return {
            'sales': [s.to_dict() for s in sales],
            'stats': history_stats(sales).to_dict(),
            'showing': len(sales),
            'total': len(self.sales_service.get_all_sales()),
        }

    def _build_calculator_view(self, usd: Any = None, ves: Any = None, **_: Any) -> Dict[str, Any]:
        return {'calculator': currency_service.calculate(self.exchange_rate, usd, ves)}

    def _build_daily_close_view(self, **_: Any) -> Dict[str, Any]:
        return {
            'businessName': config.BUSINESS_NAME,
            'logo': self.logo,
            'summary': self.daily_close().to_dict(),
        }

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    @classmethod
    def get_instance(cls, base_path: Optional[str] = None) -> 'AppContainer':
        """Contenedor global (se crea en la primera llamada)."""
        if cls._instance is None:
            cls._instance = cls(base_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia global (útil para tests)."""
        cls._instance = None


_VIEW_BUILDERS: Dict[View, Callable[..., Dict[str, Any]]] = {
    View.POS: AppContainer._build_pos_view,
    View.INVENTORY: AppContainer._build_inventory_view,
    View.SALES: AppContainer._build_sales_view,
    View.CALCULATOR: AppContainer._build_calculator_view,
    View.DAILY_CLOSE: AppContainer._build_daily_close_view,
}

_missing_views = set(View) - set(_VIEW_BUILDERS)
if _missing_views:
    raise RuntimeError(f"Vistas sin constructor: {sorted(v.value for v in _missing_views)}")


def get_container(base_path: Optional[str] = None) -> AppContainer:
    """
    Obtiene el contenedor de la aplicación global.

    Args:
        base_path: Directorio de datos

    Returns:
        Instancia del contenedor
    """
    return AppContainer.get_instance(base_path)

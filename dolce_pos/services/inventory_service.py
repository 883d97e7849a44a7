# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Centraliza la lógica del menú: alta, edición y baja de productos.
# El menú vive en memoria y se guarda completo después de cada cambio.
# ==============================================================================

import logging
from typing import Any, Dict, List, Optional

from dolce_pos import config
from dolce_pos.models import Currency, Product, generate_id
from dolce_pos.repositories.interfaces import IInventoryRepository
from dolce_pos.services.currency_service import parse_amount, to_usd

logger = logging.getLogger(__name__)

ALL_CATEGORIES = 'All'


class InventoryService:
    """
    Servicio para gestión del menú.

    Responsabilidades:
    - CRUD de productos
    - Validación del formulario de producto
    - Conversión del precio cuando se ingresa en bolívares
    - Filtro por categoría para el punto de venta

    Borrar un producto no toca las ventas: cada venta guarda su propia
    copia de nombre y precio.
    """

    def __init__(self, inventory_repo: IInventoryRepository):
        """
        Inicializa el servicio y carga el menú.

        Args:
            inventory_repo: Repositorio del menú
        """
        self.inventory_repo = inventory_repo
        self._products: List[Product] = inventory_repo.load()

    def _persist(self) -> None:
        try:
            self.inventory_repo.save(self._products)
        except OSError as e:
            logger.error("[INVENTARIO] No se pudo guardar el menú: %s", e)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_products(self) -> List[Product]:
        """Retorna una copia de la lista del menú."""
        return list(self._products)

    def get_product(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def get_categories(self) -> List[str]:
        """
        Categorías del menú: las configuradas primero y luego las que
        aparezcan en productos existentes.
        """
        categories = list(config.CATEGORIES)
        for product in self._products:
            if product.category and product.category not in categories:
                categories.append(product.category)
        return categories

    def filter_by_category(self, category: Optional[str] = None) -> List[Product]:
        """
        Productos de una categoría.

        Args:
            category: Categoría a mostrar; 'All' o vacío muestra todo
        """
        if not category or category == ALL_CATEGORIES:
            return self.get_all_products()
        return [p for p in self._products if p.category == category]

    # =========================================================================
    # OPERACIONES DEL CATÁLOGO
    # =========================================================================

    def add_product(self, product: Product) -> None:
        self._products.append(product)
        self._persist()
        logger.info("[INVENTARIO] Producto agregado: %s (%s)", product.name, product.id)

    def update_product(self, product: Product) -> bool:
        """
        Reemplaza el producto con el mismo id.

        Returns:
            False (sin cambios) si el id no existe
        """
        for index, existing in enumerate(self._products):
            if existing.id == product.id:
                self._products[index] = product
                self._persist()
                logger.info("[INVENTARIO] Producto actualizado: %s (%s)", product.name, product.id)
                return True
        return False

    def delete_product(self, product_id: str) -> Optional[Product]:
        """
        Elimina un producto del menú.

        Returns:
            El producto eliminado o None si no existía
        """
        for index, existing in enumerate(self._products):
            if existing.id == product_id:
                removed = self._products.pop(index)
                self._persist()
                logger.info("[INVENTARIO] Producto eliminado: %s (%s)", removed.name, removed.id)
                return removed
        return None

    # =========================================================================
    # FORMULARIO DE PRODUCTO
    # =========================================================================

    @staticmethod
    def price_to_usd(price: Any, currency: Any = Currency.USD, exchange_rate: float = 0.0) -> float:
        """
        Normaliza el precio del formulario a divisas.

        Args:
            price: Precio tal como se escribió
            currency: Moneda en que se escribió
            exchange_rate: Tasa vigente (necesaria si la moneda es VES)
        """
        amount = parse_amount(price)
        try:
            currency = Currency(currency)
        except ValueError:
            currency = Currency.USD
        if currency == Currency.VES:
            return to_usd(amount, exchange_rate)
        return amount

    def _validate_form(self, name: Any, price_usd: float) -> Optional[str]:
        if not name or not str(name).strip():
            return 'El nombre del producto es obligatorio'
        if price_usd <= 0:
            return 'El precio debe ser mayor a 0'
        return None

    def create_product(
        self,
        name: str,
        price: Any,
        category: str = '',
        description: Optional[str] = None,
        currency: Any = Currency.USD,
        exchange_rate: float = 0.0
    ) -> Dict[str, Any]:
        """
        Crea un producto desde el formulario del menú.

        Returns:
            Dict con ok y product, o ok=False y error (nada se guarda)
        """
        price_usd = self.price_to_usd(price, currency, exchange_rate)
        error = self._validate_form(name, price_usd)
        if error:
            return {'ok': False, 'error': error}

        product = Product(
            id=generate_id(),
            name=str(name).strip(),
            price_usd=price_usd,
            category=category or config.CATEGORIES[0],
            description=description,
        )
        self.add_product(product)
        return {'ok': True, 'product': product}

    def edit_product(
        self,
        product_id: str,
        name: str,
        price: Any,
        category: str = '',
        description: Optional[str] = None,
        currency: Any = Currency.USD,
        exchange_rate: float = 0.0
    ) -> Dict[str, Any]:
        """
        Edita un producto existente desde el formulario.

        Returns:
            Dict con ok y product, o ok=False y error
        """
        existing = self.get_product(product_id)
        if existing is None:
            return {'ok': False, 'error': 'Producto no encontrado'}

        price_usd = self.price_to_usd(price, currency, exchange_rate)
        error = self._validate_form(name, price_usd)
        if error:
            return {'ok': False, 'error': error}

        product = Product(
            id=existing.id,
            name=str(name).strip(),
            price_usd=price_usd,
            category=category or existing.category,
            description=description if description is not None else existing.description,
        )
        self.update_product(product)
        return {'ok': True, 'product': product}

# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza la lógica del carrito del punto de venta.
# El carrito vive en un diccionario mutable: la sesión de Flask en la API,
# un dict normal en cualquier otro uso.
# ==============================================================================

from typing import Any, Dict, List, MutableMapping, Optional

from dolce_pos.models import PaymentMethod, Product
from dolce_pos.services.sales_service import SalesService
from dolce_pos.services.settings_service import SettingsService

CART_KEY = 'cart'
REFERENCE_KEY = 'cart_reference'


class CartService:
    """
    Servicio para gestión del carrito.

    Responsabilidades:
    - Agregar/quitar líneas (una línea por producto)
    - Ajustar cantidades (mínimo 1)
    - Calcular totales en ambas monedas
    - Cobrar: registrar la venta y vaciar el carrito

    El carrito se almacena en store['cart'] y la referencia del pago
    en store['cart_reference'].
    """

    def __init__(
        self,
        sales_service: SalesService,
        settings_service: SettingsService,
        store: Optional[MutableMapping[str, Any]] = None
    ):
        """
        Args:
            sales_service: Servicio de ventas
            settings_service: Fuente de la tasa vigente
            store: Diccionario donde vive el carrito (por defecto uno nuevo)
        """
        self.sales_service = sales_service
        self.settings_service = settings_service
        self.store = store if store is not None else {}

    def _get_cart(self) -> List[Dict[str, Any]]:
        return self.store.get(CART_KEY, [])

    def _save_cart(self, cart: List[Dict[str, Any]]) -> None:
        self.store[CART_KEY] = cart
        # La sesión de Flask no detecta cambios dentro de listas
        if hasattr(self.store, 'modified'):
            self.store.modified = True

    def _summary(self, cart: List[Dict[str, Any]]) -> Dict[str, Any]:
        rate = self.settings_service.exchange_rate
        total_usd = sum(item['totalUSD'] for item in cart)
        return {
            'total_items': sum(item['quantity'] for item in cart),
            'items_count': len(cart),
            'total_usd': round(total_usd, 2),
            'total_ves': round(total_usd * rate, 2),
        }

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_cart(self) -> Dict[str, Any]:
        """
        Obtiene el carrito con totales calculados a la tasa vigente.

        Returns:
            Dict con items, reference, total_items, items_count, total_usd, total_ves
        """
        cart = self._get_cart()
        result = {'items': cart, 'reference': self.get_reference()}
        result.update(self._summary(cart))
        return result

    def get_cart_items(self) -> List[Dict[str, Any]]:
        return self._get_cart()

    def get_reference(self) -> str:
        return self.store.get(REFERENCE_KEY, '')

    def is_empty(self) -> bool:
        return not self._get_cart()

    # =========================================================================
    # OPERACIONES
    # =========================================================================

    def add_item(self, product: Product) -> Dict[str, Any]:
        """
        Agrega una unidad del producto. Si ya está en el carrito, suma 1.

        El nombre y el precio se copian del producto en este momento.

        Returns:
            Dict con resultado (ok, error, carrito)
        """
        if product is None:
            return {'ok': False, 'error': 'Producto no encontrado'}
        if not product.is_sellable:
            return {'ok': False, 'error': 'El producto no tiene un precio válido'}

        cart = self._get_cart()
        for item in cart:
            if item['productId'] == product.id:
                item['quantity'] += 1
                item['totalUSD'] = item['quantity'] * item['priceUSD']
                break
        else:
            cart.append({
                'productId': product.id,
                'name': product.name,
                'quantity': 1,
                'priceUSD': product.price_usd,
                'totalUSD': product.price_usd,
            })

        self._save_cart(cart)
        return {'ok': True, 'mensaje': 'Producto agregado al carrito', 'carrito': self._summary(cart)}

    def update_quantity(self, product_id: str, delta: int) -> Dict[str, Any]:
        """
        Suma delta a la cantidad de una línea. Nunca baja de 1: para sacar
        el producto se usa remove_item.

        Returns:
            Dict con resultado
        """
        cart = self._get_cart()
        for item in cart:
            if item['productId'] == product_id:
                item['quantity'] = max(1, item['quantity'] + int(delta))
                item['totalUSD'] = item['quantity'] * item['priceUSD']
                self._save_cart(cart)
                return {'ok': True, 'mensaje': 'Cantidad actualizada', 'carrito': self._summary(cart)}
        return {'ok': False, 'error': 'El producto no está en el carrito'}

    def remove_item(self, product_id: str) -> Dict[str, Any]:
        """Elimina la línea completa de un producto."""
        cart = [item for item in self._get_cart() if item['productId'] != product_id]
        self._save_cart(cart)
        return {'ok': True, 'mensaje': 'Producto eliminado del carrito', 'carrito': self._summary(cart)}

    def set_reference(self, reference: Optional[str]) -> None:
        """Guarda la referencia del Pago Móvil mientras se arma la venta."""
        self.store[REFERENCE_KEY] = (reference or '').strip()

    def clear_cart(self) -> Dict[str, Any]:
        """Vacía el carrito y la referencia."""
        self._save_cart([])
        self.store[REFERENCE_KEY] = ''
        return {'ok': True, 'mensaje': 'Carrito vaciado', 'carrito': self._summary([])}

    def checkout(self, payment_method: Any, reference: Optional[str] = None) -> Dict[str, Any]:
        """
        Cobra el carrito: registra UNA venta a la tasa vigente y vacía el carrito.

        Con el carrito vacío no hace nada. La referencia solo se guarda
        con PAGO_MOVIL.

        Args:
            payment_method: Método de pago
            reference: Referencia del pago (si no llega, la guardada en el carrito)

        Returns:
            Dict con ok y sale, o ok=False y error
        """
        cart = self._get_cart()
        if not cart:
            return {'ok': False, 'error': 'El carrito está vacío'}

        method = PaymentMethod.parse(payment_method)
        if method is None:
            return {'ok': False, 'error': 'Método de pago inválido'}

        if reference is None:
            reference = self.get_reference()
        if method != PaymentMethod.PAGO_MOVIL:
            reference = None

        sale = self.sales_service.create_sale_from_cart(
            cart, method, self.settings_service.exchange_rate, reference
        )
        self.clear_cart()
        return {'ok': True, 'mensaje': '¡Venta procesada con éxito!', 'sale': sale}

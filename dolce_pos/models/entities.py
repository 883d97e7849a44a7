# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia.
# Las claves de to_dict() conservan el formato camelCase de los datos guardados.
# ==============================================================================

import time
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

class PaymentMethod(str, Enum):
    """Métodos de pago aceptados en el puesto."""
    CASH_USD = "CASH_USD"      # Divisas en efectivo
    CASH_VES = "CASH_VES"      # Bolívares en efectivo
    PAGO_MOVIL = "PAGO_MOVIL"  # Transferencia móvil (requiere referencia)
    CARD = "CARD"              # Punto de venta

    @property
    def label(self) -> str:
        return _PAYMENT_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional['PaymentMethod']:
        """Convierte un string al enum; None si no es un método válido."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


_PAYMENT_LABELS = {
    PaymentMethod.CASH_USD: "Divisas $",
    PaymentMethod.CASH_VES: "Efectivo Bs.",
    PaymentMethod.PAGO_MOVIL: "Pago Móvil",
    PaymentMethod.CARD: "Punto Venta",
}


class Currency(str, Enum):
    """Monedas manejadas: divisa de referencia y moneda local."""
    USD = "USD"
    VES = "VES"


class View(str, Enum):
    """Vistas de la aplicación."""
    POS = "POS"
    INVENTORY = "INVENTORY"
    SALES = "SALES"
    CALCULATOR = "CALCULATOR"
    DAILY_CLOSE = "DAILY_CLOSE"


def generate_id() -> str:
    """Genera un identificador único para productos y ventas."""
    return str(uuid.uuid4())


def now_ms() -> int:
    """Timestamp actual en milisegundos (epoch)."""
    return int(time.time() * 1000)


# ==============================================================================
# ENTIDADES DE INVENTARIO
# ==============================================================================

@dataclass
class Product:
    """
    Producto del menú.

    Attributes:
        id: Identificador único, estable desde su creación
        name: Nombre visible en el punto de venta
        price_usd: Precio en divisas (debe ser > 0 para poder venderse)
        category: Categoría del menú
        description: Texto de marketing opcional
    """
    id: str
    name: str
    price_usd: float
    category: str = ''
    description: Optional[str] = None

    @property
    def is_sellable(self) -> bool:
        """Un producto sin precio positivo no puede entrar al carrito."""
        return self.price_usd > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = {
            'id': self.id,
            'name': self.name,
            'priceUSD': self.price_usd,
            'category': self.category,
        }
        if self.description is not None:
            d['description'] = self.description
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """
        Crea instancia desde diccionario.

        Raises:
            KeyError, TypeError, ValueError: si faltan campos o no son válidos
        """
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            price_usd=float(data['priceUSD']),
            category=data.get('category', '') or '',
            description=data.get('description'),
        )


# ==============================================================================
# ENTIDADES DE VENTA
# ==============================================================================

@dataclass(frozen=True)
class SaleItem:
    """
    Línea de una venta. Nombre y precio son una copia del producto al momento
    de agregarlo al carrito: editar el producto después no cambia el historial.
    """
    product_id: str
    name: str
    quantity: int
    price_usd: float
    total_usd: float

    @classmethod
    def create(cls, product_id: str, name: str, quantity: int, price_usd: float) -> 'SaleItem':
        """Construye la línea calculando total_usd = quantity * price_usd."""
        return cls(
            product_id=product_id,
            name=name,
            quantity=quantity,
            price_usd=price_usd,
            total_usd=quantity * price_usd,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'quantity': self.quantity,
            'priceUSD': self.price_usd,
            'totalUSD': self.total_usd,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaleItem':
        # El total se recalcula para que la invariante se mantenga siempre
        return cls.create(
            product_id=str(data['productId']),
            name=str(data['name']),
            quantity=int(data['quantity']),
            price_usd=float(data['priceUSD']),
        )


@dataclass(frozen=True)
class Sale:
    """
    Venta registrada. Inmutable: solo puede eliminarse, nunca editarse.

    Attributes:
        id: Identificador único
        timestamp: Momento del cobro (epoch en milisegundos)
        items: Líneas vendidas
        total_usd: Suma de los totales de las líneas
        total_ves: total_usd * exchange_rate
        exchange_rate: Tasa vigente al momento del cobro (copia, no referencia)
        payment_method: Método de pago
        reference: Referencia bancaria (solo PAGO_MOVIL)
    """
    id: str
    timestamp: int
    items: Tuple[SaleItem, ...]
    total_usd: float
    total_ves: float
    exchange_rate: float
    payment_method: PaymentMethod
    reference: Optional[str] = None

    @classmethod
    def create(
        cls,
        items: List[SaleItem],
        exchange_rate: float,
        payment_method: PaymentMethod,
        reference: Optional[str] = None,
        sale_id: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> 'Sale':
        """
        Construye la venta calculando los totales a partir de las líneas.
        La referencia se descarta para todo método distinto de PAGO_MOVIL.
        """
        total_usd = sum(item.total_usd for item in items)
        if payment_method != PaymentMethod.PAGO_MOVIL:
            reference = None
        return cls(
            id=sale_id or generate_id(),
            timestamp=timestamp if timestamp is not None else now_ms(),
            items=tuple(items),
            total_usd=total_usd,
            total_ves=total_usd * exchange_rate,
            exchange_rate=exchange_rate,
            payment_method=payment_method,
            reference=reference,
        )

    @property
    def local_datetime(self) -> datetime:
        """Fecha y hora local del cobro."""
        return datetime.fromtimestamp(self.timestamp / 1000)

    @property
    def local_date(self) -> date:
        """Fecha calendario local del cobro."""
        return self.local_datetime.date()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'id': self.id,
            'timestamp': self.timestamp,
            'items': [item.to_dict() for item in self.items],
            'totalUSD': self.total_usd,
            'totalVES': self.total_ves,
            'exchangeRate': self.exchange_rate,
            'paymentMethod': self.payment_method.value,
        }
        if self.reference is not None:
            d['reference'] = self.reference
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sale':
        """
        Crea instancia desde diccionario guardado.

        Raises:
            KeyError, TypeError, ValueError: si el registro está incompleto
        """
        method = PaymentMethod.parse(data['paymentMethod'])
        if method is None:
            raise ValueError(f"Método de pago desconocido: {data['paymentMethod']!r}")
        return cls.create(
            items=[SaleItem.from_dict(i) for i in data['items']],
            exchange_rate=float(data['exchangeRate']),
            payment_method=method,
            reference=data.get('reference'),
            sale_id=str(data['id']),
            timestamp=int(data['timestamp']),
        )


# ==============================================================================
# ENTIDADES DE REPORTE
# ==============================================================================

@dataclass
class ProductTotals:
    """Acumulado de un producto dentro de un reporte."""
    product_id: str
    name: str
    quantity: int = 0
    total_usd: float = 0.0
    total_ves: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'quantity': self.quantity,
            'totalUSD': round(self.total_usd, 2),
            'totalVES': round(self.total_ves, 2),
        }


@dataclass
class PaymentTotals:
    """Acumulado de un método de pago dentro de un reporte."""
    method: PaymentMethod
    count: int = 0
    total_usd: float = 0.0
    total_ves: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'method': self.method.value,
            'label': self.method.label,
            'count': self.count,
            'totalUSD': round(self.total_usd, 2),
            'totalVES': round(self.total_ves, 2),
        }


@dataclass
class DailySummary:
    """Resumen de cierre de caja sobre un conjunto de ventas."""
    products: List[ProductTotals] = field(default_factory=list)
    payments: Dict[PaymentMethod, PaymentTotals] = field(default_factory=dict)
    grand_total_usd: float = 0.0
    grand_total_ves: float = 0.0
    total_sales: int = 0
    day: Optional[date] = None

    @property
    def average_ticket_usd(self) -> float:
        if self.total_sales == 0:
            return 0.0
        return self.grand_total_usd / self.total_sales

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.day.isoformat() if self.day else None,
            'products': [p.to_dict() for p in self.products],
            'payments': [
                (self.payments.get(m) or PaymentTotals(m)).to_dict() for m in PaymentMethod
            ],
            'grandTotalUSD': round(self.grand_total_usd, 2),
            'grandTotalVES': round(self.grand_total_ves, 2),
            'totalSales': self.total_sales,
            'averageTicketUSD': round(self.average_ticket_usd, 2),
        }


@dataclass
class HistoryStats:
    """Totales de la vista de historial sobre las ventas filtradas."""
    total_usd: float = 0.0
    total_ves: float = 0.0
    count: int = 0

    @property
    def average_ticket_usd(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_usd / self.count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalUSD': round(self.total_usd, 2),
            'totalVES': round(self.total_ves, 2),
            'count': self.count,
            'averageTicketUSD': round(self.average_ticket_usd, 2),
        }

# ==============================================================================
# SERVICIO DE ESTADÍSTICAS - Cierre de caja
# ==============================================================================
# Agrega ventas por producto, por método de pago y en total, en ambas monedas.
#
# REGLA PRINCIPAL: el monto en bolívares de cada ítem usa la tasa de SU venta,
# no la tasa vigente. Las tasas cambian de una venta a otra.
# ==============================================================================

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from dolce_pos import config
from dolce_pos.models import DailySummary, PaymentMethod, PaymentTotals, ProductTotals, Sale
from dolce_pos.services.currency_service import format_currency


def is_on_local_date(sale: Sale, day: date) -> bool:
    """Compara la fecha calendario local de la venta (no una ventana de 24h)."""
    return sale.local_date == day


def summarize(sales: Iterable[Sale], day: Optional[date] = None) -> DailySummary:
    """
    Resume un conjunto de ventas.

    Args:
        sales: Ventas a agregar (no se modifican)
        day: Fecha que representa el resumen (informativa)

    Returns:
        DailySummary con productos ordenados por cantidad descendente
    """
    product_map: Dict[str, ProductTotals] = {}
    payment_map = {method: PaymentTotals(method) for method in PaymentMethod}
    summary = DailySummary(payments=payment_map, day=day)

    for sale in sales:
        summary.grand_total_usd += sale.total_usd
        summary.grand_total_ves += sale.total_ves
        summary.total_sales += 1

        payment = payment_map[sale.payment_method]
        payment.count += 1
        payment.total_usd += sale.total_usd
        payment.total_ves += sale.total_ves

        for item in sale.items:
            totals = product_map.get(item.product_id)
            if totals is None:
                totals = ProductTotals(product_id=item.product_id, name=item.name)
                product_map[item.product_id] = totals
            totals.quantity += item.quantity
            totals.total_usd += item.total_usd
            totals.total_ves += item.total_usd * sale.exchange_rate

    # sorted() es estable: los empates conservan el orden de aparición
    summary.products = sorted(product_map.values(), key=lambda p: p.quantity, reverse=True)
    return summary


def daily_close(sales: Iterable[Sale], today: Optional[date] = None) -> DailySummary:
    """
    Cierre de caja del día.

    Args:
        sales: Libro completo de ventas
        today: Fecha del cierre (por defecto la fecha local actual)
    """
    today = today or datetime.now().date()
    return summarize((s for s in sales if is_on_local_date(s, today)), day=today)


def render_daily_report(
    summary: DailySummary,
    business_name: str = config.BUSINESS_NAME,
    width: int = 44
) -> str:
    """
    Reporte imprimible del cierre de caja en texto plano.

    Returns:
        Texto listo para imprimir
    """
    def row(label: str, value: str) -> str:
        space = max(1, width - len(label) - len(value))
        return f"{label}{' ' * space}{value}"

    rule = '=' * width
    thin = '-' * width
    day = summary.day.strftime('%d/%m/%Y') if summary.day else ''

    lines: List[str] = [
        rule,
        business_name.upper().center(width),
        'CIERRE DE CAJA'.center(width),
        day.center(width),
        rule,
        row('Ventas', str(summary.total_sales)),
        row('Total USD', format_currency(summary.grand_total_usd, 'USD')),
        row('Total Bs.', format_currency(summary.grand_total_ves, 'VES')),
        row('Ticket promedio', format_currency(summary.average_ticket_usd, 'USD')),
        thin,
        'MÉTODOS DE PAGO',
    ]
    for method in PaymentMethod:
        payment = summary.payments.get(method) or PaymentTotals(method)
        lines.append(row(f"{method.label} ({payment.count} ops)",
                         format_currency(payment.total_usd, 'USD')))
        lines.append(row('', format_currency(payment.total_ves, 'VES')))

    lines.extend([thin, 'PRODUCTOS'])
    if not summary.products:
        lines.append('Sin ventas registradas hoy')
    for product in summary.products:
        lines.append(row(f"{product.quantity} x {product.name}",
                         format_currency(product.total_usd, 'USD')))
    lines.append(rule)
    return '\n'.join(lines) + '\n'

# ==============================================================================
# SERVICIO DE MONEDA - Conversión USD / VES
# ==============================================================================
# Funciones puras: la tasa siempre llega como argumento, nunca se lee de un
# estado global.
# ==============================================================================

import math
from typing import Any, Dict, Optional, Union

from dolce_pos.models import Currency

Number = Union[int, float]


def to_ves(usd: Number, rate: Number) -> float:
    """Convierte divisas a bolívares."""
    return usd * rate


def to_usd(ves: Number, rate: Number) -> float:
    """Convierte bolívares a divisas. Con una tasa no positiva retorna 0."""
    if rate > 0:
        return ves / rate
    return 0.0


def convert(amount: Number, source: Currency, target: Currency, rate: Number) -> float:
    """
    Convierte un monto entre las dos monedas.

    Args:
        amount: Monto en la moneda de origen
        source: Moneda de origen
        target: Moneda de destino
        rate: Bolívares por divisa

    Returns:
        Monto en la moneda de destino
    """
    source = Currency(source)
    target = Currency(target)
    if source == target:
        return float(amount)
    if target == Currency.VES:
        return to_ves(amount, rate)
    return to_usd(amount, rate)


def parse_amount(raw: Any) -> float:
    """Lectura permisiva de un monto escrito: lo que no es número vale 0."""
    if raw is None:
        return 0.0
    try:
        value = float(str(raw).strip().replace(',', '.'))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def parse_rate(raw: Any) -> Optional[float]:
    """
    Lectura estricta de una tasa ingresada por el operador.

    Returns:
        La tasa como float positivo, o None si no es válida
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip().replace(',', '.'))
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def calculate(rate: Number, usd: Any = None, ves: Any = None) -> Dict[str, str]:
    """
    Calculadora Bs.: a partir de un lado calcula el otro.

    Si llegan ambos montos manda el de divisas. Sin ninguno, se usa $1.

    Returns:
        {'usd': '1.00', 'ves': '45.50', 'rate': 45.5}
    """
    if usd is None and ves is not None:
        ves_value = parse_amount(ves)
        usd_value = to_usd(ves_value, rate)
    else:
        usd_value = parse_amount(usd if usd is not None else 1)
        ves_value = to_ves(usd_value, rate)
    return {
        'usd': f"{usd_value:.2f}",
        'ves': f"{ves_value:.2f}",
        'rate': rate,
    }


def _group_thousands(amount: float, thousands: str, decimal: str) -> str:
    text = f"{abs(amount):,.2f}"
    integer, fraction = text.split('.')
    return integer.replace(',', thousands) + decimal + fraction


def format_currency(amount: Number, currency: Union[Currency, str]) -> str:
    """
    Formatea un monto para mostrar.

    USD con formato en-US: $1,234.56
    VES con formato es-VE: Bs. 1.234,56
    """
    currency = Currency(currency)
    sign = '-' if amount < 0 and round(abs(amount), 2) > 0 else ''
    if currency == Currency.USD:
        return f"{sign}${_group_thousands(amount, ',', '.')}"
    return f"{sign}Bs. {_group_thousands(amount, '.', ',')}"

# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio como dataclasses, independientes de Flask y del
# mecanismo de persistencia.
# ==============================================================================

from .entities import (
    # Enumeraciones
    PaymentMethod,
    Currency,
    View,

    # Inventario
    Product,

    # Ventas
    Sale,
    SaleItem,

    # Reportes
    ProductTotals,
    PaymentTotals,
    DailySummary,
    HistoryStats,

    # Utilidades
    generate_id,
    now_ms,
)

__all__ = [
    'PaymentMethod',
    'Currency',
    'View',
    'Product',
    'Sale',
    'SaleItem',
    'ProductTotals',
    'PaymentTotals',
    'DailySummary',
    'HistoryStats',
    'generate_id',
    'now_ms',
]

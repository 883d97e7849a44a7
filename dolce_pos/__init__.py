"""Punto de venta de Dolce Fusión: menú, carrito, ventas y cierre de caja."""

__version__ = '1.0.0'

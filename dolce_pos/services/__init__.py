# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (controllers) solo llaman a servicios
# 4. Los servicios NO conocen el tipo de almacenamiento
#
# ESTRUCTURA:
# ├── currency_service.py     → Conversión y formato USD / VES
# ├── inventory_service.py    → Menú de productos
# ├── sales_service.py        → Registro e historial de ventas
# ├── cart_service.py         → Carrito y cobro
# ├── settings_service.py     → Tasa del día y logo
# ├── stats_service.py        → Cierre de caja
# └── description_service.py  → Descripciones con Gemini
# ==============================================================================

from dolce_pos.services.inventory_service import InventoryService
from dolce_pos.services.sales_service import SalesService
from dolce_pos.services.settings_service import SettingsService
from dolce_pos.services.cart_service import CartService
from dolce_pos.services.description_service import DescriptionService, DescriptionDraft

__all__ = [
    'InventoryService',
    'SalesService',
    'SettingsService',
    'CartService',
    'DescriptionService',
    'DescriptionDraft',
]

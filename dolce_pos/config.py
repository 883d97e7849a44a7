# ==============================================================================
# CONFIGURACIÓN - Constantes del negocio y variables de entorno
# ==============================================================================
# Todo valor sensible o dependiente del despliegue se lee del entorno.
# Comando: export DOLCE_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
# ==============================================================================

import logging
import os
import sys

BASE = os.path.dirname(os.path.abspath(__file__))

# ═══════════════════════════════════════════════════════════════════════════════
# NEGOCIO
# ═══════════════════════════════════════════════════════════════════════════════
BUSINESS_NAME = "Dolce Fusión"

DEFAULT_EXCHANGE_RATE = 45.50
DEFAULT_LOGO_URL = "https://cdn-icons-png.flaticon.com/512/3130/3130432.png"

CATEGORIES = ["Chichas", "Bebidas Frías", "Postres", "Extras"]

# Menú inicial (se usa cuando no hay inventario guardado o está corrupto)
INITIAL_PRODUCTS = [
    {"id": "1", "name": "Chicha Tradicional", "priceUSD": 2.5, "category": "Chichas",
     "description": "La receta de la abuela, cremosa y con canela."},
    {"id": "2", "name": "Chicha Grande", "priceUSD": 3.5, "category": "Chichas",
     "description": "Para compartir, con leche condensada."},
    {"id": "3", "name": "Papelón con Limón", "priceUSD": 1.5, "category": "Bebidas Frías",
     "description": "Bien frío, como debe ser."},
    {"id": "4", "name": "Tizana", "priceUSD": 2.0, "category": "Bebidas Frías",
     "description": "Frutas picaditas en jugo natural."},
    {"id": "5", "name": "Quesillo", "priceUSD": 2.0, "category": "Postres",
     "description": "Porción individual."},
    {"id": "6", "name": "Topping de Leche Condensada", "priceUSD": 0.5, "category": "Extras",
     "description": ""},
]

# ═══════════════════════════════════════════════════════════════════════════════
# PERSISTENCIA
# ═══════════════════════════════════════════════════════════════════════════════
DATA_DIR = os.environ.get("DOLCE_DATA_DIR") or os.path.join(BASE, "data")

INVENTORY_KEY = "chicha_inventory"
SALES_KEY = "chicha_sales"
RATE_KEY = "dolce_exchange_rate"
LOGO_KEY = "dolce_fusion_logo"

# ═══════════════════════════════════════════════════════════════════════════════
# FLASK
# ═══════════════════════════════════════════════════════════════════════════════
_DEFAULT_SECRET = "dolce_pos_dev_secret_key_change_in_production"
SECRET_KEY = os.environ.get("DOLCE_SECRET_KEY") or _DEFAULT_SECRET
SECRET_KEY_IS_DEFAULT = SECRET_KEY == _DEFAULT_SECRET

# ═══════════════════════════════════════════════════════════════════════════════
# GENERADOR DE DESCRIPCIONES (Gemini)
# ═══════════════════════════════════════════════════════════════════════════════
GEMINI_API_KEY = os.environ.get("API_KEY") or os.environ.get("GEMINI_API_KEY")
GEMINI_MODEL = os.environ.get("DOLCE_GEMINI_MODEL", "gemini-3-flash-preview")
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

try:
    DESCRIPTION_TIMEOUT = float(os.environ.get("DOLCE_DESCRIPTION_TIMEOUT", "15"))
except ValueError:
    DESCRIPTION_TIMEOUT = 15.0

# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════════════════
LOG_LEVEL = os.environ.get("DOLCE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_logging_configured = False


def configure_logging(level: str = None) -> None:
    """Configura el logger raíz del paquete una sola vez."""
    global _logging_configured
    if _logging_configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger("dolce_pos")
    logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
    _logging_configured = True

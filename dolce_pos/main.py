# ==============================================================================
# API HTTP - Flask
# ==============================================================================
# Las rutas solo traducen HTTP <-> servicios. Toda la lógica está en services/.
# Todas las respuestas son JSON ({"ok": ..., ...}) salvo el reporte imprimible.
# ==============================================================================

import asyncio
import logging
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, Response, current_app, request, session
from werkzeug.exceptions import HTTPException

from dolce_pos import config
from dolce_pos.app_container import AppContainer

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)


def get_app_container() -> AppContainer:
    return current_app.extensions['dolce_pos']


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


VIEW_PARAMS = ('q', 'method', 'start', 'end', 'category', 'usd', 'ves')


def _view_params() -> Dict[str, Any]:
    """Filtros de vista tomados del query string (solo claves conocidas)."""
    return {key: request.args[key] for key in VIEW_PARAMS if key in request.args}


def _cart():
    return get_app_container().create_cart_service(session)


def _result(result: Dict[str, Any], success_status: int = 200):
    """Convierte un resultado de servicio en respuesta JSON."""
    body = dict(result)
    for key in ('product', 'sale'):
        if body.get(key) is not None:
            body[key] = body[key].to_dict()
    return body, (success_status if body.get('ok') else 400)


# ═══════════════════════════════════════════════════════════════════════════════
# VISTAS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/api/views', methods=['GET'])
def current_view():
    container = get_app_container()
    return {'ok': True, 'view': container.current_view.value}


@api.route('/api/views/<view>', methods=['GET'])
def render_view(view):
    """Navega a una vista y retorna su modelo de datos."""
    container = get_app_container()
    try:
        container.navigate(view.upper())
    except ValueError:
        return {'ok': False, 'error': f'Vista desconocida: {view}'}, 404
    params = _view_params()
    params['cart_store'] = session
    model = container.render_view(**params)
    model['ok'] = True
    return model


# ═══════════════════════════════════════════════════════════════════════════════
# MENÚ
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/api/products', methods=['GET'])
def list_products():
    inventory = get_app_container().inventory_service
    products = inventory.filter_by_category(request.args.get('category'))
    return {
        'ok': True,
        'products': [p.to_dict() for p in products],
        'categories': inventory.get_categories(),
    }


@api.route('/api/products', methods=['POST'])
def create_product():
    """
    Crear producto.

    Body JSON: {"name": "...", "price": 2.5, "currency": "USD"|"VES",
                "category": "...", "description": "..."}
    """
    container = get_app_container()
    data = _json_body()
    result = container.inventory_service.create_product(
        name=data.get('name'),
        price=data.get('price', data.get('priceUSD')),
        category=data.get('category', ''),
        description=data.get('description'),
        currency=data.get('currency', 'USD'),
        exchange_rate=container.exchange_rate,
    )
    return _result(result, success_status=201)


@api.route('/api/products/<product_id>', methods=['PUT'])
def edit_product(product_id):
    container = get_app_container()
    data = _json_body()
    result = container.inventory_service.edit_product(
        product_id,
        name=data.get('name'),
        price=data.get('price', data.get('priceUSD')),
        category=data.get('category', ''),
        description=data.get('description'),
        currency=data.get('currency', 'USD'),
        exchange_rate=container.exchange_rate,
    )
    if not result['ok'] and result['error'] == 'Producto no encontrado':
        return result, 404
    return _result(result)


@api.route('/api/products/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    removed = get_app_container().inventory_service.delete_product(product_id)
    if removed is None:
        return {'ok': False, 'error': 'Producto no encontrado'}, 404
    return {'ok': True, 'mensaje': f'Producto {removed.name} eliminado'}


@api.route('/api/descriptions', methods=['POST'])
def generate_description():
    """Genera la frase de marketing para un nombre de producto."""
    name = (_json_body().get('name') or '').strip()
    if not name:
        return {'ok': False, 'error': 'El nombre del producto es obligatorio'}, 400
    text = asyncio.run(get_app_container().generate_description(name))
    return {'ok': True, 'description': text}


# ═══════════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/api/cart', methods=['GET'])
def view_cart():
    cart = _cart().get_cart()
    cart['ok'] = True
    return cart


@api.route('/api/cart/add', methods=['POST'])
def cart_add():
    product_id = _json_body().get('productId')
    product = get_app_container().inventory_service.get_product(product_id)
    if product is None:
        return {'ok': False, 'error': 'Producto no encontrado'}, 404
    return _result(_cart().add_item(product))


@api.route('/api/cart/quantity', methods=['POST'])
def cart_quantity():
    data = _json_body()
    try:
        delta = int(data.get('delta', 0))
    except (TypeError, ValueError):
        return {'ok': False, 'error': 'Cantidad inválida'}, 400
    return _result(_cart().update_quantity(data.get('productId'), delta))


@api.route('/api/cart/remove', methods=['POST'])
def cart_remove():
    return _result(_cart().remove_item(_json_body().get('productId')))


@api.route('/api/cart/reference', methods=['POST'])
def cart_reference():
    cart = _cart()
    cart.set_reference(_json_body().get('reference'))
    return {'ok': True, 'reference': cart.get_reference()}


@api.route('/api/cart/clear', methods=['POST'])
def cart_clear():
    return _result(_cart().clear_cart())


@api.route('/api/cart/checkout', methods=['POST'])
def cart_checkout():
    """
    Cobrar el carrito.

    Body JSON: {"paymentMethod": "PAGO_MOVIL", "reference": "0123"}
    """
    data = _json_body()
    result = _cart().checkout(data.get('paymentMethod'), data.get('reference'))
    return _result(result, success_status=201)


# ═══════════════════════════════════════════════════════════════════════════════
# VENTAS Y CIERRE
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/api/sales', methods=['GET'])
def list_sales():
    """Historial con filtros: ?q=&method=&start=YYYY-MM-DD&end=YYYY-MM-DD"""
    model = get_app_container().render_view('SALES', **_view_params())
    model['ok'] = True
    return model


@api.route('/api/sales/<sale_id>', methods=['GET'])
def get_sale(sale_id):
    sale = get_app_container().sales_service.get_sale(sale_id)
    if sale is None:
        return {'ok': False, 'error': 'Venta no encontrada'}, 404
    return {'ok': True, 'sale': sale.to_dict()}


@api.route('/api/sales/<sale_id>', methods=['DELETE'])
def delete_sale(sale_id):
    if not get_app_container().sales_service.delete_sale(sale_id):
        return {'ok': False, 'error': 'Venta no encontrada'}, 404
    return {'ok': True, 'mensaje': 'Venta eliminada'}


@api.route('/api/daily-close', methods=['GET'])
def daily_close():
    return {'ok': True, 'summary': get_app_container().daily_close().to_dict()}


@api.route('/daily-close/print', methods=['GET'])
def daily_close_print():
    report = get_app_container().daily_report()
    return Response(report, mimetype='text/plain; charset=utf-8')


# ═══════════════════════════════════════════════════════════════════════════════
# TASA, LOGO Y CALCULADORA
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/api/rate', methods=['GET'])
def get_rate():
    return {'ok': True, 'rate': get_app_container().exchange_rate}


@api.route('/api/rate', methods=['POST'])
def update_rate():
    """Body JSON: {"rate": "46.10"}"""
    return _result(get_app_container().update_exchange_rate(_json_body().get('rate')))


@api.route('/api/logo', methods=['GET'])
def get_logo():
    return {'ok': True, 'logo': get_app_container().logo}


@api.route('/api/logo', methods=['POST'])
def update_logo():
    return _result(get_app_container().update_logo(_json_body().get('logo')))


@api.route('/api/calculator', methods=['GET'])
def calculator():
    """?usd=1 o ?ves=45.5"""
    model = get_app_container().render_view(
        'CALCULATOR', usd=request.args.get('usd'), ves=request.args.get('ves')
    )
    model['ok'] = True
    return model


# ═══════════════════════════════════════════════════════════════════════════════
# APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

def create_app(container: Optional[AppContainer] = None, **overrides: Any) -> Flask:
    """
    Crea la aplicación Flask.

    Args:
        container: Contenedor a usar (por defecto el global, con archivos JSON)
        **overrides: Valores para app.config (TESTING, SECRET_KEY, ...)
    """
    config.configure_logging()

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE='Lax',
    )
    app.config.update(overrides)

    if config.SECRET_KEY_IS_DEFAULT and 'SECRET_KEY' not in overrides:
        logger.warning("[ADVERTENCIA] DOLCE_SECRET_KEY no definida, usando clave de desarrollo")

    app.extensions['dolce_pos'] = container or AppContainer.get_instance()
    app.register_blueprint(api)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return {'ok': False, 'error': e.description or e.name}, e.code

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
        response.headers['Permissions-Policy'] = 'geolocation=(), microphone=()'
        # HSTS solo con HTTPS real
        if request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    return app


if __name__ == '__main__':
    create_app().run(debug=True, host='0.0.0.0', port=5000)

# -*- coding: utf-8 -*-
"""
Tests del carrito y el cobro
"""
import pytest

from dolce_pos.app_container import AppContainer
from dolce_pos.models import PaymentMethod, Product
from dolce_pos.services import DescriptionService
from dolce_pos.tests.conftest import FailingStorage


@pytest.fixture
def cart(container):
    return container.create_cart_service({})


def chicha(container):
    return container.inventory_service.get_product('1')


def test_add_same_product_increments_quantity(container, cart):
    cart.add_item(chicha(container))
    cart.add_item(chicha(container))

    items = cart.get_cart_items()
    assert len(items) == 1
    assert items[0]['quantity'] == 2
    assert items[0]['totalUSD'] == pytest.approx(5.0)


def test_cart_totals_use_current_rate(container, cart):
    cart.add_item(chicha(container))
    container.update_exchange_rate('50')

    summary = cart.get_cart()
    assert summary['total_usd'] == pytest.approx(2.5)
    assert summary['total_ves'] == pytest.approx(125.0)
    assert summary['total_items'] == 1


def test_update_quantity_never_below_one(container, cart):
    cart.add_item(chicha(container))
    result = cart.update_quantity('1', -5)

    assert result['ok']
    assert cart.get_cart_items()[0]['quantity'] == 1
    assert cart.get_cart_items()[0]['totalUSD'] == pytest.approx(2.5)


def test_update_quantity_unknown_product(cart):
    assert not cart.update_quantity('nope', 1)['ok']


def test_remove_item(container, cart):
    cart.add_item(chicha(container))
    cart.add_item(container.inventory_service.get_product('3'))
    cart.remove_item('1')

    assert [i['productId'] for i in cart.get_cart_items()] == ['3']


def test_add_rejects_unsellable_product(cart):
    result = cart.add_item(Product(id='x', name='Gratis', price_usd=0))
    assert not result['ok']
    assert cart.is_empty()


def test_checkout_empty_cart_is_noop(container, cart):
    result = cart.checkout(PaymentMethod.CASH_USD)
    assert not result['ok']
    assert container.sales_service.get_all_sales() == []


def test_checkout_records_sale_and_clears_cart(container, cart):
    cart.add_item(chicha(container))
    cart.add_item(chicha(container))
    result = cart.checkout('PAGO_MOVIL', '0123')

    assert result['ok']
    sale = result['sale']
    assert sale.reference == '0123'
    assert sale.total_usd == pytest.approx(5.0)
    assert sale.total_ves == pytest.approx(5.0 * 45.5)
    assert sale.exchange_rate == 45.5
    assert cart.is_empty()
    assert cart.get_reference() == ''
    assert container.sales_service.get_all_sales()[0].id == sale.id


def test_reference_dropped_for_other_methods(container, cart):
    cart.add_item(chicha(container))
    sale = cart.checkout(PaymentMethod.CASH_USD, '0123')['sale']
    assert sale.reference is None


def test_checkout_uses_stored_reference(container, cart):
    cart.add_item(chicha(container))
    cart.set_reference(' 9876 ')
    sale = cart.checkout(PaymentMethod.PAGO_MOVIL)['sale']
    assert sale.reference == '9876'


def test_checkout_invalid_method_keeps_cart(container, cart):
    cart.add_item(chicha(container))
    result = cart.checkout('BITCOIN')

    assert not result['ok']
    assert not cart.is_empty()
    assert container.sales_service.get_all_sales() == []


def test_sale_keeps_price_copied_when_added(container, cart):
    cart.add_item(chicha(container))
    container.inventory_service.edit_product('1', name='Chicha Premium', price=9)
    sale = cart.checkout(PaymentMethod.CARD)['sale']

    assert sale.items[0].name == 'Chicha Tradicional'
    assert sale.items[0].price_usd == pytest.approx(2.5)


def test_checkout_with_failing_storage_records_one_sale():
    container = AppContainer(storage=FailingStorage(), description_service=DescriptionService())
    cart = container.create_cart_service({})
    cart.add_item(chicha(container))

    first = cart.checkout('CASH_USD')
    second = cart.checkout('CASH_USD')

    assert first['ok']
    assert not second['ok']
    assert len(container.sales_service.get_all_sales()) == 1
    assert cart.is_empty()
    assert container.storage.failed_saves == 1

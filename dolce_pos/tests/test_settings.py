# -*- coding: utf-8 -*-
"""
Tests de la tasa del día y el logo
"""
import pytest

from dolce_pos import config
from dolce_pos.repositories import MemoryStorage, SettingsRepository
from dolce_pos.services import SettingsService
from dolce_pos.tests.conftest import FailingStorage


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def service(storage):
    return SettingsService(SettingsRepository(storage))


def test_default_rate(service):
    assert service.exchange_rate == config.DEFAULT_EXCHANGE_RATE


@pytest.mark.parametrize('raw', ['abc', '-5', '0', '', None])
def test_invalid_rate_keeps_previous(service, storage, raw):
    service.update_exchange_rate('50')
    result = service.update_exchange_rate(raw)

    assert not result['ok']
    assert result['error'] == 'Por favor ingresa una tasa válida'
    assert result['rate'] == 50
    assert service.exchange_rate == 50
    assert storage.load(config.RATE_KEY) == '50.0'


def test_valid_rate_is_persisted(service, storage):
    result = service.update_exchange_rate('46,75')

    assert result == {'ok': True, 'rate': pytest.approx(46.75)}
    assert SettingsService(SettingsRepository(storage)).exchange_rate == pytest.approx(46.75)


def test_rate_change_does_not_touch_recorded_sales(container):
    cart = container.create_cart_service({})
    cart.add_item(container.inventory_service.get_product('1'))
    sale = cart.checkout('CASH_VES')['sale']

    container.update_exchange_rate('60')

    recorded = container.sales_service.get_sale(sale.id)
    assert recorded.exchange_rate == config.DEFAULT_EXCHANGE_RATE
    assert recorded.total_ves == pytest.approx(2.5 * config.DEFAULT_EXCHANGE_RATE)


def test_update_logo(service):
    assert not service.update_logo('')['ok']
    assert not service.update_logo(None)['ok']
    assert service.logo == config.DEFAULT_LOGO_URL

    assert service.update_logo('https://example.com/logo.png')['ok']
    assert service.logo == 'https://example.com/logo.png'


def test_failing_storage_still_updates_rate_and_logo():
    service = SettingsService(SettingsRepository(FailingStorage()))

    assert service.update_exchange_rate('48')['ok']
    assert service.exchange_rate == 48
    assert service.update_logo('https://example.com/l.png')['ok']
    assert service.logo == 'https://example.com/l.png'

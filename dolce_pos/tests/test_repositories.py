# -*- coding: utf-8 -*-
"""
Tests de persistencia: datos corruptos caen a valores por defecto
"""
import json
import os

import pytest

from dolce_pos import config
from dolce_pos.models import PaymentMethod, Product
from dolce_pos.repositories import (
    IKeyValueStorage,
    InventoryRepository,
    JsonFileStorage,
    MemoryStorage,
    SalesRepository,
    SettingsRepository,
)
from dolce_pos.tests.conftest import make_sale


@pytest.mark.parametrize('raw', ['garbage', {'a': 1}, [{'id': '1'}], [None]])
def test_corrupt_inventory_falls_back_to_initial_menu(raw):
    storage = MemoryStorage({config.INVENTORY_KEY: raw})
    products = InventoryRepository(storage).load()
    assert [p.id for p in products] == ['1', '2', '3', '4', '5', '6']


def test_initial_menu_is_not_shared():
    first = InventoryRepository(MemoryStorage()).load()
    first[0].name = 'Cambiado'
    assert InventoryRepository(MemoryStorage()).load()[0].name == 'Chicha Tradicional'


def test_inventory_save_and_load():
    storage = MemoryStorage()
    repo = InventoryRepository(storage)
    repo.save([Product('p1', 'Cocada', 2.0, 'Bebidas Frías')])

    assert storage.load(config.INVENTORY_KEY) == [
        {'id': 'p1', 'name': 'Cocada', 'priceUSD': 2.0, 'category': 'Bebidas Frías'}
    ]
    assert repo.load()[0].name == 'Cocada'


@pytest.mark.parametrize('raw', ['garbage', 42, [{'id': 'x'}]])
def test_corrupt_sales_fall_back_to_empty(raw):
    storage = MemoryStorage({config.SALES_KEY: raw})
    assert SalesRepository(storage).load() == []


def test_sale_with_unknown_method_is_corrupt():
    data = make_sale([('1', 'Chicha', 1, 2.5)]).to_dict()
    data['paymentMethod'] = 'BITCOIN'
    storage = MemoryStorage({config.SALES_KEY: [data]})
    assert SalesRepository(storage).load() == []


def test_sales_round_trip_keeps_reference():
    storage = MemoryStorage()
    repo = SalesRepository(storage)
    sale = make_sale([('1', 'Chicha', 2, 2.5)], method=PaymentMethod.PAGO_MOVIL, reference='77')
    repo.save([sale])
    assert repo.load() == [sale]


@pytest.mark.parametrize('raw', ['abc', '0', '-3', 'nan', ['x']])
def test_invalid_stored_rate_uses_default(raw):
    storage = MemoryStorage({config.RATE_KEY: raw})
    assert SettingsRepository(storage).get_exchange_rate() == config.DEFAULT_EXCHANGE_RATE


def test_rate_saved_as_decimal_string():
    storage = MemoryStorage()
    repo = SettingsRepository(storage)
    repo.set_exchange_rate(46.2)

    assert storage.load(config.RATE_KEY) == '46.2'
    assert repo.get_exchange_rate() == pytest.approx(46.2)


def test_logo_default_and_custom():
    storage = MemoryStorage({config.LOGO_KEY: ''})
    repo = SettingsRepository(storage)
    assert repo.get_logo() == config.DEFAULT_LOGO_URL
    repo.set_logo('data:image/png;base64,AAA')
    assert repo.get_logo() == 'data:image/png;base64,AAA'


def test_memory_storage_returns_copies():
    storage = MemoryStorage()
    value = [{'a': 1}]
    storage.save('k', value)
    value[0]['a'] = 2
    loaded = storage.load('k')
    loaded.append('x')
    assert storage.load('k') == [{'a': 1}]
    assert isinstance(storage, IKeyValueStorage)


def test_json_file_storage(tmp_path):
    storage = JsonFileStorage(str(tmp_path / 'data'))
    assert storage.load('chicha_sales') is None

    storage.save('chicha_sales', [{'id': 'á'}])
    assert storage.load('chicha_sales') == [{'id': 'á'}]
    assert os.listdir(tmp_path / 'data') == ['chicha_sales.json']


def test_json_file_storage_corrupt_file(tmp_path):
    storage = JsonFileStorage(str(tmp_path))
    (tmp_path / 'chicha_inventory.json').write_text('{not json', encoding='utf-8')

    assert storage.load('chicha_inventory') is None
    assert len(InventoryRepository(storage).load()) == 6


def test_json_file_storage_rejects_unsafe_keys(tmp_path):
    storage = JsonFileStorage(str(tmp_path))
    with pytest.raises(ValueError):
        storage.save('../escape', 1)


def test_json_file_written_as_utf8(tmp_path):
    storage = JsonFileStorage(str(tmp_path))
    storage.save('dolce_fusion_logo', 'Dolce Fusión')
    with open(tmp_path / 'dolce_fusion_logo.json', encoding='utf-8') as f:
        assert json.load(f) == 'Dolce Fusión'

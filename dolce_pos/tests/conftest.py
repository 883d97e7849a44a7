# -*- coding: utf-8 -*-
"""
Fixtures comunes: contenedor en memoria, cliente Flask y dobles de requests.
"""
import time
from datetime import datetime

import pytest
import requests

from dolce_pos.app_container import AppContainer
from dolce_pos.main import create_app
from dolce_pos.models import PaymentMethod, Sale, SaleItem
from dolce_pos.repositories import MemoryStorage
from dolce_pos.services import DescriptionService


def ts(when: datetime) -> int:
    """Timestamp en ms de una fecha/hora local."""
    return int(when.timestamp() * 1000)


def make_sale(items, rate=45.5, method=PaymentMethod.CASH_USD, when=None, reference=None):
    """
    Venta de prueba.

    items: lista de (product_id, name, quantity, price_usd)
    """
    return Sale.create(
        [SaleItem.create(pid, name, qty, price) for pid, name, qty, price in items],
        rate,
        method,
        reference,
        timestamp=ts(when) if when else None,
    )


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Reemplaza requests.Session: registra las llamadas y responde lo configurado."""

    def __init__(self, response=None, error=None, delay=0.0):
        self.response = response or FakeResponse()
        self.error = error
        self.delay = delay
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class FailingStorage(MemoryStorage):
    """Memoria cuya escritura falla (disco lleno) para todas las claves."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.failed_saves = 0

    def save(self, key, value):
        self.failed_saves += 1
        raise OSError('disk full')


def gemini_payload(text):
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def container(storage):
    return AppContainer(storage=storage, description_service=DescriptionService(api_key=None))


@pytest.fixture
def app(container):
    return create_app(container, TESTING=True, SECRET_KEY='test-secret')


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c

# -*- coding: utf-8 -*-
"""
Tests del cierre de caja
"""
from datetime import date, datetime

import pytest

from dolce_pos.models import PaymentMethod
from dolce_pos.services import stats_service
from dolce_pos.tests.conftest import make_sale

DAY = date(2024, 5, 10)


def test_product_ves_uses_each_sale_rate():
    sales = [
        make_sale([('1', 'Chicha', 1, 2.5)], rate=40),
        make_sale([('1', 'Chicha', 1, 2.5)], rate=50),
    ]
    summary = stats_service.summarize(sales)

    assert len(summary.products) == 1
    assert summary.products[0].quantity == 2
    assert summary.products[0].total_ves == pytest.approx(100 + 125)
    assert summary.grand_total_ves == pytest.approx(225)


def test_products_sorted_by_quantity_with_stable_ties():
    sale = make_sale([
        ('a', 'A', 1, 1.0),
        ('b', 'B', 3, 1.0),
        ('c', 'C', 1, 1.0),
    ])
    summary = stats_service.summarize([sale])
    assert [p.product_id for p in summary.products] == ['b', 'a', 'c']


def test_all_payment_methods_reported():
    sale = make_sale([('1', 'Chicha', 1, 2.5)], method=PaymentMethod.CARD)
    payments = stats_service.summarize([sale]).to_dict()['payments']

    assert [p['method'] for p in payments] == [m.value for m in PaymentMethod]
    by_method = {p['method']: p for p in payments}
    assert by_method['CARD']['count'] == 1
    assert by_method['CASH_USD'] == {
        'method': 'CASH_USD', 'label': 'Divisas $', 'count': 0, 'totalUSD': 0, 'totalVES': 0
    }


def test_empty_summary_has_zero_average():
    summary = stats_service.summarize([])
    assert summary.total_sales == 0
    assert summary.average_ticket_usd == 0
    assert summary.products == []
    assert len(summary.to_dict()['payments']) == 4


def test_totals_are_consistent():
    sales = [
        make_sale([('1', 'Chicha', 2, 2.5), ('3', 'Papelón', 1, 1.5)], rate=45.5,
                  method=PaymentMethod.PAGO_MOVIL, reference='11'),
        make_sale([('3', 'Papelón', 4, 1.5)], rate=47, method=PaymentMethod.CASH_VES),
    ]
    summary = stats_service.summarize(sales)

    assert sum(p.total_usd for p in summary.payments.values()) == pytest.approx(summary.grand_total_usd)
    assert sum(p.total_ves for p in summary.payments.values()) == pytest.approx(summary.grand_total_ves)
    assert sum(p.quantity for p in summary.products) == 7
    assert summary.average_ticket_usd == pytest.approx(summary.grand_total_usd / 2)


def test_daily_close_uses_local_calendar_date():
    sales = [
        make_sale([('1', 'Chicha', 1, 2.5)], when=datetime(2024, 5, 10, 0, 0, 1)),
        make_sale([('1', 'Chicha', 1, 2.5)], when=datetime(2024, 5, 10, 23, 59, 59)),
        make_sale([('1', 'Chicha', 1, 2.5)], when=datetime(2024, 5, 9, 23, 59, 59)),
        make_sale([('1', 'Chicha', 1, 2.5)], when=datetime(2024, 5, 11, 0, 0, 0)),
    ]
    summary = stats_service.daily_close(sales, today=DAY)

    assert summary.total_sales == 2
    assert summary.day == DAY


def test_report_without_sales():
    report = stats_service.render_daily_report(stats_service.summarize([], day=DAY))

    assert 'DOLCE FUSIÓN' in report
    assert 'CIERRE DE CAJA' in report
    assert '10/05/2024' in report
    assert 'Sin ventas registradas hoy' in report


def test_report_lists_methods_and_products():
    sale = make_sale([('1', 'Chicha Tradicional', 2, 2.5)], method=PaymentMethod.PAGO_MOVIL,
                     reference='1')
    report = stats_service.render_daily_report(stats_service.summarize([sale], day=DAY))

    assert 'Pago Móvil (1 ops)' in report
    assert 'Punto Venta (0 ops)' in report
    assert '2 x Chicha Tradicional' in report
    assert '$5.00' in report

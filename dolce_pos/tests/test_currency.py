# -*- coding: utf-8 -*-
"""
Tests de conversión y formato de moneda
"""
import pytest

from dolce_pos.models import Currency
from dolce_pos.services import currency_service as cs


def test_to_ves_multiplies_by_rate():
    assert cs.to_ves(2.5, 45.5) == pytest.approx(113.75)


def test_to_usd_divides_by_rate():
    assert cs.to_usd(91, 45.5) == pytest.approx(2.0)


@pytest.mark.parametrize('rate', [0, -3])
def test_to_usd_with_non_positive_rate_is_zero(rate):
    assert cs.to_usd(100, rate) == 0


def test_convert_between_currencies():
    assert cs.convert(2, Currency.USD, Currency.VES, 50) == pytest.approx(100)
    assert cs.convert(100, 'VES', 'USD', 50) == pytest.approx(2)
    assert cs.convert(7, 'USD', 'USD', 50) == 7


def test_parse_amount_is_lenient():
    assert cs.parse_amount('abc') == 0
    assert cs.parse_amount(None) == 0
    assert cs.parse_amount('1,5') == pytest.approx(1.5)
    assert cs.parse_amount(' 3 ') == 3


@pytest.mark.parametrize('raw', ['abc', '', '-5', '0', 'nan', 'inf', None, True])
def test_parse_rate_rejects_invalid(raw):
    assert cs.parse_rate(raw) is None


def test_parse_rate_accepts_comma_decimal():
    assert cs.parse_rate('46,10') == pytest.approx(46.1)
    assert cs.parse_rate(50) == 50


def test_calculator_defaults_to_one_dollar():
    assert cs.calculate(45.5) == {'usd': '1.00', 'ves': '45.50', 'rate': 45.5}


def test_calculator_from_bolivares():
    result = cs.calculate(45.5, ves='91')
    assert result['usd'] == '2.00'
    assert result['ves'] == '91.00'


def test_calculator_prefers_dollars_when_both_given():
    assert cs.calculate(10, usd='3', ves='999')['ves'] == '30.00'


def test_calculator_with_zero_rate():
    assert cs.calculate(0, ves='91')['usd'] == '0.00'


def test_format_currency():
    assert cs.format_currency(1234.5, 'USD') == '$1,234.50'
    assert cs.format_currency(1234.5, Currency.VES) == 'Bs. 1.234,50'
    assert cs.format_currency(0, 'USD') == '$0.00'
    assert cs.format_currency(-2, 'USD') == '-$2.00'


@pytest.mark.parametrize('rate', [1, 36.58, 45.5, 0.37, 1234.5678])
def test_dollar_survives_conversion_to_bolivares_and_back(rate):
    assert cs.to_usd(cs.to_ves(1, rate), rate) == pytest.approx(1)

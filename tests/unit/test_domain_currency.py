"""Unit tests for domain.currency module."""

import pytest

from pharmarisk.domain.currency import convert_currency, format_price


class TestConvertCurrency:
    def test_uzs_to_usd(self):
        assert convert_currency(12400, "UZS", "USD") == pytest.approx(1.0)

    def test_usd_to_eur(self):
        assert convert_currency(100, "USD", "EUR") == pytest.approx(92.0)

    def test_cross_rate_via_usd(self):
        # 12,400 so'm → $1 → 450 ₸
        assert convert_currency(12400, "UZS", "KZT") == pytest.approx(450.0)

    def test_same_currency(self):
        assert convert_currency(85000, "UZS", "UZS") == pytest.approx(85000)

    def test_unknown_currency_is_rate_one(self):
        assert convert_currency(10, "XYZ", "USD") == pytest.approx(10)


class TestFormatPrice:
    def test_whole_unit_currencies(self):
        assert format_price(12000, "UZS") == "12,000 so'm"
        assert format_price(1499.5, "KZT") == "1,500 ₸"

    def test_symbol_prefixed(self):
        assert format_price(3.5, "EUR") == "€3.50"
        assert format_price(0.9677, "USD") == "$0.97"

    def test_unknown_currency_uses_code(self):
        assert format_price(2, "CHF") == "CHF2.00"

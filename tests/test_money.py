"""Tests for price parsing and serialization"""
from decimal import Decimal

import pytest

from marketplace.money import parse_price, price_to_str, to_decimal


def test_to_decimal_is_lenient():
    """Test invalid values become zero"""
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("oops") == Decimal("0")
    assert to_decimal(0.1) == Decimal("0.1")


def test_parse_price():
    """Test strict price parsing"""
    assert parse_price("12.50") == Decimal("12.50")
    assert parse_price(3) == Decimal("3")
    with pytest.raises(ValueError):
        parse_price("-0.01")
    with pytest.raises(ValueError):
        parse_price("Infinity")


def test_price_to_str_has_no_exponent():
    """Test prices are written in plain notation"""
    assert price_to_str(Decimal("1E+2")) == "100"
    assert price_to_str("89.90") == "89.90"

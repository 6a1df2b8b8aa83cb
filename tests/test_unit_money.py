from decimal import Decimal

from backoffice.utils.money import format_idr, to_decimal, to_float


def test_to_decimal_quantizes_and_defaults():
    assert to_decimal(None) == Decimal("0.00")
    assert to_decimal(10) == Decimal("10.00")
    assert to_decimal("0.005") == Decimal("0.01")
    assert to_decimal(0.1 + 0.2) == Decimal("0.30")


def test_to_float():
    assert to_float(Decimal("150000.50")) == 150000.5
    assert to_float(None) == 0.0


def test_format_idr():
    assert format_idr(1500000) == "Rp 1.500.000,00"
    assert format_idr(Decimal("100000.5")) == "Rp 100.000,50"
    assert format_idr(0) == "Rp 0,00"
    assert format_idr(-2500) == "-Rp 2.500,00"

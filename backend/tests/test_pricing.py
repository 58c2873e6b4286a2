from types import SimpleNamespace

import pytest

from rentalhub.core.errors import InvalidArgument
from rentalhub.services.pricing import line_subtotals, price


def _line(rental: int, deposit: int):
    return SimpleNamespace(subtotal_rental=rental, subtotal_deposit=deposit)


class TestPrice:
    def test_two_lines_with_discount(self):
        result = price([_line(100, 50), _line(200, 0)], discount=30)

        assert result.rental == 300
        assert result.deposit == 50
        assert result.discount == 30
        assert result.total == 320
        assert result.outstanding == 320

    def test_total_is_rental_plus_deposit_minus_discount(self):
        lines = [_line(120, 40), _line(75, 25), _line(0, 10)]
        result = price(lines, discount=15)

        assert result.total == result.rental + result.deposit - result.discount
        assert result.outstanding == result.total

    def test_no_lines_prices_to_zero(self):
        result = price([], discount=0)
        assert result.total == 0

    def test_discount_equal_to_total_is_allowed(self):
        assert price([_line(100, 50)], discount=150).total == 0

    def test_discount_above_total_is_rejected(self):
        with pytest.raises(InvalidArgument):
            price([_line(100, 50)], discount=151)

    def test_negative_discount_is_rejected(self):
        with pytest.raises(InvalidArgument):
            price([_line(100, 0)], discount=-1)


class TestLineSubtotals:
    def test_rental_scales_with_days_and_quantity(self):
        assert line_subtotals(
            price_per_day=100, deposit_per_unit=500, quantity=2, total_days=5
        ) == (1000, 1000)

    def test_zero_days_charges_deposit_only(self):
        assert line_subtotals(
            price_per_day=100, deposit_per_unit=50, quantity=1, total_days=0
        ) == (0, 50)

    def test_quantity_must_be_positive(self):
        with pytest.raises(InvalidArgument):
            line_subtotals(price_per_day=100, deposit_per_unit=50, quantity=0, total_days=1)

"""Tests for money conversion and rounding."""

from decimal import Decimal

import pytest
from shared.exceptions import ValidationError
from shared.money import has_whole_cents, line_total, to_money


class TestToMoney:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (2.5, Decimal("2.50")),
            (3, Decimal("3.00")),
            ("2.75", Decimal("2.75")),
            (Decimal("1.005"), Decimal("1.01")),
            (0.1, Decimal("0.10")),
        ],
    )
    def test_conversion(self, value, expected):
        assert to_money(value) == expected

    @pytest.mark.parametrize("value", [True, "abc", float("nan"), float("inf"), None])
    def test_rejects_non_amounts(self, value):
        with pytest.raises(ValidationError):
            to_money(value, field="price")

    def test_error_names_the_field(self):
        with pytest.raises(ValidationError) as exc:
            to_money("abc", field="price")
        assert "price" in exc.value.messages


class TestLineTotal:
    def test_multiplies_and_rounds(self):
        assert line_total(Decimal("2.50"), 2) == Decimal("5.00")
        assert line_total(Decimal("0.10"), 3) == Decimal("0.30")

    def test_huge_line_total_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc:
            line_total(Decimal("1e30"), 10**30)
        assert "total" in exc.value.messages


class TestOverflow:
    @pytest.mark.parametrize("value", [1e30, Decimal("1e40"), 10**30])
    def test_amounts_too_large_to_quantize(self, value):
        with pytest.raises(ValidationError) as exc:
            to_money(value, field="price")
        assert exc.value.messages == {"price": ["Amount is too large"]}


class TestHasWholeCents:
    @pytest.mark.parametrize("value", [0, 3, 2.5, 0.1, 19.99, "2.500", Decimal("100"), 1e20])
    def test_whole_cents(self, value):
        assert has_whole_cents(value)

    @pytest.mark.parametrize("value", [0.125, "1.001", 1e-5, float("nan"), "abc"])
    def test_fractions_of_a_cent(self, value):
        assert not has_whole_cents(value)

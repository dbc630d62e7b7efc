"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_digits(self):
        assert Money.of(9.99).amount == Decimal("9.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_of_factory_rejects_bool(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of(True)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="must be finite"):
            Money(Decimal("NaN"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_float_sum_does_not_drift(self):
        total = Money.zero()
        for _ in range(10):
            total = total + Money.of(0.1)
        assert total == Money.of("1.00")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_quantized_rounds_half_up(self):
        assert Money.of("2.345").quantized().amount == Decimal("2.35")
        assert Money.of("2.344").quantized().amount == Decimal("2.34")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_increment(self):
        assert Quantity(1).incremented() == Quantity(2)

    def test_decrement(self):
        assert Quantity(3).decremented() == Quantity(2)

    def test_decrement_below_one_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(1).decremented()

    def test_str(self):
        assert str(Quantity(7)) == "7"

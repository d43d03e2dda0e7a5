"""Unit tests for domain value objects."""

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money, Quantity, format_rupiah


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(25000)
        assert m.amount == 25000
        assert m.currency == "IDR"

    def test_zero_is_allowed(self):
        assert Money(0).amount == 0

    def test_of_factory_from_string(self):
        assert Money.of("15000") == Money(15000)

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("12.50")

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_addition(self):
        assert Money(10000) + Money(5500) == Money(15500)

    def test_multiplication_by_int(self):
        assert Money(25000) * 3 == Money(75000)

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money(100) * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(10, "IDR") + Money(5, "USD")

    def test_str_formatting(self):
        assert str(Money(25000)) == "Rp25.000"
        assert str(Money(0)) == "Rp0"


class TestFormatRupiah:

    def test_groups_thousands_with_dots(self):
        assert format_rupiah(1234567) == "Rp1.234.567"

    def test_small_amounts_have_no_separator(self):
        assert format_rupiah(999) == "Rp999"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        q = Quantity(5)
        assert q.value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_str(self):
        assert str(Quantity(7)) == "7"

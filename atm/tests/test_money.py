import pytest
from decimal import Decimal

from atm.models import TransactionKind
from atm.money import format_money, format_transaction, to_cents, to_decimal


class TestFormatMoney:
    """Tests for two-decimal money rendering."""

    def test_pads_to_two_decimals(self):
        assert format_money(99.9) == "99.90"
        assert format_money(40000) == "40000.00"
        assert format_money(Decimal("0")) == "0.00"

    def test_rounds_half_up(self):
        """Test standard rounding rather than truncation."""
        assert format_money(Decimal("2.005")) == "2.01"
        assert format_money(Decimal("2.004")) == "2.00"
        assert format_money("1.999") == "2.00"

    def test_negative_amount(self):
        assert format_money(Decimal("-5")) == "-5.00"

    def test_no_scientific_notation(self):
        assert format_money(Decimal("1E+3")) == "1000.00"


class TestToCents:
    def test_rounds_half_up_to_cents(self):
        assert to_cents("0.005") == Decimal("0.01")
        assert to_cents("0.004") == Decimal("0.00")
        assert to_cents(99.9) == Decimal("99.90")


class TestToDecimal:
    def test_float_uses_shortest_repr(self):
        assert to_decimal(300.30) == Decimal("300.3")
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_decimal("12abc")
        with pytest.raises(TypeError):
            to_decimal(None)


class TestFormatTransaction:
    def test_deposit_record_shape(self):
        record = format_transaction(TransactionKind.DEPOSIT, Decimal("40000"), Decimal("40099.9"))
        assert record == "Deposit - Amount: $40000.00, Updated Balance: $40099.90"

    def test_withdrawal_record_shape(self):
        record = format_transaction(TransactionKind.WITHDRAWAL, 200.4, 99.9)
        assert record == "Withdrawal - Amount: $200.40, Updated Balance: $99.90"

"""
Money helpers.

Amounts are carried as ``Decimal`` and rendered with exactly two digits after
the decimal point using half-up rounding.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .models import TransactionKind

CURRENCY_SYMBOL = "$"
CENTS = Decimal("0.01")

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert a user-supplied amount to ``Decimal``.

    Floats go through ``str`` so that ``300.30`` becomes ``Decimal("300.3")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise TypeError("Amount must be a number, not a bool")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid monetary amount: {value!r}") from e
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def to_cents(amount: Amount) -> Decimal:
    """Round an amount to whole cents, half-up."""
    return to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(amount: Amount) -> str:
    return format(to_cents(amount), "f")


def format_transaction(kind: TransactionKind, amount: Amount, balance: Amount) -> str:
    return (
        f"{kind.value} - Amount: {CURRENCY_SYMBOL}{format_money(amount)}, "
        f"Updated Balance: {CURRENCY_SYMBOL}{format_money(balance)}"
    )

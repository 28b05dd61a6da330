"""
Banking Terminal Ledger

This module provides:
- Accounts keyed by (card number, PIN)
- Cash deposits and withdrawals with balance validation
- Append-only transaction history per account
- Plain-text ledger export
"""

from .models import (
    AccountKey,
    Account,
    TransactionKind,
)
from .money import format_money, format_transaction
from .service import (
    AccountLedger,
    AtmError,
    InvalidArgumentError,
    DuplicateAccountError,
    AccountNotFoundError,
    InvalidAmountError,
    InsufficientFundsError,
    LedgerExportError,
)

__all__ = [
    "AccountKey",
    "Account",
    "TransactionKind",
    "format_money",
    "format_transaction",
    "AccountLedger",
    "AtmError",
    "InvalidArgumentError",
    "DuplicateAccountError",
    "AccountNotFoundError",
    "InvalidAmountError",
    "InsufficientFundsError",
    "LedgerExportError",
]

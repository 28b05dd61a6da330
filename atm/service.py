from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from pydantic import ValidationError

from .logging_config import get_logger
from .models import Account, AccountKey, TransactionKind
from .money import Amount, format_transaction, to_cents, to_decimal

logger = get_logger(__name__)


class AtmError(Exception):
    pass


class InvalidArgumentError(AtmError, ValueError):
    pass


class DuplicateAccountError(InvalidArgumentError):
    pass


class AccountNotFoundError(InvalidArgumentError):
    pass


class InvalidAmountError(InvalidArgumentError):
    pass


class InsufficientFundsError(AtmError, RuntimeError):
    pass


class LedgerExportError(AtmError, OSError):
    pass


class AccountLedger:
    """Owns every account and its transaction history for one terminal."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._accounts: dict[AccountKey, Account] = {}
        self._transactions: dict[AccountKey, list[str]] = {}

    def register_account(self, card_number: int, pin: int, owner_name: str,
                         initial_balance: Amount) -> Account:
        key = self._make_key(card_number, pin)
        if key in self._accounts:
            logger.warning("Duplicate registration rejected",
                           extra={"card_number": card_number, "action": "register"})
            raise DuplicateAccountError(f"Account for card {card_number} already exists")

        balance = self._to_amount(initial_balance)
        if not balance.is_finite():
            raise InvalidAmountError(f"Initial balance must be finite, got {initial_balance}")
        try:
            account = Account(owner_name=owner_name, balance=balance)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid account details: {e}") from e
        self._accounts[key] = account
        self._transactions[key] = []

        logger.info("Account registered",
                    extra={"card_number": card_number, "action": "register"})
        return account.model_copy()

    def check_balance(self, card_number: int, pin: int) -> Decimal:
        return self._get(card_number, pin).balance

    def deposit_cash(self, card_number: int, pin: int, amount: Amount) -> Decimal:
        key = self._make_key(card_number, pin)
        account = self._get_by_key(key, action="deposit")
        value = self._positive_amount(amount, card_number, action="deposit")

        account.balance += value
        self._record(key, TransactionKind.DEPOSIT, value, account.balance)
        return account.balance

    def withdraw_cash(self, card_number: int, pin: int, amount: Amount) -> Decimal:
        key = self._make_key(card_number, pin)
        account = self._get_by_key(key, action="withdraw")
        value = self._positive_amount(amount, card_number, action="withdraw")

        if value > account.balance:
            logger.warning("Withdrawal exceeds balance",
                           extra={"card_number": card_number, "action": "withdraw"})
            raise InsufficientFundsError(
                f"Insufficient funds: requested {value}, available {account.balance}"
            )

        account.balance -= value
        self._record(key, TransactionKind.WITHDRAWAL, value, account.balance)
        return account.balance

    def render_ledger(self, card_number: int, pin: int) -> list[str]:
        key = self._make_key(card_number, pin)
        account = self._get_by_key(key, action="ledger")
        return [
            f"Name: {account.owner_name}",
            f"Card Number: {key.card_number}",
            f"PIN: {key.pin}",
            *self._transactions[key],
        ]

    def print_ledger(self, destination_path: Union[str, Path], card_number: int, pin: int) -> Path:
        lines = self.render_ledger(card_number, pin)
        path = Path(destination_path)
        try:
            with path.open("w", encoding=self.encoding) as f:
                f.writelines(f"{line}\n" for line in lines)
        except OSError as e:
            logger.error("Ledger export failed",
                         extra={"card_number": card_number, "action": "print_ledger"})
            raise LedgerExportError(f"Could not write ledger to {path}: {e}") from e

        logger.info("Ledger exported",
                    extra={"card_number": card_number, "action": "print_ledger",
                           "extra": {"path": str(path), "lines": len(lines)}})
        return path

    def get_account(self, card_number: int, pin: int) -> Account:
        return self._get(card_number, pin).model_copy()

    def get_transaction_history(self, card_number: int, pin: int) -> list[str]:
        key = self._make_key(card_number, pin)
        self._get_by_key(key, action="history")
        return list(self._transactions[key])

    def get_accounts(self) -> Mapping[AccountKey, Account]:
        return MappingProxyType({k: a.model_copy() for k, a in self._accounts.items()})

    def get_transactions(self) -> Mapping[AccountKey, tuple[str, ...]]:
        return MappingProxyType({k: tuple(v) for k, v in self._transactions.items()})

    def _make_key(self, card_number: int, pin: int) -> AccountKey:
        for name, value in (("card_number", card_number), ("pin", pin)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgumentError(f"{name} must be a non-negative integer")
        return AccountKey(card_number, pin)

    def _get(self, card_number: int, pin: int) -> Account:
        return self._get_by_key(self._make_key(card_number, pin), action="lookup")

    def _get_by_key(self, key: AccountKey, action: str) -> Account:
        account = self._accounts.get(key)
        if account is None:
            logger.warning("Account not found",
                           extra={"card_number": key.card_number, "action": action})
            raise AccountNotFoundError(f"Account for card {key.card_number} not found")
        return account

    def _to_amount(self, amount: Amount) -> Decimal:
        try:
            value = to_decimal(amount)
        except (TypeError, ValueError) as e:
            raise InvalidAmountError(str(e)) from e
        # Balances carry whole cents only
        return to_cents(value) if value.is_finite() else value

    def _positive_amount(self, amount: Amount, card_number: int, action: str) -> Decimal:
        value = self._to_amount(amount)
        if not value.is_finite() or value <= 0:
            logger.warning("Non-positive amount rejected",
                           extra={"card_number": card_number, "action": action})
            raise InvalidAmountError(f"Amount must be positive, got {amount}")
        return value

    def _record(self, key: AccountKey, kind: TransactionKind, amount: Decimal,
                balance: Decimal) -> None:
        self._transactions[key].append(format_transaction(kind, amount, balance))
        logger.info("%s recorded", kind.value,
                    extra={"card_number": key.card_number, "action": kind.value.lower()})

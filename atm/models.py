from decimal import Decimal
from enum import Enum
from typing import NamedTuple
from pydantic import BaseModel, Field, ConfigDict


class AccountKey(NamedTuple):
    card_number: int
    pin: int


class TransactionKind(str, Enum):
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"


class Account(BaseModel):
    owner_name: str = Field(..., frozen=True)
    balance: Decimal


class RegisterAccountRequest(BaseModel):
    card_number: int = Field(..., ge=0, description="Card number printed on the card")
    pin: int = Field(..., ge=0, description="PIN paired with the card")
    owner_name: str
    initial_balance: Decimal = Field(default=Decimal("0.00"))

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "card_number": 12345678,
            "pin": 1234,
            "owner_name": "Sam Sepiol",
            "initial_balance": 300.30
        }
    })


class AmountRequest(BaseModel):
    amount: Decimal = Field(..., description="Cash amount, must be positive")


class AccountResponse(BaseModel):
    card_number: int
    owner_name: str
    balance: Decimal


class BalanceResponse(BaseModel):
    card_number: int
    balance: Decimal


class TransactionResponse(BaseModel):
    card_number: int
    kind: TransactionKind
    amount: Decimal
    balance: Decimal
    record: str


class TransactionHistoryResponse(BaseModel):
    card_number: int
    owner_name: str
    transactions: list[str]
    total_count: int

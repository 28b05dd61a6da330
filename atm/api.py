from typing import Annotated, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Path, Request, status
from fastapi.responses import PlainTextResponse

from .config import AtmSettings, get_settings
from .logging_config import setup_logging
from .models import (
    AccountResponse, AmountRequest, BalanceResponse, RegisterAccountRequest,
    TransactionHistoryResponse, TransactionKind, TransactionResponse,
)
from .service import (
    AccountLedger, AccountNotFoundError, DuplicateAccountError,
    InsufficientFundsError, InvalidArgumentError,
)

router = APIRouter()

CardNumber = Annotated[int, Path(ge=0)]
Pin = Annotated[int, Path(ge=0)]


def get_ledger(request: Request) -> AccountLedger:
    return request.app.state.ledger


@router.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "atm-ledger"}


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED, tags=["Accounts"])
def register_account(request: RegisterAccountRequest, ledger: AccountLedger = Depends(get_ledger)) -> AccountResponse:
    try:
        account = ledger.register_account(
            request.card_number, request.pin, request.owner_name, request.initial_balance
        )
    except DuplicateAccountError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AccountResponse(card_number=request.card_number, owner_name=account.owner_name, balance=account.balance)


@router.get("/accounts/{card_number}/{pin}/balance", response_model=BalanceResponse, tags=["Accounts"])
def check_balance(card_number: CardNumber, pin: Pin,
                  ledger: AccountLedger = Depends(get_ledger)) -> BalanceResponse:
    try:
        balance = ledger.check_balance(card_number, pin)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return BalanceResponse(card_number=card_number, balance=balance)


@router.post("/accounts/{card_number}/{pin}/deposit", response_model=TransactionResponse, tags=["Transactions"])
def deposit_cash(request: AmountRequest, card_number: CardNumber, pin: Pin,
                 ledger: AccountLedger = Depends(get_ledger)) -> TransactionResponse:
    try:
        balance = ledger.deposit_cash(card_number, pin, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _transaction_response(ledger, card_number, pin, TransactionKind.DEPOSIT, request, balance)


@router.post("/accounts/{card_number}/{pin}/withdraw", response_model=TransactionResponse, tags=["Transactions"])
def withdraw_cash(request: AmountRequest, card_number: CardNumber, pin: Pin,
                  ledger: AccountLedger = Depends(get_ledger)) -> TransactionResponse:
    try:
        balance = ledger.withdraw_cash(card_number, pin, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InsufficientFundsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _transaction_response(ledger, card_number, pin, TransactionKind.WITHDRAWAL, request, balance)


@router.get("/accounts/{card_number}/{pin}/transactions", response_model=TransactionHistoryResponse, tags=["Transactions"])
def get_transactions(card_number: CardNumber, pin: Pin,
                     ledger: AccountLedger = Depends(get_ledger)) -> TransactionHistoryResponse:
    try:
        account = ledger.get_account(card_number, pin)
        history = ledger.get_transaction_history(card_number, pin)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TransactionHistoryResponse(
        card_number=card_number,
        owner_name=account.owner_name,
        transactions=history,
        total_count=len(history),
    )


@router.get("/accounts/{card_number}/{pin}/ledger", response_class=PlainTextResponse, tags=["Transactions"])
def get_ledger_text(card_number: CardNumber, pin: Pin,
                    ledger: AccountLedger = Depends(get_ledger)) -> str:
    try:
        lines = ledger.render_ledger(card_number, pin)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return "".join(f"{line}\n" for line in lines)


def _transaction_response(ledger: AccountLedger, card_number: int, pin: int, kind: TransactionKind,
                          request: AmountRequest, balance) -> TransactionResponse:
    return TransactionResponse(
        card_number=card_number,
        kind=kind,
        amount=request.amount,
        balance=balance,
        record=ledger.get_transaction_history(card_number, pin)[-1],
    )


def create_app(settings: Optional[AtmSettings] = None, ledger: Optional[AccountLedger] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.api_title,
        description="Banking-terminal simulator: card/PIN accounts, cash deposits and withdrawals, ledger export",
        version="1.0.0",
    )
    app.state.ledger = ledger or AccountLedger(encoding=settings.ledger_encoding)
    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)

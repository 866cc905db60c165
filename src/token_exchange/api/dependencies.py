"""FastAPI dependency injection functions for service layer access.

This module provides dependency injection functions that enable FastAPI
endpoints to access the services created at application startup. The
services live in ``app.state``; endpoints never touch module globals,
which keeps them easy to exercise against a fresh app in tests.

Examples
--------
>>> @router.get("/exchange")
>>> async def get_exchange(
...     ledger: ExchangeLedger = Depends(get_exchange_ledger)
... ) -> ApiResponse:
...     return ApiResponse(success=True, data=ledger.get_summary(), ...)
"""

from fastapi import Request

from ..domain.accounts import AccountService
from ..domain.assets import NativeCurrencyInterface, TokenLedgerInterface
from ..domain.exchange import ExchangeLedger


def get_exchange_ledger(request: Request) -> ExchangeLedger:
    """Dependency to get the exchange ledger from app state.

    Parameters
    ----------
    request : Request
        FastAPI request object containing app reference

    Returns
    -------
    ExchangeLedger
        The initialized exchange ledger

    Raises
    ------
    AttributeError
        If the ledger is not found in app state
    """
    return request.app.state.ledger


def get_account_service(request: Request) -> AccountService:
    """Dependency to get the account registry from app state."""
    return request.app.state.account_service


def get_token_ledger(request: Request) -> TokenLedgerInterface:
    """Dependency to get the token ledger from app state."""
    return request.app.state.token_ledger


def get_native_currency(request: Request) -> NativeCurrencyInterface:
    """Dependency to get the native-currency ledger from app state."""
    return request.app.state.native_currency

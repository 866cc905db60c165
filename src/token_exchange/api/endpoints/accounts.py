"""Account endpoints.

This module provides REST API endpoints for account registration and
for an account's view of its own balances.
"""

from fastapi import APIRouter, Depends

from ...constants.errors import ErrorCodes
from ...domain.accounts import AccountService
from ...domain.assets import NativeCurrencyInterface
from ...domain.exchange import ExchangeLedger
from ...infrastructure.api.auth import get_current_account
from ...infrastructure.api.models import (
    AccountInfo,
    AccountRegistration,
    ApiResponse,
)
from ..dependencies import (
    get_account_service,
    get_exchange_ledger,
    get_native_currency,
)
from ..responses import error_response, new_request_id, success_response

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/register", response_model=ApiResponse)
async def register_account(
    registration: AccountRegistration,
    account_service: AccountService = Depends(get_account_service),
):
    """Register a new account.

    Creates an account with a unique ID and an API key. The account is
    funded with the configured starting native currency.

    Parameters
    ----------
    registration : AccountRegistration
        Display name of the account

    Returns
    -------
    ApiResponse
        Success response with the account credentials, or an error if
        the name is already taken
    """
    request_id = new_request_id()

    try:
        account = account_service.register_account(registration.name)
    except ValueError as e:
        return error_response(
            request_id,
            ErrorCodes.DUPLICATE_ACCOUNT_NAME,
            str(e),
            {"name": registration.name},
        )

    return success_response(
        request_id,
        {
            "account_id": account.account_id,
            "name": account.name,
            "api_key": account.api_key,
            "created_at": account.created_at.isoformat(),
        },
    )


@router.get("/me", response_model=ApiResponse)
async def get_my_account(
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
    native: NativeCurrencyInterface = Depends(get_native_currency),
):
    """Get the caller's balances and orders.

    Returns
    -------
    ApiResponse
        Token balance, allowance granted to the exchange, native
        currency balance and the caller's orders
    """
    token = ledger.token_ledger
    account_id = account.account_id

    return success_response(
        new_request_id(),
        {
            "account_id": account_id,
            "name": account.name,
            "token_balance": token.balance_of(account_id),
            "exchange_allowance": token.allowance(
                account_id, ledger.contract_address
            ),
            "currency_balance": native.balance_of(account_id),
            "orders": [
                order.to_dict() for order in ledger.get_orders(user=account_id)
            ],
        },
    )

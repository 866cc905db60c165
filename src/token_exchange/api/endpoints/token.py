"""Token ledger endpoints.

This module provides REST API endpoints for the token ledger the
exchange trades against: approvals before a swap or a deposit, and
minting by the token owner.
"""

from fastapi import APIRouter, Depends

from ...domain.errors import ExchangeError
from ...domain.exchange import ExchangeLedger
from ...infrastructure.api.auth import get_current_account
from ...infrastructure.api.models import (
    AccountInfo,
    ApiResponse,
    ApproveRequest,
    MintRequest,
)
from ..dependencies import get_exchange_ledger
from ..responses import exchange_error_response, new_request_id, success_response

router = APIRouter(prefix="/token", tags=["token"])


@router.get("", response_model=ApiResponse)
async def get_token_info(ledger: ExchangeLedger = Depends(get_exchange_ledger)):
    """Get token name, symbol and total supply."""
    token = ledger.token_ledger
    return success_response(
        new_request_id(),
        {
            "name": token.name,
            "symbol": token.symbol,
            "total_supply": token.total_supply,
        },
    )


@router.post("/approve", response_model=ApiResponse)
async def approve(
    request: ApproveRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Approve a spender to pull the caller's tokens.

    Parameters
    ----------
    request : ApproveRequest
        Allowance and spender; the spender defaults to the exchange

    Returns
    -------
    ApiResponse
        The new allowance
    """
    request_id = new_request_id()
    spender = request.spender or ledger.contract_address

    try:
        ledger.token_ledger.approve(account.account_id, spender, request.amount)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(
        request_id,
        {
            "owner": account.account_id,
            "spender": spender,
            "allowance": request.amount,
        },
    )


@router.post("/mint", response_model=ApiResponse)
async def mint(
    request: MintRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Mint new tokens; only the token owner may call this."""
    request_id = new_request_id()
    token = ledger.token_ledger

    try:
        token.mint(account.account_id, request.to, request.amount)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(
        request_id,
        {
            "to": request.to,
            "amount": request.amount,
            "balance": token.balance_of(request.to),
            "total_supply": token.total_supply,
        },
    )

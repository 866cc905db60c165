"""Exchange ledger endpoints.

This module exposes every exchange ledger operation over REST. The
authenticated account is the caller identity for the ledger, so the
ledger's own administrator checks decide who may call the privileged
endpoints; this layer only translates requests and errors.

Notes
-----
Ledger failures are returned with HTTP 200 and ``success=false``, the
error code taken from the exception (UNAUTHORIZED, INVALID_ORDER,
INSUFFICIENT_LIQUIDITY, TRANSFER_FAILED, INVALID_RATIO). Only missing
or invalid API keys produce HTTP 401.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...domain.errors import ExchangeError
from ...domain.exchange import ExchangeLedger
from ...infrastructure.api.auth import get_current_account
from ...infrastructure.api.models import (
    AccountInfo,
    AmountRequest,
    ApiResponse,
    OwnershipRequest,
    RatioRequest,
)
from ..dependencies import get_exchange_ledger
from ..responses import exchange_error_response, new_request_id, success_response

router = APIRouter(prefix="/exchange", tags=["exchange"])


@router.get("", response_model=ApiResponse)
async def get_exchange_state(
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Get ratio, pool balances, administrator and next order id."""
    return success_response(new_request_id(), ledger.get_summary())


@router.put("/ratio", response_model=ApiResponse)
async def set_exchange_ratio(
    request: RatioRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Set the exchange ratio (administrator only).

    Returns
    -------
    ApiResponse
        The new ratio, or INVALID_RATIO / UNAUTHORIZED
    """
    request_id = new_request_id()
    try:
        ledger.set_exchange_ratio(account.account_id, request.ratio)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, {"exchange_ratio": ledger.exchange_ratio})


@router.post("/deposits/token", response_model=ApiResponse)
async def deposit_token(
    request: AmountRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Deposit tokens into the pool (administrator only).

    The administrator must have approved the exchange beforehand.
    """
    request_id = new_request_id()
    try:
        ledger.deposit_token(account.account_id, request.amount)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(
        request_id, {"token_liquidity": ledger.token_balance()}
    )


@router.post("/deposits/currency", response_model=ApiResponse)
async def deposit_currency(
    request: AmountRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Deposit native currency into the pool (administrator only).

    ``amount`` is the value attached to the call.
    """
    request_id = new_request_id()
    try:
        ledger.deposit_currency(account.account_id, request.amount)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(
        request_id, {"currency_balance": ledger.currency_balance()}
    )


@router.post("/swaps/token-to-currency", response_model=ApiResponse)
async def swap_token_to_currency(
    request: AmountRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Swap tokens for native currency.

    Returns
    -------
    ApiResponse
        Swap result; ``settled`` is False and ``order_id`` is set when
        the currency pool could not cover the payout
    """
    request_id = new_request_id()
    try:
        result = ledger.exchange_token_to_currency(
            account.account_id, request.amount
        )
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, result.to_dict())


@router.post("/swaps/currency-to-token", response_model=ApiResponse)
async def swap_currency_to_token(
    request: AmountRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Swap attached native currency for tokens.

    Returns
    -------
    ApiResponse
        Swap result; ``settled`` is False and ``order_id`` is set when
        the token pool could not cover the payout
    """
    request_id = new_request_id()
    try:
        result = ledger.exchange_currency_to_token(
            account.account_id, request.amount
        )
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, result.to_dict())


@router.get("/orders", response_model=ApiResponse)
async def list_orders(
    user: Optional[str] = None,
    pending_only: bool = False,
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """List stored orders, optionally for one user or pending only."""
    orders = ledger.get_orders(user=user, pending_only=pending_only)
    return success_response(
        new_request_id(), {"orders": [order.to_dict() for order in orders]}
    )


@router.get("/orders/{order_id}", response_model=ApiResponse)
async def get_pending_order(
    order_id: int,
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Get a stored order, executed or not."""
    request_id = new_request_id()
    try:
        order = ledger.get_pending_order(order_id)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, order.to_dict())


@router.post("/orders/{order_id}/execute", response_model=ApiResponse)
async def execute_pending_order(
    order_id: int,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Execute a pending order with the current ratio (administrator only)."""
    request_id = new_request_id()
    try:
        order = ledger.execute_pending_order(account.account_id, order_id)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, order.to_dict())


@router.get("/events", response_model=ApiResponse)
async def get_events(ledger: ExchangeLedger = Depends(get_exchange_ledger)):
    """Get the ledger's event log."""
    return success_response(
        new_request_id(),
        {"events": [event.to_dict() for event in ledger.get_events()]},
    )


@router.post("/ownership", response_model=ApiResponse)
async def transfer_ownership(
    request: OwnershipRequest,
    account: AccountInfo = Depends(get_current_account),
    ledger: ExchangeLedger = Depends(get_exchange_ledger),
):
    """Hand the administrator role to another account (administrator only)."""
    request_id = new_request_id()
    try:
        ledger.transfer_ownership(account.account_id, request.new_owner)
    except ExchangeError as e:
        return exchange_error_response(request_id, e)

    return success_response(request_id, {"administrator": ledger.administrator})

"""Authentication module for the REST API.

This module provides API key authentication through FastAPI dependency
injection. The authenticated account ID is the caller identity passed
to every exchange ledger operation, so the administrator checks of the
ledger apply unchanged to REST callers.

Examples
--------
>>> @router.post("/exchange/ratio")
>>> async def set_ratio(
...     body: RatioRequest,
...     account: AccountInfo = Depends(get_current_account),
... ) -> ApiResponse:
...     ledger.set_exchange_ratio(account.account_id, body.ratio)
"""

from fastapi import Depends, HTTPException, Security
from fastapi.security import APIKeyHeader

from ...api.dependencies import get_account_service
from ...domain.accounts import AccountService
from .models import AccountInfo

# FastAPI dependency
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def get_current_account(
    api_key: str = Security(api_key_header),
    account_service: AccountService = Depends(get_account_service),
) -> AccountInfo:
    """FastAPI dependency to validate API key and return the account.

    Parameters
    ----------
    api_key : str
        The API key provided in the X-API-Key header
    account_service : AccountService
        Account registry injected from app state

    Returns
    -------
    AccountInfo
        The authenticated account

    Raises
    ------
    HTTPException
        401 Unauthorized if no API key is provided or the key does not
        match any registered account
    """
    if not api_key:
        raise HTTPException(
            status_code=401,
            detail="Missing API key. Include X-API-Key header.",
        )

    account = account_service.get_account_by_api_key(api_key)
    if not account:
        raise HTTPException(status_code=401, detail="Invalid API key")

    return account

"""Helpers building the unified API response envelope."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..domain.errors import ExchangeError, Unauthorized
from ..infrastructure.api.models import ApiError, ApiResponse

logger = logging.getLogger(__name__)


def new_request_id() -> str:
    """Generate a request ID for response tracking."""
    return f"req_{datetime.now().timestamp()}"


def success_response(
    request_id: str, data: Optional[Dict[str, Any]] = None
) -> ApiResponse:
    """Build a successful response carrying ``data``."""
    return ApiResponse(
        success=True,
        request_id=request_id,
        data=data,
        timestamp=datetime.now(),
    )


def error_response(
    request_id: str,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> ApiResponse:
    """Build a failed response with an error code and message."""
    return ApiResponse(
        success=False,
        request_id=request_id,
        error=ApiError(code=code, message=message, details=details),
        timestamp=datetime.now(),
    )


def exchange_error_response(request_id: str, error: ExchangeError) -> ApiResponse:
    """Map a ledger failure to a failed response.

    The error code of the exception is passed through unchanged so
    clients can tell an unauthorized call from a liquidity shortfall.
    """
    details = None
    if isinstance(error, Unauthorized):
        details = {"caller": error.caller}

    logger.debug(f"Request {request_id} failed: {error.code}: {error.message}")
    return error_response(request_id, error.code, error.message, details)

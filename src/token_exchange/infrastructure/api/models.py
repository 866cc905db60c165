"""Pydantic models for REST API requests and responses."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ApiError(BaseModel):
    """Error details for failed API requests."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "code": "INSUFFICIENT_LIQUIDITY",
                "message": "Insufficient currency liquidity: "
                "required 200, available 100",
                "details": {"order_id": 1},
            }
        }
    }


class ApiResponse(BaseModel):
    """Generic API response for all operations.

    This unified response structure is used for both successful and failed
    operations, providing a consistent interface for clients.
    """

    success: bool = Field(..., description="Whether the request succeeded")
    request_id: str = Field(..., description="Server generated request ID")
    data: Optional[Dict[str, Any]] = Field(
        default=None, description="Response data"
    )
    error: Optional[ApiError] = Field(
        default=None, description="Error details if failed"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now, description="Server timestamp"
    )

    model_config = {
        "json_schema_extra": {
            "examples": {
                "success": {
                    "value": {
                        "success": True,
                        "request_id": "req_1705312801.001",
                        "data": {
                            "direction": "token_to_currency",
                            "amount": 50,
                            "payout": 10,
                            "settled": True,
                            "order_id": None,
                        },
                        "error": None,
                        "timestamp": "2024-01-15T10:00:01.001Z",
                    }
                },
                "failure": {
                    "value": {
                        "success": False,
                        "request_id": "req_1705312801.001",
                        "data": None,
                        "error": {
                            "code": "UNAUTHORIZED",
                            "message": "Unauthorized account: ACCT_002",
                        },
                        "timestamp": "2024-01-15T10:00:01.001Z",
                    }
                },
            }
        }
    }


class AccountRegistration(BaseModel):
    """Request model for account registration."""

    name: str = Field(..., min_length=1, max_length=50)

    model_config = {"json_schema_extra": {"example": {"name": "alice"}}}


class AccountInfo(BaseModel):
    """Registered account with its credentials."""

    account_id: str
    name: str
    api_key: str
    created_at: datetime


class AmountRequest(BaseModel):
    """Request carrying a token amount or an attached currency value."""

    amount: int = Field(..., ge=0, description="Amount in base units")

    model_config = {"json_schema_extra": {"example": {"amount": 50}}}


class RatioRequest(BaseModel):
    """Request model for changing the exchange ratio."""

    ratio: int = Field(
        ..., description="Token units per one unit of native currency"
    )

    model_config = {"json_schema_extra": {"example": {"ratio": 10}}}


class ApproveRequest(BaseModel):
    """Request model for a token approval."""

    amount: int = Field(..., ge=0, description="Allowance to grant")
    spender: Optional[str] = Field(
        default=None,
        description="Account allowed to pull tokens; defaults to the exchange",
    )


class MintRequest(BaseModel):
    """Request model for minting tokens."""

    to: str = Field(..., description="Account receiving the new tokens")
    amount: int = Field(..., ge=0, description="Tokens to mint")


class OwnershipRequest(BaseModel):
    """Request model for handing over the administrator role."""

    new_owner: str = Field(..., min_length=1)

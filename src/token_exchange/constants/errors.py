"""Error codes and messages used in the exchange ledger."""


class ErrorCodes:
    """Error codes for ledger failures and API responses."""

    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    INVALID_ORDER = "INVALID_ORDER"
    TRANSFER_FAILED = "TRANSFER_FAILED"
    INVALID_RATIO = "INVALID_RATIO"
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    DUPLICATE_ACCOUNT_NAME = "DUPLICATE_ACCOUNT_NAME"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessages:
    """Error messages for user responses."""

    ORDER_NOT_FOUND = "Order not found"
    ORDER_ALREADY_EXECUTED = "Order already executed"
    ALREADY_INITIALIZED = "Exchange ledger already initialized"
    NOT_INITIALIZED = "Exchange ledger not initialized"

    @staticmethod
    def format_unauthorized(caller: str) -> str:
        """Format the rejection message for a non-administrator caller."""
        return f"Unauthorized account: {caller}"

    @staticmethod
    def format_insufficient_liquidity(
        asset: str, required: int, available: int
    ) -> str:
        """Format the message for a pool that cannot cover a payout."""
        return (
            f"Insufficient {asset} liquidity: "
            f"required {required}, available {available}"
        )

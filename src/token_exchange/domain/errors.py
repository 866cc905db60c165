"""Exception hierarchy for the exchange ledger and its collaborators.

Every failure of a ledger operation is raised as a subclass of
ExchangeError carrying a machine-readable code. The API layer maps
the code straight into its error envelope.
"""

from ..constants.errors import ErrorCodes


class ExchangeError(Exception):
    """Base exception for all exchange ledger errors."""

    code = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ExchangeError):
    """Raised when a privileged operation is invoked by a non-administrator."""

    code = ErrorCodes.UNAUTHORIZED

    def __init__(self, message: str, caller: str):
        super().__init__(message)
        self.caller = caller


class InsufficientLiquidity(ExchangeError):
    """Raised when the paying pool cannot cover an order execution."""

    code = ErrorCodes.INSUFFICIENT_LIQUIDITY


class InvalidOrder(ExchangeError):
    """Raised for an unknown order id or an order already executed."""

    code = ErrorCodes.INVALID_ORDER


class TransferFailure(ExchangeError):
    """Raised when a token or currency transfer is rejected."""

    code = ErrorCodes.TRANSFER_FAILED


class InvalidRatio(ExchangeError):
    """Raised when a non-positive exchange ratio is supplied."""

    code = ErrorCodes.INVALID_RATIO


class InitializationError(ExchangeError):
    """Raised on repeated initialization or use before initialization."""

    code = ErrorCodes.INITIALIZATION_FAILED

"""Constants module for the token exchange.

This module contains shared constants including error codes, error
messages and ledger defaults to prevent string duplication and ensure
consistency across the codebase.
"""

from .errors import ErrorCodes, ErrorMessages

# Token units per one unit of native currency on a freshly initialized ledger
DEFAULT_EXCHANGE_RATIO = 5

__all__ = ["DEFAULT_EXCHANGE_RATIO", "ErrorCodes", "ErrorMessages"]

"""Asset ledgers consumed by the exchange: token and native currency."""

from .interfaces import NativeCurrencyInterface, TokenLedgerInterface
from .native_currency import InMemoryNativeCurrency
from .token_ledger import InMemoryTokenLedger

__all__ = [
    "TokenLedgerInterface",
    "NativeCurrencyInterface",
    "InMemoryTokenLedger",
    "InMemoryNativeCurrency",
]

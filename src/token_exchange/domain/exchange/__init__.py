"""Exchange ledger domain: pools, ratio conversion and pending orders."""

from .ledger import ExchangeLedger
from .models import (
    EventKind,
    ExchangeEvent,
    ExchangeState,
    Order,
    OrderDirection,
    SwapResult,
)
from .ownership import OwnershipGate

__all__ = [
    "ExchangeLedger",
    "ExchangeState",
    "ExchangeEvent",
    "EventKind",
    "Order",
    "OrderDirection",
    "OwnershipGate",
    "SwapResult",
]

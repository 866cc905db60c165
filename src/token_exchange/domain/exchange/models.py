"""Domain models for the exchange ledger.

This module contains the data structures owned by the exchange ledger:
the pending order record, the ledger state, the result of a swap and
the entries of the ledger's event log.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ...constants import DEFAULT_EXCHANGE_RATIO
from ..assets.interfaces import TokenLedgerInterface


class OrderDirection(str, Enum):
    """Direction of a swap, naming the offered and the owed asset.

    Attributes
    ----------
    TOKEN_TO_CURRENCY : str
        User offered tokens and is owed native currency
    CURRENCY_TO_TOKEN : str
        User offered native currency and is owed tokens
    """

    TOKEN_TO_CURRENCY = "token_to_currency"
    CURRENCY_TO_TOKEN = "currency_to_token"


class EventKind(str, Enum):
    """Kinds of entries recorded in the ledger's event log."""

    RATIO_UPDATED = "ratio_updated"
    TOKEN_DEPOSITED = "token_deposited"
    CURRENCY_DEPOSITED = "currency_deposited"
    SWAP_SETTLED = "swap_settled"
    ORDER_CREATED = "order_created"
    ORDER_EXECUTED = "order_executed"
    OWNERSHIP_TRANSFERRED = "ownership_transferred"


@dataclass
class Order:
    """A pending swap the ledger could not settle immediately.

    The offered asset is already escrowed by the ledger when the order
    is created. The owed asset is paid out when the administrator
    executes the order.

    Parameters
    ----------
    id : int
        Order id, equal to its key in the ledger's order table
    user : str
        Account that initiated the swap and is owed the payout
    amount : int
        Quantity of the offered asset held in escrow
    direction : OrderDirection
        Which asset was offered and which one is owed
    executed : bool, default=False
        Whether the payout has been made

    Notes
    -----
    Orders store no ratio. The payout is computed from ``amount`` with
    the ratio current at execution time:

    $$\\text{payout}_{t \\to c} = \\lfloor \\text{amount} / \\text{ratio} \\rfloor$$

    $$\\text{payout}_{c \\to t} = \\text{amount} \\times \\text{ratio}$$

    Examples
    --------
    >>> order = Order(
    ...     id=1,
    ...     user="alice",
    ...     amount=1000,
    ...     direction=OrderDirection.TOKEN_TO_CURRENCY,
    ... )
    >>> order.is_token_to_currency
    True
    >>> order.executed
    False
    """

    id: int
    user: str
    amount: int
    direction: OrderDirection
    executed: bool = False

    @property
    def is_token_to_currency(self) -> bool:
        """Check if the user is owed native currency."""
        return self.direction == OrderDirection.TOKEN_TO_CURRENCY

    def to_dict(self) -> Dict[str, Any]:
        """Convert the order to a plain dictionary."""
        return {
            "id": self.id,
            "user": self.user,
            "amount": self.amount,
            "direction": self.direction.value,
            "executed": self.executed,
        }


@dataclass
class ExchangeEvent:
    """A single entry of the ledger's append-only event log."""

    sequence: int
    kind: EventKind
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a plain dictionary."""
        return {
            "sequence": self.sequence,
            "kind": self.kind.value,
            "data": dict(self.data),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ExchangeState:
    """Complete mutable state of one exchange ledger.

    Attributes
    ----------
    token_ledger : TokenLedgerInterface
        Token ledger holding the exchange's token custody
    contract_address : str
        Identity under which the exchange holds tokens and currency
    exchange_ratio : int
        Token units per one unit of native currency, always positive
    token_liquidity : int
        Tokens the ledger holds for exchange purposes
    currency_balance : int
        Native currency held by the ledger, escrow included
    next_order_id : int
        Id assigned to the next pending order
    orders : Dict[int, Order]
        Every order ever created, keyed by id
    events : list
        Event log in sequence order
    """

    token_ledger: TokenLedgerInterface
    contract_address: str
    exchange_ratio: int = DEFAULT_EXCHANGE_RATIO
    token_liquidity: int = 0
    currency_balance: int = 0
    next_order_id: int = 1
    orders: Dict[int, Order] = field(default_factory=dict)
    events: list = field(default_factory=list)


@dataclass
class SwapResult:
    """Outcome of a user swap.

    Attributes
    ----------
    direction : OrderDirection
        Direction of the swap
    amount : int
        Quantity of the offered asset taken into escrow
    payout : int
        Quantity of the owed asset computed at the current ratio
    settled : bool
        True if the payout was made immediately
    order_id : Optional[int]
        Id of the pending order created when the swap did not settle
    """

    direction: OrderDirection
    amount: int
    payout: int
    settled: bool
    order_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a plain dictionary."""
        return {
            "direction": self.direction.value,
            "amount": self.amount,
            "payout": self.payout,
            "settled": self.settled,
            "order_id": self.order_id,
        }

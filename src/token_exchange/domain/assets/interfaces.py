"""Abstract interfaces for the asset ledgers the exchange depends on.

The exchange ledger never moves value itself. Token movements go
through a fungible token ledger and native-currency movements go
through the execution environment's value-transfer primitive. Both
are consumed through the interfaces below so that the exchange can be
exercised against in-memory implementations or any other backend.

An exchange operation that fails part way undoes its own movements
with compensating calls on these interfaces: a transfer in the
opposite direction, and ``increase_allowance`` to give back an
allowance consumed by ``transfer_from``.
"""

from abc import ABC, abstractmethod


class TokenLedgerInterface(ABC):
    """Abstract interface of a standard fungible token ledger.

    Notes
    -----
    Implementations raise ``TransferFailure`` for any rejected movement
    (insufficient balance, insufficient allowance, negative amount).
    The exchange propagates that failure unchanged.

    Examples
    --------
    >>> token.approve("alice", "exchange", 50)
    >>> token.transfer_from("exchange", "alice", "exchange", 50)
    >>> token.balance_of("exchange")
    50
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable token name."""

    @property
    @abstractmethod
    def symbol(self) -> str:
        """Ticker symbol of the token."""

    @property
    @abstractmethod
    def total_supply(self) -> int:
        """Total amount of tokens in existence."""

    @abstractmethod
    def balance_of(self, who: str) -> int:
        """Return the token balance held by an account."""

    @abstractmethod
    def allowance(self, owner: str, spender: str) -> int:
        """Return how much ``spender`` may still pull from ``owner``."""

    @abstractmethod
    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Authorize ``spender`` to pull up to ``amount`` from ``owner``."""

    @abstractmethod
    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move tokens from ``sender`` to ``to``."""

    @abstractmethod
    def transfer_from(
        self, spender: str, owner: str, to: str, amount: int
    ) -> bool:
        """Move tokens from ``owner`` to ``to`` using ``spender``'s allowance."""

    @abstractmethod
    def mint(self, caller: str, to: str, amount: int) -> None:
        """Create new tokens for ``to``; restricted to the token owner."""

    @abstractmethod
    def increase_allowance(self, owner: str, spender: str, added: int) -> bool:
        """Add ``added`` to the allowance of ``spender`` over ``owner``."""


class NativeCurrencyInterface(ABC):
    """Abstract interface of the native-currency value-transfer primitive.

    Notes
    -----
    Native currency is the environment's intrinsic unit of value. Value
    attached to a call is moved with ``transfer`` from the caller to
    the exchange's address before the exchange logic runs.
    """

    @abstractmethod
    def balance_of(self, who: str) -> int:
        """Return the native balance of an account."""

    @abstractmethod
    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move native currency between accounts."""

    @abstractmethod
    def credit(self, to: str, amount: int) -> None:
        """Create native currency for an account (environment faucet)."""

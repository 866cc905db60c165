"""In-memory fungible token ledger.

This module provides a thread-safe token ledger with the standard
balance/allowance semantics of a fungible token: holders approve a
spender, and the spender pulls tokens with ``transfer_from``. New
tokens can only be minted by the token owner.
"""

import logging
import threading
from typing import Dict, Tuple

from ..errors import TransferFailure, Unauthorized
from .interfaces import TokenLedgerInterface

logger = logging.getLogger(__name__)


class InMemoryTokenLedger(TokenLedgerInterface):
    """Thread-safe in-memory token ledger.

    Parameters
    ----------
    name : str
        Human readable token name
    symbol : str
        Ticker symbol
    owner : str
        Account allowed to mint new tokens

    Attributes
    ----------
    _balances : Dict[str, int]
        Token balance per account
    _allowances : Dict[Tuple[str, str], int]
        Remaining allowance per (owner, spender) pair
    _total_supply : int
        Sum of all minted tokens
    _lock : threading.RLock
        Internal lock for thread-safe access

    Notes
    -----
    Every rejected movement raises ``TransferFailure`` and leaves the
    ledger untouched. Zero-amount movements are accepted, matching the
    usual token convention.

    Examples
    --------
    >>> token = InMemoryTokenLedger("ABC Token", "ABC", owner="admin")
    >>> token.mint("admin", "alice", 1000)
    >>> token.approve("alice", "exchange", 50)
    True
    >>> token.transfer_from("exchange", "alice", "exchange", 50)
    True
    >>> token.balance_of("alice")
    950
    """

    def __init__(self, name: str, symbol: str, owner: str):
        self._name = name
        self._symbol = symbol
        self._owner = owner
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def owner(self) -> str:
        """Account allowed to mint."""
        return self._owner

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self._total_supply

    def balance_of(self, who: str) -> int:
        with self._lock:
            return self._balances.get(who, 0)

    def allowance(self, owner: str, spender: str) -> int:
        with self._lock:
            return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Set the allowance of ``spender`` over ``owner``'s tokens.

        The new allowance replaces the previous one rather than adding
        to it.

        Raises
        ------
        TransferFailure
            If the amount is negative
        """
        self._check_amount(amount)
        with self._lock:
            self._allowances[(owner, spender)] = amount
        logger.debug(f"{owner} approved {spender} for {amount} {self._symbol}")
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move tokens from ``sender`` to ``to``.

        Raises
        ------
        TransferFailure
            If the amount is negative or exceeds the sender's balance
        """
        self._check_amount(amount)
        with self._lock:
            self._move(sender, to, amount)
        return True

    def transfer_from(
        self, spender: str, owner: str, to: str, amount: int
    ) -> bool:
        """Move tokens out of ``owner``'s balance on behalf of ``spender``.

        The allowance is consumed by ``amount``.

        Raises
        ------
        TransferFailure
            If the amount is negative, exceeds the allowance granted to
            the spender, or exceeds the owner's balance
        """
        self._check_amount(amount)
        with self._lock:
            allowed = self._allowances.get((owner, spender), 0)
            if allowed < amount:
                raise TransferFailure(
                    f"Insufficient allowance: {spender} may pull {allowed} "
                    f"{self._symbol} from {owner}, requested {amount}"
                )
            self._move(owner, to, amount)
            self._allowances[(owner, spender)] = allowed - amount
        return True

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Create ``amount`` new tokens for ``to``.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the token owner
        TransferFailure
            If the amount is negative
        """
        if caller != self._owner:
            raise Unauthorized(
                f"Only the token owner may mint, got {caller}", caller=caller
            )
        self._check_amount(amount)
        with self._lock:
            self._balances[to] = self._balances.get(to, 0) + amount
            self._total_supply += amount
        logger.info(f"Minted {amount} {self._symbol} to {to}")

    def increase_allowance(self, owner: str, spender: str, added: int) -> bool:
        """Add to the allowance of ``spender`` over ``owner``'s tokens.

        Unlike ``approve`` the amount is added to the current allowance.

        Raises
        ------
        TransferFailure
            If ``added`` is negative
        """
        self._check_amount(added)
        with self._lock:
            key = (owner, spender)
            self._allowances[key] = self._allowances.get(key, 0) + added
        logger.debug(
            f"{owner} increased allowance of {spender} by {added} {self._symbol}"
        )
        return True

    def _move(self, sender: str, to: str, amount: int) -> None:
        """Move tokens between balances; caller must hold the lock."""
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise TransferFailure(
                f"Insufficient balance: {sender} holds {balance} "
                f"{self._symbol}, requested {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount

    @staticmethod
    def _check_amount(amount: int) -> None:
        if amount < 0:
            raise TransferFailure(f"Amount must be non-negative, got {amount}")

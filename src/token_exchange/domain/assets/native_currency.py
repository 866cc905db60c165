"""In-memory native-currency ledger.

Stands in for the execution environment's value-transfer primitive:
a plain balance book with a faucet used to fund new accounts.
"""

import threading
from typing import Dict

from ..errors import TransferFailure
from .interfaces import NativeCurrencyInterface


class InMemoryNativeCurrency(NativeCurrencyInterface):
    """Thread-safe native-currency balance book.

    Examples
    --------
    >>> native = InMemoryNativeCurrency()
    >>> native.credit("alice", 100)
    >>> native.transfer("alice", "exchange", 10)
    >>> native.balance_of("exchange")
    10
    """

    def __init__(self):
        self._balances: Dict[str, int] = {}
        self._lock = threading.RLock()

    def balance_of(self, who: str) -> int:
        with self._lock:
            return self._balances.get(who, 0)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move native currency from ``sender`` to ``to``.

        Raises
        ------
        TransferFailure
            If the amount is negative or exceeds the sender's balance
        """
        if amount < 0:
            raise TransferFailure(f"Amount must be non-negative, got {amount}")
        with self._lock:
            balance = self._balances.get(sender, 0)
            if balance < amount:
                raise TransferFailure(
                    f"Insufficient native balance: {sender} holds {balance}, "
                    f"requested {amount}"
                )
            self._balances[sender] = balance - amount
            self._balances[to] = self._balances.get(to, 0) + amount

    def credit(self, to: str, amount: int) -> None:
        if amount < 0:
            raise TransferFailure(f"Amount must be non-negative, got {amount}")
        with self._lock:
            self._balances[to] = self._balances.get(to, 0) + amount

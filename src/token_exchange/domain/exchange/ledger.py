"""Exchange ledger swapping a fungible token against native currency.

The ledger holds two pools, a token pool and a native-currency pool,
and converts between them at an integer ratio set by the administrator.
A swap the receiving pool cannot cover is not rejected: the offered
asset stays in escrow and a pending order is recorded for the
administrator to execute once liquidity has been replenished.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ...constants.errors import ErrorMessages
from ..assets.interfaces import NativeCurrencyInterface, TokenLedgerInterface
from ..errors import (
    ExchangeError,
    InitializationError,
    InsufficientLiquidity,
    InvalidOrder,
    InvalidRatio,
)
from .models import (
    EventKind,
    ExchangeEvent,
    ExchangeState,
    Order,
    OrderDirection,
    SwapResult,
)
from .ownership import OwnershipGate

logger = logging.getLogger(__name__)


@dataclass
class _Checkpoint:
    """Everything needed to undo a failed operation.

    ``reversals`` journals a compensating transfer for every asset
    movement the operation has completed so far.
    """

    state: ExchangeState
    owner: Optional[str]
    reversals: List[Tuple[str, Callable[[], Any]]] = field(default_factory=list)


class ExchangeLedger:
    """Token/native-currency exchange with deferred pending orders.

    The ledger owns an ExchangeState for its whole lifetime. Token
    movements are delegated to the token ledger given at initialization
    and native-currency movements to the value-transfer primitive given
    at construction.

    Parameters
    ----------
    native_currency : NativeCurrencyInterface
        Value-transfer primitive of the execution environment
    contract_address : str, default="exchange"
        Identity under which the ledger holds tokens and currency

    Attributes
    ----------
    _state : Optional[ExchangeState]
        Ledger state, None until ``initialize`` is called
    _gate : Optional[OwnershipGate]
        Administrator gate, None until ``initialize`` is called
    _lock : threading.RLock
        Serializes every public operation

    Notes
    -----
    Every public operation runs under one lock and is atomic. Before an
    operation mutates anything the ledger takes a checkpoint of its own
    state and of the administrator, and while it runs it journals a
    compensating transfer for each asset movement it completes. If the
    operation raises, the journaled movements are reversed newest first,
    the state is restored and the exception propagates unchanged. A
    failed swap therefore never leaves tokens or currency in escrow,
    and balances other callers changed meanwhile are left alone.

    Conversions use integer arithmetic only:

    $$\\text{currency} = \\lfloor \\text{tokens} / \\text{ratio} \\rfloor$$

    $$\\text{tokens} = \\text{currency} \\times \\text{ratio}$$

    TradingContext
    --------------
    The ratio is fixed by the administrator, not by the market. Pending
    orders store no ratio: the payout is recomputed with the ratio in
    force when the administrator executes the order, so a ratio change
    between creation and execution changes what the user receives.

    Examples
    --------
    >>> native = InMemoryNativeCurrency()
    >>> token = InMemoryTokenLedger("ABC Token", "ABC", owner="admin")
    >>> ledger = ExchangeLedger(native)
    >>> ledger.initialize(token, "admin")
    >>> ledger.exchange_ratio
    5
    >>> token.mint("admin", "alice", 50)
    >>> token.approve("alice", "exchange", 50)
    True
    >>> result = ledger.exchange_token_to_currency("alice", 50)
    >>> result.settled, result.order_id
    (False, 1)
    """

    def __init__(
        self,
        native_currency: NativeCurrencyInterface,
        contract_address: str = "exchange",
    ):
        self._native = native_currency
        self._contract_address = contract_address
        self._state: Optional[ExchangeState] = None
        self._gate: Optional[OwnershipGate] = None
        self._journal: Optional[List[Tuple[str, Callable[[], Any]]]] = None
        self._lock = threading.RLock()

    # Lifecycle

    def initialize(
        self, token_ledger: TokenLedgerInterface, administrator: str
    ) -> None:
        """Bind the token ledger and the administrator.

        Sets the ratio to its default, both pools to zero and the order
        counter to 1.

        Parameters
        ----------
        token_ledger : TokenLedgerInterface
            Token ledger the exchange trades against
        administrator : str
            Identity allowed to call privileged operations

        Raises
        ------
        InitializationError
            If the ledger was already initialized
        """
        with self._lock:
            if self._state is not None:
                raise InitializationError(ErrorMessages.ALREADY_INITIALIZED)

            self._gate = OwnershipGate(administrator)
            self._state = ExchangeState(
                token_ledger=token_ledger,
                contract_address=self._contract_address,
            )

        logger.info(
            f"Exchange initialized at {self._contract_address}: "
            f"token={token_ledger.symbol}, administrator={administrator}, "
            f"ratio={self._state.exchange_ratio}"
        )

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    # Administrator operations

    def set_exchange_ratio(self, caller: str, new_ratio: int) -> None:
        """Replace the exchange ratio.

        Parameters
        ----------
        caller : str
            Account invoking the operation
        new_ratio : int
            Token units per one unit of native currency

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        InvalidRatio
            If ``new_ratio`` is zero or negative

        Notes
        -----
        Stored orders are not touched; their payout is computed with the
        new ratio if they are executed after this call.
        """
        with self._atomic("set_exchange_ratio") as state:
            self._gate.require_owner(caller)
            if isinstance(new_ratio, bool) or not isinstance(new_ratio, int):
                raise InvalidRatio(
                    f"Exchange ratio must be an integer, got {new_ratio!r}"
                )
            if new_ratio <= 0:
                raise InvalidRatio(
                    f"Exchange ratio must be positive, got {new_ratio}"
                )

            previous = state.exchange_ratio
            state.exchange_ratio = new_ratio
            self._record(
                state,
                EventKind.RATIO_UPDATED,
                previous=previous,
                ratio=new_ratio,
            )

        logger.info(f"Exchange ratio changed from {previous} to {new_ratio}")

    def deposit_token(self, caller: str, amount: int) -> None:
        """Pull tokens from the administrator into the token pool.

        The administrator must have approved the exchange for at least
        ``amount`` beforehand.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        TransferFailure
            If the token ledger rejects the pull
        """
        with self._atomic("deposit_token") as state:
            self._gate.require_owner(caller)
            self._pull_token(state, caller, amount)
            self._record(
                state, EventKind.TOKEN_DEPOSITED, account=caller, amount=amount
            )

        logger.info(
            f"Token deposit of {amount} by {caller}; "
            f"liquidity={self._state.token_liquidity}"
        )

    def deposit_currency(self, caller: str, value: int) -> None:
        """Add the value attached by the administrator to the currency pool.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        TransferFailure
            If the caller cannot cover the attached value
        """
        with self._atomic("deposit_currency") as state:
            self._gate.require_owner(caller)
            self._receive_currency(state, caller, value)
            self._record(
                state,
                EventKind.CURRENCY_DEPOSITED,
                account=caller,
                amount=value,
            )

        logger.info(
            f"Currency deposit of {value} by {caller}; "
            f"balance={self._state.currency_balance}"
        )

    def execute_pending_order(self, caller: str, order_id: int) -> Order:
        """Pay out a pending order with the current ratio.

        Parameters
        ----------
        caller : str
            Account invoking the operation
        order_id : int
            Id of the order to execute

        Returns
        -------
        Order
            Copy of the executed order

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        InvalidOrder
            If the order does not exist or was already executed
        InsufficientLiquidity
            If the paying pool cannot cover the payout
        TransferFailure
            If the payout transfer is rejected

        Notes
        -----
        The payout and the ``executed`` flag are committed together: if
        the payout fails the flag stays False, and the flag is never set
        without the payout having been made.

        TradingContext
        --------------
        Execution is the only way out of the pending state. There is no
        partial fill: either the whole payout is covered or the call
        fails and the order stays pending.
        """
        with self._atomic("execute_pending_order") as state:
            self._gate.require_owner(caller)
            order = self._find_order(state, order_id)
            if order.executed:
                raise InvalidOrder(
                    f"{ErrorMessages.ORDER_ALREADY_EXECUTED}: {order_id}"
                )

            if order.is_token_to_currency:
                payout = self._token_to_currency_payout(state, order.amount)
                if state.currency_balance < payout:
                    self._reject_liquidity(
                        "currency", payout, state.currency_balance
                    )
                self._pay_currency(state, order.user, payout)
            else:
                payout = self._currency_to_token_payout(state, order.amount)
                if state.token_liquidity < payout:
                    self._reject_liquidity(
                        "token", payout, state.token_liquidity
                    )
                self._pay_token(state, order.user, payout)

            order.executed = True
            self._record(
                state,
                EventKind.ORDER_EXECUTED,
                order_id=order.id,
                user=order.user,
                direction=order.direction.value,
                amount=order.amount,
                payout=payout,
                ratio=state.exchange_ratio,
            )
            executed = replace(order)

        logger.info(
            f"Order {order_id} executed: paid {payout} to {executed.user} "
            f"({executed.direction.value})"
        )
        return executed

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the administrator role to another account.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the administrator
        ValueError
            If ``new_owner`` is empty
        """
        with self._atomic("transfer_ownership") as state:
            previous = self._gate.transfer_ownership(caller, new_owner)
            self._record(
                state,
                EventKind.OWNERSHIP_TRANSFERRED,
                previous=previous,
                owner=new_owner,
            )

    def renounce_ownership(self, caller: str) -> None:
        """Leave the ledger without an administrator.

        Every privileged operation fails afterwards, including the
        execution of pending orders.
        """
        with self._atomic("renounce_ownership") as state:
            self._gate.renounce_ownership(caller)
            self._record(
                state,
                EventKind.OWNERSHIP_TRANSFERRED,
                previous=caller,
                owner=None,
            )

    # User operations

    def exchange_token_to_currency(self, caller: str, amount: int) -> SwapResult:
        """Swap tokens for native currency.

        The tokens are pulled into escrow first, whatever happens next.
        If the currency pool covers ``amount // ratio`` the caller is
        paid immediately, otherwise a pending order is created.

        Parameters
        ----------
        caller : str
            Account offering the tokens; must have approved the exchange
        amount : int
            Tokens offered

        Returns
        -------
        SwapResult
            Settled result, or unsettled result carrying the new order id

        Raises
        ------
        TransferFailure
            If the token ledger rejects the pull into escrow

        Examples
        --------
        >>> # ratio 5, currency pool of 100
        >>> result = ledger.exchange_token_to_currency("alice", 50)
        >>> result.settled, result.payout
        (True, 10)
        """
        with self._atomic("exchange_token_to_currency") as state:
            self._pull_token(state, caller, amount)
            payout = self._token_to_currency_payout(state, amount)

            if state.currency_balance >= payout:
                self._pay_currency(state, caller, payout)
                result = self._settle(
                    state, caller, OrderDirection.TOKEN_TO_CURRENCY, amount, payout
                )
            else:
                result = self._defer(
                    state, caller, OrderDirection.TOKEN_TO_CURRENCY, amount, payout
                )

        return result

    def exchange_currency_to_token(self, caller: str, value: int) -> SwapResult:
        """Swap attached native currency for tokens.

        The attached value joins the currency pool first. If the token
        pool covers ``value * ratio`` the caller is paid immediately,
        otherwise a pending order is created and the value stays in
        escrow.

        Parameters
        ----------
        caller : str
            Account attaching the currency
        value : int
            Native currency attached to the call

        Returns
        -------
        SwapResult
            Settled result, or unsettled result carrying the new order id

        Raises
        ------
        TransferFailure
            If the caller cannot cover the attached value
        """
        with self._atomic("exchange_currency_to_token") as state:
            self._receive_currency(state, caller, value)
            payout = self._currency_to_token_payout(state, value)

            if state.token_liquidity >= payout:
                self._pay_token(state, caller, payout)
                result = self._settle(
                    state, caller, OrderDirection.CURRENCY_TO_TOKEN, value, payout
                )
            else:
                result = self._defer(
                    state, caller, OrderDirection.CURRENCY_TO_TOKEN, value, payout
                )

        return result

    # Queries

    def get_pending_order(self, order_id: int) -> Order:
        """Return a copy of a stored order, executed or not.

        Raises
        ------
        InvalidOrder
            If ``order_id`` was never assigned
        """
        with self._lock:
            state = self._require_state()
            return replace(self._find_order(state, order_id))

    def get_orders(
        self, user: Optional[str] = None, pending_only: bool = False
    ) -> List[Order]:
        """Return copies of stored orders in id order.

        Parameters
        ----------
        user : Optional[str]
            Only return orders owed to this account
        pending_only : bool, default=False
            Skip executed orders
        """
        with self._lock:
            state = self._require_state()
            return [
                replace(order)
                for order_id, order in sorted(state.orders.items())
                if (user is None or order.user == user)
                and not (pending_only and order.executed)
            ]

    def token_balance(self) -> int:
        """Tokens held by the pool."""
        with self._lock:
            return self._require_state().token_liquidity

    def currency_balance(self) -> int:
        """Native currency held by the ledger, escrow included."""
        with self._lock:
            return self._require_state().currency_balance

    @property
    def exchange_ratio(self) -> int:
        with self._lock:
            return self._require_state().exchange_ratio

    @property
    def next_order_id(self) -> int:
        with self._lock:
            return self._require_state().next_order_id

    @property
    def administrator(self) -> Optional[str]:
        with self._lock:
            self._require_state()
            return self._gate.owner

    @property
    def token_ledger(self) -> TokenLedgerInterface:
        with self._lock:
            return self._require_state().token_ledger

    @property
    def contract_address(self) -> str:
        return self._contract_address

    def get_events(self) -> List[ExchangeEvent]:
        """Return a copy of the event log."""
        with self._lock:
            return list(self._require_state().events)

    def get_summary(self) -> Dict[str, Any]:
        """Return the public state of the ledger as a dictionary."""
        with self._lock:
            state = self._require_state()
            return {
                "contract_address": state.contract_address,
                "administrator": self._gate.owner,
                "token_symbol": state.token_ledger.symbol,
                "exchange_ratio": state.exchange_ratio,
                "token_liquidity": state.token_liquidity,
                "currency_balance": state.currency_balance,
                "next_order_id": state.next_order_id,
            }

    # Internals

    def _require_state(self) -> ExchangeState:
        if self._state is None:
            raise InitializationError(ErrorMessages.NOT_INITIALIZED)
        return self._state

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[ExchangeState]:
        """Run an operation under the lock, undoing everything on failure."""
        with self._lock:
            state = self._require_state()
            checkpoint = self._checkpoint(state)
            self._journal = checkpoint.reversals
            try:
                yield state
            except ExchangeError as e:
                self._rollback(checkpoint)
                logger.warning(f"{operation} rolled back: {e.code}: {e}")
                raise
            except Exception:
                self._rollback(checkpoint)
                logger.exception(f"{operation} rolled back on unexpected error")
                raise
            finally:
                self._journal = None

    def _checkpoint(self, state: ExchangeState) -> _Checkpoint:
        saved = replace(
            state,
            orders={
                order_id: replace(order)
                for order_id, order in state.orders.items()
            },
            events=list(state.events),
        )
        return _Checkpoint(state=saved, owner=self._gate.snapshot())

    def _rollback(self, checkpoint: _Checkpoint) -> None:
        """Reverse the transfers of the failed call, newest first.

        Only movements made by the call itself are undone, so writes
        other callers made to the asset ledgers in the meantime survive.
        """
        for description, reverse in reversed(checkpoint.reversals):
            try:
                reverse()
            except ExchangeError as e:
                logger.error(f"Could not reverse {description}: {e}")
        self._gate.restore(checkpoint.owner)
        self._state = checkpoint.state

    def _record_reversal(
        self, description: str, reverse: Callable[[], Any]
    ) -> None:
        self._journal.append((description, reverse))

    def _find_order(self, state: ExchangeState, order_id: int) -> Order:
        order = None
        if not isinstance(order_id, bool):
            order = state.orders.get(order_id)
        if order is None:
            raise InvalidOrder(f"{ErrorMessages.ORDER_NOT_FOUND}: {order_id}")
        return order

    @staticmethod
    def _token_to_currency_payout(state: ExchangeState, amount: int) -> int:
        return amount // state.exchange_ratio

    @staticmethod
    def _currency_to_token_payout(state: ExchangeState, value: int) -> int:
        return value * state.exchange_ratio

    def _pull_token(self, state: ExchangeState, owner: str, amount: int) -> None:
        logger.debug(f"Pulling {amount} {state.token_ledger.symbol} from {owner}")
        token = state.token_ledger
        contract = state.contract_address
        token.transfer_from(contract, owner, contract, amount)
        self._record_reversal(
            f"token pull of {amount} from {owner}",
            partial(token.transfer, contract, owner, amount),
        )
        self._record_reversal(
            f"allowance of {owner} consumed by {amount}",
            partial(token.increase_allowance, owner, contract, amount),
        )
        state.token_liquidity += amount

    def _pay_token(self, state: ExchangeState, to: str, amount: int) -> None:
        logger.debug(f"Paying {amount} {state.token_ledger.symbol} to {to}")
        token = state.token_ledger
        token.transfer(state.contract_address, to, amount)
        self._record_reversal(
            f"token payout of {amount} to {to}",
            partial(token.transfer, to, state.contract_address, amount),
        )
        state.token_liquidity -= amount

    def _receive_currency(
        self, state: ExchangeState, sender: str, value: int
    ) -> None:
        logger.debug(f"Receiving {value} currency from {sender}")
        self._native.transfer(sender, state.contract_address, value)
        self._record_reversal(
            f"currency receipt of {value} from {sender}",
            partial(self._native.transfer, state.contract_address, sender, value),
        )
        state.currency_balance += value

    def _pay_currency(self, state: ExchangeState, to: str, amount: int) -> None:
        logger.debug(f"Paying {amount} currency to {to}")
        self._native.transfer(state.contract_address, to, amount)
        self._record_reversal(
            f"currency payout of {amount} to {to}",
            partial(self._native.transfer, to, state.contract_address, amount),
        )
        state.currency_balance -= amount

    @staticmethod
    def _reject_liquidity(asset: str, required: int, available: int) -> None:
        raise InsufficientLiquidity(
            ErrorMessages.format_insufficient_liquidity(asset, required, available)
        )

    def _settle(
        self,
        state: ExchangeState,
        user: str,
        direction: OrderDirection,
        amount: int,
        payout: int,
    ) -> SwapResult:
        self._record(
            state,
            EventKind.SWAP_SETTLED,
            user=user,
            direction=direction.value,
            amount=amount,
            payout=payout,
            ratio=state.exchange_ratio,
        )
        logger.info(
            f"Swap settled for {user}: {direction.value} "
            f"amount={amount} payout={payout}"
        )
        return SwapResult(
            direction=direction, amount=amount, payout=payout, settled=True
        )

    def _defer(
        self,
        state: ExchangeState,
        user: str,
        direction: OrderDirection,
        amount: int,
        payout: int,
    ) -> SwapResult:
        order = Order(
            id=state.next_order_id,
            user=user,
            amount=amount,
            direction=direction,
        )
        state.orders[order.id] = order
        state.next_order_id += 1
        self._record(
            state,
            EventKind.ORDER_CREATED,
            order_id=order.id,
            user=user,
            direction=direction.value,
            amount=amount,
        )
        logger.info(
            f"Order {order.id} created for {user}: {direction.value} "
            f"amount={amount}, payout {payout} not covered"
        )
        return SwapResult(
            direction=direction,
            amount=amount,
            payout=payout,
            settled=False,
            order_id=order.id,
        )

    @staticmethod
    def _record(state: ExchangeState, kind: EventKind, **data: Any) -> None:
        state.events.append(
            ExchangeEvent(sequence=len(state.events) + 1, kind=kind, data=data)
        )

"""Account registry issuing API keys for exchange participants.

Accounts are the identities the exchange ledger sees as callers. Each
account authenticates to the REST API with the key issued here.
"""

import logging
import secrets
import threading
from datetime import datetime
from typing import Dict, Optional

from ...infrastructure.api.models import AccountInfo
from ..assets.interfaces import NativeCurrencyInterface

logger = logging.getLogger(__name__)


class AccountService:
    """Registry of named accounts and their API keys.

    Parameters
    ----------
    native_currency : NativeCurrencyInterface
        Value-transfer primitive used to fund new accounts
    starting_currency : int, default=0
        Native currency credited to every newly registered account

    Attributes
    ----------
    accounts : Dict[str, AccountInfo]
        Mapping of account IDs to account information
    api_key_to_account : Dict[str, str]
        Mapping of API keys to account IDs for fast lookup
    _account_counter : int
        Counter for generating sequential account IDs

    Notes
    -----
    Generated API keys are "ex_" followed by 43 characters of URL-safe
    base64, giving 256 bits of entropy. Account IDs are sequential
    (ACCT_001, ACCT_002, ...).

    Examples
    --------
    >>> service = AccountService(InMemoryNativeCurrency(), starting_currency=100)
    >>> account = service.register_account("alice")
    >>> account.account_id
    'ACCT_001'
    >>> service.get_account_by_api_key(account.api_key).name
    'alice'
    """

    def __init__(
        self,
        native_currency: NativeCurrencyInterface,
        starting_currency: int = 0,
    ):
        self.accounts: Dict[str, AccountInfo] = {}
        self.api_key_to_account: Dict[str, str] = {}
        self._account_counter = 0
        self._native = native_currency
        self._starting_currency = starting_currency
        self._lock = threading.RLock()

    def register_account(
        self,
        name: str,
        account_id: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> AccountInfo:
        """Register a new account and issue its API key.

        Parameters
        ----------
        name : str
            Display name, unique across accounts
        account_id : Optional[str]
            Fixed identity to use instead of a generated one; used for
            the administrator account configured at startup
        api_key : Optional[str]
            Fixed API key to use instead of a generated one

        Returns
        -------
        AccountInfo
            The registered account including its API key

        Raises
        ------
        ValueError
            If the name or the account ID is already taken
        """
        with self._lock:
            if self.get_account_by_name(name) is not None:
                raise ValueError(f"Account name '{name}' already exists")

            if account_id is None:
                self._account_counter += 1
                account_id = f"ACCT_{self._account_counter:03d}"
            if account_id in self.accounts:
                raise ValueError(f"Account id '{account_id}' already exists")

            account = AccountInfo(
                account_id=account_id,
                name=name,
                api_key=api_key or f"ex_{secrets.token_urlsafe(32)}",
                created_at=datetime.now(),
            )
            self.accounts[account_id] = account
            self.api_key_to_account[account.api_key] = account_id

        if self._starting_currency:
            self._native.credit(account_id, self._starting_currency)
        logger.info(f"Registered account {account_id} ({name})")

        return account

    def get_account_by_api_key(self, api_key: str) -> Optional[AccountInfo]:
        """Look up an account by API key."""
        account_id = self.api_key_to_account.get(api_key)
        if account_id:
            return self.accounts.get(account_id)
        return None

    def get_account_by_id(self, account_id: str) -> Optional[AccountInfo]:
        """Look up an account by ID."""
        return self.accounts.get(account_id)

    def get_account_by_name(self, name: str) -> Optional[AccountInfo]:
        """Look up an account by name."""
        for account in self.accounts.values():
            if account.name == name:
                return account
        return None

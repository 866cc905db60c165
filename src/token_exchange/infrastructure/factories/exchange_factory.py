"""Factory for creating configured exchange instances.

This module provides factory methods to build the exchange ledger and
its collaborators (token ledger, native-currency ledger and account
registry) from configuration.
"""

import logging
from dataclasses import dataclass

from ...constants import DEFAULT_EXCHANGE_RATIO
from ...domain.accounts import AccountService
from ...domain.assets import InMemoryNativeCurrency, InMemoryTokenLedger
from ...domain.exchange import ExchangeLedger
from ...infrastructure.api.models import AccountInfo
from ..config.loader import ConfigLoader

logger = logging.getLogger(__name__)


@dataclass
class ExchangeServices:
    """The wired set of services behind one exchange."""

    ledger: ExchangeLedger
    token: InMemoryTokenLedger
    native: InMemoryNativeCurrency
    accounts: AccountService
    administrator: AccountInfo


class ExchangeFactory:
    """Factory for creating configured exchange instances.

    This class provides static methods to create the exchange ledger
    and its collaborators from configuration, hiding the order in which
    they have to be wired together.
    """

    @staticmethod
    def create_from_config(config_loader: ConfigLoader) -> ExchangeServices:
        """Create an initialized exchange from configuration.

        Parameters
        ----------
        config_loader : ConfigLoader
            Loader for the exchange, token and accounts sections

        Returns
        -------
        ExchangeServices
            Initialized ledger with its collaborators and the registered
            administrator account

        Raises
        ------
        ValueError
            If the administrator identity equals the contract address

        Notes
        -----
        Startup sequence:
        1. Create the native-currency ledger and the account registry
        2. Register the administrator account (funded like any account)
        3. Create the token ledger owned by the administrator and mint
           the initial supply to it
        4. Initialize the exchange ledger, then apply the configured
           ratio through the administrator if it differs from the default
        """
        exchange_config = config_loader.get_exchange_config()
        token_config = config_loader.get_token_config()
        accounts_config = config_loader.get_accounts_config()

        if accounts_config.administrator == exchange_config.contract_address:
            raise ValueError(
                f"accounts.administrator must differ from "
                f"exchange.contract_address, both are "
                f"'{exchange_config.contract_address}'"
            )

        native = InMemoryNativeCurrency()
        accounts = AccountService(
            native, starting_currency=accounts_config.starting_currency
        )
        administrator = accounts.register_account(
            name=accounts_config.administrator,
            account_id=accounts_config.administrator,
            api_key=accounts_config.administrator_api_key,
        )

        token = InMemoryTokenLedger(
            name=token_config.name,
            symbol=token_config.symbol,
            owner=administrator.account_id,
        )
        if token_config.initial_supply:
            token.mint(
                administrator.account_id,
                administrator.account_id,
                token_config.initial_supply,
            )

        ledger = ExchangeLedger(
            native, contract_address=exchange_config.contract_address
        )
        ledger.initialize(token, administrator.account_id)
        if exchange_config.initial_ratio != DEFAULT_EXCHANGE_RATIO:
            ledger.set_exchange_ratio(
                administrator.account_id, exchange_config.initial_ratio
            )

        return ExchangeServices(
            ledger=ledger,
            token=token,
            native=native,
            accounts=accounts,
            administrator=administrator,
        )

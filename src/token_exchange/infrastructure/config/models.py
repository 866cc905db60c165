"""Configuration data models.

This module defines the data structures for application configuration,
using dataclasses for type safety and clarity.
"""

from dataclasses import dataclass
from typing import Optional

from ...constants import DEFAULT_EXCHANGE_RATIO


@dataclass
class ExchangeConfig:
    """Exchange ledger configuration.

    Attributes
    ----------
    contract_address : str
        Identity under which the exchange holds tokens and currency.
        Users approve this identity before swapping tokens.
    initial_ratio : int
        Ratio applied by the administrator right after initialization.
        A freshly initialized ledger always starts at the default ratio;
        a different value here is set through the regular ratio update.
    """

    contract_address: str = "exchange"
    initial_ratio: int = DEFAULT_EXCHANGE_RATIO


@dataclass
class TokenConfig:
    """Token ledger configuration.

    Attributes
    ----------
    name : str
        Human readable token name
    symbol : str
        Ticker symbol
    initial_supply : int
        Tokens minted to the administrator at startup
    """

    name: str = "ABC Token"
    symbol: str = "ABC"
    initial_supply: int = 0


@dataclass
class AccountsConfig:
    """Account configuration.

    Attributes
    ----------
    administrator : str
        Account ID of the exchange administrator, also the token owner
    administrator_api_key : Optional[str]
        Fixed API key for the administrator; generated when None
    starting_currency : int
        Native currency credited to every new account
    """

    administrator: str = "admin"
    administrator_api_key: Optional[str] = None
    starting_currency: int = 0


@dataclass
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str
        Root log level name (DEBUG, INFO, WARNING, ERROR)
    """

    level: str = "INFO"

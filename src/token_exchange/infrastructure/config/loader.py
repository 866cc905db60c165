"""Configuration loading utilities.

This module provides functionality to load and parse YAML configuration files,
with support for defaults and validation.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ...constants import DEFAULT_EXCHANGE_RATIO
from .models import AccountsConfig, ExchangeConfig, LoggingConfig, TokenConfig

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoader:
    """Loads and manages application configuration from YAML files.

    This class provides a centralized way to load configuration from YAML files,
    with caching to avoid repeated file I/O.

    Parameters
    ----------
    config_path : Optional[Path]
        Path to the configuration file. If None, defaults to "config/default.yaml"

    Attributes
    ----------
    config_path : Path
        The path to the configuration file
    _config_data : Optional[Dict]
        Cached configuration data

    Examples
    --------
    >>> loader = ConfigLoader(Path("config/default.yaml"))
    >>> loader.get_exchange_config().initial_ratio
    5
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the config loader with a path."""
        self.config_path = Path(config_path or "config/default.yaml")
        self._config_data: Optional[Dict] = None

    def load(self) -> Dict:
        """Load raw configuration data from YAML file.

        Loads the YAML file and caches the result. Subsequent calls
        return the cached data.

        Returns
        -------
        Dict
            The parsed YAML configuration as a dictionary

        Raises
        ------
        FileNotFoundError
            If the configuration file doesn't exist
        yaml.YAMLError
            If the YAML file is malformed
        """
        if self._config_data is None:
            if not self.config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}"
                )

            with open(self.config_path) as f:
                try:
                    self._config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise yaml.YAMLError(
                        f"Failed to parse config file {self.config_path}: {e}"
                    )

        return self._config_data

    def get_exchange_config(self) -> ExchangeConfig:
        """Get exchange ledger configuration.

        Returns
        -------
        ExchangeConfig
            The exchange configuration with defaults applied

        Raises
        ------
        ValueError
            If initial_ratio is not a positive integer or the contract
            address is empty
        """
        exchange_data = self._section("exchange")

        initial_ratio = exchange_data.get("initial_ratio", DEFAULT_EXCHANGE_RATIO)
        if (
            isinstance(initial_ratio, bool)
            or not isinstance(initial_ratio, int)
            or initial_ratio <= 0
        ):
            raise ValueError(
                f"exchange.initial_ratio must be a positive integer, "
                f"got {initial_ratio!r}"
            )

        contract_address = str(exchange_data.get("contract_address", "exchange"))
        if not contract_address:
            raise ValueError("exchange.contract_address must be non-empty")

        return ExchangeConfig(
            contract_address=contract_address,
            initial_ratio=initial_ratio,
        )

    def get_token_config(self) -> TokenConfig:
        """Get token ledger configuration.

        Raises
        ------
        ValueError
            If initial_supply is negative
        """
        token_data = self._section("token")

        initial_supply = self._non_negative_int(
            token_data, "initial_supply", "token"
        )

        return TokenConfig(
            name=str(token_data.get("name", "ABC Token")),
            symbol=str(token_data.get("symbol", "ABC")),
            initial_supply=initial_supply,
        )

    def get_accounts_config(self) -> AccountsConfig:
        """Get account configuration.

        Raises
        ------
        ValueError
            If starting_currency is negative or the administrator is empty
        """
        accounts_data = self._section("accounts")

        administrator = str(accounts_data.get("administrator", "admin"))
        if not administrator:
            raise ValueError("accounts.administrator must be non-empty")

        api_key = accounts_data.get("administrator_api_key")

        return AccountsConfig(
            administrator=administrator,
            administrator_api_key=str(api_key) if api_key else None,
            starting_currency=self._non_negative_int(
                accounts_data, "starting_currency", "accounts"
            ),
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration.

        Raises
        ------
        ValueError
            If the level is not a standard logging level name
        """
        logging_data = self._section("logging")

        level = str(logging_data.get("level", "INFO")).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid logging level: {level}. Valid levels are: "
                f"{list(_LOG_LEVELS)}"
            )

        return LoggingConfig(level=level)

    def configure_logging(self) -> None:
        """Configure the root logger from the logging section."""
        logging.basicConfig(
            level=getattr(logging, self.get_logging_config().level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    def _section(self, name: str) -> Dict[str, Any]:
        data = self.load()
        return data.get(name) or {}

    @staticmethod
    def _non_negative_int(data: Dict[str, Any], key: str, section: str) -> int:
        value = data.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(
                f"{section}.{key} must be a non-negative integer, got {value!r}"
            )
        return value

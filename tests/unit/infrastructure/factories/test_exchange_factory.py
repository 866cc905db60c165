"""Behavior tests for exchange factory functionality."""

from unittest.mock import Mock

import pytest

from token_exchange.domain.exchange import ExchangeLedger
from token_exchange.infrastructure.config.models import (
    AccountsConfig,
    ExchangeConfig,
    TokenConfig,
)
from token_exchange.infrastructure.factories.exchange_factory import (
    ExchangeFactory,
)


def _mock_loader(exchange=None, token=None, accounts=None):
    loader = Mock()
    loader.get_exchange_config.return_value = exchange or ExchangeConfig()
    loader.get_token_config.return_value = token or TokenConfig()
    loader.get_accounts_config.return_value = accounts or AccountsConfig()
    return loader


class TestExchangeFactory:
    """Test exchange creation from configuration."""

    def test_create_default_exchange(self):
        """Test creating an exchange with default configuration.

        Given - Default exchange, token and accounts config
        When - Factory creates the exchange
        Then - Ledger is initialized at ratio 5 with admin in charge
        """
        # Given - Default config
        loader = _mock_loader()

        # When - Create services
        services = ExchangeFactory.create_from_config(loader)

        # Then - Ledger is ready to use
        assert isinstance(services.ledger, ExchangeLedger)
        assert services.ledger.is_initialized
        assert services.ledger.exchange_ratio == 5
        assert services.ledger.administrator == "admin"
        assert services.ledger.token_ledger is services.token
        assert services.ledger.contract_address == "exchange"
        assert services.ledger.get_events() == []

    def test_administrator_registered_under_configured_id(self):
        """Test the administrator account identity matches the ledger."""
        loader = _mock_loader(
            accounts=AccountsConfig(
                administrator="operator", administrator_api_key="secret"
            )
        )

        services = ExchangeFactory.create_from_config(loader)

        assert services.administrator.account_id == "operator"
        assert services.administrator.api_key == "secret"
        assert services.accounts.get_account_by_api_key("secret") is (
            services.administrator
        )
        assert services.ledger.administrator == "operator"
        assert services.token.owner == "operator"

    def test_initial_supply_minted_to_administrator(self):
        loader = _mock_loader(
            token=TokenConfig(name="Test", symbol="TST", initial_supply=5_000)
        )

        services = ExchangeFactory.create_from_config(loader)

        assert services.token.symbol == "TST"
        assert services.token.balance_of("admin") == 5_000
        assert services.token.total_supply == 5_000

    def test_starting_currency_funds_administrator(self):
        loader = _mock_loader(accounts=AccountsConfig(starting_currency=300))

        services = ExchangeFactory.create_from_config(loader)

        assert services.native.balance_of("admin") == 300

    def test_custom_ratio_applied(self):
        """Test a configured ratio goes through the ratio update.

        Given - Config with initial_ratio 8
        When - Factory creates the exchange
        Then - Ratio is 8 and the change is in the event log
        """
        loader = _mock_loader(
            exchange=ExchangeConfig(contract_address="swap", initial_ratio=8)
        )

        services = ExchangeFactory.create_from_config(loader)

        assert services.ledger.exchange_ratio == 8
        assert services.ledger.contract_address == "swap"
        assert len(services.ledger.get_events()) == 1

    def test_administrator_equal_to_contract_rejected(self):
        """Test the administrator cannot share the exchange's identity.

        Given - Config naming "exchange" as both administrator and contract
        When - Factory creates the exchange
        Then - ValueError naming both settings
        """
        loader = _mock_loader(
            exchange=ExchangeConfig(contract_address="exchange"),
            accounts=AccountsConfig(administrator="exchange"),
        )

        with pytest.raises(ValueError, match="contract_address"):
            ExchangeFactory.create_from_config(loader)

"""Behavior tests for the account registry."""

import pytest

from token_exchange.domain.accounts import AccountService
from token_exchange.domain.assets import InMemoryNativeCurrency


@pytest.fixture
def native():
    return InMemoryNativeCurrency()


@pytest.fixture
def service(native):
    return AccountService(native, starting_currency=1_000)


class TestRegistration:
    """Test account registration."""

    def test_sequential_ids(self, service):
        """Test generated ids count up from ACCT_001."""
        alice = service.register_account("alice")
        bob = service.register_account("bob")

        assert alice.account_id == "ACCT_001"
        assert bob.account_id == "ACCT_002"

    def test_generated_key_format(self, service):
        account = service.register_account("alice")

        assert account.api_key.startswith("ex_")
        assert len(account.api_key) == 46

    def test_keys_are_unique(self, service):
        alice = service.register_account("alice")
        bob = service.register_account("bob")

        assert alice.api_key != bob.api_key

    def test_new_account_is_funded(self, service, native):
        """Test each new account receives the starting currency."""
        account = service.register_account("alice")

        assert native.balance_of(account.account_id) == 1_000

    def test_no_funding_when_zero(self, native):
        service = AccountService(native)

        account = service.register_account("alice")

        assert native.balance_of(account.account_id) == 0

    def test_duplicate_name_rejected(self, service, native):
        """Test names are unique.

        Given - alice is registered
        When - alice registers again
        Then - ValueError, no second account and no second credit
        """
        first = service.register_account("alice")

        with pytest.raises(ValueError, match="already exists"):
            service.register_account("alice")

        assert len(service.accounts) == 1
        assert native.balance_of(first.account_id) == 1_000

    def test_fixed_id_and_key(self, service):
        """Test the administrator can be registered under fixed identity."""
        account = service.register_account(
            "admin", account_id="admin", api_key="secret"
        )

        assert account.account_id == "admin"
        assert service.get_account_by_api_key("secret") is account

    def test_duplicate_fixed_id_rejected(self, service):
        service.register_account("admin", account_id="admin")

        with pytest.raises(ValueError):
            service.register_account("other", account_id="admin")


class TestLookups:
    """Test account lookups."""

    def test_lookup_by_key_id_and_name(self, service):
        account = service.register_account("alice")

        assert service.get_account_by_api_key(account.api_key) is account
        assert service.get_account_by_id(account.account_id) is account
        assert service.get_account_by_name("alice") is account

    def test_unknown_lookups_return_none(self, service):
        assert service.get_account_by_api_key("ex_unknown") is None
        assert service.get_account_by_id("ACCT_999") is None
        assert service.get_account_by_name("nobody") is None

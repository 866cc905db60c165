"""Fixtures for exchange ledger tests.

Accounts used throughout:
- admin: exchange administrator and token owner
- alice, bob: regular users
"""

import pytest

from token_exchange.domain.assets import (
    InMemoryNativeCurrency,
    InMemoryTokenLedger,
)
from token_exchange.domain.exchange import ExchangeLedger

EXCHANGE = "exchange"


@pytest.fixture
def native():
    """Native-currency ledger with funded accounts."""
    native = InMemoryNativeCurrency()
    native.credit("admin", 1_000)
    native.credit("alice", 1_000)
    native.credit("bob", 1_000)
    return native


@pytest.fixture
def token():
    """Token ledger owned by admin with balances for everyone."""
    token = InMemoryTokenLedger("ABC Token", "ABC", owner="admin")
    token.mint("admin", "admin", 10_000)
    token.mint("admin", "alice", 1_000)
    token.mint("admin", "bob", 1_000)
    return token


@pytest.fixture
def ledger(native, token):
    """Initialized exchange ledger with empty pools and ratio 5."""
    ledger = ExchangeLedger(native, contract_address=EXCHANGE)
    ledger.initialize(token, "admin")
    return ledger


@pytest.fixture
def provisioned_ledger(ledger, token):
    """Ledger holding 1000 tokens and 100 currency of liquidity."""
    token.approve("admin", EXCHANGE, 1_000)
    ledger.deposit_token("admin", 1_000)
    ledger.deposit_currency("admin", 100)
    return ledger

"""API-level integration test fixtures.

Provides a TestClient over an application built from a temporary
configuration file, so every test starts from a fresh ledger.
"""

import tempfile
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from token_exchange.api.main import create_app
from token_exchange.infrastructure.config import ConfigLoader

ADMIN_API_KEY = "admin-test-key"


@pytest.fixture
def config_path():
    """Temporary config with a fixed administrator key."""
    config_data = {
        "exchange": {"contract_address": "exchange", "initial_ratio": 5},
        "token": {"name": "ABC Token", "symbol": "ABC", "initial_supply": 10_000},
        "accounts": {
            "administrator": "admin",
            "administrator_api_key": ADMIN_API_KEY,
            "starting_currency": 1_000,
        },
        "logging": {"level": "INFO"},
    }
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".yaml", delete=False
    ) as f:
        yaml.dump(config_data, f)
        path = Path(f.name)

    yield path

    path.unlink()


@pytest.fixture
def client(config_path):
    """TestClient running the app lifespan."""
    app = create_app(ConfigLoader(config_path))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    return {"X-API-Key": ADMIN_API_KEY}


@pytest.fixture
def register(client):
    """Register an account and return (account data, auth headers)."""

    def _register(name):
        response = client.post("/accounts/register", json={"name": name})
        data = response.json()["data"]
        return data, {"X-API-Key": data["api_key"]}

    return _register


@pytest.fixture
def provisioned(client, admin_headers):
    """Pools of 1000 tokens and 100 currency, as set up by the administrator."""
    client.post(
        "/token/approve", json={"amount": 1_000}, headers=admin_headers
    )
    client.post(
        "/exchange/deposits/token", json={"amount": 1_000}, headers=admin_headers
    )
    client.post(
        "/exchange/deposits/currency", json={"amount": 100}, headers=admin_headers
    )
    return client

"""Integration tests for the exchange REST API.

Each test drives a fresh application through HTTP only: accounts are
registered, tokens approved and swaps made exactly as a client would.
"""


class TestHealthAndAuth:
    """Test health check and API key handling."""

    def test_health_check(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["ledger_initialized"] is True

    def test_missing_api_key_rejected(self, client):
        response = client.put("/exchange/ratio", json={"ratio": 10})

        assert response.status_code == 401
        assert "Missing API key" in response.json()["detail"]

    def test_invalid_api_key_rejected(self, client):
        response = client.put(
            "/exchange/ratio",
            json={"ratio": 10},
            headers={"X-API-Key": "ex_wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_negative_amount_is_validation_error(self, client, admin_headers):
        response = client.post(
            "/exchange/deposits/currency",
            json={"amount": -1},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestAccounts:
    """Test registration and the account view."""

    def test_register_and_view_account(self, client, register):
        """Test a new account is funded and can see its balances.

        Given - A running exchange with starting currency 1000
        When - alice registers and fetches /accounts/me
        Then - She has 1000 currency, no tokens and no orders
        """
        account, headers = register("alice")

        response = client.get("/accounts/me", headers=headers)

        data = response.json()["data"]
        assert account["account_id"] == "ACCT_001"
        assert account["api_key"].startswith("ex_")
        assert data["currency_balance"] == 1_000
        assert data["token_balance"] == 0
        assert data["exchange_allowance"] == 0
        assert data["orders"] == []

    def test_duplicate_name_rejected(self, client, register):
        register("alice")

        response = client.post("/accounts/register", json={"name": "alice"})

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["error"]["code"] == "DUPLICATE_ACCOUNT_NAME"


class TestToken:
    """Test token endpoints."""

    def test_token_info(self, client):
        data = client.get("/token").json()["data"]

        assert data == {
            "name": "ABC Token",
            "symbol": "ABC",
            "total_supply": 10_000,
        }

    def test_owner_mints(self, client, admin_headers, register):
        account, _ = register("alice")

        response = client.post(
            "/token/mint",
            json={"to": account["account_id"], "amount": 500},
            headers=admin_headers,
        )

        assert response.json()["success"] is True
        assert response.json()["data"]["balance"] == 500
        assert response.json()["data"]["total_supply"] == 10_500

    def test_non_owner_cannot_mint(self, client, register):
        account, headers = register("alice")

        response = client.post(
            "/token/mint",
            json={"to": account["account_id"], "amount": 500},
            headers=headers,
        )

        assert response.json()["success"] is False
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_approve_defaults_to_exchange(self, client, register):
        _, headers = register("alice")

        client.post("/token/approve", json={"amount": 50}, headers=headers)

        me = client.get("/accounts/me", headers=headers).json()["data"]
        assert me["exchange_allowance"] == 50


class TestAdministration:
    """Test administrator-only endpoints."""

    def test_set_ratio(self, client, admin_headers):
        response = client.put(
            "/exchange/ratio", json={"ratio": 10}, headers=admin_headers
        )

        assert response.json()["data"] == {"exchange_ratio": 10}
        assert client.get("/exchange").json()["data"]["exchange_ratio"] == 10

    def test_user_cannot_set_ratio(self, client, register):
        """Test a user ratio change is rejected with the caller named.

        Given - Ratio of 5
        When - alice sets the ratio to 10
        Then - UNAUTHORIZED naming ACCT_001, ratio still 5
        """
        _, headers = register("alice")

        response = client.put(
            "/exchange/ratio", json={"ratio": 10}, headers=headers
        )

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is False
        assert body["error"]["code"] == "UNAUTHORIZED"
        assert body["error"]["details"] == {"caller": "ACCT_001"}
        assert client.get("/exchange").json()["data"]["exchange_ratio"] == 5

    def test_zero_ratio_rejected(self, client, admin_headers):
        response = client.put(
            "/exchange/ratio", json={"ratio": 0}, headers=admin_headers
        )

        assert response.json()["error"]["code"] == "INVALID_RATIO"

    def test_deposits(self, provisioned):
        data = provisioned.get("/exchange").json()["data"]

        assert data["token_liquidity"] == 1_000
        assert data["currency_balance"] == 100
        assert data["administrator"] == "admin"
        assert data["next_order_id"] == 1

    def test_token_deposit_without_approval(self, client, admin_headers):
        response = client.post(
            "/exchange/deposits/token",
            json={"amount": 1_000},
            headers=admin_headers,
        )

        assert response.json()["error"]["code"] == "TRANSFER_FAILED"

    def test_transfer_ownership(self, client, admin_headers, register):
        """Test the new administrator can use privileged endpoints."""
        account, headers = register("alice")

        response = client.post(
            "/exchange/ownership",
            json={"new_owner": account["account_id"]},
            headers=admin_headers,
        )
        assert response.json()["data"] == {"administrator": "ACCT_001"}

        alice_ratio = client.put(
            "/exchange/ratio", json={"ratio": 7}, headers=headers
        )
        admin_ratio = client.put(
            "/exchange/ratio", json={"ratio": 8}, headers=admin_headers
        )

        assert alice_ratio.json()["success"] is True
        assert admin_ratio.json()["error"]["code"] == "UNAUTHORIZED"


class TestSwaps:
    """Test swaps and pending orders end to end."""

    def _fund_alice(self, client, admin_headers, register, tokens):
        account, headers = register("alice")
        client.post(
            "/token/mint",
            json={"to": account["account_id"], "amount": tokens},
            headers=admin_headers,
        )
        return account, headers

    def test_token_to_currency_settles(self, provisioned, admin_headers, register):
        """Test a covered token swap pays out immediately.

        Given - Pools of 1000 tokens and 100 currency, ratio 5
        When - alice approves and swaps 50 tokens
        Then - She receives 10 currency and liquidity becomes 1050
        """
        _, headers = self._fund_alice(provisioned, admin_headers, register, 50)
        provisioned.post("/token/approve", json={"amount": 50}, headers=headers)

        response = provisioned.post(
            "/exchange/swaps/token-to-currency",
            json={"amount": 50},
            headers=headers,
        )

        assert response.json()["data"]["settled"] is True
        assert response.json()["data"]["payout"] == 10
        me = provisioned.get("/accounts/me", headers=headers).json()["data"]
        assert me["currency_balance"] == 1_010
        assert me["token_balance"] == 0
        state = provisioned.get("/exchange").json()["data"]
        assert state["token_liquidity"] == 1_050
        assert state["currency_balance"] == 90

    def test_currency_to_token_settles(self, provisioned, register):
        _, headers = register("alice")

        response = provisioned.post(
            "/exchange/swaps/currency-to-token",
            json={"amount": 10},
            headers=headers,
        )

        assert response.json()["data"]["payout"] == 50
        me = provisioned.get("/accounts/me", headers=headers).json()["data"]
        assert me["token_balance"] == 50
        assert me["currency_balance"] == 990
        assert provisioned.get("/exchange").json()["data"]["token_liquidity"] == 950

    def test_pending_order_lifecycle(self, provisioned, admin_headers, register):
        """Test an uncovered swap is deferred and executed later.

        Given - Only 100 currency of liquidity
        When - alice swaps 1000 tokens, admin replenishes and executes
        Then - Order 1 pays exactly 200 once and cannot be paid again
        """
        _, headers = self._fund_alice(provisioned, admin_headers, register, 1_000)
        provisioned.post(
            "/token/approve", json={"amount": 1_000}, headers=headers
        )

        # Swap is deferred
        swap = provisioned.post(
            "/exchange/swaps/token-to-currency",
            json={"amount": 1_000},
            headers=headers,
        ).json()["data"]
        assert swap["settled"] is False
        assert swap["order_id"] == 1

        order = provisioned.get("/exchange/orders/1").json()["data"]
        assert order["user"] == "ACCT_001"
        assert order["direction"] == "token_to_currency"
        assert order["executed"] is False

        # Users cannot execute orders
        user_execute = provisioned.post(
            "/exchange/orders/1/execute", headers=headers
        ).json()
        assert user_execute["error"]["code"] == "UNAUTHORIZED"

        # Execution fails while the pool is short
        short = provisioned.post(
            "/exchange/orders/1/execute", headers=admin_headers
        ).json()
        assert short["error"]["code"] == "INSUFFICIENT_LIQUIDITY"

        # Replenish and execute
        provisioned.post(
            "/exchange/deposits/currency",
            json={"amount": 200},
            headers=admin_headers,
        )
        executed = provisioned.post(
            "/exchange/orders/1/execute", headers=admin_headers
        ).json()
        assert executed["data"]["executed"] is True

        me = provisioned.get("/accounts/me", headers=headers).json()["data"]
        assert me["currency_balance"] == 1_200
        assert me["orders"][0]["executed"] is True

        # Second execution is rejected
        again = provisioned.post(
            "/exchange/orders/1/execute", headers=admin_headers
        ).json()
        assert again["error"]["code"] == "INVALID_ORDER"
        me = provisioned.get("/accounts/me", headers=headers).json()["data"]
        assert me["currency_balance"] == 1_200

    def test_unknown_order(self, client):
        response = client.get("/exchange/orders/42")

        assert response.json()["error"]["code"] == "INVALID_ORDER"

    def test_order_listing(self, client, register):
        """Test orders can be listed per user and by status."""
        alice, alice_headers = register("alice")
        _, bob_headers = register("bob")
        client.post(
            "/exchange/swaps/currency-to-token",
            json={"amount": 10},
            headers=alice_headers,
        )
        client.post(
            "/exchange/swaps/currency-to-token",
            json={"amount": 20},
            headers=bob_headers,
        )

        all_orders = client.get("/exchange/orders").json()["data"]["orders"]
        alice_orders = client.get(
            "/exchange/orders", params={"user": alice["account_id"]}
        ).json()["data"]["orders"]

        assert [o["id"] for o in all_orders] == [1, 2]
        assert [o["id"] for o in alice_orders] == [1]

    def test_event_log(self, provisioned):
        events = provisioned.get("/exchange/events").json()["data"]["events"]

        assert [e["kind"] for e in events] == [
            "token_deposited",
            "currency_deposited",
        ]
        assert [e["sequence"] for e in events] == [1, 2]

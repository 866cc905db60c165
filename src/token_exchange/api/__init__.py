"""REST API module for the token exchange.

The application factory lives in ``token_exchange.api.main``.
"""

"""Account registration and API key management."""

from .account_service import AccountService

__all__ = ["AccountService"]

"""Infrastructure configuration module."""

from .loader import ConfigLoader
from .models import AccountsConfig, ExchangeConfig, LoggingConfig, TokenConfig

__all__ = [
    "ConfigLoader",
    "ExchangeConfig",
    "TokenConfig",
    "AccountsConfig",
    "LoggingConfig",
]

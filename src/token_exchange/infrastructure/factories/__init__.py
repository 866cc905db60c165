"""Factories wiring domain services from configuration."""

from .exchange_factory import ExchangeFactory, ExchangeServices

__all__ = ["ExchangeFactory", "ExchangeServices"]

"""Shared helpers: transport, caching, error handling and logging."""
from .api_utils import APIError, ProviderUnavailable, ProviderMalformedResponse, Transport
from .cache import ResponseCache
from .error_handling import provider_boundary
from .logging_setup import setup_logging

__all__ = [
    'APIError',
    'ProviderUnavailable',
    'ProviderMalformedResponse',
    'Transport',
    'ResponseCache',
    'provider_boundary',
    'setup_logging',
]

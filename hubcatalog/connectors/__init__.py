"""
hubcatalog/connectors package marker.
"""

from hubcatalog.connectors.errors import DecodeError, RateLimitExceeded, RegistryFetchError, TransportError
from hubcatalog.connectors.registry_fetcher import RegistryFetcher
from hubcatalog.connectors.retry import RateLimitRetryPolicy, RetryState, RetryStep

__all__ = [
    "DecodeError",
    "RateLimitExceeded",
    "RateLimitRetryPolicy",
    "RegistryFetchError",
    "RegistryFetcher",
    "RetryState",
    "RetryStep",
    "TransportError",
]

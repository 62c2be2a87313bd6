"""
hubcatalog/connectors/errors.py

Fetch-side exceptions for the registry connector.
"""

from __future__ import annotations


class RegistryFetchError(RuntimeError):
    """
    Raised when a registry page cannot be fetched or parsed.
    """

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class RateLimitExceeded(RegistryFetchError):
    """
    Raised when a URL stays rate limited (HTTP 429) for every allowed attempt.
    """

    def __init__(self, *, url: str, attempts: int) -> None:
        super().__init__(f"max retries exceeded for URL: {url} (attempts={attempts})", url=url)
        self.attempts = attempts


class TransportError(RegistryFetchError):
    """
    Raised on a non-429 HTTP failure or a transport-level exception.
    """

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class DecodeError(RegistryFetchError):
    """
    Raised when a response body is not a valid repository listing page.
    """

"""
hubcatalog/connectors/registry_fetcher.py

Paginated fetcher for the registry repository listing API.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

import requests
from pydantic import ValidationError

from hubcatalog.config import RegistryHTTPSettings
from hubcatalog.connectors.errors import DecodeError, RateLimitExceeded, TransportError
from hubcatalog.connectors.retry import RateLimitRetryPolicy, RetryState
from hubcatalog.domain.docker_image import RegistryPage
from hubcatalog.schemas.registry import RegistryPageResponse

logger = logging.getLogger(__name__)


class RegistryFetcher:
    """
    Follows the server-supplied `next` cursor until the listing is exhausted.
    """

    def __init__(
        self,
        *,
        http_settings: RegistryHTTPSettings,
        session: requests.Session | None = None,
        retry_policy: RateLimitRetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._retry_policy = retry_policy or RateLimitRetryPolicy(
            max_attempts=http_settings.max_attempts,
            backoff_seconds=http_settings.backoff_seconds,
        )
        self._sleep = sleep

    def close(self) -> None:
        """
        Close the HTTP session when this fetcher created it.
        """

        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RegistryFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def iter_pages(self, start_url: str) -> Iterator[RegistryPage]:
        """
        Lazily yield every page reachable from `start_url`.

        The generator stops after the page whose cursor is empty. Any fetch
        error propagates out of the generator and ends the sequence.
        """

        visited: set[str] = set()
        url: str | None = start_url
        while url:
            if url in visited:
                raise DecodeError(f"Pagination cursor loops back to an already fetched URL: {url}", url=url)
            visited.add(url)
            page = self.fetch_page(url)
            yield page
            url = page.next_url

    def fetch_page(self, url: str) -> RegistryPage:
        """
        Fetch and parse one listing page.
        """

        response = self._get_with_retry(url)
        if not 200 <= response.status_code < 300:
            logger.error(
                "Registry request failed status=%s url=%s",
                response.status_code,
                url,
            )
            raise TransportError(
                f"Unexpected HTTP status {response.status_code} for URL: {url}",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = RegistryPageResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"Error parsing repositories JSON from URL: {url}", url=url) from exc

        return RegistryPage(
            url=url,
            count=payload.count,
            next_url=payload.next or None,
            results=payload.results,
        )

    def _get_with_retry(self, url: str) -> requests.Response:
        """
        GET `url`, waiting and retrying the same URL while it is rate limited.
        """

        policy = self._retry_policy
        step = policy.start()
        while True:
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
            except requests.RequestException as exc:
                logger.error("Registry transport failure url=%s error=%s", url, exc)
                raise TransportError(f"Request failed for URL: {url}", url=url) from exc

            step = policy.on_status(step, response.status_code)
            if step.state is RetryState.SUCCEEDED:
                return response
            if step.state is RetryState.FAILED:
                logger.error(
                    "Registry request exhausted retries url=%s attempts=%s",
                    url,
                    step.attempt,
                )
                raise RateLimitExceeded(url=url, attempts=step.attempt)

            logger.warning(
                "Registry request rate limited url=%s attempt=%s/%s wait_seconds=%.1f",
                url,
                step.attempt,
                policy.max_attempts,
                policy.backoff_seconds,
            )
            self._sleep(policy.backoff_seconds)
            step = policy.after_backoff(step)

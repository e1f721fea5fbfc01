"""
HTTP fetching shared by all source adapters.

One httpx client per Fetcher, polite rate limiting across threads, tenacity
retries for transport errors and 5xx/429 responses.
"""
import json
import logging
import threading
import time

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from usportstats.config import Settings, settings as default_settings
from usportstats.errors import NetworkFailure

logger = logging.getLogger('usportstats')
event_logger = logging.getLogger('usportstats.events')


class FetchError(Exception):
    """HTTP fetch error (retriable)."""
    pass


def log_event(**kv):
    """Emit structured JSON log line."""
    event_logger.info(json.dumps(kv, separators=(',', ':'), default=str))


class Fetcher:
    """
    Rate-limited, retrying page fetcher.

    Safe to share between worker threads: httpx.Client is thread-safe and the
    rate limiter hands out request slots under a lock.
    """

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None):
        self.settings = settings or default_settings
        self.client = client or httpx.Client(
            follow_redirects=True,
            headers={'User-Agent': self.settings.user_agent},
            timeout=self.settings.req_timeout_s,
        )
        self._lock = threading.Lock()
        self._next_slot = 0.0
        self._retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(max(1, self.settings.retries)),
            wait=wait_exponential_jitter(initial=self.settings.backoff_initial_s, max=6),
            retry=retry_if_exception_type((httpx.TransportError, FetchError)),
        )

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _wait_for_slot(self):
        """Rate limiting (politeness)."""
        if self.settings.rate_limit_rps <= 0:
            return
        interval = 1.0 / self.settings.rate_limit_rps
        with self._lock:
            now = time.monotonic()
            slot = max(now, self._next_slot)
            self._next_slot = slot + interval
        delay = slot - now
        if delay > 0:
            time.sleep(delay)

    def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        """Single attempt; raises FetchError for retriable statuses."""
        self._wait_for_slot()

        start = time.time()
        response = self.client.get(url, params=params)
        elapsed_ms = int((time.time() - start) * 1000)

        log_event(event='fetch', url=str(response.request.url), status=response.status_code, ms=elapsed_ms)

        if response.status_code >= 500 or response.status_code == 429:
            raise FetchError(f'Server error {response.status_code}')

        response.raise_for_status()
        return response

    def get_text(self, url: str, params: dict | None = None, allow_missing: bool = False) -> str | None:
        """
        Fetch a page body.

        Args:
            url: Page URL
            params: Query parameters
            allow_missing: Return None on 404 instead of raising

        Returns:
            Response text, or None for a missing page when allow_missing is set

        Raises:
            NetworkFailure: unreachable, timed out, or non-success status after retries
        """
        try:
            response = self._retrying(self._get, url, params)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404 and allow_missing:
                logger.debug(f'Missing page {url}')
                return None
            raise NetworkFailure(f'HTTP {status} for {url}', url=url, status=status) from e
        except FetchError as e:
            raise NetworkFailure(f'{e} for {url}', url=url) from e
        except httpx.HTTPError as e:
            raise NetworkFailure(f'{type(e).__name__} for {url}: {e}', url=url) from e
        return response.text

"""Tests for the shared page fetcher."""
from dataclasses import replace

import httpx
import pytest

from usportstats.errors import NetworkFailure
from tests.conftest import make_fetcher


class Flaky:
    """Fails with the given statuses, then serves a page."""

    def __init__(self, *statuses: int):
        self.statuses = list(statuses)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.statuses:
            return httpx.Response(self.statuses.pop(0), text='error')
        return httpx.Response(200, text='<html>ok</html>')


class TestFetcher:
    """Tests for retries and status handling."""

    def test_success(self, test_settings):
        site = Flaky()
        fetcher = make_fetcher(site, test_settings)
        assert fetcher.get_text('https://example.com/page') == '<html>ok</html>'
        assert site.calls == 1

    def test_retries_server_errors(self, test_settings):
        """5xx and 429 responses are retried."""
        site = Flaky(503, 429)
        fetcher = make_fetcher(site, replace(test_settings, retries=3))
        assert fetcher.get_text('https://example.com/page') == '<html>ok</html>'
        assert site.calls == 3

    def test_gives_up(self, test_settings):
        site = Flaky(500, 500, 500)
        fetcher = make_fetcher(site, replace(test_settings, retries=2))
        with pytest.raises(NetworkFailure) as exc:
            fetcher.get_text('https://example.com/page')
        assert exc.value.url == 'https://example.com/page'
        assert site.calls == 2

    def test_missing_page(self, test_settings):
        """404 is not retried; allow_missing turns it into None."""
        site = Flaky(404)
        fetcher = make_fetcher(site, test_settings)
        assert fetcher.get_text('https://example.com/page', allow_missing=True) is None

        site = Flaky(404)
        fetcher = make_fetcher(site, replace(test_settings, retries=3))
        with pytest.raises(NetworkFailure) as exc:
            fetcher.get_text('https://example.com/page')
        assert exc.value.status == 404
        assert site.calls == 1

    def test_transport_error(self, test_settings):
        def handler(request):
            raise httpx.ConnectError('connection refused', request=request)

        fetcher = make_fetcher(handler, test_settings)
        with pytest.raises(NetworkFailure):
            fetcher.get_text('https://example.com/page')

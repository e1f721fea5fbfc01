"""
Shared fixtures.

Unit tests run against canned HTML served through httpx.MockTransport.
Integration tests (marked) hit the live sites and only run with RUN_INTEGRATION=1.
"""
import os

import httpx
import pytest

from usportstats.adapters import default_adapters
from usportstats.config import Settings
from usportstats.http import Fetcher
from usportstats.router import QueryRouter
from tests import pages


def pytest_configure(config):
    config.addinivalue_line('markers', 'integration: hits live sources (set RUN_INTEGRATION=1)')


def pytest_collection_modifyitems(config, items):
    if os.getenv('RUN_INTEGRATION') == '1':
        return
    skip = pytest.mark.skip(reason='live test; set RUN_INTEGRATION=1 to run')
    for item in items:
        if 'integration' in item.keywords:
            item.add_marker(skip)


class FakeSite:
    """
    Serves canned pages by URL path (plus '?view=...' for game sub-pages).

    A page value that is an int is returned as that HTTP status.
    """

    def __init__(self, pages: dict[str, str | int]):
        self.pages = dict(pages)
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        key = request.url.path
        view = request.url.params.get('view')
        if view:
            key += f'?view={view}'
        self.requests.append(key)
        body = self.pages.get(key, 404)
        if isinstance(body, int):
            return httpx.Response(body, text='error')
        return httpx.Response(200, text=body)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        cache_dir=str(tmp_path / 'cache'),
        exports_dir=str(tmp_path / 'exports'),
        use_cache=True,
        retries=1,
        rate_limit_rps=0,
        backoff_initial_s=0,
        max_workers=2,
        current_season=2021,
        db_url='',
    )


@pytest.fixture
def nocache_settings(test_settings):
    from dataclasses import replace
    return replace(test_settings, use_cache=False)


def make_fetcher(site, settings: Settings) -> Fetcher:
    client = httpx.Client(transport=httpx.MockTransport(site), follow_redirects=True)
    return Fetcher(settings, client=client)


def make_router(site, settings: Settings) -> QueryRouter:
    return QueryRouter(adapters=default_adapters(make_fetcher(site, settings)), settings=settings)


@pytest.fixture
def site():
    return FakeSite(pages.SITE)


@pytest.fixture
def router(site, test_settings):
    return make_router(site, test_settings)


@pytest.fixture
def shared_router(router):
    """Router installed as the package-wide default for the api/cli/service layers."""
    from usportstats.api import set_router
    set_router(router)
    yield router
    set_router(None)

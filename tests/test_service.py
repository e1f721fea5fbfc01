"""Tests for the HTTP service."""
import pytest
from fastapi.testclient import TestClient

from usportstats.service import app
from tests import pages


@pytest.fixture
def client(shared_router):
    return TestClient(app)


class TestHealth:
    """Tests for platform endpoints."""

    def test_root(self, client):
        body = client.get('/').json()
        assert body['service'] == 'usportstats'
        assert body['status'] == 'ok'

    def test_health_and_ready(self, client):
        assert client.get('/health').json() == {'ok': True}
        assert client.get('/ready').json() == {'ready': True}


class TestDatasets:
    """Tests for dataset routes."""

    def test_schedule(self, client):
        response = client.get('/schedule/basketball/w', params={'season': [2018, 2019]})
        assert response.status_code == 200
        body = response.json()
        assert body['rows'] == 4
        assert body['records'][0]['home_team'] == 'York'
        assert body['failures'] == []

    def test_partial_failure_reported(self, client, site):
        site.pages[f'{pages.BKB_2018}/schedule'] = 503
        body = client.get('/schedule/basketball/w', params={'season': [2018, 2019]}).json()
        assert body['rows'] == 3
        assert body['failures'][0]['season'] == 2018

    def test_rankings(self, client):
        response = client.get('/rankings/track_and_field/w', params={'season': 2019, 'event': '60m'})
        assert response.status_code == 200
        records = response.json()['records']
        assert [r['performance_valid'] for r in records] == [True, True, False]

    def test_unsupported(self, client):
        assert client.get('/schedule/curling/m', params={'season': 2019}).status_code == 400
        assert client.get('/rankings/basketball/w', params={'season': 2019}).status_code == 400

    def test_all_failed(self, client, site):
        site.pages[f'{pages.BKB_2019}/schedule'] = 500
        response = client.get('/schedule/basketball/w', params={'season': 2019})
        assert response.status_code == 502
        assert response.json()['detail']['failures'][0]['season'] == 2019

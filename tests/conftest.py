"""
tests/conftest.py - shared fixtures

Builds an app per test with explicit Settings and an httpx.MockTransport
standing in for the sports-data provider. No network access.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from predictions_api.core.config import Settings
from predictions_api.main import create_app
from predictions_api.services.upstream import get_http_client


@pytest.fixture
def upstream_calls():
    """Requests seen by the fake provider, in order."""
    return []


@pytest.fixture
def make_client(upstream_calls):
    """
    make_client(handler, **settings) -> TestClient

    `handler(request) -> httpx.Response` answers every outbound call.
    Settings default to API-Sports with a test key.
    """

    def _make(handler=None, **overrides):
        params = {"provider": "apisports", "api_sports_key": "test-key"}
        params.update(overrides)
        app = create_app(Settings(**params))

        def record(request: httpx.Request) -> httpx.Response:
            upstream_calls.append(request)
            if handler is None:
                return httpx.Response(200, json={"response": []})
            return handler(request)

        async def _client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(record)) as client:
                yield client

        app.dependency_overrides[get_http_client] = _client
        return TestClient(app)

    return _make

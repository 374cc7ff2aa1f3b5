import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from tours_bridge.core.config import Settings
from tours_bridge.main import create_application

CREDENTIAL_ENV_VARS = (
    "BOKUN_ACCESS_KEY",
    "BOKUN_SECRET_KEY",
    "BOKUN_API_TOKEN",
    "BOKUN_VENDOR_ID",
    "BOKUN_API_BASE",
    "BACKEND_CORS_ORIGINS",
)


class FakeProvider:
    """Stands in for the Bokun API: records every request and answers with ``handler``."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"results": []})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond_with(self, status_code: int = 200, **kwargs) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def raise_error(self, exc_type) -> None:
        def handler(request):
            raise exc_type("simulated failure", request=request)
        self.handler = handler

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self):
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        BOKUN_API_BASE="https://bokun.test",
        BOKUN_ACCESS_KEY="access-123",
        BOKUN_SECRET_KEY="secret-456",
        ENABLE_STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def transport(provider):
    return httpx.MockTransport(provider)


@pytest.fixture
def client(settings, transport):
    app = create_application(settings=settings, transport=transport)
    with TestClient(app) as test_client:
        yield test_client

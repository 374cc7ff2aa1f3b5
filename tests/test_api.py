import httpx
import pytest
from fastapi.testclient import TestClient

from tours_bridge.core.config import Settings
from tours_bridge.core.exceptions import ConfigurationError
from tours_bridge.main import create_application


def test_health(client, settings):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert isinstance(body["ts"], int)
    assert body["allowed"] == settings.BACKEND_CORS_ORIGINS
    assert response.headers["X-Correlation-ID"]


def test_correlation_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_list_tours_end_to_end(client, provider):
    provider.respond_with(json={
        "items": [
            {
                "id": 11,
                "title": "Whale watching",
                "slug": "whale-watching",
                "feedback": {"average": 4.9, "count": 210},
                "images": [{"url": "https://img/whale.jpg"}],
                "lowestPrice": {"amount": 85, "currency": "MXN"},
                "durationText": "4 hours",
            }
        ],
        "total": 31,
    })

    response = client.get("/api/tours", params={"page": 2, "pageSize": 10, "query": "whale"})

    assert response.status_code == 200
    assert provider.last_body == {"page": 2, "pageSize": 10, "query": "whale"}
    assert "vendorId" not in provider.last_body

    body = response.json()
    assert body["page"] == 2
    assert body["pageSize"] == 10
    assert body["total"] == 31
    assert body["items"] == [
        {
            "id": 11,
            "title": "Whale watching",
            "subtitle": None,
            "slug": "whale-watching",
            "cover": "https://img/whale.jpg",
            "rating": 4.9,
            "ratingCount": 210,
            "fromPrice": 85.0,
            "currency": "MXN",
            "duration": "4 hours",
            "url": "/tours/whale-watching",
        }
    ]


def test_list_tours_clamps_page_size(client, provider):
    response = client.get("/api/tours", params={"pageSize": 500})

    assert response.status_code == 200
    assert response.json()["pageSize"] == 50
    assert provider.last_body == {"page": 1, "pageSize": 50}


def test_list_tours_accepts_legacy_limit(client, provider):
    response = client.get("/api/tours", params={"limit": 6})

    assert response.json()["pageSize"] == 6
    assert provider.last_body["pageSize"] == 6


def test_list_tours_malformed_params_use_defaults(client, provider):
    response = client.get("/api/tours", params={"page": "first", "pageSize": "lots"})

    assert response.status_code == 200
    assert provider.last_body == {"page": 1, "pageSize": 20}


def test_list_tours_empty_payload(client, provider):
    provider.respond_with(json={"unexpected": True})

    response = client.get("/api/tours")

    assert response.status_code == 200
    assert response.json() == {"page": 1, "pageSize": 20, "total": 0, "items": []}


def test_vendor_id_is_injected_when_configured(settings, transport, provider):
    settings.BOKUN_VENDOR_ID = "4242"
    app = create_application(settings=settings, transport=transport)

    with TestClient(app) as client:
        client.get("/api/tours")

    assert provider.last_body["vendorId"] == "4242"
    assert provider.last_request.headers["X-Bokun-VendorId"] == "4242"


def test_get_tour_includes_raw(client, provider):
    raw = {"productId": "P-9", "name": "Cenote dive", "rating": 4.4}
    provider.respond_with(json=raw)

    response = client.get("/api/tours/P-9")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "P-9"
    assert body["title"] == "Cenote dive"
    assert body["url"] == "/tours/P-9"
    assert body["currency"] == "USD"
    assert body["raw"] == raw
    assert provider.last_request.url.path == "/activity.json/P-9"


def test_upstream_status_in_error_envelope(client, provider):
    provider.respond_with(404, json={"message": "Activity not found"})

    response = client.get("/api/tours/999")

    assert response.status_code == 404
    assert response.json() == {
        "error": True,
        "status": 404,
        "message": {"message": "Activity not found"},
    }


def test_upstream_timeout_in_error_envelope(client, provider):
    provider.raise_error(httpx.ConnectTimeout)

    response = client.get("/api/tours")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] is True
    assert body["status"] == 500
    assert "timed out" in body["message"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": True, "status": 404, "message": "Not Found"}


def test_cors_allows_configured_origin(client):
    response = client.get("/api/health", headers={"Origin": "https://novaxperience.com"})

    assert response.headers["access-control-allow-origin"] == "https://novaxperience.com"


def test_cors_ignores_unknown_origin(client):
    response = client.get("/api/health", headers={"Origin": "https://evil.example"})

    assert "access-control-allow-origin" not in response.headers


def test_token_credentials_used_for_upstream(transport, provider):
    settings = Settings(_env_file=None, BOKUN_API_BASE="https://bokun.test", BOKUN_API_TOKEN="tok-1")
    app = create_application(settings=settings, transport=transport)

    with TestClient(app) as client:
        client.get("/api/tours")

    assert provider.last_request.headers["Authorization"] == "Bearer tok-1"
    assert "X-Bokun-AccessKey" not in provider.last_request.headers


def test_startup_fails_without_credentials(transport):
    settings = Settings(_env_file=None)
    app = create_application(settings=settings, transport=transport)

    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass

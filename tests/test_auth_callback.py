"""Tests for the authorization-callback endpoint.

Covers:
- Missing hmac → 400
- Wrong hmac → 401
- Valid hmac → 200
- Tampered query → 401
- Empty shared secret → 500
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from authguard.config import Settings, get_settings
from authguard.main import app

TEST_SECRET = "test_api_secret_1234567890abcdef"


def _sign(canonical: str, secret: str = TEST_SECRET) -> str:
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=canonical.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()


def _params(**overrides: str) -> dict[str, str]:
    params = {
        "code": "abc",
        "timestamp": "1",
        "state": "xyz",
        "shop": "s.myshopify.com",
        "hmac": _sign("code=abc&shop=s.myshopify.com&state=xyz&timestamp=1"),
    }
    params.update(overrides)
    return params


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """TestClient with settings overridden to the test secret."""
    app.dependency_overrides[get_settings] = lambda: Settings(api_secret_key=TEST_SECRET)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


# =============================================================================
#  Callback verification
# =============================================================================


class TestAuthCallback:
    """HMAC verification of the OAuth redirect."""

    def test_valid_signature_returns_200(self, client: TestClient) -> None:
        response = client.get("/api/auth/callback", params=_params())
        assert response.status_code == 200
        assert response.json() == {"status": "authenticated", "shop": "s.myshopify.com"}

    def test_valid_signature_with_host_returns_200(self, client: TestClient) -> None:
        host = "aG9zdA=="
        signature = _sign(
            "code=abc&host=aG9zdA%3D%3D&shop=s.myshopify.com&state=xyz&timestamp=1"
        )
        response = client.get(
            "/api/auth/callback", params=_params(host=host, hmac=signature)
        )
        assert response.status_code == 200

    def test_missing_signature_returns_400(self, client: TestClient) -> None:
        params = _params()
        del params["hmac"]
        response = client.get("/api/auth/callback", params=params)
        assert response.status_code == 400
        assert "HMAC" in response.json()["detail"]

    def test_wrong_signature_returns_401(self, client: TestClient) -> None:
        response = client.get("/api/auth/callback", params=_params(hmac="0" * 64))
        assert response.status_code == 401
        assert response.json()["detail"] == "HMAC validation failed"

    def test_tampered_query_returns_401(self, client: TestClient) -> None:
        response = client.get(
            "/api/auth/callback", params=_params(state="forged")
        )
        assert response.status_code == 401

    def test_empty_secret_returns_500(self, client: TestClient) -> None:
        app.dependency_overrides[get_settings] = lambda: Settings(api_secret_key="")
        response = client.get("/api/auth/callback", params=_params())
        assert response.status_code == 500

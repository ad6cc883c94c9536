import pytest
import httpx
import respx
from httpx import AsyncClient, Response

from google_token_strategy.api.auth import accept_profile
from google_token_strategy.app import create_app
from google_token_strategy.settings import StrategyOptions
from google_token_strategy.settings.config import get_settings
from google_token_strategy.strategy import GoogleTokenStrategy


USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


def make_app(verify=accept_profile):
    strategy = GoogleTokenStrategy(StrategyOptions(clientID="id", clientSecret="secret"), verify)
    return create_app(strategy=strategy)


@pytest.mark.asyncio
async def test_health_endpoint():
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "google-token-strategy"
        assert data["strategy_configured"] is True
        assert resp.headers.get("x-request-id")


@pytest.mark.asyncio
async def test_request_id_is_echoed():
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/health", headers={"X-Request-ID": "req-1"})
        assert resp.headers["x-request-id"] == "req-1"


@pytest.mark.asyncio
@respx.mock
async def test_bearer_token_returns_profile():
    respx.get(USERINFO_URL).mock(
        return_value=Response(200, json={"sub": "42", "name": "Ada Lovelace", "email": "ada@example.com"})
    )
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/auth/google/token", headers={"Authorization": "Bearer abc123"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"]["id"] == "42"
        assert data["user"]["displayName"] == "Ada Lovelace"
        assert data["user"]["emails"] == [{"value": "ada@example.com"}]
        assert "_raw" not in data["user"]
        # the Bearer header satisfies the refresh token lookup as well
        assert data["info"] == {"has_refresh_token": True}


@pytest.mark.asyncio
@respx.mock
async def test_form_body_token():
    route = respx.get(USERINFO_URL).mock(return_value=Response(200, json={"sub": "42"}))
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post("/auth/google/token", data={"access_token": "from-form"})
        assert resp.status_code == 200
        assert route.calls.last.request.url.params["access_token"] == "from-form"


@pytest.mark.asyncio
@respx.mock
async def test_json_body_wins_over_query():
    route = respx.get(USERINFO_URL).mock(return_value=Response(200, json={"sub": "42"}))
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/auth/google/token?access_token=from-query",
            json={"access_token": "from-json"},
        )
        assert resp.status_code == 200
        assert route.calls.last.request.url.params["access_token"] == "from-json"


@pytest.mark.asyncio
async def test_malformed_multipart_body_is_bad_request():
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/auth/google/token",
            content=b"not a multipart body",
            headers={"Content-Type": "multipart/form-data"},
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized():
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/auth/google/token")
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"
        assert resp.json()["detail"] == "You should provide access_token"


@pytest.mark.asyncio
@respx.mock
async def test_profile_without_subject_is_unauthorized():
    respx.get(USERINFO_URL).mock(return_value=Response(200, json={"email": "ada@example.com"}))
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/auth/google/token?access_token=tok")
        assert resp.status_code == 401
        assert resp.json()["info"] == {"message": "Google profile has no subject identifier"}


@pytest.mark.asyncio
@respx.mock
async def test_upstream_failure_is_server_error():
    respx.get(USERINFO_URL).mock(return_value=Response(503, text="unavailable"))
    transport = httpx.ASGITransport(app=make_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/auth/google/token?access_token=tok")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Authentication error"}


@pytest.mark.asyncio
async def test_unconfigured_strategy(monkeypatch):
    monkeypatch.delenv("GOOGLE_TOKEN_STRATEGY_GOOGLE__CLIENT_ID", raising=False)
    monkeypatch.delenv("GOOGLE_TOKEN_STRATEGY_GOOGLE__CLIENT_SECRET", raising=False)
    get_settings.cache_clear()  # type: ignore[attr-defined]

    app = create_app()
    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        health = await ac.get("/health")
        assert health.json()["strategy_configured"] is False
        resp = await ac.get("/auth/google/token?access_token=tok")
        assert resp.status_code == 500
        assert "not configured" in resp.json()["detail"]
    get_settings.cache_clear()  # type: ignore[attr-defined]

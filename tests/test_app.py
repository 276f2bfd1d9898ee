import pytest
from httpx import AsyncClient

from personalbook import __version__


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__


@pytest.mark.asyncio
async def test_response_headers(client: AsyncClient):
    response = await client.get("/api/health", headers={"X-Request-ID": "abc12345"})

    assert response.headers["X-Request-ID"] == "abc12345"
    assert response.headers["X-Response-Time"].endswith("ms")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_oversized_body_rejected(client: AsyncClient, test_user, user_headers):
    headers = {**user_headers, "Content-Length": str(50 * 1024 * 1024)}
    response = await client.put(f"/api/profile/{test_user.secret_id}", content=b"{}", headers=headers)

    assert response.status_code == 413
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    response = await client.get("/api/nope")

    assert response.status_code == 404

"""
Unit Tests for the CLI HTTP client (httpx.MockTransport)
"""
import json

import httpx
import pytest

from personalbook_cli.api_client import APIError, PersonalBookClient

BASE_URL = "http://books.test/api"


def make_client(handler, token=None) -> PersonalBookClient:
    return PersonalBookClient(BASE_URL, token=token, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_login_user_posts_secret_id_and_keeps_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"token": "tok", "role": "user", "username": "Ada", "id": "482913"})

    async with make_client(handler) as client:
        data = await client.login_user("ada@example.com", "482913")

    assert seen["url"] == f"{BASE_URL}/auth/login"
    assert seen["body"] == {"type": "user", "email": "ada@example.com", "secretId": "482913"}
    assert data["id"] == "482913"
    assert client.token == "tok"


@pytest.mark.asyncio
async def test_bearer_header_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer tok"
        return httpx.Response(200, json=[])

    async with make_client(handler, token="tok") as client:
        assert await client.list_users() == []


@pytest.mark.asyncio
async def test_no_header_without_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"username": "Ada", "profile": {}})

    async with make_client(handler) as client:
        await client.get_public_profile("key123")


@pytest.mark.asyncio
async def test_error_response_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "Master access required", "code": "FORBIDDEN", "details": {}})

    async with make_client(handler, token="tok") as client:
        with pytest.raises(APIError) as exc_info:
            await client.delete_user("482913")

    assert exc_info.value.status == 403
    assert exc_info.value.code == "FORBIDDEN"
    assert exc_info.value.message == "Master access required"


@pytest.mark.asyncio
async def test_non_json_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.health()

    assert exc_info.value.status == 502
    assert exc_info.value.code is None


@pytest.mark.asyncio
async def test_replace_profile_sends_whole_document():
    document = {"about": {"name": "Ada", "bio": "b", "image": "i"}, "interests": [{"id": 1, "text": "x"}]}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        assert request.url.path == "/api/profile/482913"
        return httpx.Response(200, json=json.loads(request.content))

    async with make_client(handler, token="tok") as client:
        assert await client.replace_profile("482913", document) == document

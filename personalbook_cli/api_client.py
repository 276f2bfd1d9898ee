"""
HTTP client for the Personal Book API

Wraps httpx.AsyncClient. Every non-2xx response raises APIError carrying
the status, the server's message and its error code.

Usage:
    async with PersonalBookClient("http://localhost:5000/api") as client:
        login = await client.login_user("ada@example.com", "482913")
"""

from typing import Any, Dict, List, Optional

import httpx


class APIError(Exception):
    """Error response from the API"""

    def __init__(self, status: int, message: str, code: Optional[str] = None):
        self.status = status
        self.message = message
        self.code = code
        super().__init__(f"{status}: {message}")


class PersonalBookClient:
    """Async client for every Personal Book endpoint"""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PersonalBookClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise APIError(
            status=response.status_code,
            message=body.get("message") or body.get("detail") or response.reason_phrase,
            code=body.get("code"),
        )

    # ==================== AUTH ====================

    async def login_master(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/auth/login",
            json={"type": "master", "email": email, "password": password},
        )
        self.token = data["token"]
        return data

    async def login_user(self, email: str, secret_id: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/auth/login",
            json={"type": "user", "email": email, "secretId": secret_id},
        )
        self.token = data["token"]
        return data

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    # ==================== USERS ====================

    async def list_users(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/users/list")

    async def register_user(self, username: str, email: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/users/register",
            json={"username": username, "email": email},
        )

    async def delete_user(self, secret_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/users/{secret_id}")

    # ==================== PROFILES ====================

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/profile/{user_id}")

    async def replace_profile(self, user_id: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """PUT the whole document; sections left out are cleared server-side"""
        return await self._request("PUT", f"/profile/{user_id}", json=document)

    async def get_share_link(self, user_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/profile/{user_id}/share")

    async def get_public_profile(self, public_link_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/profile/public/{public_link_key}")

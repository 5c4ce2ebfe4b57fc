"""Authenticated access to the project backend and object storage."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from .identity import IdentityProvider

logger = logging.getLogger(__name__)


class RemoteAccessError(RuntimeError):
    """Raised when a remote call could not be completed."""


class AuthorizationError(RemoteAccessError):
    """Raised when the caller has no identity or the backend refuses it."""


class RemoteStatusError(RemoteAccessError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, method: str, url: str, status_code: int) -> None:
        super().__init__(f"{method} {url} returned {status_code}")
        self.status_code = status_code


class RemoteTransportError(RemoteAccessError):
    """Raised when the request never produced a response."""


class RemotePayloadError(RemoteAccessError):
    """Raised when a response body is not the JSON shape that was expected."""


class RemoteAccessFacade:
    """Async HTTP client for the project backend.

    Backend calls carry the caller's bearer token; binary uploads go straight
    to the pre-signed storage target without it.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        *,
        api_base: str = "http://localhost:8000",
        timeout: float = 30.0,
        upload_timeout: float = 300.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = httpx.URL(api_base)
        if not parsed.scheme or not parsed.host:
            raise ValueError("api_base must include scheme and host")

        self._identity = identity
        self._api_base = api_base.rstrip("/")
        self._upload_timeout = upload_timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    async def _auth_headers(self) -> dict[str, str]:
        token = await self._identity.get_token()
        if not token:
            raise AuthorizationError("No signed-in caller; bearer token unavailable")
        return {"Authorization": f"Bearer {token}", "Accept": "application/json"}

    @staticmethod
    def _unwrap(payload: Any) -> Any:
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Remote request failed: %s %s - %s", method, url, exc)
            raise RemoteTransportError(f"{method} {url} failed: {exc}") from exc

        if response.status_code in (401, 403):
            logger.error("Remote request refused: %s %s - %s", method, url, response.status_code)
            raise AuthorizationError(f"{method} {url} returned {response.status_code}")
        if response.is_error:
            logger.error("Remote request failed: %s %s - %s", method, url, response.status_code)
            raise RemoteStatusError(method, url, response.status_code)
        return response

    async def _request(self, method: str, endpoint: str, payload: Any | None = None) -> Any:
        url = f"{self._api_base}{endpoint}"
        headers = await self._auth_headers()
        response = await self._send(method, url, json=payload, headers=headers)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return self._unwrap(response.json())
        except ValueError as exc:
            raise RemotePayloadError(f"Non-JSON response from backend: {method} {endpoint}") from exc

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def get(self, endpoint: str) -> Any:
        return await self._request("GET", endpoint)

    async def post(self, endpoint: str, payload: Any | None = None) -> Any:
        return await self._request("POST", endpoint, payload)

    async def put(self, endpoint: str, payload: Any | None = None) -> Any:
        return await self._request("PUT", endpoint, payload)

    async def delete(self, endpoint: str) -> Any:
        return await self._request("DELETE", endpoint)

    async def upload_binary(self, write_target: str, payload: bytes, content_type: str) -> None:
        """Push raw bytes to a pre-signed object-storage target."""

        await self._send(
            "PUT",
            write_target,
            content=payload,
            headers={"Content-Type": content_type},
            timeout=self._upload_timeout,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "AuthorizationError",
    "RemoteAccessError",
    "RemoteAccessFacade",
    "RemotePayloadError",
    "RemoteStatusError",
    "RemoteTransportError",
]

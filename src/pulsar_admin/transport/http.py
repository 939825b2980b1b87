"""
REST HTTP client for the Pulsar admin API (`/admin/v2`).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from pulsar_admin.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
ADMIN_PATH = "/admin/v2"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}{ADMIN_PATH}",
            headers={"User-Agent": "pulsar-admin-python/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, json_body: bool = False) -> dict[str, str]:
        headers: dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _check(resp: httpx.Response) -> None:
        if not resp.is_success:
            text = resp.text[:200]
            logger.warning("%s %s -> HTTP %d", resp.request.method, resp.request.url, resp.status_code)
            raise TransportError(
                f"HTTP {resp.status_code}: {text}",
                details={"status_code": resp.status_code, "body": text},
            )

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        return resp.json()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        logger.debug("%s %s", method, path)
        try:
            resp = await self._client.request(
                method, path, json=json, headers=self._headers(json_body=json is not None),
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}") from e
        self._check(resp)
        return self._decode(resp)

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self._request("PUT", path, json=body)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self._request("POST", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    @asynccontextmanager
    async def stream(self, path: str) -> AsyncIterator[httpx.Response]:
        """GET `path` without reading the body; the response is closed on exit.

        Redirects are followed; any other non-2xx status raises TransportError
        before the body is handed out.
        """
        logger.debug("GET %s (stream)", path)
        try:
            async with self._client.stream("GET", path, headers=self._headers()) as resp:
                if not resp.is_success:
                    await resp.aread()
                    self._check(resp)
                yield resp
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", path, e)
            raise TransportError(f"GET {path} failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()

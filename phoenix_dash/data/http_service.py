from __future__ import annotations

import json
from typing import Any

import aiohttp

from phoenix_dash.config import Settings
from phoenix_dash.domain.errors import BackendError, MalformedPayloadError


class HttpService:
    """Thin aiohttp transport for the monitored backend.

    No retry, timeout or cache: a failed call surfaces as ``BackendError`` and
    the next scheduled poll is the retry. Bodies are read as bytes and only
    decoded by the caller that needs text.
    """

    def __init__(
        self,
        base_url: str,
        *,
        conn_limit: int = 16,
        keepalive_sec: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._conn_limit = max(1, int(conn_limit))
        self._keepalive_sec = max(5.0, float(keepalive_sec))
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpService:
        return cls(
            settings.backend_url,
            conn_limit=settings.http_conn_limit,
            keepalive_sec=settings.http_keepalive_sec,
        )

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is not None and not self._session.closed:
            return self._session
        connector = aiohttp.TCPConnector(
            limit=self._conn_limit,
            enable_cleanup_closed=True,
            keepalive_timeout=self._keepalive_sec,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=None),
            headers={"User-Agent": "phoenix-dash/1.0"},
        )
        self._owns_session = True
        return self._session

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        data: bytes | None = None,
    ) -> bytes:
        session = await self._ensure_session()
        url = self.url(path)
        try:
            async with session.request(method, url, params=params, data=data) as r:
                body = await r.read()
                if r.status < 200 or r.status >= 300:
                    detail = body.decode("utf-8", errors="replace").strip()[:200]
                    raise BackendError(
                        f"http {r.status} {method} {url}: {detail}",
                        status=r.status,
                        url=url,
                    )
                return body
        except aiohttp.ClientError as exc:
            raise BackendError(f"{method} {url} failed: {exc}", url=url) from exc

    async def get_json(self, path: str, *, params: dict | None = None) -> Any:
        body = await self._request("GET", path, params=params)
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too
            raise MalformedPayloadError(f"invalid json from {path}: {exc}") from exc

    async def get_text(self, path: str) -> str:
        body = await self._request("GET", path)
        return body.decode("utf-8", errors="replace")

    async def post(self, path: str, body: str | None = None) -> None:
        data = None if body is None else body.encode("utf-8")
        await self._request("POST", path, data=data)

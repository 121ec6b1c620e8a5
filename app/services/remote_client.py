# app/services/remote_client.py
"""
Thin async client for the managed data/auth service (Supabase-style).

  GET  /auth/v1/user                 resolve the caller behind a bearer token
  *    /rest/v1/<table or view>      PostgREST table access
  POST /rest/v1/rpc/<procedure>      stored procedures

One client is built per request and carries that caller's token, so the
remote row-level policies see the real user. It is closed when the request ends.
"""

import re
from typing import Any, Optional

import httpx

from app.exceptions import RemoteOperationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

_CONTENT_RANGE_TOTAL = re.compile(r"/(\d+)$")
_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class SupabaseClient:
    def __init__(
        self,
        url: str,
        anon_key: str,
        access_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self._http = httpx.AsyncClient(
            base_url=url.rstrip("/"),
            headers={
                "apikey": anon_key,
                "Authorization": f"Bearer {access_token}",
            },
            transport=transport,
            **kwargs,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    # ── Auth ──────────────────────────────────────────────────────────────
    async def get_user(self) -> Optional[dict]:
        """Returns the user object for the current token, or None if the token is rejected."""
        resp = await self._send("GET", "/auth/v1/user")
        if resp.status_code != 200:
            logger.info(f"Token rejected by identity provider (HTTP {resp.status_code})")
            return None
        return resp.json()

    # ── Tables / views ────────────────────────────────────────────────────
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[dict] = None,
        order: Optional[str] = None,
        single: bool = False,
    ) -> Any:
        params = {"select": columns, **_eq_filters(filters)}
        if order:
            params["order"] = order
        headers = {"Accept": _SINGLE_OBJECT} if single else {}
        resp = await self._send("GET", f"/rest/v1/{table}", params=params, headers=headers)
        return self._json_or_raise(resp)

    async def count(self, table: str, filters: Optional[dict] = None) -> int:
        """Exact row count without transferring rows (HEAD + Prefer: count=exact)."""
        params = {"select": "id", **_eq_filters(filters)}
        resp = await self._send(
            "HEAD", f"/rest/v1/{table}", params=params, headers={"Prefer": "count=exact"}
        )
        if resp.is_error:
            raise RemoteOperationError(f"count on {table} failed with HTTP {resp.status_code}")
        match = _CONTENT_RANGE_TOTAL.search(resp.headers.get("content-range", ""))
        if not match:
            raise RemoteOperationError(f"count on {table} returned no total")
        return int(match.group(1))

    async def insert(self, table: str, values: dict) -> dict:
        resp = await self._send(
            "POST", f"/rest/v1/{table}", json=values,
            headers={"Prefer": "return=representation", "Accept": _SINGLE_OBJECT},
        )
        return self._json_or_raise(resp)

    async def update(self, table: str, match: dict, values: dict) -> dict:
        resp = await self._send(
            "PATCH", f"/rest/v1/{table}", params=_eq_filters(match), json=values,
            headers={"Prefer": "return=representation", "Accept": _SINGLE_OBJECT},
        )
        return self._json_or_raise(resp)

    async def delete(self, table: str, match: dict) -> None:
        resp = await self._send("DELETE", f"/rest/v1/{table}", params=_eq_filters(match))
        self._json_or_raise(resp)

    # ── Procedures ────────────────────────────────────────────────────────
    async def rpc(self, procedure: str, params: Optional[dict] = None) -> Any:
        resp = await self._send("POST", f"/rest/v1/rpc/{procedure}", json=params or {})
        return self._json_or_raise(resp)

    # ── Internals ─────────────────────────────────────────────────────────
    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"Remote call {method} {path} failed: {e}")
            raise RemoteOperationError(str(e) or e.__class__.__name__) from e

    @staticmethod
    def _json_or_raise(resp: httpx.Response) -> Any:
        if resp.is_error:
            message = _error_message(resp)
            logger.warning(f"Remote {resp.request.method} {resp.request.url.path} → {resp.status_code}: {message}")
            raise RemoteOperationError(message)
        if not resp.content:
            return None
        return resp.json()


def _eq_filters(filters: Optional[dict]) -> dict:
    return {column: f"eq.{value}" for column, value in (filters or {}).items()}


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("msg") or body.get("error") or f"HTTP {resp.status_code}"
    return str(body)

"""HTTP transport speaking the Supabase PostgREST dialect."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from fleetsync._constants import REST_PATH, USER_AGENT
from fleetsync._redact import redact_filters, redact_for_log
from fleetsync.config import FleetSyncConfig
from fleetsync.exceptions import FleetSyncConfigError, RemoteTransportError

_logger = logging.getLogger(__name__)

PREFER_REPRESENTATION = "return=representation"


def eq(value: Any) -> str:
    """PostgREST equality filter value."""
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class Transport(Protocol):
    """Structural transport interface used by the remote client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`PostgrestTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        prefer: str | None = None,
    ) -> Any:
        ...


def _error_message(status: int, text: str) -> tuple[str, str | None]:
    """Extract ``(message, code)`` from a PostgREST error body."""
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        return f"HTTP {status}: {text[:200]}", None
    if not isinstance(body, dict):
        return f"HTTP {status}: {text[:200]}", None
    message = str(body.get("message") or body.get("error") or f"HTTP {status}")
    details = body.get("details")
    if details:
        message = f"{message} ({details})"
    code = body.get("code")
    return message, str(code) if code is not None else None


class PostgrestTransport:
    """Table requests against ``<supabase_url>/rest/v1/<table>``."""

    def __init__(self, config: FleetSyncConfig, http_session: aiohttp.ClientSession) -> None:
        if not config.supabase_url or not config.supabase_key:
            raise FleetSyncConfigError("PostgrestTransport requires supabase_url and supabase_key")
        self._config = config
        self._http = http_session
        self._base = f"{config.supabase_url}{REST_PATH}"
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self, method: str, prefer: str | None) -> dict[str, str]:
        key = self._config.supabase_key or ""
        headers: dict[str, str] = {
            "apikey": key,
            "authorization": f"Bearer {key}",
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if method in ("GET", "HEAD"):
            headers["accept-profile"] = self._config.schema
        else:
            headers["content-type"] = "application/json"
            headers["content-profile"] = self._config.schema
        if prefer:
            headers["prefer"] = prefer
        return headers

    async def request(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        prefer: str | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty)."""
        url = f"{self._base}/{table}"
        headers = self._headers(method, prefer)
        data = json.dumps(body, separators=(",", ":")) if body is not None else None

        _logger.debug("%s %s params=%s body=%s", method, url, redact_filters(params), redact_for_log(body))

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params or {}),
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    message, code = _error_message(resp.status, text)
                    raise RemoteTransportError(
                        message,
                        status_code=resp.status,
                        code=code,
                        table=table,
                    )
        except RemoteTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RemoteTransportError(
                f"Request to {table} failed: {str(exc) or type(exc).__name__}",
                table=table,
            ) from exc

        if not text.strip():
            return None
        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RemoteTransportError(
                f"Invalid JSON from {table}: {text[:200]}",
                status_code=resp.status,
                table=table,
            ) from exc

        _logger.debug("%s %s -> %s", method, url, redact_for_log(result))
        return result

"""
Client for an external Vespa search engine.

Only two calls are supported: an application status probe and a
pass-through query. The probe never raises; transport failures are
reported as a disconnected status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config import DEFAULT_VESPA_TIMEOUT
from .errors import TransportError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineStatus:
    """Result of probing the external engine."""

    connected: bool
    detail: str
    status_code: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "connected": self.connected,
            "detail": self.detail,
            "vespaStatus": self.status_code if self.status_code is not None else "disconnected",
        }


class VespaClient:
    """Async HTTP client for a Vespa application endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_VESPA_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def status(self) -> EngineStatus:
        """Probe ``/ApplicationStatus``; degrade to disconnected on any failure."""
        try:
            async with self._client() as client:
                response = await client.get("/ApplicationStatus")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Vespa status probe failed for %s: %s", self.base_url, exc)
            return EngineStatus(connected=False, detail=str(exc) or type(exc).__name__)

        connected = response.status_code == 200
        if not connected:
            logger.warning(
                "Vespa status probe for %s returned HTTP %d", self.base_url, response.status_code
            )
        return EngineStatus(
            connected=connected,
            detail=response.text,
            status_code=response.status_code,
        )

    async def query(self, yql: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Forward a YQL query to ``/search/`` and return the decoded response."""
        if not yql or not yql.strip():
            raise ValidationError("yql is required.")
        payload: dict[str, Any] = dict(params or {})
        payload["yql"] = yql
        try:
            async with self._client() as client:
                response = await client.post("/search/", json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Vespa query failed with HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Vespa query failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError("Vespa returned a non-JSON response") from exc
        if not isinstance(data, dict):
            raise TransportError("Vespa returned an unexpected response shape")
        return data

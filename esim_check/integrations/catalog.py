"""Phone catalog provider integration (gsmarena-style JSON API).

Endpoints:
  GET {base}/search?q=<query>   -> list of device suggestions
  GET {base}/devices/{id}       -> device detail with ``detailSpec`` sections

Failures are not retried: every error surfaces to the caller immediately.
"""

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from esim_check.errors import UpstreamBlockedError, UpstreamFailureError, UpstreamRateLimitedError
from esim_check.orchestrator.schemas import DeviceDetail, SearchResult
from esim_check.services.throttle import ThrottleGate

logger = logging.getLogger(__name__)


class CatalogClient:
    """Async client for the phone catalog provider."""

    def __init__(self, base_url: str, gate: ThrottleGate, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.gate = gate
        self.timeout = timeout

    async def search(self, query: str) -> list[SearchResult]:
        """Search devices by name. Unusable provider output yields []."""
        data = await self._get_json("/search", params={"q": query}, label=f"query={query[:80]}")
        items = _unwrap_list(data)
        results = []
        for item in items:
            try:
                results.append(SearchResult.model_validate(item))
            except ValidationError:
                logger.debug("Catalog search | dropped malformed result: %s", str(item)[:120])
        logger.info("Catalog search OK | results=%d | query=%s", len(results), query[:80])
        return results

    async def get_device(self, device_id: str) -> DeviceDetail:
        """Fetch one device's full specification."""
        data = await self._get_json(f"/devices/{device_id}", label=f"id={device_id}")
        if not isinstance(data, dict):
            raise UpstreamFailureError(f"Unexpected device payload for {device_id}: {type(data).__name__}")
        try:
            return DeviceDetail.model_validate(data)
        except ValidationError as e:
            raise UpstreamFailureError(f"Invalid device payload for {device_id}: {e.error_count()} errors") from e

    async def _get_json(self, path: str, params: dict[str, str] | None = None, label: str = "") -> Any:
        if self.gate.is_blocked():
            raise UpstreamBlockedError("UPSTREAM_BLOCKED")

        url = f"{self.base_url}{path}"
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning("Catalog timeout | %s | %dms | %s", path, elapsed_ms, label)
            raise UpstreamFailureError(f"Catalog request timed out: {path}") from e
        except httpx.HTTPError as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.error("Catalog error | %s | %dms | %s", path, elapsed_ms, str(e)[:200])
            raise UpstreamFailureError(f"Catalog request failed: {e}") from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if response.status_code == 429:
            logger.warning("Catalog rate limited | %s | %dms | %s", path, elapsed_ms, label)
            raise UpstreamRateLimitedError("Catalog responded 429")
        if not response.is_success:
            logger.warning(
                "Catalog | status=%d | %s | %dms | %s",
                response.status_code, path, elapsed_ms, label,
            )
            raise UpstreamFailureError(f"Catalog responded {response.status_code}")

        logger.debug("Catalog OK | %s | %dms | %s", path, elapsed_ms, label)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailureError(f"Catalog returned invalid JSON for {path}") from e


def _unwrap_list(data: Any) -> list:
    """Accept a bare list or one wrapped under ``data``/``results``."""
    if isinstance(data, dict):
        data = data.get("data", data.get("results"))
    if not isinstance(data, list):
        return []
    return [item for item in data if item]

"""Lookup service — the state and flow behind both API endpoints.

Responsibilities:
  - Validate input (empty query / missing device)
  - Serve cached verdicts before touching the throttle gate
  - Gate every upstream-bound request
  - Call the catalog and run the SIM extractor
  - Arm the cooldown when the provider rate-limits us
  - Cache every verdict, including "not found"
"""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from esim_check import messages
from esim_check.config import Settings, settings
from esim_check.errors import (
    ErrorKind,
    InvalidRequestError,
    LocalThrottleError,
    UpstreamBlockedError,
    UpstreamRateLimitedError,
)
from esim_check.integrations.catalog import CatalogClient
from esim_check.orchestrator.schemas import AnswerPayload, DeviceSuggestion, SearchResult
from esim_check.services.cache import ResponseCache, make_key
from esim_check.services.extractor import extract_sim_info
from esim_check.services.throttle import ThrottleGate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LookupService:
    """Per-application context: throttle gate, verdict cache and catalog client."""

    def __init__(
        self,
        gate: ThrottleGate,
        cache: ResponseCache,
        catalog: CatalogClient,
        result_limit: int = 8,
    ):
        self.gate = gate
        self.cache = cache
        self.catalog = catalog
        self.result_limit = result_limit

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "LookupService":
        gate = ThrottleGate(
            min_interval=config.min_interval_seconds,
            cooldown=config.upstream_cooldown_seconds,
        )
        catalog = CatalogClient(
            config.catalog_base_url, gate, timeout=config.catalog_timeout_seconds,
        )
        return cls(gate, ResponseCache(), catalog, result_limit=config.search_result_limit)

    async def search_devices(self, query: str | None) -> list[DeviceSuggestion]:
        if not query or not query.strip():
            raise InvalidRequestError(messages.EMPTY_SEARCH_QUERY)

        self._reserve_upstream_slot()
        results = await self._call_upstream(self.catalog.search(query.strip()))

        suggestions = [DeviceSuggestion.from_result(r) for r in results[: self.result_limit] if r]
        logger.info("Device search | results=%d | query=%s", len(suggestions), query.strip()[:80])
        return suggestions

    async def check_esim(self, query: str | None, device_id: str | None) -> tuple[AnswerPayload, bool]:
        """Return the verdict and whether it was served from cache."""
        if (not query or not query.strip()) and not device_id:
            raise InvalidRequestError(messages.MISSING_DEVICE)

        clean_query = query.strip() if query else None
        cache_key = make_key(clean_query, device_id)

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached, True

        self._reserve_upstream_slot()

        selected_id = device_id
        first_result: SearchResult | None = None

        if not selected_id:
            results = await self._call_upstream(self.catalog.search(clean_query))
            if not results:
                payload = AnswerPayload(found=False, message=messages.DEVICE_NOT_FOUND)
                self.cache.put(cache_key, payload)
                return payload, False
            first_result = results[0]
            selected_id = first_result.id

        device = await self._call_upstream(self.catalog.get_device(selected_id))
        sim = extract_sim_info(device)

        if sim.simRaw is None:
            message = messages.SIM_UNKNOWN
        elif sim.supportsEsim:
            message = messages.ESIM_SUPPORTED
        else:
            message = messages.ESIM_NOT_EVIDENT

        payload = AnswerPayload(
            found=True,
            deviceName=device.name or (first_result.name if first_result else None) or clean_query,
            deviceId=selected_id,
            simRaw=sim.simRaw,
            supportsEsim=sim.supportsEsim,
            message=message,
        )
        self.cache.put(cache_key, payload)
        logger.info(
            "eSIM check | device=%s | supportsEsim=%s", selected_id, payload.supportsEsim,
        )
        return payload, False

    def _reserve_upstream_slot(self) -> None:
        decision = self.gate.check_and_reserve()
        if decision.allowed:
            return
        if decision.reason == ErrorKind.LOCAL_THROTTLE:
            raise LocalThrottleError(messages.LOCAL_THROTTLE)
        raise UpstreamBlockedError(messages.UPSTREAM_BLOCKED)

    async def _call_upstream(self, call: Awaitable[T]) -> T:
        """Await a catalog call, arming the cooldown on any rate-limit signal."""
        try:
            return await call
        except (UpstreamRateLimitedError, UpstreamBlockedError) as e:
            self.gate.block()
            raise UpstreamRateLimitedError(messages.UPSTREAM_RATE_LIMITED) from e

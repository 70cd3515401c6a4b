"""S2 — Response cache for eSIM verdicts.

Keys are LookupKeys (``id:<deviceId>`` or ``q:<normalized query>``).
The store is unbounded and never expires: entries live for the process
lifetime, which only suits a single short-lived local instance.
"""

import logging
import math

from cachetools import Cache

from esim_check.orchestrator.schemas import AnswerPayload

logger = logging.getLogger(__name__)


def make_key(query: str | None, device_id: str | None) -> str:
    """Derive the LookupKey; a device id takes precedence over the query."""
    if device_id:
        return f"id:{device_id}"
    return f"q:{(query or '').strip().lower()}"


class ResponseCache:
    """In-memory verdict cache, exact-key lookups only."""

    def __init__(self):
        self._store: Cache = Cache(maxsize=math.inf)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> AnswerPayload | None:
        """Read from cache. Returns None on miss."""
        payload = self._store.get(key)
        if payload is not None:
            logger.info("Cache HIT | key=%s", key[:40])
        return payload

    def put(self, key: str, payload: AnswerPayload) -> None:
        self._store[key] = payload
        logger.info("Cache SET | key=%s | found=%s | size=%d", key[:40], payload.found, len(self._store))

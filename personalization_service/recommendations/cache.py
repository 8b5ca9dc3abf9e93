"""
Time-based cache for computed recommendation responses.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

from ..models.attributes import AttributeSet
from ..models.recommendation_models import DEFAULT_PER_PAGE, RecommendationResponse

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


@dataclass(slots=True)
class CacheEntry:
    response: RecommendationResponse
    stored_at: float
    expires_at: float


class RecommendationCache:
    """Memoizes recommendation responses per normalized request.

    There is no per-key invalidation: entries age out after their TTL and
    invalidate_all() drops everything. All access goes through one lock,
    so get/set are atomic per key.
    """

    PREFIX = "rec_"

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    @classmethod
    def key(cls, attributes: AttributeSet, per_page: int = DEFAULT_PER_PAGE, page: int = 1) -> str:
        """Derive a cache key that ignores attribute and value ordering."""
        # Values may contain any character; JSON keeps their boundaries.
        payload = json.dumps(
            [[name, list(values)] for name, values in attributes.normalized_items()]
            + [int(per_page), int(page)],
            ensure_ascii=False,
        )
        digest = hashlib.md5(payload.encode("utf-8")).hexdigest()
        return cls.PREFIX + digest

    def get(self, key: str) -> Optional[RecommendationResponse]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.response

    def set(self, key: str, response: RecommendationResponse, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._entries[key] = CacheEntry(response=response, stored_at=now, expires_at=now + ttl)

    def invalidate_all(self) -> int:
        """Drop every cached entry and return how many were dropped."""
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.info(f"Recommendation cache flushed ({dropped} entries)")
        return dropped

    def stats(self) -> Dict[str, int]:
        now = self._clock()
        with self._lock:
            live = sum(1 for entry in self._entries.values() if now < entry.expires_at)
            total = len(self._entries)
        return {"entries": total, "live_entries": live, "ttl_seconds": self.default_ttl}

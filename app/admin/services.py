"""
Admin services: audience listing, targeting edits, API key rotation and
recent logs.
"""
from typing import Any, Dict, List, Mapping, Optional

from personalization_service.api_keys import ApiKeyStore, mask_api_key
from personalization_service.content_store import ContentStore
from personalization_service.logging_config import RecentLogHandler
from personalization_service.models import ContentItem
from personalization_service.recommendations import RecommendationService


class AdminService:
    """Operations behind the admin endpoints.

    Every write flushes the whole recommendation cache; there is no
    per-key invalidation.
    """

    def __init__(
        self,
        content_store: ContentStore,
        api_key_store: ApiKeyStore,
        recommendation_service: RecommendationService,
        recent_logs: RecentLogHandler,
    ):
        self.content_store = content_store
        self.api_key_store = api_key_store
        self.recommendation_service = recommendation_service
        self.recent_logs = recent_logs

    def list_audience(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Items of any status that carry at least one targeting attribute."""
        rows = []
        for item in self.content_store.list_items():
            if not item.has_targeting:
                continue
            rows.append(_audience_row(item))
            if len(rows) >= limit:
                break
        return rows

    def update_targeting(self, item_id: int, targeting: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        item = self.content_store.update_targeting(item_id, targeting)
        if item is None:
            return None
        self.recommendation_service.invalidate_cache()
        return _audience_row(item)

    def get_masked_api_key(self) -> Optional[str]:
        return mask_api_key(self.api_key_store.get_key())

    def rotate_api_key(self) -> str:
        key = self.api_key_store.rotate()
        self.recommendation_service.invalidate_cache()
        return key

    def flush_cache(self) -> int:
        return self.recommendation_service.invalidate_cache()

    def cache_stats(self) -> Dict[str, int]:
        return self.recommendation_service.cache.stats()

    def get_recent_logs(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self.recent_logs.get_recent(limit)

    def clear_logs(self) -> None:
        self.recent_logs.clear()


def _audience_row(item: ContentItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "status": item.status.value,
        "targeting": dict(item.targeting),
    }

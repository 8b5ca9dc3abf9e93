"""
Recommendation orchestration: normalize, check cache, compute, record.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..analytics import AnalyticsRecorder
from ..content_store import ContentStore
from ..errors import NotFoundError, UpstreamError
from ..models.attributes import AttributeSet, DEFAULT_ATTRIBUTE_NAMES
from ..models.recommendation_models import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    RecommendationRequest,
    RecommendationResponse,
    RecommendedPost,
)
from .cache import RecommendationCache
from .ranker import Ranker

logger = logging.getLogger(__name__)


def _to_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clamp_pagination(
    per_page: Any,
    page: Any,
    default_per_page: int = DEFAULT_PER_PAGE,
    max_per_page: int = MAX_PER_PAGE,
) -> tuple[int, int]:
    """Clamp raw pagination input; never raises."""
    per_page = max(1, min(_to_int(per_page, default_per_page), max_per_page))
    page = max(1, _to_int(page, 1))
    return per_page, page


class RecommendationService:
    """Serves paginated recommendations for a set of requester attributes."""

    def __init__(
        self,
        content_store: ContentStore,
        cache: RecommendationCache,
        analytics: AnalyticsRecorder,
        ranker: Optional[Ranker] = None,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
        attribute_names: tuple[str, ...] = DEFAULT_ATTRIBUTE_NAMES,
    ):
        self.content_store = content_store
        self.cache = cache
        self.analytics = analytics
        self.ranker = ranker or Ranker()
        self.default_per_page = default_per_page
        self.max_per_page = max_per_page
        self.attribute_names = attribute_names

    def build_request(
        self,
        raw_attributes: Optional[Mapping[str, Any]],
        per_page: Any = None,
        page: Any = None,
    ) -> RecommendationRequest:
        per_page, page = clamp_pagination(per_page, page, self.default_per_page, self.max_per_page)
        attributes = AttributeSet.from_raw(raw_attributes, names=self.attribute_names)
        return RecommendationRequest(attributes=attributes, page=page, per_page=per_page)

    def get_recommendations(
        self,
        raw_attributes: Optional[Mapping[str, Any]],
        per_page: Any = None,
        page: Any = None,
    ) -> RecommendationResponse:
        """Return one page of recommendations.

        Every returned response, cached or fresh, records one impression per
        post. A failed computation raises UpstreamError and leaves both the
        cache and the counters untouched.
        """
        request = self.build_request(raw_attributes, per_page, page)
        key = self.cache.key(request.attributes, request.per_page, request.page)

        cached = self._read_cache(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            self._record_impressions(cached)
            return cached

        response = self._compute(request)
        self.cache.set(key, response)
        self._record_impressions(response)
        return response

    def _read_cache(self, key: str) -> Optional[RecommendationResponse]:
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed, computing fresh: {e}", extra={"context": {"key": key}})
            return None

    def _compute(self, request: RecommendationRequest) -> RecommendationResponse:
        eligible_only = request.attributes.is_empty()
        try:
            candidates = self.content_store.query_eligible_items(eligible_only=eligible_only)
        except UpstreamError as e:
            logger.error(f"Recommendations computation failed: {e}", extra={"context": {"error": str(e)}})
            raise
        except Exception as e:
            logger.error(f"Recommendations computation failed: {e}", extra={"context": {"error": str(e)}})
            raise UpstreamError(f"Content store query failed: {e}") from e

        ranked = self.ranker.rank(candidates, request.attributes, request.page, request.per_page)
        posts = [RecommendedPost.from_candidate(candidate) for candidate in ranked.items]
        return RecommendationResponse.build(
            posts=posts,
            total=ranked.total,
            page=request.page,
            per_page=request.per_page,
        )

    def _record_impressions(self, response: RecommendationResponse) -> None:
        if response.posts:
            self.analytics.record_impressions(response.post_ids)

    def record_click(self, post_id: int) -> None:
        """Count a click on a published item; NotFoundError otherwise."""
        item = self.content_store.get_item(post_id)
        if item is None or not item.is_published:
            logger.info(f"Click rejected for unpublished or unknown post {post_id}")
            raise NotFoundError()
        self.analytics.record_click(post_id)

    def invalidate_cache(self) -> int:
        return self.cache.invalidate_all()

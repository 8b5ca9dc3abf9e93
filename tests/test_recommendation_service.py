"""
Tests for RecommendationService: normalization, caching, impressions and clicks.
"""

from datetime import datetime, timedelta, timezone

import pytest

from personalization_service.analytics import CounterAnalytics
from personalization_service.errors import NotFoundError, UpstreamError
from personalization_service.models import ContentItem, ContentStatus
from personalization_service.recommendations import (
    RecommendationCache,
    RecommendationService,
    clamp_pagination,
)


BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _make_item(item_id, targeting=None, status=ContentStatus.PUBLISH, days_ago=0, **extra):
    return ContentItem(
        id=item_id,
        title=f"Post {item_id}",
        url=f"https://example.com/posts/{item_id}",
        status=status,
        published_at=BASE_TIME - timedelta(days=days_ago),
        targeting=targeting or {},
        **extra,
    )


class FakeContentStore:
    """In-memory store that counts queries and can be made to fail."""

    def __init__(self, items=None):
        self.items = {item.id: item for item in (items or [])}
        self.queries = []
        self.fail_with = None

    def query_eligible_items(self, eligible_only):
        self.queries.append(eligible_only)
        if self.fail_with is not None:
            raise self.fail_with
        items = [item for item in self.items.values() if item.is_published]
        if eligible_only:
            items = [item for item in items if item.has_targeting]
        return items

    def get_item(self, item_id):
        return self.items.get(item_id)


class BrokenCache(RecommendationCache):
    def get(self, key):
        raise RuntimeError("cache backend unavailable")


class TestClampPagination:
    def test_defaults(self):
        assert clamp_pagination(None, None) == (10, 1)
        assert clamp_pagination("", "") == (10, 1)

    def test_out_of_range_values_are_clamped(self):
        assert clamp_pagination(500, 1) == (50, 1)
        assert clamp_pagination(0, 0) == (1, 1)
        assert clamp_pagination(-3, -7) == (1, 1)

    def test_non_numeric_values_fall_back_to_defaults(self):
        assert clamp_pagination("abc", "two") == (10, 1)

    def test_numeric_strings_are_parsed(self):
        assert clamp_pagination("25", "3") == (25, 3)


class TestRecommendationService:
    def setup_method(self):
        self.store = FakeContentStore([
            _make_item(1, {"industry": "Tech", "role": "CTO"}, days_ago=3),
            _make_item(2, {"industry": "Finance"}, days_ago=1),
            _make_item(3, days_ago=0),
            _make_item(4, {"industry": "Tech"}, status=ContentStatus.DRAFT),
        ])
        self.cache = RecommendationCache()
        self.analytics = CounterAnalytics()
        self.service = RecommendationService(
            content_store=self.store,
            cache=self.cache,
            analytics=self.analytics,
        )

    def test_scored_recommendations(self):
        response = self.service.get_recommendations({"industry": "tech", "role": "cto"})

        assert response.post_ids == [1, 2, 3]
        assert response.posts[0].match_score == 1.0
        assert response.posts[1].match_score == 0.0
        assert response.total == 3
        assert self.store.queries == [False]

    def test_filter_free_request_queries_eligible_only(self):
        response = self.service.get_recommendations({})

        assert response.post_ids == [2, 1]
        assert self.store.queries == [True]

    def test_unknown_attribute_names_are_ignored(self):
        response = self.service.get_recommendations({"country": "DE"})
        assert response.post_ids == [2, 1]

    def test_match_score_is_rounded(self):
        response = self.service.get_recommendations({"industry": "Tech", "company_size": "1-10", "role": "CTO"})
        assert response.posts[0].match_score == 0.67

    def test_pagination_is_clamped(self):
        response = self.service.get_recommendations({}, per_page=1000, page=0)
        assert response.per_page == 50
        assert response.page == 1

    def test_second_request_is_served_from_cache(self):
        first = self.service.get_recommendations({"industry": "Tech"})
        second = self.service.get_recommendations({"industry": "tech"})

        assert second is first
        assert len(self.store.queries) == 1

    def test_values_with_delimiters_get_their_own_cache_entry(self):
        first = self.service.get_recommendations({"industry": "tech", "role": "cto"})
        second = self.service.get_recommendations({"industry": "tech|role=cto"})

        assert first.posts[0].match_score == 1.0
        assert second is not first
        assert all(post.match_score == 0.0 for post in second.posts)
        assert len(self.store.queries) == 2

    def test_cache_hit_still_records_impressions(self):
        self.service.get_recommendations({"industry": "Tech"}, per_page=2)
        self.service.get_recommendations({"industry": "Tech"}, per_page=2)

        assert self.analytics.get_impressions(1) == 2
        assert self.analytics.get_impressions(2) == 2
        assert self.analytics.get_impressions(3) == 0

    def test_store_failure_raises_and_is_not_cached(self):
        self.store.fail_with = OSError("disk gone")

        with pytest.raises(UpstreamError):
            self.service.get_recommendations({"industry": "Tech"})

        assert self.cache.stats()["entries"] == 0
        assert self.analytics.get_all_impressions() == {}

        self.store.fail_with = None
        response = self.service.get_recommendations({"industry": "Tech"})
        assert response.post_ids[0] == 1

    def test_upstream_error_is_propagated_unchanged(self):
        error = UpstreamError("store offline")
        self.store.fail_with = error

        with pytest.raises(UpstreamError) as exc_info:
            self.service.get_recommendations({})
        assert exc_info.value is error

    def test_cache_read_failure_is_treated_as_miss(self):
        service = RecommendationService(
            content_store=self.store,
            cache=BrokenCache(),
            analytics=self.analytics,
        )
        response = service.get_recommendations({"industry": "Tech"})

        assert response.post_ids[0] == 1
        assert self.analytics.get_impressions(1) == 1

    def test_empty_result_records_no_impressions(self):
        service = RecommendationService(
            content_store=FakeContentStore(),
            cache=self.cache,
            analytics=self.analytics,
        )
        response = service.get_recommendations({"industry": "Tech"})

        assert response.posts == ()
        assert response.total == 0
        assert self.analytics.get_all_impressions() == {}

    def test_invalidate_cache_forces_recompute(self):
        self.service.get_recommendations({})
        assert self.service.invalidate_cache() == 1

        self.service.get_recommendations({})
        assert len(self.store.queries) == 2

    def test_record_click_on_published_item(self):
        self.service.record_click(1)
        assert self.analytics.get_clicks(1) == 1

    def test_record_click_rejects_unpublished_or_missing(self):
        with pytest.raises(NotFoundError):
            self.service.record_click(4)
        with pytest.raises(NotFoundError):
            self.service.record_click(99)
        assert self.analytics.get_all_clicks() == {}

    def test_excerpt_falls_back_to_trimmed_body(self):
        body = "# Heading\n\n" + " ".join(f"word{i}" for i in range(40))
        store = FakeContentStore([_make_item(10, {"industry": "Tech"}, body=body)])
        service = RecommendationService(content_store=store, cache=RecommendationCache(), analytics=self.analytics)

        excerpt = service.get_recommendations({"industry": "Tech"}).posts[0].excerpt
        assert excerpt.startswith("Heading word0")
        assert excerpt.endswith("…")
        assert len(excerpt.rstrip("…").split()) == 25

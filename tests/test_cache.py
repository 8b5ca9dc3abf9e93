"""
Tests for the recommendation response cache.
"""

from dataclasses import FrozenInstanceError

import pytest

from personalization_service.models import AttributeSet, RecommendationResponse, RecommendedPost
from personalization_service.recommendations import DEFAULT_TTL_SECONDS, RecommendationCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _response(*post_ids) -> RecommendationResponse:
    posts = [
        RecommendedPost(id=i, title=f"Post {i}", excerpt="", url=f"https://example.com/{i}", match_score=1.0)
        for i in post_ids
    ]
    return RecommendationResponse.build(posts=posts, total=len(posts), page=1, per_page=10)


class TestCacheKey:
    def test_key_ignores_value_order_and_case(self):
        a = AttributeSet.from_raw({"industry": "Tech,Finance", "role": "CTO"})
        b = AttributeSet.from_raw({"role": "cto", "industry": " finance , tech"})
        assert RecommendationCache.key(a) == RecommendationCache.key(b)

    def test_key_depends_on_pagination(self):
        attrs = AttributeSet.from_raw({"industry": "Tech"})
        assert RecommendationCache.key(attrs, per_page=10, page=1) != RecommendationCache.key(attrs, per_page=10, page=2)
        assert RecommendationCache.key(attrs, per_page=10, page=1) != RecommendationCache.key(attrs, per_page=20, page=1)

    def test_key_depends_on_attributes(self):
        tech = AttributeSet.from_raw({"industry": "Tech"})
        finance = AttributeSet.from_raw({"industry": "Finance"})
        assert RecommendationCache.key(tech) != RecommendationCache.key(finance)

    def test_delimiters_inside_values_do_not_collide(self):
        merged = AttributeSet.from_raw({"industry": "tech|role=cto"})
        separate = AttributeSet.from_raw({"industry": "tech", "role": "cto"})
        assert RecommendationCache.key(merged) != RecommendationCache.key(separate)

        with_page = AttributeSet.from_raw({"industry": "tech|per_page=10"})
        plain = AttributeSet.from_raw({"industry": "tech"})
        assert RecommendationCache.key(with_page, per_page=20) != RecommendationCache.key(plain, per_page=10)

    def test_key_has_prefix(self):
        assert RecommendationCache.key(AttributeSet()).startswith(RecommendationCache.PREFIX)


class TestRecommendationCache:
    def setup_method(self):
        self.clock = FakeClock()
        self.cache = RecommendationCache(default_ttl=DEFAULT_TTL_SECONDS, clock=self.clock)

    def test_default_ttl_is_five_minutes(self):
        assert DEFAULT_TTL_SECONDS == 300

    def test_miss_returns_none(self):
        assert self.cache.get("rec_missing") is None

    def test_set_then_get_returns_same_response(self):
        response = _response(1, 2)
        self.cache.set("rec_a", response)
        assert self.cache.get("rec_a") is response

    def test_entry_expires_after_ttl(self):
        self.cache.set("rec_a", _response(1))

        self.clock.advance(DEFAULT_TTL_SECONDS - 1)
        assert self.cache.get("rec_a") is not None

        self.clock.advance(1)
        assert self.cache.get("rec_a") is None
        assert self.cache.stats()["entries"] == 0

    def test_custom_ttl_per_entry(self):
        self.cache.set("rec_short", _response(1), ttl=10)
        self.clock.advance(11)
        assert self.cache.get("rec_short") is None

    def test_invalidate_all_drops_every_entry(self):
        self.cache.set("rec_a", _response(1))
        self.cache.set("rec_b", _response(2))

        assert self.cache.invalidate_all() == 2
        assert self.cache.get("rec_a") is None
        assert self.cache.get("rec_b") is None
        assert self.cache.invalidate_all() == 0

    def test_stats_counts_live_entries(self):
        self.cache.set("rec_a", _response(1), ttl=5)
        self.cache.set("rec_b", _response(2))
        self.clock.advance(6)

        stats = self.cache.stats()
        assert stats == {"entries": 2, "live_entries": 1, "ttl_seconds": DEFAULT_TTL_SECONDS}


def test_response_wire_format():
    response = _response(7)
    assert response.to_dict() == {
        "posts": [
            {"id": 7, "title": "Post 7", "excerpt": "", "url": "https://example.com/7", "match_score": 1.0}
        ],
        "total": 1,
        "page": 1,
        "per_page": 10,
    }
    with pytest.raises(FrozenInstanceError):
        response.total = 5

"""
Recommendation pipeline: attribute matching, ranking, caching and the
orchestrating service.

Kept free of Flask so it can be reused by the web layer, CLI tooling or
batch jobs.
"""

from .matcher import AttributeMatcher, MatchResult
from .ranker import Ranker, paginate
from .cache import CacheEntry, DEFAULT_TTL_SECONDS, RecommendationCache
from .service import RecommendationService, clamp_pagination

__all__ = [
    "AttributeMatcher",
    "MatchResult",
    "Ranker",
    "paginate",
    "CacheEntry",
    "DEFAULT_TTL_SECONDS",
    "RecommendationCache",
    "RecommendationService",
    "clamp_pagination",
]

"""
Factory for creating the recommendations module.
"""
from personalization_service.analytics import AnalyticsRecorder
from personalization_service.content_store import ContentStore
from personalization_service.recommendations import (
    DEFAULT_TTL_SECONDS,
    RecommendationCache,
    RecommendationService,
)

from .routes import create_recommendation_routes


def create_recommendations_module(
    content_store: ContentStore,
    analytics: AnalyticsRecorder,
    authorizer,
    url_prefix: str = "",
    default_per_page: int = 10,
    max_per_page: int = 50,
    cache_ttl: int = DEFAULT_TTL_SECONDS,
    cache: RecommendationCache = None,
) -> dict:
    """
    Create the recommendations module with all its components.

    Args:
        content_store: Source of content items
        analytics: Impression/click recorder
        authorizer: RequestAuthorizer guarding the routes
        url_prefix: Optional prefix for the API routes
        cache: Optional pre-built cache (defaults to an in-memory TTL cache)

    Returns:
        Dictionary containing:
            - service: RecommendationService instance
            - cache: RecommendationCache instance
            - blueprint: Flask blueprint for routes
    """
    cache = cache or RecommendationCache(default_ttl=cache_ttl)
    service = RecommendationService(
        content_store=content_store,
        cache=cache,
        analytics=analytics,
        default_per_page=default_per_page,
        max_per_page=max_per_page,
    )
    blueprint = create_recommendation_routes(service, authorizer, url_prefix)

    return {
        "service": service,
        "cache": cache,
        "blueprint": blueprint,
    }

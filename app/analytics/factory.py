"""
Factory for creating analytics module.
"""
from personalization_service.analytics import CounterAnalytics
from personalization_service.content_store import ContentStore
from personalization_service.recommendations import RecommendationService

from .routes import create_analytics_blueprint
from .services import AnalyticsReportService


def create_analytics_module(
    analytics: CounterAnalytics,
    content_store: ContentStore,
    recommendation_service: RecommendationService,
    authorizer,
    url_prefix: str = "",
) -> dict:
    """Create analytics module with service and routes.

    Returns:
        Dictionary containing the report service and blueprint
    """
    report_service = AnalyticsReportService(analytics, content_store)

    blueprint = create_analytics_blueprint(
        recommendation_service=recommendation_service,
        report_service=report_service,
        authorizer=authorizer,
        url_prefix=url_prefix,
    )

    return {
        "service": report_service,
        "blueprint": blueprint
    }

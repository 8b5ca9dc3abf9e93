"""
Factory for creating admin module.
"""
from personalization_service.api_keys import ApiKeyStore
from personalization_service.content_store import ContentStore
from personalization_service.logging_config import RecentLogHandler
from personalization_service.recommendations import RecommendationService

from .routes import create_admin_blueprint
from .services import AdminService


def create_admin_module(
    content_store: ContentStore,
    api_key_store: ApiKeyStore,
    recommendation_service: RecommendationService,
    recent_logs: RecentLogHandler,
    authorizer,
    url_prefix: str = "",
) -> dict:
    """Create admin module with service and routes.

    Args:
        content_store: Content items whose targeting is managed here
        api_key_store: Storage for the shared API key
        recommendation_service: Service whose cache is flushed on writes
        recent_logs: In-memory log buffer shown to admins
        authorizer: RequestAuthorizer for admin checks

    Returns:
        Dictionary containing the service and blueprint
    """
    admin_service = AdminService(
        content_store=content_store,
        api_key_store=api_key_store,
        recommendation_service=recommendation_service,
        recent_logs=recent_logs,
    )

    blueprint = create_admin_blueprint(
        admin_service=admin_service,
        authorizer=authorizer,
        url_prefix=url_prefix,
    )

    return {
        "service": admin_service,
        "blueprint": blueprint
    }

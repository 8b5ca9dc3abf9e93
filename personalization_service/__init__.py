# Personalization service package: audience-based content recommendations

from .models import (
    AttributeSet,
    ContentItem,
    ContentStatus,
    RecommendationRequest,
    RecommendationResponse,
    RecommendedPost,
    ScoredCandidate,
)
from .recommendations import (
    AttributeMatcher,
    Ranker,
    RecommendationCache,
    RecommendationService,
)
from .content_store import ContentStore, JsonContentStore
from .analytics import AnalyticsRecorder, CounterAnalytics, effectiveness_report
from .api_keys import ApiKeyStore, generate_api_key, mask_api_key
from .errors import (
    PersonalizationError,
    ValidationError,
    UpstreamError,
    AuthorizationError,
    NotFoundError,
)
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
    install_recent_log_handler,
    RecentLogHandler,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "AttributeSet",
    "ContentItem",
    "ContentStatus",
    "RecommendationRequest",
    "RecommendationResponse",
    "RecommendedPost",
    "ScoredCandidate",
    "AttributeMatcher",
    "Ranker",
    "RecommendationCache",
    "RecommendationService",
    "ContentStore",
    "JsonContentStore",
    "AnalyticsRecorder",
    "CounterAnalytics",
    "effectiveness_report",
    "ApiKeyStore",
    "generate_api_key",
    "mask_api_key",
    "PersonalizationError",
    "ValidationError",
    "UpstreamError",
    "AuthorizationError",
    "NotFoundError",
    "setup_logging",
    "stop_logging",
    "get_logger",
    "install_recent_log_handler",
    "RecentLogHandler",
    "ThreadSafeLoggingConfig",
]

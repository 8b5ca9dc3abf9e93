import logging
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from personalization_service.analytics import AnalyticsRecorder, CounterAnalytics
from personalization_service.api_keys import ApiKeyStore
from personalization_service.content_store import ContentStore, JsonContentStore
from personalization_service.errors import PersonalizationError
from personalization_service.logging_config import RecentLogHandler, install_recent_log_handler
from personalization_service.recommendations import RecommendationCache

from app.admin.factory import create_admin_module
from app.analytics.factory import create_analytics_module
from app.auth.factory import create_auth_module
from app.recommendations.factory import create_recommendations_module

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent


def _resolve_dir(path_str: str) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else BASE_DIR / path


def create_app(
    config: Optional[ConfigManager] = None,
    content_store: Optional[ContentStore] = None,
    analytics: Optional[AnalyticsRecorder] = None,
    cache: Optional[RecommendationCache] = None,
) -> Flask:
    """Build the Flask application and wire every module.

    Each collaborator is created once here and handed to the modules that
    need it. Tests pass their own store, analytics or cache.
    """
    config = config or ConfigManager()
    app_config = config.get_app_config()
    api_config = config.get_api_config()
    cache_config = config.get_cache_config()
    paths_config = config.get_paths_config()
    logging_settings = config.get_logging_config()

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------
    content_dir = _resolve_dir(paths_config.content_dir)
    data_dir = _resolve_dir(paths_config.data_dir)
    content_dir.mkdir(parents=True, exist_ok=True)
    data_dir.mkdir(parents=True, exist_ok=True)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_proto = 1,     # trust 1 hop for X-Forwarded-Proto
            x_host  = 1,     # trust 1 hop for X-Forwarded-Host
            x_prefix= 1)     # <-- pay attention to X-Forwarded-Prefix

    # -------------------------------------------------------------------------
    # Shared collaborators
    # -------------------------------------------------------------------------
    recent_logs = install_recent_log_handler(
        RecentLogHandler(
            limit=logging_settings.recent_log_limit,
            level=getattr(logging, logging_settings.recent_log_level.upper(), logging.WARNING),
        )
    )
    api_key_store = ApiKeyStore(data_dir / "api_key.json")
    content_store = content_store or JsonContentStore(content_dir)
    analytics = analytics or CounterAnalytics(data_dir / "analytics.json")

    # -------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------
    auth_module = create_auth_module(
        api_key_store=api_key_store,
        admin_user_ids=app_config.admin_user_ids,
        reader_user_ids=app_config.reader_user_ids,
    )
    authorizer = auth_module["service"]

    recommendations_module = create_recommendations_module(
        content_store=content_store,
        analytics=analytics,
        authorizer=authorizer,
        url_prefix=api_config.url_prefix,
        default_per_page=api_config.default_per_page,
        max_per_page=api_config.max_per_page,
        cache_ttl=cache_config.ttl_seconds,
        cache=cache,
    )
    recommendation_service = recommendations_module["service"]

    analytics_module = create_analytics_module(
        analytics=analytics,
        content_store=content_store,
        recommendation_service=recommendation_service,
        authorizer=authorizer,
        url_prefix=api_config.url_prefix,
    )

    admin_module = create_admin_module(
        content_store=content_store,
        api_key_store=api_key_store,
        recommendation_service=recommendation_service,
        recent_logs=recent_logs,
        authorizer=authorizer,
        url_prefix=api_config.url_prefix,
    )

    # Register blueprints
    app.register_blueprint(recommendations_module["blueprint"])
    app.register_blueprint(analytics_module["blueprint"])
    app.register_blueprint(admin_module["blueprint"])

    app.extensions["personalization"] = {
        "auth": auth_module,
        "recommendations": recommendations_module,
        "analytics": analytics_module,
        "admin": admin_module,
        "api_key_store": api_key_store,
        "recent_logs": recent_logs,
    }

    @app.errorhandler(PersonalizationError)
    def handle_personalization_error(error: PersonalizationError):
        if error.status >= 500:
            logger.error(f"Request failed: {error.message}", extra={"context": {"code": error.code}})
        return jsonify(error.to_dict()), error.status

    logger.info(
        f"Personalization API ready (content_dir={content_dir}, data_dir={data_dir}, "
        f"cache_ttl={cache_config.ttl_seconds}s)"
    )
    return app

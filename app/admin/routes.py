"""
Admin Routes

JSON endpoints for managing targeting, the API key, the cache and the
recent log buffer. All routes require an admin session.
"""

from flask import Blueprint, request, jsonify

from personalization_service.errors import UpstreamError

from app.auth import RequestAuthorizer, admin_required
from .services import AdminService


def create_admin_blueprint(
    admin_service: AdminService,
    authorizer: RequestAuthorizer,
    url_prefix: str = "",
) -> Blueprint:
    """Create admin blueprint with routes.

    Args:
        admin_service: The admin service instance
        authorizer: RequestAuthorizer used to check admin sessions
        url_prefix: Optional prefix shared with the recommendations API

    Returns:
        Flask blueprint with admin routes
    """
    blueprint = Blueprint('admin', __name__, url_prefix=f"{url_prefix}/admin")

    @blueprint.route('/audience', methods=['GET'])
    @admin_required(authorizer)
    def audience():
        """Posts by target audience."""
        try:
            items = admin_service.list_audience()
        except UpstreamError as e:
            return jsonify(e.to_dict()), e.status
        return jsonify({"status": "ok", "items": items})

    @blueprint.route('/items/<int:item_id>/targeting', methods=['POST'])
    @admin_required(authorizer)
    def update_targeting(item_id):
        """Set targeting attributes for a post."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "No data provided"}), 400

        row = admin_service.update_targeting(item_id, data)
        if row is None:
            return jsonify({"error": "not-found"}), 404
        return jsonify({"status": "ok", "item": row})

    @blueprint.route('/api-key', methods=['GET'])
    @admin_required(authorizer)
    def show_api_key():
        """Masked view of the current API key."""
        return jsonify({"api_key": admin_service.get_masked_api_key()})

    @blueprint.route('/api-key', methods=['POST'])
    @admin_required(authorizer)
    def generate_api_key():
        """Generate a new API key; the full key is only returned here."""
        key = admin_service.rotate_api_key()
        return jsonify({"status": "ok", "api_key": key})

    @blueprint.route('/cache', methods=['GET'])
    @admin_required(authorizer)
    def cache_stats():
        """Cached entry counts and the configured TTL."""
        return jsonify({"status": "ok", "cache": admin_service.cache_stats()})

    @blueprint.route('/cache/flush', methods=['POST'])
    @admin_required(authorizer)
    def flush_cache():
        """Drop every cached recommendation response."""
        dropped = admin_service.flush_cache()
        return jsonify({"status": "ok", "dropped": dropped})

    @blueprint.route('/logs', methods=['GET'])
    @admin_required(authorizer)
    def recent_logs():
        limit = request.args.get('limit', 100, type=int)
        return jsonify({"status": "ok", "logs": admin_service.get_recent_logs(limit)})

    @blueprint.route('/logs/clear', methods=['POST'])
    @admin_required(authorizer)
    def clear_logs():
        admin_service.clear_logs()
        return jsonify({"status": "ok"})

    return blueprint

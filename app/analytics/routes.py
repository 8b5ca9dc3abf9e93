"""
Analytics Routes

Flask routes for click recording and the effectiveness report.
"""

from flask import Blueprint, request, jsonify

from personalization_service.errors import NotFoundError, ValidationError
from personalization_service.recommendations import RecommendationService

from app.auth import RequestAuthorizer, admin_required, api_auth_required
from .services import AnalyticsReportService


def _parse_post_id(value) -> int:
    if isinstance(value, bool):
        raise ValidationError("post_id must be a positive integer.")
    try:
        post_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("post_id must be a positive integer.")
    if post_id < 1:
        raise ValidationError("post_id must be a positive integer.")
    return post_id


def create_analytics_blueprint(
    recommendation_service: RecommendationService,
    report_service: AnalyticsReportService,
    authorizer: RequestAuthorizer,
    url_prefix: str = "",
) -> Blueprint:
    """Create a Flask blueprint for analytics routes.

    Args:
        recommendation_service: Service that validates and records clicks
        report_service: Builds the admin effectiveness report
        authorizer: RequestAuthorizer guarding the routes
        url_prefix: Optional prefix shared with the recommendations API

    Returns:
        Flask blueprint with analytics routes
    """
    bp = Blueprint('analytics', __name__, url_prefix=url_prefix or None)

    @bp.route("/record-click", methods=["POST"])
    @api_auth_required(authorizer)
    def record_click():
        """Record a click on a recommended post."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        raw_post_id = payload.get("post_id", request.form.get("post_id", request.args.get("post_id")))

        try:
            post_id = _parse_post_id(raw_post_id)
            recommendation_service.record_click(post_id)
        except (ValidationError, NotFoundError) as e:
            return jsonify({"success": False, "message": e.message}), e.status

        return jsonify({"success": True})

    @bp.route("/admin/analytics", methods=["GET"])
    @admin_required(authorizer)
    def analytics_report():
        """Per-post impressions, clicks and CTR."""
        limit = request.args.get("limit", 100, type=int)
        limit = max(1, min(limit, 100))
        return jsonify({
            "status": "ok",
            "items": report_service.build_report(limit=limit),
        })

    return bp

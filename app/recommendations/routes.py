"""
Recommendation routes.
"""
from flask import Blueprint, jsonify, request

from personalization_service.errors import UpstreamError
from personalization_service.recommendations import RecommendationService

from app.auth import RequestAuthorizer, api_auth_required


def create_recommendation_routes(
    recommendation_service: RecommendationService,
    authorizer: RequestAuthorizer,
    url_prefix: str = "",
) -> Blueprint:
    """Create recommendation routes blueprint."""
    bp = Blueprint('recommendations', __name__, url_prefix=url_prefix or None)

    @bp.route('/recommendations', methods=['GET'])
    @api_auth_required(authorizer)
    def get_recommendations():
        """
        Get recommended posts for the requester's attributes.

        Query parameters:
            - industry, company_size, role: comma-separated values (optional)
            - per_page: Posts per page (default 10, clamped to 1..50)
            - page: Page number (default 1, minimum 1)
        """
        raw_attributes = {
            name: request.args.get(name, "")
            for name in recommendation_service.attribute_names
        }

        try:
            response = recommendation_service.get_recommendations(
                raw_attributes,
                per_page=request.args.get('per_page'),
                page=request.args.get('page'),
            )
        except UpstreamError as e:
            return jsonify(e.to_dict()), e.status

        return jsonify(response.to_dict())

    return bp

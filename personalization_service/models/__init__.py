"""
Models package for the personalization service.

Attribute sets, content item records, and the request/response
structures passed through the recommendation pipeline.
"""

from .attributes import (
    INDUSTRY,
    COMPANY_SIZE,
    ROLE,
    DEFAULT_ATTRIBUTE_NAMES,
    AttributeSet,
    parse_attribute_value,
    sanitize_targeting,
)

from .content import (
    ContentItem,
    ContentStatus,
    markdown_to_text,
    trim_words,
)

from .recommendation_models import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    RankedPage,
    RecommendationRequest,
    RecommendationResponse,
    RecommendedPost,
    ScoredCandidate,
)

__all__ = [
    # Attributes
    "INDUSTRY",
    "COMPANY_SIZE",
    "ROLE",
    "DEFAULT_ATTRIBUTE_NAMES",
    "AttributeSet",
    "parse_attribute_value",
    "sanitize_targeting",

    # Content
    "ContentItem",
    "ContentStatus",
    "markdown_to_text",
    "trim_words",

    # Recommendation structures
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "RankedPage",
    "RecommendationRequest",
    "RecommendationResponse",
    "RecommendedPost",
    "ScoredCandidate",
]

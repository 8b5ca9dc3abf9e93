"""
Request/response structures for the recommendation pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .attributes import AttributeSet
from .content import ContentItem


DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 50


@dataclass(frozen=True)
class RecommendationRequest:
    """A requester's attributes plus pagination, already clamped."""

    attributes: AttributeSet
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    def normalized_attributes(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        return self.attributes.normalized_items()


@dataclass(slots=True)
class ScoredCandidate:
    """Content item with its (unrounded) match score."""

    item: ContentItem
    score: float

    @property
    def item_id(self) -> int:
        return self.item.id


@dataclass(slots=True)
class RankedPage:
    """One page of ranked candidates and the pre-pagination total."""

    items: List[ScoredCandidate] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class RecommendedPost:
    id: int
    title: str
    excerpt: str
    url: str
    match_score: float

    @classmethod
    def from_candidate(cls, candidate: ScoredCandidate) -> "RecommendedPost":
        item = candidate.item
        return cls(
            id=item.id,
            title=item.title,
            excerpt=item.summary_text(),
            url=item.url,
            match_score=round(candidate.score, 2),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "url": self.url,
            "match_score": self.match_score,
        }


@dataclass(frozen=True)
class RecommendationResponse:
    """The cached unit: one page of recommended posts."""

    posts: Tuple[RecommendedPost, ...]
    total: int
    page: int
    per_page: int

    @classmethod
    def build(cls, posts: Sequence[RecommendedPost], total: int, page: int, per_page: int) -> "RecommendationResponse":
        return cls(posts=tuple(posts), total=total, page=page, per_page=per_page)

    @property
    def post_ids(self) -> List[int]:
        return [post.id for post in self.posts]

    def to_dict(self) -> Dict[str, Any]:
        """Wire format returned by GET /recommendations."""
        return {
            "posts": [post.to_dict() for post in self.posts],
            "total": self.total,
            "page": self.page,
            "per_page": self.per_page,
        }

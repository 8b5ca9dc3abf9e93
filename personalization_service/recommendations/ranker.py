"""
Ranking and pagination of candidate content items.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from ..models.attributes import AttributeSet
from ..models.content import ContentItem
from ..models.recommendation_models import RankedPage, ScoredCandidate
from .matcher import AttributeMatcher


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _recency_key(item: ContentItem) -> datetime:
    published = item.published_at
    if published is None:
        return _OLDEST
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def paginate(candidates: Sequence[ScoredCandidate], page: int, per_page: int) -> list[ScoredCandidate]:
    offset = (page - 1) * per_page
    return list(candidates[offset:offset + per_page])


class Ranker:
    """Orders candidates by match score, or by recency when no attributes are given.

    The mode is chosen from how many attributes the requester specified,
    not from scores: a 0.0 score in filter-free mode carries no ranking
    meaning, while in scored mode it means "nothing matched".
    """

    def __init__(self, matcher: Optional[AttributeMatcher] = None):
        self.matcher = matcher or AttributeMatcher()

    def rank(
        self,
        candidates: Sequence[ContentItem],
        requester: AttributeSet,
        page: int,
        per_page: int,
    ) -> RankedPage:
        published = [item for item in candidates if item.is_published]
        if not published:
            return RankedPage(items=[], total=0)

        if requester.compared_count == 0:
            scored = self._rank_by_recency(published)
        else:
            scored = self._rank_by_score(published, requester)

        return RankedPage(items=paginate(scored, page, per_page), total=len(scored))

    def _rank_by_recency(self, items: Sequence[ContentItem]) -> list[ScoredCandidate]:
        # Untargeted items are only excluded in this mode.
        eligible = [item for item in items if item.has_targeting]
        eligible.sort(key=_recency_key, reverse=True)
        return [ScoredCandidate(item=item, score=0.0) for item in eligible]

    def _rank_by_score(self, items: Sequence[ContentItem], requester: AttributeSet) -> list[ScoredCandidate]:
        scored = [
            ScoredCandidate(item=item, score=self.matcher.score(requester, item.attribute_set))
            for item in items
        ]
        # sorted() is stable with reverse=True, so ties keep input order.
        return sorted(scored, key=lambda candidate: candidate.score, reverse=True)

"""
Attribute matching between a requester and a content item.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..models.attributes import AttributeSet, DEFAULT_ATTRIBUTE_NAMES


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Counts behind a match score."""

    matched: int
    compared: int

    @property
    def score(self) -> float:
        # compared == 0 means the requester expressed no preference.
        if self.compared == 0:
            return 0.0
        return self.matched / self.compared


class AttributeMatcher:
    """Scores how well an item's targeting fits a requester's attributes.

    Only attributes the requester specified are compared. An attribute
    matches when the two value sets share at least one member. Values are
    already lowercased and trimmed by AttributeSet, so the comparison is
    case-insensitive.
    """

    def __init__(self, attribute_names: Tuple[str, ...] = DEFAULT_ATTRIBUTE_NAMES):
        self.attribute_names = attribute_names

    def compare(self, requester: AttributeSet, item: AttributeSet) -> MatchResult:
        matched = 0
        compared = 0
        for name in self.attribute_names:
            wanted = requester.get(name)
            if not wanted:
                continue
            compared += 1
            if wanted & item.get(name):
                matched += 1
        return MatchResult(matched=matched, compared=compared)

    def score(self, requester: AttributeSet, item: AttributeSet) -> float:
        """Return the match score in [0, 1]."""
        return self.compare(requester, item).score

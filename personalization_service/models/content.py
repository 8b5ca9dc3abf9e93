"""
Content item records.

Content items are authored elsewhere; the recommendation pipeline only
reads them. Records are stored as JSON and validated with Pydantic.
"""

import html
import re
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

import markdown
from pydantic import BaseModel, Field, field_validator

from .attributes import AttributeSet, DEFAULT_ATTRIBUTE_NAMES, sanitize_targeting


EXCERPT_WORDS = 25

_TAG_RE = re.compile(r"<[^>]+>")


class ContentStatus(str, Enum):
    """Publication status of a content item."""
    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"


class ContentItem(BaseModel):
    """A recommendable content item with its audience targeting."""
    id: int = Field(ge=1, description="Content item identifier")
    title: str = Field(description="Display title")
    excerpt: Optional[str] = Field(default=None, description="Hand-written summary, if any")
    body: str = Field(default="", description="Markdown body, used when no excerpt is set")
    url: str = Field(description="Public URL of the item")
    status: ContentStatus = Field(default=ContentStatus.DRAFT, description="Publication status")
    published_at: Optional[datetime] = Field(default=None, description="Publish timestamp")
    targeting: Dict[str, str] = Field(
        default_factory=dict,
        description="Attribute name -> comma-separated target values",
    )

    @field_validator("targeting", mode="before")
    @classmethod
    def _clean_targeting(cls, value):
        if value is None:
            return {}
        unknown = [name for name in value if name not in DEFAULT_ATTRIBUTE_NAMES]
        if unknown:
            raise ValueError(f"Unknown targeting attribute(s): {', '.join(sorted(unknown))}")
        return sanitize_targeting(value)

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISH

    @property
    def attribute_set(self) -> AttributeSet:
        return AttributeSet.from_raw(self.targeting)

    @property
    def has_targeting(self) -> bool:
        return not self.attribute_set.is_empty()

    def summary_text(self) -> str:
        """Excerpt for listings: the explicit excerpt or the trimmed body."""
        if self.excerpt and self.excerpt.strip():
            return self.excerpt.strip()
        return trim_words(markdown_to_text(self.body), EXCERPT_WORDS)


def markdown_to_text(body: str) -> str:
    """Render markdown and strip the resulting HTML tags."""
    if not body:
        return ""
    rendered = markdown.markdown(body)
    return " ".join(html.unescape(_TAG_RE.sub(" ", rendered)).split())


def trim_words(text: str, num_words: int, more: str = "…") -> str:
    words = text.split()
    if len(words) <= num_words:
        return " ".join(words)
    return " ".join(words[:num_words]) + more

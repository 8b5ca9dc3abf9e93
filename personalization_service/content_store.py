"""
Content item storage.

The recommendation pipeline talks to storage through the ContentStore
protocol. JsonContentStore keeps one `<id>.json` record per item in a
directory, validated with the ContentItem Pydantic model.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from .errors import UpstreamError
from .json_files import write_json_atomic
from .models.attributes import sanitize_targeting
from .models.content import ContentItem

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    """Read/write access to content items."""

    def query_eligible_items(self, eligible_only: bool) -> List[ContentItem]:
        """Return published items; with eligible_only, only those carrying targeting."""

    def get_item(self, item_id: int) -> Optional[ContentItem]:
        ...

    def list_items(self) -> List[ContentItem]:
        ...

    def save_item(self, item: ContentItem) -> None:
        ...

    def update_targeting(self, item_id: int, targeting: Mapping[str, Any]) -> Optional[ContentItem]:
        ...


class JsonContentStore:
    """Directory-backed content store."""

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)
        self._lock = Lock()

    def _item_file(self, item_id: int) -> Path:
        return self.content_dir / f"{int(item_id)}.json"

    def _load_file(self, path: Path) -> Optional[ContentItem]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return ContentItem.model_validate(data)
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning(f"Skipping unreadable content record {path.name}: {e}")
            return None

    def list_items(self) -> List[ContentItem]:
        """Load every item, ordered by id."""
        if not self.content_dir.is_dir():
            raise UpstreamError(f"Content directory not found: {self.content_dir}")
        try:
            paths = sorted(self.content_dir.glob("*.json"))
        except OSError as e:
            raise UpstreamError(f"Failed to scan content directory: {e}") from e

        items: List[ContentItem] = []
        for path in paths:
            try:
                item = self._load_file(path)
            except OSError as e:
                raise UpstreamError(f"Failed to read {path.name}: {e}") from e
            if item is not None:
                items.append(item)
        items.sort(key=lambda item: item.id)
        return items

    def query_eligible_items(self, eligible_only: bool) -> List[ContentItem]:
        items = [item for item in self.list_items() if item.is_published]
        if eligible_only:
            items = [item for item in items if item.has_targeting]
        return items

    def get_item(self, item_id: int) -> Optional[ContentItem]:
        path = self._item_file(item_id)
        if not path.exists():
            return None
        return self._load_file(path)

    def save_item(self, item: ContentItem) -> None:
        with self._lock:
            write_json_atomic(self._item_file(item.id), item.model_dump(mode="json"))

    def update_targeting(self, item_id: int, targeting: Mapping[str, Any]) -> Optional[ContentItem]:
        """Replace the given targeting attributes; others are left untouched.

        Returns the updated item, or None if the item does not exist.
        """
        item = self.get_item(item_id)
        if item is None:
            return None
        merged: Dict[str, str] = dict(item.targeting)
        merged.update(sanitize_targeting(targeting))
        updated = item.model_copy(update={"targeting": {k: v for k, v in merged.items() if v}})
        self.save_item(updated)
        logger.info(f"Updated targeting for item {item_id}: {updated.targeting}")
        return updated

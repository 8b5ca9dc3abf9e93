"""
Impression and click counters for measuring recommendation effectiveness.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Protocol

from .json_files import write_json_atomic

logger = logging.getLogger(__name__)


class AnalyticsRecorder(Protocol):
    """Counting contract the recommendation service relies on."""

    def record_impressions(self, item_ids: Iterable[int]) -> None:
        ...

    def record_click(self, item_id: int) -> None:
        ...

    def get_impressions(self, item_id: int) -> int:
        ...

    def get_clicks(self, item_id: int) -> int:
        ...

    def get_ctr(self, item_id: int) -> Optional[float]:
        ...


class CounterAnalytics:
    """Thread-safe counters, optionally persisted to a JSON file.

    Every increment happens under a single lock, so concurrent requests
    never lose updates. With a counts file, the file is rewritten inside
    the same lock after each batch.
    """

    def __init__(self, counts_file: Optional[Path] = None):
        self.counts_file = counts_file
        self._lock = Lock()
        self._impressions: Dict[int, int] = {}
        self._clicks: Dict[int, int] = {}
        self._load()

    def _load(self) -> None:
        if not self.counts_file or not self.counts_file.exists():
            return
        try:
            data = json.loads(self.counts_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt analytics file {self.counts_file}: {e}")
            return
        self._impressions = {int(k): int(v) for k, v in data.get("impressions", {}).items()}
        self._clicks = {int(k): int(v) for k, v in data.get("clicks", {}).items()}

    def _save(self) -> None:
        if not self.counts_file:
            return
        data = {
            "impressions": {str(k): v for k, v in self._impressions.items()},
            "clicks": {str(k): v for k, v in self._clicks.items()},
        }
        write_json_atomic(self.counts_file, data)

    def record_impressions(self, item_ids: Iterable[int]) -> None:
        """Count one impression for each id returned to a caller."""
        ids = [int(item_id) for item_id in item_ids if int(item_id) > 0]
        if not ids:
            return
        with self._lock:
            for item_id in ids:
                self._impressions[item_id] = self._impressions.get(item_id, 0) + 1
            self._save()

    def record_click(self, item_id: int) -> None:
        item_id = int(item_id)
        if item_id <= 0:
            return
        with self._lock:
            self._clicks[item_id] = self._clicks.get(item_id, 0) + 1
            self._save()

    def get_impressions(self, item_id: int) -> int:
        with self._lock:
            return self._impressions.get(int(item_id), 0)

    def get_clicks(self, item_id: int) -> int:
        with self._lock:
            return self._clicks.get(int(item_id), 0)

    def get_ctr(self, item_id: int) -> Optional[float]:
        """Click-through rate in [0, 1], or None when there are no impressions."""
        impressions = self.get_impressions(item_id)
        if impressions <= 0:
            return None
        return self.get_clicks(item_id) / impressions

    def get_all_impressions(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._impressions)

    def get_all_clicks(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._clicks)


def effectiveness_report(
    analytics: CounterAnalytics,
    content_store,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Impressions, clicks and CTR for every item with recorded activity.

    Rows are ordered by id, newest first. `ctr` is None for items that were
    clicked but never shown.
    """
    impressions = analytics.get_all_impressions()
    clicks = analytics.get_all_clicks()
    item_ids = sorted(set(impressions) | set(clicks), reverse=True)
    if limit is not None:
        item_ids = item_ids[:limit]

    rows = []
    for item_id in item_ids:
        item = content_store.get_item(item_id)
        rows.append({
            "id": item_id,
            "title": item.title if item else f"#{item_id}",
            "impressions": impressions.get(item_id, 0),
            "clicks": clicks.get(item_id, 0),
            "ctr": analytics.get_ctr(item_id),
        })
    return rows

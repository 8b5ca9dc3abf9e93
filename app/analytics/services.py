"""
Effectiveness reporting built on the impression/click counters.
"""
from typing import Any, Dict, List

from personalization_service.analytics import CounterAnalytics, effectiveness_report
from personalization_service.content_store import ContentStore


class AnalyticsReportService:
    """Per-item impressions, clicks and CTR for the admin report."""

    def __init__(self, analytics: CounterAnalytics, content_store: ContentStore):
        self.analytics = analytics
        self.content_store = content_store

    def build_report(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Rows for every item with recorded activity, newest ids first.

        Args:
            limit: Maximum number of rows to return

        Returns:
            List of dicts with id, title, impressions, clicks, ctr_percent
        """
        rows = []
        for row in effectiveness_report(self.analytics, self.content_store, limit=limit):
            ctr = row.pop("ctr")
            row["ctr_percent"] = round(ctr * 100, 1) if ctr is not None else None
            rows.append(row)
        return rows

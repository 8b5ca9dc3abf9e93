#!/usr/bin/env python3
"""
Management script for the Personalization API:
- generate-key: create and store a new API key (printed once)
- show-key: show the masked current key
- stats: impressions, clicks and CTR per content item
- list-items: content items and their targeting
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config_manager import get_paths_config
from personalization_service.analytics import CounterAnalytics, effectiveness_report
from personalization_service.api_keys import ApiKeyStore, mask_api_key
from personalization_service.content_store import JsonContentStore
from personalization_service.errors import UpstreamError

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    paths = get_paths_config()

    parser = argparse.ArgumentParser(description="Personalization API management script")
    parser.add_argument("--data-dir", type=Path, default=Path(paths.data_dir),
                        help="Directory holding the API key and analytics files")
    parser.add_argument("--content-dir", type=Path, default=Path(paths.content_dir),
                        help="Directory containing content item records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("generate-key", help="Generate and store a new API key")
    subparsers.add_parser("show-key", help="Show the masked current API key")
    subparsers.add_parser("stats", help="Show impressions, clicks and CTR per item")
    list_parser = subparsers.add_parser("list-items", help="List content items and their targeting")
    list_parser.add_argument("--eligible-only", action="store_true",
                             help="Only published items with at least one targeting attribute")

    args = parser.parse_args(argv)

    key_store = ApiKeyStore(args.data_dir / "api_key.json")

    if args.command == "generate-key":
        # A running server keeps serving cached responses until their TTL
        # expires; use POST /admin/api-key to rotate and flush together.
        key = key_store.rotate()
        print(key)
        return 0

    if args.command == "show-key":
        print(mask_api_key(key_store.get_key()) or "(no key set)")
        return 0

    store = JsonContentStore(args.content_dir)

    if args.command == "stats":
        analytics = CounterAnalytics(args.data_dir / "analytics.json")
        rows = effectiveness_report(analytics, store)
        for row in rows:
            row["ctr"] = f"{row['ctr'] * 100:.1f}%" if row["ctr"] is not None else "-"
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return 0

    if args.command == "list-items":
        try:
            if args.eligible_only:
                items = store.query_eligible_items(eligible_only=True)
            else:
                items = store.list_items()
        except UpstreamError as e:
            logger.error(str(e))
            return 1
        rows = [
            {"id": item.id, "title": item.title, "status": item.status.value, "targeting": item.targeting}
            for item in items
        ]
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())

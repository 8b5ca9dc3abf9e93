"""
Tests for the management CLI.
"""

import json
import re

from manage_api import main
from personalization_service.analytics import CounterAnalytics
from personalization_service.api_keys import ApiKeyStore


def _seed_content(content_dir):
    content_dir.mkdir()
    records = [
        {"id": 1, "title": "Targeted", "url": "https://example.com/1", "status": "publish",
         "targeting": {"industry": "Tech"}},
        {"id": 2, "title": "Plain", "url": "https://example.com/2", "status": "publish"},
    ]
    for record in records:
        (content_dir / f"{record['id']}.json").write_text(json.dumps(record), encoding="utf-8")


def test_generate_and_show_key(tmp_path, capsys):
    data_dir = tmp_path / "data"

    assert main(["--data-dir", str(data_dir), "generate-key"]) == 0
    key = capsys.readouterr().out.strip()
    assert re.fullmatch(r"[0-9a-f]{64}", key)
    assert ApiKeyStore(data_dir / "api_key.json").verify(key)

    assert main(["--data-dir", str(data_dir), "show-key"]) == 0
    assert capsys.readouterr().out.strip() == f"{key[:8]}...{key[-4:]}"


def test_show_key_without_key(tmp_path, capsys):
    assert main(["--data-dir", str(tmp_path), "show-key"]) == 0
    assert capsys.readouterr().out.strip() == "(no key set)"


def test_stats_formats_ctr(tmp_path, capsys):
    content_dir = tmp_path / "content"
    data_dir = tmp_path / "data"
    _seed_content(content_dir)
    analytics = CounterAnalytics(data_dir / "analytics.json")
    analytics.record_impressions([1, 1, 1, 1])
    analytics.record_click(1)

    assert main(["--data-dir", str(data_dir), "--content-dir", str(content_dir), "stats"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [{"id": 1, "title": "Targeted", "impressions": 4, "clicks": 1, "ctr": "25.0%"}]


def test_list_items(tmp_path, capsys):
    content_dir = tmp_path / "content"
    _seed_content(content_dir)

    assert main(["--content-dir", str(content_dir), "list-items"]) == 0
    assert [row["id"] for row in json.loads(capsys.readouterr().out)] == [1, 2]

    assert main(["--content-dir", str(content_dir), "list-items", "--eligible-only"]) == 0
    assert [row["id"] for row in json.loads(capsys.readouterr().out)] == [1]


def test_list_items_missing_directory(tmp_path):
    assert main(["--content-dir", str(tmp_path / "missing"), "list-items"]) == 1

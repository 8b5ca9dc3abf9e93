"""
Tests for atomic JSON state file writes.
"""

import json
from unittest.mock import patch

import pytest

from personalization_service.json_files import write_json_atomic


class TestWriteJsonAtomic:
    def test_creates_parent_and_writes(self, tmp_path):
        target = tmp_path / "data" / "state.json"
        write_json_atomic(target, {"a": 1})

        assert json.loads(target.read_text(encoding="utf-8")) == {"a": 1}
        assert [p.name for p in target.parent.iterdir()] == ["state.json"]

    def test_failed_write_keeps_previous_content(self, tmp_path):
        target = tmp_path / "state.json"
        write_json_atomic(target, {"version": 1})

        with patch("personalization_service.json_files.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                write_json_atomic(target, {"version": 2})

        assert json.loads(target.read_text(encoding="utf-8")) == {"version": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_unserializable_data_leaves_no_temp_file(self, tmp_path):
        target = tmp_path / "state.json"
        with pytest.raises(TypeError):
            write_json_atomic(target, {"bad": object()})

        assert list(tmp_path.iterdir()) == []

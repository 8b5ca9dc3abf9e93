"""
Tests for API key generation, storage and verification.
"""

import re
import threading

from personalization_service.api_keys import ApiKeyStore, generate_api_key, mask_api_key


class TestApiKeys:
    def test_generated_key_is_64_hex_chars(self):
        key = generate_api_key()
        assert re.fullmatch(r"[0-9a-f]{64}", key)
        assert generate_api_key() != key

    def test_mask_shows_prefix_and_suffix_only(self):
        key = "abcdef0123456789" * 4
        masked = mask_api_key(key)
        assert masked == "abcdef01...6789"
        assert mask_api_key(None) is None
        assert mask_api_key("") is None


class TestApiKeyStore:
    def test_missing_file_means_no_key(self, tmp_path):
        store = ApiKeyStore(tmp_path / "api_key.json")
        assert store.get_key() is None
        assert store.verify("anything") is False

    def test_rotate_stores_and_verifies(self, tmp_path):
        store = ApiKeyStore(tmp_path / "data" / "api_key.json")
        key = store.rotate()

        assert store.get_key() == key
        assert store.verify(key) is True
        assert store.verify(key.upper()) is False
        assert store.verify("") is False
        assert store.verify(None) is False

    def test_rotate_invalidates_previous_key(self, tmp_path):
        store = ApiKeyStore(tmp_path / "api_key.json")
        old_key = store.rotate()
        new_key = store.rotate()

        assert store.verify(new_key) is True
        assert store.verify(old_key) is False

    def test_corrupt_file_means_no_key(self, tmp_path):
        key_file = tmp_path / "api_key.json"
        key_file.write_text("not json", encoding="utf-8")
        assert ApiKeyStore(key_file).get_key() is None


def test_concurrent_rotation_never_exposes_a_missing_key(tmp_path):
    store = ApiKeyStore(tmp_path / "api_key.json")
    store.rotate()
    stop = threading.Event()

    def rotate_loop():
        while not stop.is_set():
            store.rotate()

    rotator = threading.Thread(target=rotate_loop)
    rotator.start()
    try:
        missing = sum(1 for _ in range(2000) if store.get_key() is None)
    finally:
        stop.set()
        rotator.join()

    assert missing == 0
    assert [p.name for p in tmp_path.iterdir()] == ["api_key.json"]

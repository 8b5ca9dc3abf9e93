"""
Shared-secret API key management.

The key is 32 random bytes, hex encoded. Verification uses a
constant-time comparison.
"""

import hmac
import json
import logging
import secrets
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Optional

from .json_files import write_json_atomic

logger = logging.getLogger(__name__)

API_KEY_BYTES = 32


def generate_api_key() -> str:
    """Return a new 64-character hex API key."""
    return secrets.token_hex(API_KEY_BYTES)


def mask_api_key(key: Optional[str]) -> Optional[str]:
    if not key:
        return None
    return f"{key[:8]}...{key[-4:]}"


class ApiKeyStore:
    """Stores the current API key in a small JSON file."""

    def __init__(self, key_file: Path):
        self.key_file = Path(key_file)
        self._lock = Lock()

    def get_key(self) -> Optional[str]:
        try:
            data = json.loads(self.key_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            logger.warning(f"API key file is corrupt, treating as unset: {e}")
            return None
        return data.get("api_key") or None

    def set_key(self, key: str) -> None:
        with self._lock:
            payload = {"api_key": key, "updated_at": datetime.now().isoformat()}
            write_json_atomic(self.key_file, payload)

    def rotate(self) -> str:
        """Generate, store and return a new key."""
        key = generate_api_key()
        self.set_key(key)
        logger.info("API key rotated")
        return key

    def verify(self, candidate: Optional[str]) -> bool:
        """Constant-time check of a presented key against the stored one."""
        if not candidate:
            return False
        stored = self.get_key()
        if not stored:
            return False
        return hmac.compare_digest(stored.encode("utf-8"), str(candidate).encode("utf-8"))

"""
Request authorization for the personalization API.

A request is authorized by an authenticated session (a `uid` cookie naming
a configured reader or admin) or by the shared API key, sent in the
`X-API-Key` header or the `api_key` query parameter.
"""
from typing import List, Optional

from flask import request

from personalization_service.api_keys import ApiKeyStore


class RequestAuthorizer:
    """Decides whether the current request may use the API."""

    API_KEY_HEADER = "X-API-Key"
    API_KEY_PARAM = "api_key"

    def __init__(
        self,
        api_key_store: ApiKeyStore,
        admin_user_ids: List[str],
        reader_user_ids: Optional[List[str]] = None,
    ):
        self.api_key_store = api_key_store
        self.admin_user_ids = [uid.strip() for uid in admin_user_ids]
        self.reader_user_ids = [uid.strip() for uid in (reader_user_ids or [])]

    def get_current_user_id(self) -> Optional[str]:
        """Get the current user ID from cookies."""
        uid = request.cookies.get("uid")
        return uid.strip() if uid else None

    def is_admin_user(self, uid: Optional[str]) -> bool:
        return bool(uid) and uid.strip() in self.admin_user_ids

    def has_session(self) -> bool:
        uid = self.get_current_user_id()
        if not uid:
            return False
        return uid in self.reader_user_ids or self.is_admin_user(uid)

    def get_api_key_from_request(self) -> str:
        header = request.headers.get(self.API_KEY_HEADER)
        if header:
            return header
        return request.args.get(self.API_KEY_PARAM, "") or ""

    def is_authorized(self) -> bool:
        if self.has_session():
            return True
        return self.api_key_store.verify(self.get_api_key_from_request())

    def is_admin(self) -> bool:
        return self.is_admin_user(self.get_current_user_id())

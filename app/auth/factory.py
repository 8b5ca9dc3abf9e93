"""
Factory for creating the auth module.
"""
from typing import List, Optional

from personalization_service.api_keys import ApiKeyStore

from .services import RequestAuthorizer


def create_auth_module(
    api_key_store: ApiKeyStore,
    admin_user_ids: List[str],
    reader_user_ids: Optional[List[str]] = None,
) -> dict:
    """Create the auth module.

    Returns:
        Dictionary containing the authorizer service
    """
    authorizer = RequestAuthorizer(
        api_key_store=api_key_store,
        admin_user_ids=admin_user_ids,
        reader_user_ids=reader_user_ids,
    )
    return {
        "service": authorizer,
    }

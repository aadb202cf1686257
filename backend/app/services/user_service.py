"""
User service layer for the point balance.
"""

from app.core.state_store import StateStore
from app.models.user import UserInfo


def get_user_info(store: StateStore) -> UserInfo:
    """
    Get the current user info.

    Args:
        store: State store

    Returns:
        UserInfo held in memory
    """
    return store.user_info

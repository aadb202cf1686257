"""
Shared route dependencies.
"""

from fastapi import Request

from app.core.state_store import StateStore


def get_state_store(request: Request) -> StateStore:
    """
    Dependency function to get the application's state store.

    Usage:
        @router.get("/api/bots")
        async def list_bots(store: StateStore = Depends(get_state_store)):
            return store.bots
    """
    return request.app.state.store

"""
User API endpoints.

Exposes the single user's point balance.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from typing import Union

from app.api.deps import get_state_store
from app.core.state_store import StateStore
from app.services import user_service


router = APIRouter(prefix="/api/user", tags=["user"])


class UserInfoResponse(BaseModel):
    """Response model for user info."""
    model_config = ConfigDict(populate_by_name=True)

    points: Union[int, float]
    user_id: str = Field(alias="userId")


@router.get("", response_model=UserInfoResponse)
async def get_user_info(store: StateStore = Depends(get_state_store)):
    """
    Get the current point balance.

    Args:
        store: State store

    Returns:
        User info object
    """
    return user_service.get_user_info(store).to_dict()

"""
Bot API endpoints.

Provides private bot creation, verification and listing.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

from app.api.deps import get_state_store
from app.config import get_settings
from app.core.state_store import StateStore
from app.services import bot_service


router = APIRouter(prefix="/api/bots", tags=["bots"])
settings = get_settings()


# Request/Response models
class CreateBotRequest(BaseModel):
    """Request model for creating a bot."""
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = Field(None, description="Bot label")
    is_private: Any = Field(None, alias="isPrivate", description="Private checkbox (must be checked)")
    user_id: Optional[str] = Field(None, alias="userId", description="Owner identifier (defaults to guest)")


class BotResponse(BaseModel):
    """Response model for bot data."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    status: str
    created_at: str = Field(alias="createdAt")
    verification_deadline: str = Field(alias="verificationDeadline")
    is_private: bool = Field(alias="isPrivate")
    user_id: str = Field(alias="userId")


class CreateBotResponse(BaseModel):
    """Response model for a created bot."""
    message: str
    bot: BotResponse


class MessageResponse(BaseModel):
    message: str


@router.post("", response_model=CreateBotResponse)
async def create_bot(
    request: CreateBotRequest,
    store: StateStore = Depends(get_state_store)
):
    """
    Create a new private bot, deducting its cost from the user's points.

    Args:
        request: Bot creation request
        store: State store

    Returns:
        Confirmation message and the created bot

    Raises:
        400: A creation check failed
        500: Points or bot list could not be saved
    """
    bot = await bot_service.create_bot(
        store,
        username=request.username,
        is_private=request.is_private,
        user_id=request.user_id,
    )
    return {
        "message": f"Bot {bot.username} created successfully! {settings.quota.BOT_COST} points deducted.",
        "bot": bot.to_dict(),
    }


@router.get("", response_model=List[BotResponse])
async def list_bots(store: StateStore = Depends(get_state_store)):
    """
    List all bots in creation order.

    Args:
        store: State store

    Returns:
        List of bot objects
    """
    return [bot.to_dict() for bot in bot_service.get_bots(store)]


@router.post("/verify/{bot_id}", response_model=MessageResponse)
async def verify_bot(
    bot_id: str,
    store: StateStore = Depends(get_state_store)
):
    """
    Mark a bot as verified.

    Args:
        bot_id: Bot ID to verify
        store: State store

    Returns:
        Confirmation message

    Raises:
        404: Bot not found
        500: Bot list could not be saved
    """
    bot = await bot_service.verify_bot(store, bot_id)
    return {"message": f"Bot {bot.username} verified successfully!"}

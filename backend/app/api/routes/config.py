"""
Configuration API endpoints.

Provides the creation limits and cost to clients.
"""

from fastapi import APIRouter
from typing import Dict, Any

from app.config import get_settings

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/limits")
async def get_limits() -> Dict[str, Any]:
    """
    Get bot creation limits.

    Returns the same values the creation checks use, so a client can show
    remaining capacity and the cost before submitting.

    Returns:
        dict: Limits, cost and verification window
    """
    quota = get_settings().quota

    return {
        "maxBots": quota.MAX_BOTS,
        "maxPrivateBots": quota.MAX_PRIVATE_BOTS,
        "botCost": quota.BOT_COST,
        "verificationWindowHours": quota.VERIFICATION_WINDOW_HOURS,
        "defaultUserId": quota.DEFAULT_USER_ID,
    }

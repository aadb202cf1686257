"""
Bot service layer for bot management operations.

Handles private bot creation (quota checks, point deduction and rollback
when a document write fails), verification and listing.
"""

import logging
from typing import Any, List, Optional

from app.config import get_settings
from app.core.exceptions import (
    DocumentWriteError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.core.state_store import StateStore
from app.models.bot import BotRecord

logger = logging.getLogger(__name__)
settings = get_settings()


def validate_create_request(
    store: StateStore,
    username: Optional[str],
    is_private: Any,
    user_id: str,
) -> None:
    """
    Run the creation checks in order, stopping at the first failure.

    Args:
        store: State to check against
        username: Requested bot label
        is_private: Private checkbox value (must be truthy)
        user_id: Owner the private quota is counted for

    Raises:
        ValidationError: If any check fails
    """
    quota = settings.quota

    if not is_private:
        raise ValidationError(
            "Private bot checkbox must be checked.",
            code="private_flag_required",
        )

    if not username:
        raise ValidationError(
            "Please enter a username for the bot.",
            code="username_required",
        )

    if store.bot_count >= quota.MAX_BOTS:
        raise ValidationError(
            f"Maximum bot limit ({quota.MAX_BOTS}) reached!",
            code="bot_limit_reached",
            details={"bot_count": store.bot_count},
        )

    private_count = store.private_bot_count(user_id)
    if private_count >= quota.MAX_PRIVATE_BOTS:
        raise ValidationError(
            f"Maximum private bot limit ({quota.MAX_PRIVATE_BOTS}) reached!",
            code="private_bot_limit_reached",
            details={"user_id": user_id, "private_bot_count": private_count},
        )

    points = store.user_info.points
    if not isinstance(points, (int, float)) or points != points or points < quota.BOT_COST:
        raise ValidationError(
            f"Insufficient points! You need {quota.BOT_COST} points to create a private bot. "
            f"Current points: {points or 0}",
            code="insufficient_points",
            details={"points": points},
        )


async def create_bot(
    store: StateStore,
    username: Optional[str],
    is_private: Any,
    user_id: Optional[str] = None,
) -> BotRecord:
    """
    Create a new private bot and charge its cost.

    Points are deducted and saved first, then the bot is appended and the
    bot list saved. If either write fails, in-memory state is restored to
    what it was before the request.

    Args:
        store: State store to mutate
        username: Bot label
        is_private: Private checkbox value
        user_id: Owner identifier (defaults to "guest")

    Returns:
        Created BotRecord

    Raises:
        ValidationError: If a creation check fails (nothing is changed)
        PersistenceError: If saving points or the bot list fails
    """
    user_id = user_id or settings.quota.DEFAULT_USER_ID
    logger.info(
        f"Create bot attempt: Username={username}, Private={is_private}, UserId={user_id}, "
        f"Points={store.user_info.points}, TotalBots={store.bot_count}, "
        f"PrivateBots={store.private_bot_count(user_id)}"
    )

    try:
        validate_create_request(store, username, is_private, user_id)
    except ValidationError as e:
        logger.info(f"Create bot rejected ({e.code}): {e.message}")
        raise

    # Deduct points
    original_points = store.user_info.points
    store.user_info.points = original_points - settings.quota.BOT_COST
    try:
        await store.save_user_info()
        logger.info(f"Points saved: {store.user_info.points}")
    except DocumentWriteError as e:
        store.user_info.points = original_points
        logger.error(f"Failed to save user data (points restored to {original_points}): {e}")
        raise PersistenceError(
            "Error saving points. Please try again.",
            code="points_save_failed",
            details={"user_id": user_id, "points": original_points},
        ) from e

    # Create bot
    bot = BotRecord.create(username=username, user_id=user_id)
    store.bots.append(bot)
    try:
        await store.save_bots()
    except DocumentWriteError as e:
        store.bots.remove(bot)
        store.user_info.points = original_points
        logger.error(
            f"Failed to save bots (bot {bot.id} removed, points restored to {original_points}): {e}"
        )

        compensation_error = None
        try:
            await store.save_user_info()
        except DocumentWriteError as restore_error:
            compensation_error = restore_error
            logger.error(
                f"Failed to save restored points {original_points}; "
                f"user data on disk may be out of date: {restore_error}"
            )

        raise PersistenceError(
            "Error saving bot. Please try again.",
            code="bot_save_failed",
            details={
                "user_id": user_id,
                "bot_count": store.bot_count,
                "points": original_points,
                "points_restored_on_disk": compensation_error is None,
            },
            compensation_error=compensation_error,
        ) from e

    logger.info(f"Bot saved: {username} ({bot.id}), Private: true, UserId: {user_id}")
    return bot


async def verify_bot(store: StateStore, bot_id: str) -> BotRecord:
    """
    Mark a bot as verified.

    Verifying an already verified bot succeeds and rewrites the bot list, so
    repeating a verify whose write failed brings the document up to date.

    Args:
        store: State store to mutate
        bot_id: Bot ID to verify

    Returns:
        The verified BotRecord

    Raises:
        NotFoundError: If no bot has this ID
        PersistenceError: If saving the bot list fails
    """
    bot = store.find_bot(bot_id)
    if not bot:
        logger.warning(f"Verify requested for unknown bot {bot_id}")
        raise NotFoundError("Bot not found.", code="bot_not_found", details={"bot_id": bot_id})

    if not bot.mark_verified():
        logger.debug(f"Bot {bot_id} already verified, rewriting bot list")

    try:
        await store.save_bots()
    except DocumentWriteError as e:
        logger.error(f"Failed to save verification of bot {bot_id}: {e}")
        raise PersistenceError(
            "Error saving bot verification. Please try again.",
            code="verify_save_failed",
            details={"bot_id": bot_id},
        ) from e

    logger.info(f"Bot verified: {bot.username} ({bot_id})")
    return bot


def get_bots(store: StateStore) -> List[BotRecord]:
    """
    Get all bots in creation order.

    Args:
        store: State store

    Returns:
        List of BotRecord objects
    """
    return store.bots

"""
Bot record stored in the bot-list document.

Each bot is a private resource created by a user and waiting for (or past)
verification. Only the status field ever changes after creation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional
import time
from uuid import uuid4

from app.config import get_settings

settings = get_settings()


class BotStatus(Enum):
    """Bot verification state machine."""
    WAITING_FOR_VERIFICATION = "WaitingForVerification"  # Initial state
    VERIFIED = "Verified"  # Terminal

    @classmethod
    def _missing_(cls, value):
        # Label written by earlier releases of the service
        if value == "Waiting for Verification":
            return cls.WAITING_FOR_VERIFICATION
        return None


def _isoformat(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def generate_bot_id() -> str:
    """Timestamp-derived id with a random suffix for same-millisecond creations."""
    return f"bot_{int(time.time() * 1000)}_{uuid4().hex[:8]}"


@dataclass
class BotRecord:
    """
    A bot tracked by the ledger.

    Attributes:
        id: Unique identifier generated at creation
        username: Caller-supplied label (not unique)
        status: Verification status
        created_at: ISO-8601 creation timestamp
        verification_deadline: created_at + 24 hours (informational)
        is_private: Always True for bots created by this service
        user_id: Owner identifier
    """
    id: str
    username: str
    status: BotStatus
    created_at: str
    verification_deadline: str
    is_private: bool = True
    user_id: str = settings.quota.DEFAULT_USER_ID

    @classmethod
    def create(cls, username: str, user_id: Optional[str] = None) -> "BotRecord":
        """Build a new record waiting for verification."""
        now = datetime.now(timezone.utc)
        deadline = now + timedelta(hours=settings.quota.VERIFICATION_WINDOW_HOURS)
        return cls(
            id=generate_bot_id(),
            username=username,
            status=BotStatus.WAITING_FOR_VERIFICATION,
            created_at=_isoformat(now),
            verification_deadline=_isoformat(deadline),
            is_private=True,
            user_id=user_id or settings.quota.DEFAULT_USER_ID,
        )

    @property
    def is_verified(self) -> bool:
        return self.status is BotStatus.VERIFIED

    def mark_verified(self) -> bool:
        """
        Move the bot to Verified.

        Returns:
            True if the status changed, False if already verified
        """
        if self.is_verified:
            return False
        self.status = BotStatus.VERIFIED
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Document/wire representation (camelCase keys)."""
        return {
            "id": self.id,
            "username": self.username,
            "status": self.status.value,
            "createdAt": self.created_at,
            "verificationDeadline": self.verification_deadline,
            "isPrivate": self.is_private,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BotRecord":
        """
        Load a record from its document form, defaulting missing optional fields.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Bot record must be an object, got {type(data).__name__}")

        for key in ("id", "username", "createdAt"):
            if not data.get(key):
                raise ValueError(f"Bot record missing '{key}'")

        created_at = str(data["createdAt"])
        deadline = data.get("verificationDeadline")
        if not deadline:
            deadline = _isoformat(
                _parse_timestamp(created_at)
                + timedelta(hours=settings.quota.VERIFICATION_WINDOW_HOURS)
            )

        return cls(
            id=str(data["id"]),
            username=str(data["username"]),
            status=BotStatus(data.get("status", BotStatus.WAITING_FOR_VERIFICATION.value)),
            created_at=created_at,
            verification_deadline=str(deadline),
            is_private=bool(data.get("isPrivate", False)),
            user_id=str(data.get("userId") or settings.quota.DEFAULT_USER_ID),
        )

    def __repr__(self):
        return f"<BotRecord(id='{self.id}', username='{self.username}', status={self.status.value})>"

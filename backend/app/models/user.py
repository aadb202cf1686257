"""
User info stored in the user-info document.

A single balance of points plus a free-text identifier. There is no
authentication; the identifier is carried through as supplied.
"""

from dataclasses import dataclass
from typing import Any, Dict
import math

from app.config import get_settings

settings = get_settings()


def coerce_points(value: Any) -> int | float:
    """
    Coerce a stored balance to a non-negative number.

    Missing, non-numeric, NaN, infinite, too large to represent, boolean or
    negative values become 0.
    Integral values are returned as int.
    """
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number) if number.is_integer() else number


@dataclass
class UserInfo:
    """
    Point balance for the service's user.

    Attributes:
        points: Spendable balance, decremented by bot creation
        user_id: Free-text identifier
    """
    points: int | float = 0
    user_id: str = settings.quota.DEFAULT_USER_ID

    def to_dict(self) -> Dict[str, Any]:
        """Document/wire representation (camelCase keys)."""
        return {"points": self.points, "userId": self.user_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfo":
        """
        Load user info, coercing points and defaulting a missing identifier.

        Raises:
            ValueError: If the document is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError(f"User info must be an object, got {type(data).__name__}")
        return cls(
            points=coerce_points(data.get("points")),
            user_id=str(data.get("userId") or settings.quota.DEFAULT_USER_ID),
        )

    def __repr__(self):
        return f"<UserInfo(user_id='{self.user_id}', points={self.points})>"

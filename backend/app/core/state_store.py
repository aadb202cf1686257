"""
In-memory state for the bot ledger.

This module owns the bot list and the user info for the lifetime of the
process, loads both from their documents at startup and writes full
snapshots back after every mutation.
"""

import logging
from typing import Any, Callable, List, Optional

from app.config import StorageConfig, get_settings
from app.core.exceptions import DocumentError, StartupError
from app.models.bot import BotRecord
from app.models.user import UserInfo
from app.storage import JsonFileAdapter, dump_document, parse_document

logger = logging.getLogger(__name__)
settings = get_settings()


class StateStore:
    """
    Owns the bot list and user info held in memory.

    Mutations are made directly on ``bots`` and ``user_info`` by the bot
    workflow; ``save_bots`` and ``save_user_info`` persist the current
    snapshot and raise DocumentWriteError on failure.
    """

    def __init__(self, adapter=None, storage: Optional[StorageConfig] = None):
        """
        Initialize an empty store.

        Args:
            adapter: Persistence adapter (defaults to JsonFileAdapter)
            storage: Storage locations (defaults to global settings)
        """
        self.adapter = adapter or JsonFileAdapter()
        self.storage = storage or settings.storage
        self.bots: List[BotRecord] = []
        self.user_info = UserInfo()
        self.loaded = False

    @property
    def bot_count(self) -> int:
        return len(self.bots)

    def private_bot_count(self, user_id: Optional[str] = None) -> int:
        """
        Count private bots, optionally only those owned by user_id.

        Args:
            user_id: Owner to count for (None = all owners)
        """
        return sum(
            1 for bot in self.bots
            if bot.is_private and (user_id is None or bot.user_id == user_id)
        )

    def find_bot(self, bot_id: str) -> Optional[BotRecord]:
        """Get bot by ID, or None."""
        for bot in self.bots:
            if bot.id == bot_id:
                return bot
        return None

    # ===== Persistence =====

    def _bots_document(self) -> str:
        return dump_document([bot.to_dict() for bot in self.bots])

    def _user_document(self) -> str:
        return dump_document(self.user_info.to_dict())

    async def save_bots(self) -> None:
        """Write the bot list snapshot."""
        await self.adapter.write_document(self.storage.bot_path, self._bots_document())

    async def save_user_info(self) -> None:
        """Write the user info snapshot."""
        await self.adapter.write_document(self.storage.user_path, self._user_document())

    async def load(self) -> None:
        """
        Load both documents, creating or repairing them as needed.

        A document that cannot be read or parsed is reset to its default in
        memory and on disk without affecting the other document.

        Raises:
            StartupError: If a document cannot be created or repaired
        """
        default_bots = dump_document([])
        default_user = dump_document(UserInfo().to_dict())

        try:
            await self.adapter.ensure_exists(self.storage.bot_path, default_bots)
            await self.adapter.ensure_exists(self.storage.user_path, default_user)
        except DocumentError as e:
            logger.critical(f"Failed to initialise data files in {self.storage.DATA_DIR}: {e}")
            raise StartupError(f"Cannot initialise data files: {e}") from e

        self.bots = await self._load_document(
            self.storage.bot_path,
            parse=lambda data: [BotRecord.from_dict(item) for item in _as_list(data)],
            default=list,
            default_text=default_bots,
        )
        logger.info(
            f"Loaded bots: Total={self.bot_count}, Private={self.private_bot_count()}"
        )

        self.user_info = await self._load_document(
            self.storage.user_path,
            parse=UserInfo.from_dict,
            default=UserInfo,
            default_text=default_user,
        )
        logger.info(
            f"Loaded user data: Points={self.user_info.points}, UserId={self.user_info.user_id}"
        )

        self.loaded = True

    async def _load_document(
        self,
        path: str,
        parse: Callable[[Any], Any],
        default: Callable[[], Any],
        default_text: str,
    ) -> Any:
        try:
            text = await self.adapter.read_document(path)
            return parse(parse_document(text))
        except (DocumentError, ValueError, TypeError) as e:
            logger.error(f"Error loading {path}, resetting to default: {e}")

        try:
            await self.adapter.write_document(path, default_text)
        except DocumentError as e:
            logger.critical(f"Failed to reset {path}: {e}")
            raise StartupError(f"Cannot repair data file {path}: {e}") from e
        return default()


def _as_list(data: Any) -> list:
    if not isinstance(data, list):
        raise ValueError(f"Bot document must be an array, got {type(data).__name__}")
    return data

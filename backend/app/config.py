"""
Bot Ledger Server Configuration

This file contains all server-side configurable settings.
Environment overrides are read when the settings object is built.
"""

from dataclasses import dataclass, field
import logging
import os


@dataclass
class ServerConfig:
    """Server networking configuration."""
    HOST: str = "0.0.0.0"
    PORT: int = field(default_factory=lambda: int(os.getenv("PORT", "3001")))
    CORS_ORIGINS: tuple = ("*",)  # Any origin may call the API


@dataclass
class StorageConfig:
    """Flat-file storage locations."""
    DATA_DIR: str = field(default_factory=lambda: os.getenv("PERSISTENT_DISK_PATH", "./"))
    BOT_FILE: str = "bot_data.json"
    USER_FILE: str = "user_data.json"
    JSON_INDENT: int = 2

    @property
    def bot_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.BOT_FILE)

    @property
    def user_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.USER_FILE)


@dataclass
class QuotaConfig:
    """Bot creation limits and pricing."""
    MAX_BOTS: int = 20  # Across all users
    MAX_PRIVATE_BOTS: int = 5  # Per user
    BOT_COST: int = 250  # Points deducted per bot
    VERIFICATION_WINDOW_HOURS: int = 24
    DEFAULT_USER_ID: str = "guest"


@dataclass
class Settings:
    """Main settings container."""
    server: ServerConfig = None
    storage: StorageConfig = None
    quota: QuotaConfig = None

    # Application info
    APP_NAME: str = "BotLedger"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self):
        self.server = self.server or ServerConfig()
        self.storage = self.storage or StorageConfig()
        self.quota = self.quota or QuotaConfig()

    @property
    def log_level(self) -> int:
        """Numeric level for LOG_LEVEL, INFO when the name is not a known level."""
        level = logging.getLevelName(str(self.LOG_LEVEL).strip().upper())
        return level if isinstance(level, int) else logging.INFO


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings

"""Application settings -- reads from environment and ``.env`` file."""

from __future__ import annotations

import logging
import os
import re
from typing import ClassVar

from ..core.errors import ConfigurationError
from ..util.env_file import EnvFile
from ..util.singletons import register_singleton

logger = logging.getLogger(__name__)

_SNOWFLAKE_RE = re.compile(r"^\d{17,20}$")


def is_valid_snowflake(value: str) -> bool:
    return bool(_SNOWFLAKE_RE.match(value))


def is_valid_token(value: str) -> bool:
    # Bot tokens are three dot-separated base64 segments, or a "Bot " prefixed form.
    return len(value) > 50 and ("." in value or value.startswith("Bot "))


def mask_secret(value: str) -> str:
    if len(value) < 10:
        return "***"
    return value[:6] + "***" + value[-4:]


def _split_ids(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class Settings:

    _REQUIRED: ClassVar[tuple[str, ...]] = ("DISCORD_TOKEN", "DISCORD_CLIENT_ID")

    def __init__(self) -> None:
        self.env = EnvFile(os.getenv("DOTENV_PATH") or ".env")
        self.reload()

    def reload(self) -> None:
        e = self._read

        self.discord_token: str = e("DISCORD_TOKEN")
        self.discord_client_id: str = e("DISCORD_CLIENT_ID")
        self.dev_guild_id: str = e("DISCORD_DEV_GUILD_ID")
        self.environment: str = (e("SLASHBOT_ENV") or "production").lower()

        self._raw_developer_ids = _split_ids(e("DEVELOPER_IDS"))
        self.developer_ids: frozenset[str] = frozenset(self._raw_developer_ids)

        default_level = "DEBUG" if self.is_development else "INFO"
        self.log_level: str = (e("LOG_LEVEL") or default_level).upper()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def masked_token(self) -> str:
        return mask_secret(self.discord_token) if self.discord_token else "(not set)"

    def _read(self, key: str) -> str:
        return self.env.read(key) or os.getenv(key, "")

    def validate(self) -> None:
        """Check required keys and value formats.

        Raises :class:`ConfigurationError` listing every problem found, so
        an operator can fix the whole ``.env`` in one pass.
        """
        logger.info("[settings.validate] validating environment")
        missing = [key for key in self._REQUIRED if not self._read(key)]

        invalid: list[str] = []
        if self.discord_token and not is_valid_token(self.discord_token):
            invalid.append("DISCORD_TOKEN (invalid format)")
        if self.discord_client_id and not is_valid_snowflake(self.discord_client_id):
            invalid.append("DISCORD_CLIENT_ID (invalid format)")
        if self.dev_guild_id and not is_valid_snowflake(self.dev_guild_id):
            invalid.append("DISCORD_DEV_GUILD_ID (invalid format)")
        for dev_id in self._raw_developer_ids:
            if not is_valid_snowflake(dev_id):
                invalid.append(f"DEVELOPER_IDS contains invalid ID: {dev_id}")

        problems: list[str] = []
        if missing:
            problems.append(f"Missing required environment variables: {', '.join(missing)}")
        if invalid:
            problems.append(f"Invalid environment variables: {', '.join(invalid)}")
        if problems:
            for problem in problems:
                logger.error("[settings.validate] %s", problem)
            raise ConfigurationError("; ".join(problems))

        logger.info("[settings.validate] environment: %s", self.environment)
        logger.info("[settings.validate] client id: %s", self.discord_client_id)
        logger.info("[settings.validate] token: %s", self.masked_token)
        if self.developer_ids:
            logger.info("[settings.validate] developer ids configured: %d", len(self.developer_ids))


cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg)

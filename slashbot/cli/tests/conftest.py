"""Shared pytest fixtures for slashbot.cli tests."""

from __future__ import annotations

from pathlib import Path

import pytest

TOKEN = "MTIzNDU2Nzg5MDEyMzQ1Njc4.GaBcDe.abcdefghijklmnopqrstuvwxyz0123456789AB"
CLIENT_ID = "123456789012345678"
DEV_GUILD_ID = "222222222222222222"

_ENV_KEYS = (
    "DISCORD_TOKEN",
    "DISCORD_CLIENT_ID",
    "DISCORD_DEV_GUILD_ID",
    "DEVELOPER_IDS",
    "SLASHBOT_ENV",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    env_path = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(env_path))
    return env_path


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from slashbot.runtime.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def env_path(_isolate_env: Path) -> Path:
    return _isolate_env


@pytest.fixture()
def valid_settings(env_path: Path):
    """A Settings instance backed by a complete, valid .env file."""
    from slashbot.runtime.config.settings import Settings

    env_path.write_text(
        f"DISCORD_TOKEN={TOKEN}\n"
        f"DISCORD_CLIENT_ID={CLIENT_ID}\n"
        f"DISCORD_DEV_GUILD_ID={DEV_GUILD_ID}\n"
        "DEVELOPER_IDS=999999999999999999\n"
    )
    return Settings()

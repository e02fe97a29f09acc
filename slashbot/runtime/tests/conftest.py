"""Shared pytest fixtures for slashbot.runtime tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest

import slashbot.runtime.config.settings  # noqa: F401  (registers the cfg reset hook)
from slashbot.runtime.core.command import (
    CommandDescriptor,
    ContextRestriction,
    SlashCommand,
)
from slashbot.runtime.core.interaction import GuildInfo, InteractionRequest, UserInfo
from slashbot.runtime.core.replies import Reply

_ENV_KEYS = (
    "DISCORD_TOKEN",
    "DISCORD_CLIENT_ID",
    "DISCORD_DEV_GUILD_ID",
    "DEVELOPER_IDS",
    "SLASHBOT_ENV",
    "LOG_LEVEL",
)

USER_ID = "111111111111111111"
DEV_ID = "999999999999999999"
GUILD_ID = "222222222222222222"


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


class FakeResponder:
    """Records replies and enforces Discord's single-initial-response rule."""

    def __init__(self) -> None:
        self.replies: list[Reply] = []
        self.follow_ups: list[Reply] = []
        self.edits: list[Reply] = []
        self.deferred: bool | None = None

    @property
    def replied(self) -> bool:
        return bool(self.replies) or self.deferred is not None

    async def reply(self, reply: Reply) -> None:
        if self.replied:
            raise RuntimeError("interaction already responded to")
        self.replies.append(reply)

    async def defer(self, *, ephemeral: bool = False) -> None:
        if self.replied:
            raise RuntimeError("interaction already responded to")
        self.deferred = ephemeral

    async def follow_up(self, reply: Reply) -> None:
        if not self.replied:
            raise RuntimeError("follow-up before initial response")
        self.follow_ups.append(reply)

    async def edit(self, reply: Reply) -> None:
        if not self.replied:
            raise RuntimeError("edit before initial response")
        self.edits.append(reply)

    @property
    def initial_reply_count(self) -> int:
        return len(self.replies) + (1 if self.deferred is not None else 0)


class FakeClient:
    latency_ms = 42
    guild_count = 3
    user_count = 120
    channel_count = 17
    library_version = "discord.py 2.4.0"


@pytest.fixture()
def responder() -> FakeResponder:
    return FakeResponder()


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def make_request(responder: FakeResponder) -> Callable[..., InteractionRequest]:
    def _make(
        command_name: str = "ping",
        *,
        user_id: str = USER_ID,
        tag: str = "alice",
        guild: GuildInfo | None = GuildInfo(id=GUILD_ID, name="Test Guild"),
        granted: frozenset[str] = frozenset({"send_messages"}),
        subcommand: str | None = None,
        options: dict[str, Any] | None = None,
        client: Any = None,
    ) -> InteractionRequest:
        return InteractionRequest(
            command_name=command_name,
            user=UserInfo(id=user_id, tag=tag, display_name=tag.title()),
            responder=responder,
            guild=guild,
            granted_capabilities=granted,
            subcommand=subcommand,
            options=options or {},
            client=client,
        )

    return _make


async def _reply_ok(dispatcher: Any, request: InteractionRequest) -> None:
    await request.responder.reply(Reply.text(f"ran {request.command_name}"))


@pytest.fixture()
def make_command() -> Callable[..., SlashCommand]:
    def _make(
        name: str,
        category: str = "General",
        *,
        handler: Callable[[Any, InteractionRequest], Awaitable[None]] = _reply_ok,
        restriction: ContextRestriction = ContextRestriction.NONE,
        capabilities: frozenset[str] = frozenset(),
        description: str = "",
    ) -> SlashCommand:
        return SlashCommand(
            descriptor=CommandDescriptor(
                name=name,
                description=description or f"The {name} command",
                usage=f"/{name}",
                category=category,
            ),
            handler=handler,
            restriction=restriction,
            required_capabilities=capabilities,
        )

    return _make

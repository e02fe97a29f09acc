"""Inbound interaction model shared by the dispatcher and commands.

The gateway adapter translates platform events into these types so the
command core can be exercised without a live connection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from .replies import Reply


class Responder(Protocol):
    """Sends replies for a single interaction."""

    @property
    def replied(self) -> bool:
        """``True`` once an initial reply or a deferral has been sent."""
        ...

    async def reply(self, reply: Reply) -> None: ...

    async def defer(self, *, ephemeral: bool = False) -> None: ...

    async def follow_up(self, reply: Reply) -> None: ...

    async def edit(self, reply: Reply) -> None: ...


class ClientInfo(Protocol):
    """Read-only view of the connected client, for status commands."""

    @property
    def latency_ms(self) -> int: ...

    @property
    def guild_count(self) -> int: ...

    @property
    def user_count(self) -> int: ...

    @property
    def channel_count(self) -> int: ...

    @property
    def library_version(self) -> str: ...


@dataclass(frozen=True)
class UserInfo:
    id: str
    tag: str
    display_name: str = ""
    bot: bool = False
    avatar_url: str | None = None
    created_at: datetime | None = None
    joined_at: datetime | None = None
    roles: tuple[str, ...] = ()

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"


@dataclass(frozen=True)
class GuildInfo:
    id: str
    name: str = ""
    member_count: int = 0
    channel_count: int = 0
    role_count: int = 0
    emoji_count: int = 0
    owner_id: str = ""
    created_at: datetime | None = None
    description: str | None = None
    verification_level: str = ""
    premium_tier: int = 0
    icon_url: str | None = None


@dataclass(frozen=True)
class CapabilityContext:
    """Everything ``validate`` may consult, passed explicitly."""

    user_id: str
    guild_id: str | None = None
    granted: frozenset[str] = frozenset()
    privileged_users: frozenset[str] = frozenset()

    @property
    def in_guild(self) -> bool:
        return self.guild_id is not None

    @property
    def is_privileged(self) -> bool:
        return self.user_id in self.privileged_users


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InteractionRequest:
    command_name: str
    user: UserInfo
    responder: Responder
    guild: GuildInfo | None = None
    granted_capabilities: frozenset[str] = frozenset()
    subcommand: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    client: ClientInfo | None = None

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def capability_context(self, privileged_users: frozenset[str]) -> CapabilityContext:
        return CapabilityContext(
            user_id=self.user.id,
            guild_id=self.guild.id if self.guild else None,
            granted=self.granted_capabilities,
            privileged_users=privileged_users,
        )

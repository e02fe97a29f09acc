"""Platform-neutral reply payloads.

Commands build these values; the gateway adapter converts them into
``discord.Embed`` objects and response keyword arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# Brand colours used by the built-in commands.
BLURPLE = 0x5865F2
TEAL = 0x00AE86
ORANGE = 0xFF6B35


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass
class Embed:
    title: str = ""
    description: str = ""
    colour: int | None = None
    fields: list[EmbedField] = field(default_factory=list)
    footer: str = ""
    thumbnail_url: str | None = None
    timestamp: datetime | None = None

    def add_field(self, name: str, value: str, *, inline: bool = False) -> Embed:
        self.fields.append(EmbedField(name=name, value=value, inline=inline))
        return self


@dataclass(frozen=True)
class Reply:
    content: str | None = None
    embeds: tuple[Embed, ...] = ()
    ephemeral: bool = False

    @classmethod
    def text(cls, content: str, *, ephemeral: bool = False) -> Reply:
        return cls(content=content, ephemeral=ephemeral)

    @classmethod
    def embed(cls, embed: Embed, *, ephemeral: bool = False) -> Reply:
        return cls(embeds=(embed,), ephemeral=ephemeral)


@dataclass(frozen=True)
class Choice:
    """One autocomplete suggestion."""

    name: str
    value: str

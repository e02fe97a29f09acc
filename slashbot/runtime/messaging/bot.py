"""Discord gateway adapter -- routes interactions to the command dispatcher.

Translates ``discord.Interaction`` objects into platform-neutral
:class:`InteractionRequest` values and sends :class:`Reply` values back
through the interaction's response and follow-up webhooks.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

import discord
from discord import app_commands

from ..core.command import OptionType
from ..core.interaction import GuildInfo, InteractionRequest, UserInfo
from ..core.replies import Embed, Reply
from .dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)

MAX_AUTOCOMPLETE_CHOICES = 25
MAX_CHOICE_NAME_LENGTH = 100

# discord.py loggers that flood the console at INFO level.
_NOISY_LOGGERS = ("discord.gateway", "discord.http", "discord.client")

_CDN = "https://cdn.discordapp.com"


def quiet_noisy_loggers() -> None:
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# -- outbound --------------------------------------------------------------


def to_discord_embed(embed: Embed) -> discord.Embed:
    result = discord.Embed(
        title=embed.title or None,
        description=embed.description or None,
        colour=embed.colour,
        timestamp=embed.timestamp,
    )
    for f in embed.fields:
        result.add_field(name=f.name, value=f.value, inline=f.inline)
    if embed.footer:
        result.set_footer(text=embed.footer)
    if embed.thumbnail_url:
        result.set_thumbnail(url=embed.thumbnail_url)
    return result


def _message_kwargs(reply: Reply) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if reply.content is not None:
        kwargs["content"] = reply.content
    if reply.embeds:
        kwargs["embeds"] = [to_discord_embed(e) for e in reply.embeds]
    return kwargs


class DiscordResponder:
    """:class:`Responder` backed by a live ``discord.Interaction``."""

    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction

    @property
    def replied(self) -> bool:
        return self._interaction.response.is_done()

    async def reply(self, reply: Reply) -> None:
        await self._interaction.response.send_message(
            ephemeral=reply.ephemeral, **_message_kwargs(reply),
        )

    async def defer(self, *, ephemeral: bool = False) -> None:
        await self._interaction.response.defer(ephemeral=ephemeral, thinking=True)

    async def follow_up(self, reply: Reply) -> None:
        await self._interaction.followup.send(ephemeral=reply.ephemeral, **_message_kwargs(reply))

    async def edit(self, reply: Reply) -> None:
        await self._interaction.edit_original_response(**_message_kwargs(reply))


class DiscordClientInfo:
    """:class:`ClientInfo` backed by the connected ``discord.Client``."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    @property
    def latency_ms(self) -> int:
        latency = self._client.latency
        return round(latency * 1000) if math.isfinite(latency) else -1

    @property
    def guild_count(self) -> int:
        return len(self._client.guilds)

    @property
    def user_count(self) -> int:
        return len(self._client.users)

    @property
    def channel_count(self) -> int:
        return sum(1 for _ in self._client.get_all_channels())

    @property
    def library_version(self) -> str:
        return f"discord.py {discord.__version__}"


# -- inbound ---------------------------------------------------------------


def user_info(user: discord.User | discord.Member) -> UserInfo:
    roles = getattr(user, "roles", None) or []
    return UserInfo(
        id=str(user.id),
        tag=str(user),
        display_name=user.display_name,
        bot=user.bot,
        avatar_url=user.display_avatar.url,
        created_at=user.created_at,
        joined_at=getattr(user, "joined_at", None),
        roles=tuple(r.mention for r in roles if not r.is_default()),
    )


def guild_info(guild: discord.Guild) -> GuildInfo:
    return GuildInfo(
        id=str(guild.id),
        name=guild.name,
        member_count=guild.member_count or 0,
        channel_count=len(guild.channels),
        role_count=len(guild.roles),
        emoji_count=len(guild.emojis),
        owner_id=str(guild.owner_id or ""),
        created_at=guild.created_at,
        description=guild.description,
        verification_level=str(guild.verification_level),
        premium_tier=guild.premium_tier,
        icon_url=guild.icon.url if guild.icon else None,
    )


def resolved_user(user_id: str, resolved: dict[str, Any]) -> UserInfo | None:
    """Build a :class:`UserInfo` from the ``resolved`` block of a USER option."""
    raw_user = resolved.get("users", {}).get(user_id)
    if raw_user is None:
        return None
    raw_member = resolved.get("members", {}).get(user_id) or {}
    username = raw_user.get("username", "")
    discriminator = raw_user.get("discriminator") or "0"
    tag = username if discriminator in ("0", "0000") else f"{username}#{discriminator}"
    avatar = raw_user.get("avatar")
    joined = raw_member.get("joined_at")
    return UserInfo(
        id=user_id,
        tag=tag,
        display_name=raw_member.get("nick") or raw_user.get("global_name") or username,
        bot=bool(raw_user.get("bot", False)),
        avatar_url=f"{_CDN}/avatars/{user_id}/{avatar}.png" if avatar else None,
        created_at=discord.utils.snowflake_time(int(user_id)),
        joined_at=datetime.fromisoformat(joined) if joined else None,
        roles=tuple(f"<@&{role_id}>" for role_id in raw_member.get("roles", [])),
    )


def flatten_options(
    options: list[dict[str, Any]], resolved: dict[str, Any],
) -> tuple[str | None, dict[str, Any]]:
    """Return ``(subcommand, {option: value})`` for a command's option tree.

    Subcommand groups are joined with a space (``"group sub"``). USER
    options are replaced by :class:`UserInfo` values where resolvable.
    """
    subcommand: str | None = None
    values: dict[str, Any] = {}
    for option in options:
        kind = option.get("type")
        if kind in (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP):
            inner_sub, inner_values = flatten_options(option.get("options", []), resolved)
            subcommand = option["name"] if inner_sub is None else f"{option['name']} {inner_sub}"
            values.update(inner_values)
            continue
        value = option.get("value")
        if kind == OptionType.USER and value is not None:
            value = resolved_user(str(value), resolved) or value
        values[option["name"]] = value
    return subcommand, values


def focused_value(options: list[dict[str, Any]]) -> str:
    for option in options:
        if option.get("focused"):
            return str(option.get("value") or "")
        nested = option.get("options")
        if nested:
            found = focused_value(nested)
            if found:
                return found
    return ""


def build_request(
    interaction: discord.Interaction,
    responder: DiscordResponder,
    *,
    client: DiscordClientInfo | None = None,
) -> InteractionRequest:
    data: dict[str, Any] = dict(interaction.data or {})
    subcommand, values = flatten_options(data.get("options", []), data.get("resolved", {}))
    if interaction.guild is not None:
        guild: GuildInfo | None = guild_info(interaction.guild)
    elif interaction.guild_id is not None:
        guild = GuildInfo(id=str(interaction.guild_id))
    else:
        guild = None
    return InteractionRequest(
        command_name=data.get("name", ""),
        user=user_info(interaction.user),
        responder=responder,
        guild=guild,
        granted_capabilities=frozenset(
            name for name, granted in interaction.app_permissions if granted
        ),
        subcommand=subcommand,
        options=values,
        created_at=interaction.created_at,
        client=client,
    )


# -- client ----------------------------------------------------------------


class SlashBot(discord.Client):
    """Gateway client that hands every slash-command interaction to the dispatcher.

    discord.py runs each ``on_interaction`` event in its own task, so a
    slow command never blocks other interactions.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        *,
        intents: discord.Intents | None = None,
    ) -> None:
        super().__init__(intents=intents or discord.Intents.default())
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    async def on_ready(self) -> None:
        logger.info("[bot.ready] logged in as %s", self.user)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type is discord.InteractionType.application_command:
            await self._handle_command(interaction)
        elif interaction.type is discord.InteractionType.autocomplete:
            await self._handle_autocomplete(interaction)

    async def _handle_command(self, interaction: discord.Interaction) -> None:
        request = build_request(
            interaction, DiscordResponder(interaction), client=DiscordClientInfo(self),
        )
        try:
            await self._dispatcher.dispatch(request)
        except Exception:
            # Reply delivery failed (e.g. expired interaction token).
            logger.error(
                "[bot.interaction] failed to handle %s from %s",
                request.command_name, request.user.tag, exc_info=True,
            )

    async def _handle_autocomplete(self, interaction: discord.Interaction) -> None:
        data: dict[str, Any] = dict(interaction.data or {})
        choices = await self._dispatcher.autocomplete(
            data.get("name", ""), focused_value(data.get("options", [])),
        )
        try:
            await interaction.response.autocomplete([
                app_commands.Choice(name=c.name[:MAX_CHOICE_NAME_LENGTH], value=c.value)
                for c in choices[:MAX_AUTOCOMPLETE_CHOICES]
            ])
        except discord.HTTPException as exc:
            logger.warning("[bot.autocomplete] failed to send suggestions: %s", exc)

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        logger.error("[bot.error] unhandled error in %s", event_method, exc_info=True)

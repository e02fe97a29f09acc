"""Example command -- subcommands, options, permissions, and a server-only restriction."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..core.command import (
    CommandDescriptor,
    CommandOption,
    ContextRestriction,
    OptionType,
    SlashCommand,
    subcommand,
)
from ..core.interaction import InteractionRequest, UserInfo
from ..core.replies import BLURPLE, TEAL, Embed, Reply

if TYPE_CHECKING:
    from ..messaging.dispatcher import CommandDispatcher


def discord_timestamp(moment: datetime | None) -> str:
    """Render *moment* as a Discord full date-time mention."""
    if moment is None:
        return "Unknown"
    return f"<t:{int(moment.timestamp())}:F>"


async def cmd_example(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    if request.subcommand == "user":
        await _show_user(request)
    elif request.subcommand == "server":
        await _show_server(request)
    else:
        await request.responder.reply(Reply.text("❌ Unknown subcommand.", ephemeral=True))


async def _show_user(request: InteractionRequest) -> None:
    target = request.option("target")
    user: UserInfo = target if isinstance(target, UserInfo) else request.user

    embed = Embed(
        title="👤 User Information",
        description=f"Information about {user.tag}",
        colour=TEAL,
        thumbnail_url=user.avatar_url,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field("📊 Basic Info", "\n".join([
        f"**Username:** {user.tag}",
        f"**Display Name:** {user.display_name or user.tag}",
        f"**ID:** {user.id}",
        f"**Bot:** {'Yes' if user.bot else 'No'}",
    ]), inline=True)
    joined = discord_timestamp(user.joined_at) if user.joined_at else "Not in server"
    embed.add_field("📅 Dates", "\n".join([
        f"**Account Created:** {discord_timestamp(user.created_at)}",
        f"**Joined Server:** {joined}",
    ]), inline=True)
    if user.joined_at:
        embed.add_field("🎭 Roles", ", ".join(user.roles) or "No roles")

    await request.responder.reply(Reply.embed(embed))


async def _show_server(request: InteractionRequest) -> None:
    guild = request.guild
    if guild is None:
        await request.responder.reply(
            Reply.text("❌ This command can only be used in servers.", ephemeral=True),
        )
        return

    embed = Embed(
        title="🏰 Server Information",
        description=f"Information about {guild.name or guild.id}",
        colour=BLURPLE,
        thumbnail_url=guild.icon_url,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field("📊 Statistics", "\n".join([
        f"**Members:** {guild.member_count}",
        f"**Channels:** {guild.channel_count}",
        f"**Roles:** {guild.role_count}",
        f"**Emojis:** {guild.emoji_count}",
    ]), inline=True)
    embed.add_field("👑 Server Details", "\n".join([
        f"**Owner:** <@{guild.owner_id}>" if guild.owner_id else "**Owner:** Unknown",
        f"**Created:** {discord_timestamp(guild.created_at)}",
        f"**Verification:** {guild.verification_level or 'Unknown'}",
        f"**Boost Level:** {guild.premium_tier}",
    ]), inline=True)
    if guild.description:
        embed.add_field("📝 Description", guild.description)

    await request.responder.reply(Reply.embed(embed))


def example_command() -> SlashCommand:
    return SlashCommand(
        descriptor=CommandDescriptor(
            name="example",
            summary="Example command with advanced features",
            description="Example command demonstrating subcommands, options, and advanced features",
            usage="/example <user|server> [target]",
            examples=("/example user", "/example user target:@john", "/example server"),
            category="Example",
        ),
        handler=cmd_example,
        options=(
            subcommand(
                "user",
                "Get information about a user",
                CommandOption(
                    type=OptionType.USER,
                    name="target",
                    description="The user to get info about",
                    required=False,
                ),
            ),
            subcommand("server", "Get information about the server"),
        ),
        required_capabilities=frozenset({"send_messages"}),
        restriction=ContextRestriction.CONTEXT_ONLY,
    )

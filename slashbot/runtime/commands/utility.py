"""Utility commands -- ping, info, and help."""

from __future__ import annotations

import platform
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..core.command import (
    CommandDescriptor,
    CommandOption,
    ContextRestriction,
    OptionType,
    SlashCommand,
)
from ..core.interaction import InteractionRequest
from ..core.replies import BLURPLE, TEAL, Choice, Embed, Reply

if TYPE_CHECKING:
    from ..messaging.dispatcher import CommandDispatcher

BOOT_TIME = time.monotonic()


def format_uptime(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def _latency_text(request: InteractionRequest) -> str:
    if request.client is None or request.client.latency_ms < 0:
        return "n/a"
    return f"{request.client.latency_ms}ms"


# -- ping ------------------------------------------------------------------


async def cmd_ping(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    await request.responder.reply(Reply.text("Pinging..."))
    elapsed = datetime.now(timezone.utc) - request.created_at
    latency = max(int(elapsed.total_seconds() * 1000), 0)
    await request.responder.edit(Reply.text(
        "🏓 **Pong!**\n"
        f"📡 **Latency:** {latency}ms\n"
        f"💓 **API Latency:** {_latency_text(request)}"
    ))


# -- info ------------------------------------------------------------------


async def cmd_info(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    client = request.client
    uptime = format_uptime(int(time.monotonic() - BOOT_TIME))
    embed = Embed(
        title="🤖 Bot Information",
        description="A Discord bot built with the slashbot command template",
        colour=BLURPLE,
        footer=f"Requested by {request.user.tag}",
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field("📊 Statistics", "\n".join([
        f"**Servers:** {client.guild_count if client else 'n/a'}",
        f"**Users:** {client.user_count if client else 'n/a'}",
        f"**Channels:** {client.channel_count if client else 'n/a'}",
        f"**Uptime:** {uptime}",
    ]), inline=True)
    embed.add_field("⚙️ Technical", "\n".join([
        f"**Library:** {client.library_version if client else 'n/a'}",
        f"**Python:** {platform.python_version()}",
        f"**Commands:** {len(dispatcher.registry)}",
        f"**Ping:** {_latency_text(request)}",
    ]), inline=True)
    await request.responder.reply(Reply.embed(embed))


# -- help ------------------------------------------------------------------


async def cmd_help(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    name = request.option("command")
    if name:
        await _show_command_help(dispatcher, request, str(name).strip().lower())
    else:
        await _show_all_commands(dispatcher, request)


async def _show_command_help(
    dispatcher: CommandDispatcher, request: InteractionRequest, name: str,
) -> None:
    descriptor = dispatcher.help.describe(name)
    command = dispatcher.registry.lookup(name)
    if descriptor is None or command is None:
        await request.responder.reply(Reply.text(f"❌ Command \"{name}\" not found.", ephemeral=True))
        return

    embed = Embed(
        title=f"📖 Help: /{descriptor.name}",
        description=descriptor.description,
        colour=TEAL,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field("📋 Usage", f"`{descriptor.usage}`")
    if descriptor.examples:
        embed.add_field("🎯 Examples", "\n".join(f"`{ex}`" for ex in descriptor.examples))
    embed.add_field("📂 Category", descriptor.category, inline=True)

    if command.required_capabilities:
        embed.add_field(
            "🔒 Required Permissions", ", ".join(sorted(command.required_capabilities)), inline=True,
        )

    restrictions = []
    if command.restriction is ContextRestriction.CONTEXT_ONLY:
        restrictions.append("Server only")
    elif command.restriction is ContextRestriction.PRIVILEGED_ONLY:
        restrictions.append("Developer only")
    if restrictions:
        embed.add_field("⚠️ Restrictions", ", ".join(restrictions), inline=True)

    await request.responder.reply(Reply.embed(embed))


async def _show_all_commands(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    embed = Embed(
        title="🤖 Bot Commands",
        description="Here are all available commands, organized by category.",
        colour=BLURPLE,
        footer="Use /help command:<name> for detailed help on a specific command",
        timestamp=datetime.now(timezone.utc),
    )
    for category, entries in dispatcher.help.describe_all().items():
        embed.add_field(
            f"📂 {category}",
            "\n".join(f"`/{e.name}` - {e.description}" for e in entries),
        )
    await request.responder.reply(Reply.embed(embed))


async def complete_command_name(dispatcher: CommandDispatcher, focused: str) -> list[Choice]:
    return [
        Choice(name=f"{entry.name} - {entry.description}", value=entry.name)
        for entry in dispatcher.help.complete(focused)
    ]


# -- definitions -----------------------------------------------------------


def ping_command() -> SlashCommand:
    return SlashCommand(
        descriptor=CommandDescriptor(
            name="ping",
            summary="Check if the bot is responding",
            description="Check if the bot is responding and get latency information",
            usage="/ping",
            examples=("/ping",),
            category="Utility",
        ),
        handler=cmd_ping,
    )


def info_command() -> SlashCommand:
    return SlashCommand(
        descriptor=CommandDescriptor(
            name="info",
            summary="Get information about the bot",
            description="Get detailed information about the bot including statistics and technical details",
            usage="/info",
            examples=("/info",),
            category="Utility",
        ),
        handler=cmd_info,
    )


def help_command() -> SlashCommand:
    return SlashCommand(
        descriptor=CommandDescriptor(
            name="help",
            summary="Get help with bot commands",
            description="Get help with bot commands and see detailed usage instructions",
            usage="/help [command]",
            examples=("/help", "/help command:ping", "/help command:info"),
            category="Utility",
        ),
        handler=cmd_help,
        options=(
            CommandOption(
                type=OptionType.STRING,
                name="command",
                description="Get detailed help for a specific command",
                required=False,
                autocomplete=True,
            ),
        ),
        autocomplete_hook=complete_command_name,
    )

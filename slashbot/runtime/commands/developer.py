"""Developer-only diagnostics."""

from __future__ import annotations

import asyncio
import os
import platform
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..config.settings import cfg
from ..core.command import CommandDescriptor, ContextRestriction, SlashCommand, subcommand
from ..core.interaction import InteractionRequest
from ..core.replies import ORANGE, Embed, Reply
from .utility import BOOT_TIME, format_uptime

if TYPE_CHECKING:
    from ..messaging.dispatcher import CommandDispatcher


async def cmd_dev(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    if request.subcommand == "info":
        await _dev_info(dispatcher, request)
    elif request.subcommand == "test":
        await _dev_test(request)
    else:
        await request.responder.reply(Reply.text("❌ Unknown subcommand.", ephemeral=True))


async def _dev_info(dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
    developers = sorted(dispatcher.privileged_users)
    embed = Embed(
        title="🔧 Development Information",
        description="Internal bot information for developers",
        colour=ORANGE,
        footer=f"Requested by {request.user.tag}",
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field("🌍 Environment", "\n".join([
        f"**Mode**: {cfg.environment}",
        f"**Development**: {'Yes' if cfg.is_development else 'No'}",
        f"**Production**: {'Yes' if cfg.is_production else 'No'}",
    ]), inline=True)
    embed.add_field("👥 Developers", "\n".join([
        f"**Count**: {len(developers)}",
        f"**IDs**: {', '.join(developers) if developers else 'None configured'}",
    ]), inline=True)
    embed.add_field("⚡ Process", "\n".join([
        f"**Python**: {platform.python_version()}",
        f"**PID**: {os.getpid()}",
        f"**Uptime**: {format_uptime(int(time.monotonic() - BOOT_TIME))}",
    ]))
    await request.responder.reply(Reply.embed(embed, ephemeral=True))


async def _dev_test(request: InteractionRequest) -> None:
    started = time.perf_counter()
    await request.responder.reply(Reply.text("🧪 Running developer test...", ephemeral=True))
    await asyncio.sleep(0.1)
    duration = int((time.perf_counter() - started) * 1000)
    latency = request.client.latency_ms if request.client else -1
    await request.responder.edit(Reply.text(
        "✅ **Developer test completed!**\n\n"
        f"⏱️ **Duration**: {duration}ms\n"
        "🤖 **Bot Status**: Operational\n"
        f"📡 **API Latency**: {f'{latency}ms' if latency >= 0 else 'n/a'}\n"
        f"🔧 **Environment**: {cfg.environment}",
        ephemeral=True,
    ))


def dev_command() -> SlashCommand:
    return SlashCommand(
        descriptor=CommandDescriptor(
            name="dev",
            summary="Developer-only command for testing and debugging",
            description="Developer-only command for testing, debugging, and development information",
            usage="/dev <info|test>",
            examples=("/dev info", "/dev test"),
            category="Developer",
        ),
        handler=cmd_dev,
        options=(
            subcommand("info", "Show development information"),
            subcommand("test", "Run a test command"),
        ),
        restriction=ContextRestriction.PRIVILEGED_ONLY,
    )

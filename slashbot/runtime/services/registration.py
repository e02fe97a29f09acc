"""Bulk slash-command registration.

Publishes the registry's payloads in one idempotent PUT, which replaces
every command previously registered for the application (or guild).
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import RegistrationError
from ..core.registry import CommandRegistry
from .platform_api import DiscordApi

logger = logging.getLogger(__name__)


async def export_commands(
    registry: CommandRegistry,
    api: DiscordApi,
    application_id: str,
    *,
    guild_id: str | None = None,
) -> list[dict[str, Any]]:
    """Register every command and return the platform's echo of them.

    Any failure aborts the export and raises :class:`RegistrationError`
    naming the step (``prepare`` or ``publish``).
    """
    try:
        payloads = registry.registration_payloads()
    except Exception as exc:
        logger.error("[registration.prepare] failed to build payloads: %s", exc, exc_info=True)
        raise RegistrationError("prepare", exc) from exc

    scope = f"guild {guild_id}" if guild_id else "global"
    logger.info(
        "[registration.publish] refreshing %d application (/) commands (%s)", len(payloads), scope,
    )
    try:
        registered = await api.put_application_commands(
            application_id, payloads, guild_id=guild_id,
        )
    except Exception as exc:
        logger.error("[registration.publish] error registering commands: %s", exc)
        raise RegistrationError("publish", exc) from exc

    logger.info("[registration.publish] successfully reloaded %d application (/) commands", len(registered))
    for command in registry.all():
        logger.info(
            "[registration.publish] registered: /%s [%s] - %s",
            command.name, command.descriptor.category, command.descriptor.short_description,
        )
    return registered

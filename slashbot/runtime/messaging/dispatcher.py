"""Shared slash-command dispatcher.

Routes one interaction through lookup, validation, execution, and reply.
The dispatcher is the containment boundary: a failing command is logged
and answered with a generic notice, and never affects other interactions.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

from ..core.command import Command
from ..core.help_index import HelpIndex
from ..core.interaction import InteractionRequest
from ..core.registry import CommandRegistry
from ..core.replies import Choice, Reply

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "❌ An error occurred while executing this command."
DONE_MESSAGE = "✅ Done."


class DispatchOutcome(enum.Enum):
    UNRESOLVED = "unresolved"
    REJECTED = "rejected"
    FAILED = "failed"
    REPLIED = "replied"


class CommandDispatcher:
    def __init__(
        self,
        registry: CommandRegistry,
        privileged_users: Iterable[str] = (),
    ) -> None:
        self._registry = registry
        self._privileged = frozenset(privileged_users)
        self._help = HelpIndex(registry)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def help(self) -> HelpIndex:
        return self._help

    @property
    def privileged_users(self) -> frozenset[str]:
        return self._privileged

    async def dispatch(self, request: InteractionRequest) -> DispatchOutcome:
        name = request.command_name
        command = self._registry.lookup(name)
        if command is None:
            logger.warning("[dispatch] unknown command: %s", name)
            return DispatchOutcome.UNRESOLVED

        validation = command.validate(request.capability_context(self._privileged))
        if not validation.valid:
            logger.warning(
                "[dispatch] validation failed for %s: %s", name, validation.reason,
            )
            await request.responder.reply(Reply.text(f"❌ {validation.reason}", ephemeral=True))
            return DispatchOutcome.REJECTED

        try:
            await command.execute(self, request)
        except Exception:
            logger.error(
                "[dispatch] error executing command %s for %s",
                name, request.user.tag, exc_info=True,
            )
            await self._send_failure(request)
            return DispatchOutcome.FAILED

        if not request.responder.replied:
            logger.warning("[dispatch] command %s finished without replying", name)
            await request.responder.reply(Reply.text(DONE_MESSAGE, ephemeral=True))

        logger.info("[dispatch] executed command: %s by %s", name, request.user.tag)
        return DispatchOutcome.REPLIED

    async def autocomplete(self, command_name: str, focused: str) -> list[Choice]:
        command: Command | None = self._registry.lookup(command_name)
        if command is None:
            logger.warning("[dispatch.autocomplete] unknown command: %s", command_name)
            return []
        try:
            return await command.autocomplete(self, focused)
        except Exception:
            logger.error(
                "[dispatch.autocomplete] autocomplete failed for %s", command_name, exc_info=True,
            )
            return []

    async def _send_failure(self, request: InteractionRequest) -> None:
        notice = Reply.text(ERROR_MESSAGE, ephemeral=True)
        try:
            if request.responder.replied:
                await request.responder.follow_up(notice)
            else:
                await request.responder.reply(notice)
        except Exception as exc:
            logger.error("[dispatch] failed to send error reply: %s", exc)

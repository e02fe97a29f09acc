"""Command registry -- the single, read-only source of truth for commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from .command import Command
from .errors import DuplicateCommandError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Ordered collection of commands with a name index.

    The index is built once in the constructor. A duplicate name is a
    configuration error and aborts construction rather than shadowing the
    earlier entry.
    """

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)
        logger.info("[registry.load] loading commands...")
        index: dict[str, Command] = {}
        for command in self._commands:
            if command.name in index:
                logger.error("[registry.load] duplicate command name: %s", command.name)
                raise DuplicateCommandError(command.name)
            index[command.name] = command
            logger.info("[registry.load] loaded: %s", command.name)
        self._index = MappingProxyType(index)
        logger.info("[registry.load] loaded %d commands total", len(self._commands))

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._index

    def lookup(self, name: str) -> Command | None:
        return self._index.get(name) if isinstance(name, str) else None

    def all(self) -> tuple[Command, ...]:
        return self._commands

    def names(self) -> list[str]:
        return [command.name for command in self._commands]

    def by_category(self) -> dict[str, tuple[Command, ...]]:
        """Group commands by category.

        Categories appear in the order their first command was registered;
        commands keep registration order within a category.
        """
        groups: dict[str, list[Command]] = {}
        for command in self._commands:
            groups.setdefault(command.descriptor.category, []).append(command)
        return {category: tuple(members) for category, members in groups.items()}

    def registration_payloads(self) -> list[dict[str, Any]]:
        logger.info("[registry.export] preparing command registration data")
        payloads = []
        for command in self._commands:
            logger.debug("[registry.export] processing: %s", command.name)
            payloads.append(command.registration_payload())
        return payloads

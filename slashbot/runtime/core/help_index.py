"""Help index -- a derived, stateless view over the command registry."""

from __future__ import annotations

from dataclasses import dataclass

from .command import CommandDescriptor
from .registry import CommandRegistry

# Discord shows at most 25 autocomplete suggestions.
MAX_SUGGESTIONS = 25


@dataclass(frozen=True)
class HelpEntry:
    name: str
    description: str
    usage: str

    @classmethod
    def from_descriptor(cls, descriptor: CommandDescriptor) -> HelpEntry:
        return cls(
            name=descriptor.name,
            description=descriptor.short_description,
            usage=descriptor.usage,
        )


class HelpIndex:
    def __init__(self, registry: CommandRegistry, *, max_suggestions: int = MAX_SUGGESTIONS) -> None:
        self._registry = registry
        self._max_suggestions = max_suggestions

    def describe_all(self) -> dict[str, list[HelpEntry]]:
        return {
            category: [HelpEntry.from_descriptor(c.descriptor) for c in commands]
            for category, commands in self._registry.by_category().items()
        }

    def describe(self, name: str) -> CommandDescriptor | None:
        command = self._registry.lookup(name)
        return command.descriptor if command else None

    def complete(self, partial: str) -> list[HelpEntry]:
        """Case-insensitive prefix match in registration order, truncated."""
        prefix = (partial or "").strip().lower()
        matches: list[HelpEntry] = []
        for command in self._registry.all():
            if len(matches) >= self._max_suggestions:
                break
            if command.name.lower().startswith(prefix):
                matches.append(HelpEntry.from_descriptor(command.descriptor))
        return matches

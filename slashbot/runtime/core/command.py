"""Command contract -- descriptor, registration schema, validation, execution.

A command is a :class:`CommandDescriptor` composed with an async handler
function. ``SlashCommand`` supplies the shared behaviour (registration
payload and the validation pipeline); the handler supplies the
business logic.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError
from .interaction import CapabilityContext, InteractionRequest
from .replies import Choice

if TYPE_CHECKING:
    from ..messaging.dispatcher import CommandDispatcher

NAME_RE = re.compile(r"^[-_a-z0-9]{1,32}$")
MAX_DESCRIPTION_LENGTH = 100

# Application command type for slash commands.
CHAT_INPUT = 1

Handler = Callable[["CommandDispatcher", InteractionRequest], Awaitable[None]]
AutocompleteHook = Callable[["CommandDispatcher", str], Awaitable[list[Choice]]]


class ContextRestriction(enum.Enum):
    NONE = "none"
    CONTEXT_ONLY = "context_only"
    PRIVILEGED_ONLY = "privileged_only"


class OptionType(enum.IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


# -- registration schema ---------------------------------------------------


class CommandOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: OptionType
    name: str = Field(pattern=NAME_RE.pattern, description="Lowercase option name")
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    required: bool | None = Field(default=None, description="Whether the user must supply it")
    autocomplete: bool | None = Field(default=None, description="Ask the bot for suggestions")
    options: list[CommandOption] | None = Field(default=None, description="Subcommand options")


class RegistrationPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=NAME_RE.pattern)
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    type: int = CHAT_INPUT
    options: list[CommandOption] = Field(default_factory=list)


def subcommand(name: str, description: str, *options: CommandOption) -> CommandOption:
    return CommandOption(
        type=OptionType.SUB_COMMAND,
        name=name,
        description=description,
        options=list(options) or None,
    )


# -- descriptor & validation -----------------------------------------------


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    description: str
    usage: str
    examples: tuple[str, ...] = ()
    category: str = "General"
    summary: str = ""

    def __post_init__(self) -> None:
        if not NAME_RE.match(self.name):
            raise ConfigurationError(f"Illegal command name: {self.name!r}")
        if not self.description:
            raise ConfigurationError(f"Command {self.name!r} has no description")

    @property
    def short_description(self) -> str:
        text = self.summary or self.description
        if len(text) <= MAX_DESCRIPTION_LENGTH:
            return text
        return text[: MAX_DESCRIPTION_LENGTH - 3].rstrip() + "..."


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> ValidationResult:
        return cls(valid=False, reason=reason)


class Command(Protocol):
    """What the registry and dispatcher require of a command."""

    @property
    def descriptor(self) -> CommandDescriptor: ...

    @property
    def name(self) -> str: ...

    @property
    def required_capabilities(self) -> frozenset[str]: ...

    @property
    def restriction(self) -> ContextRestriction: ...

    def registration_payload(self) -> dict[str, Any]: ...

    def validate(self, ctx: CapabilityContext) -> ValidationResult: ...

    async def execute(self, dispatcher: CommandDispatcher, request: InteractionRequest) -> None: ...

    async def autocomplete(self, dispatcher: CommandDispatcher, focused: str) -> list[Choice]: ...


@dataclass(frozen=True)
class SlashCommand:
    descriptor: CommandDescriptor
    handler: Handler
    options: tuple[CommandOption, ...] = ()
    required_capabilities: frozenset[str] = frozenset()
    restriction: ContextRestriction = ContextRestriction.NONE
    autocomplete_hook: AutocompleteHook | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def context_only(self) -> bool:
        return self.restriction is ContextRestriction.CONTEXT_ONLY

    @property
    def privileged_only(self) -> bool:
        return self.restriction is ContextRestriction.PRIVILEGED_ONLY

    def registration_payload(self) -> dict[str, Any]:
        payload = RegistrationPayload(
            name=self.descriptor.name,
            description=self.descriptor.short_description,
            options=list(self.options),
        )
        return payload.model_dump(mode="json", exclude_none=True)

    def validate(self, ctx: CapabilityContext) -> ValidationResult:
        """Run the context, capability, and privilege checks in that order.

        The first failing check decides the reason; later checks are not
        evaluated. Never raises.
        """
        if self.context_only and not ctx.in_guild:
            return ValidationResult.reject("This command can only be used in servers.")

        missing = sorted(self.required_capabilities - ctx.granted)
        if missing:
            return ValidationResult.reject(
                f"Bot missing required permissions: {', '.join(missing)}"
            )

        if self.privileged_only and not ctx.is_privileged:
            return ValidationResult.reject("This command is for developers only.")

        return ValidationResult.ok()

    async def execute(self, dispatcher: CommandDispatcher, request: InteractionRequest) -> None:
        await self.handler(dispatcher, request)

    async def autocomplete(self, dispatcher: CommandDispatcher, focused: str) -> list[Choice]:
        if self.autocomplete_hook is None:
            return []
        return await self.autocomplete_hook(dispatcher, focused)

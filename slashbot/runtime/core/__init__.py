"""Command core -- descriptors, validation, registry, and help index."""

from .command import (
    Command,
    CommandDescriptor,
    CommandOption,
    ContextRestriction,
    OptionType,
    SlashCommand,
    ValidationResult,
    subcommand,
)
from .errors import (
    ConfigurationError,
    DuplicateCommandError,
    PlatformApiError,
    RegistrationError,
)
from .help_index import HelpEntry, HelpIndex
from .interaction import (
    CapabilityContext,
    ClientInfo,
    GuildInfo,
    InteractionRequest,
    Responder,
    UserInfo,
)
from .registry import CommandRegistry
from .replies import Choice, Embed, EmbedField, Reply

__all__ = [
    "CapabilityContext",
    "Choice",
    "ClientInfo",
    "Command",
    "CommandDescriptor",
    "CommandOption",
    "CommandRegistry",
    "ConfigurationError",
    "ContextRestriction",
    "DuplicateCommandError",
    "Embed",
    "EmbedField",
    "GuildInfo",
    "HelpEntry",
    "HelpIndex",
    "InteractionRequest",
    "OptionType",
    "PlatformApiError",
    "RegistrationError",
    "Reply",
    "Responder",
    "SlashCommand",
    "UserInfo",
    "ValidationResult",
    "subcommand",
]

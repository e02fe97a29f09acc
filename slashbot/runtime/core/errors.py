"""Exception types raised by the command core and its services."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Startup configuration is invalid; the bot must not start."""


class DuplicateCommandError(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate command name: {name!r}")
        self.name = name


class PlatformApiError(RuntimeError):
    """The Discord HTTP API answered with a non-success status."""

    def __init__(self, status: int, reason: str, body: str = "") -> None:
        super().__init__(f"Discord API error: {status} {reason} - {body}".rstrip(" -"))
        self.status = status
        self.reason = reason
        self.body = body


class RegistrationError(RuntimeError):
    """A step of the bulk command registration failed."""

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"Command registration failed during {step!r}: {cause}")
        self.step = step
        self.cause = cause

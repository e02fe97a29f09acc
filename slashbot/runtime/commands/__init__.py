"""Built-in slash commands.

Sub-modules group commands by domain:

- ``utility``   -- ping, info, help
- ``example``   -- subcommands, options, and restrictions
- ``developer`` -- developer-only diagnostics

Add a new command by writing its handler and definition function, then
appending it to :func:`default_commands`. The returned order is the
registration order used for help listings and the registration export.
"""

from __future__ import annotations

from ..core.command import SlashCommand
from .developer import dev_command
from .example import example_command
from .utility import BOOT_TIME, help_command, info_command, ping_command


def default_commands() -> list[SlashCommand]:
    return [
        ping_command(),
        info_command(),
        example_command(),
        help_command(),
        dev_command(),
    ]


__all__ = [
    "BOOT_TIME",
    "default_commands",
    "dev_command",
    "example_command",
    "help_command",
    "info_command",
    "ping_command",
]

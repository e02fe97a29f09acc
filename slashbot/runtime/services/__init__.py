"""External service clients -- Discord HTTP API and command registration."""

from .platform_api import API_BASE, DiscordApi
from .registration import export_commands

__all__ = [
    "API_BASE",
    "DiscordApi",
    "export_commands",
]

"""One-shot slash-command registration.

Publishes every built-in command to Discord in a single full-replace
call and exits non-zero on any failure.

Usage::

    slashbot-register
    slashbot-register --dev-guild
    slashbot-register --guild 123456789012345678
    slashbot-register --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from rich.console import Console

from slashbot.runtime.commands import default_commands
from slashbot.runtime.config.settings import cfg, is_valid_snowflake
from slashbot.runtime.core.errors import ConfigurationError, RegistrationError
from slashbot.runtime.core.registry import CommandRegistry
from slashbot.runtime.services.platform_api import DiscordApi
from slashbot.runtime.services.registration import export_commands

from .run import apply_env_file, configure_logging

logger = logging.getLogger(__name__)
console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slashbot-register",
        description="Register all slash commands with Discord.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--guild",
        type=str,
        default=None,
        help="Register to this guild only (updates instantly, useful while developing).",
    )
    target.add_argument(
        "--dev-guild",
        action="store_true",
        default=False,
        help="Register to the guild in DISCORD_DEV_GUILD_ID.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Print the registration payloads instead of sending them.",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Read settings from this .env file (default: DOTENV_PATH or ./.env).",
    )
    return parser


def _resolve_guild(args: argparse.Namespace) -> str | None:
    if args.guild:
        if not is_valid_snowflake(args.guild):
            raise ConfigurationError(f"Invalid guild id: {args.guild}")
        return args.guild
    if args.dev_guild:
        if not cfg.dev_guild_id:
            raise ConfigurationError("--dev-guild given but DISCORD_DEV_GUILD_ID is not set")
        return cfg.dev_guild_id
    return None


async def _run(args: argparse.Namespace) -> int:
    apply_env_file(cfg, args.env_file)
    configure_logging(cfg.log_level)

    try:
        registry = CommandRegistry(default_commands())
        if args.dry_run:
            console.print_json(json.dumps(registry.registration_payloads()))
            return 0
        cfg.validate()
        guild_id = _resolve_guild(args)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 1

    api = DiscordApi(cfg.discord_token)
    try:
        registered = await export_commands(registry, api, cfg.discord_client_id, guild_id=guild_id)
    except RegistrationError as exc:
        console.print(f"[red]Registration failed during {exc.step}:[/red] {exc.cause}")
        return 1

    scope = f"guild {guild_id}" if guild_id else "globally"
    console.print(f"[bold green]Registered {len(registered)} commands {scope}[/bold green]")
    for command in registry.all():
        console.print(
            f"  [green]✅[/green] /{command.name} [dim]\\[{command.descriptor.category}][/dim] "
            f"- {command.descriptor.short_description}"
        )
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``slashbot-register``."""
    args = _build_parser().parse_args(argv)
    try:
        code = asyncio.run(_run(args))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()

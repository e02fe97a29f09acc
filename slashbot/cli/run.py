"""Bot entry point.

Validates the environment, builds the command registry and dispatcher,
connects to the Discord gateway, and runs until SIGINT or SIGTERM.

Usage::

    slashbot-run
    slashbot-run --env-file /etc/slashbot/.env
    slashbot-run --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys

import discord
from rich.console import Console

from slashbot.runtime.commands import default_commands
from slashbot.runtime.config.settings import Settings, cfg
from slashbot.runtime.core.errors import ConfigurationError
from slashbot.runtime.core.registry import CommandRegistry
from slashbot.runtime.messaging.bot import SlashBot, quiet_noisy_loggers
from slashbot.runtime.messaging.dispatcher import CommandDispatcher
from slashbot.runtime.util.env_file import EnvFile

logger = logging.getLogger(__name__)
console = Console()

LOG_FORMAT = "%(asctime)s  %(name)s  %(levelname)s  %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    quiet_noisy_loggers()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slashbot-run",
        description="Run the slash-command bot until interrupted.",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Read settings from this .env file (default: DOTENV_PATH or ./.env).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the log level (default: LOG_LEVEL env / environment mode).",
    )
    return parser


def apply_env_file(settings: Settings, env_file: str | None) -> None:
    if env_file:
        settings.env = EnvFile(env_file)
        settings.reload()


def build_dispatcher(settings: Settings) -> CommandDispatcher:
    """Build the registry once and share it through the dispatcher."""
    registry = CommandRegistry(default_commands())
    return CommandDispatcher(registry, privileged_users=settings.developer_ids)


async def _run(args: argparse.Namespace) -> int:
    apply_env_file(cfg, args.env_file)
    configure_logging(args.log_level or cfg.log_level)

    try:
        cfg.validate()
        dispatcher = build_dispatcher(cfg)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 1

    logger.info("[cli.run] initializing bot with %d commands", len(dispatcher.registry))
    bot = SlashBot(dispatcher)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Signal handlers are unavailable on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    exit_code = 0
    async with bot:
        gateway = asyncio.create_task(bot.start(cfg.discord_token), name="gateway")
        shutdown = asyncio.create_task(stop.wait(), name="shutdown")
        done, _ = await asyncio.wait({gateway, shutdown}, return_when=asyncio.FIRST_COMPLETED)
        if shutdown in done:
            logger.info("[cli.run] received shutdown signal, shutting down gracefully...")
            await bot.close()
        else:
            shutdown.cancel()
        try:
            await gateway
        except discord.LoginFailure as exc:
            logger.error("[cli.run] failed to start bot: %s", exc)
            console.print(f"[red]Login failed:[/red] {exc}")
            exit_code = 1
        except Exception as exc:
            logger.error("[cli.run] bot stopped with error: %s", exc, exc_info=True)
            console.print(f"[red]Error:[/red] {exc}")
            exit_code = 1

    console.print("[dim]Bot stopped.[/dim]")
    return exit_code


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``slashbot-run``."""
    args = _build_parser().parse_args(argv)
    try:
        code = asyncio.run(_run(args))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()

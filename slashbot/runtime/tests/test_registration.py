"""Tests for bulk command registration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from slashbot.runtime.core.errors import PlatformApiError, RegistrationError
from slashbot.runtime.core.registry import CommandRegistry
from slashbot.runtime.services.registration import export_commands


def _api(**kwargs) -> MagicMock:
    api = MagicMock()
    api.put_application_commands = AsyncMock(**kwargs)
    return api


async def test_publishes_payloads_in_registration_order(make_command) -> None:
    registry = CommandRegistry([make_command("zeta"), make_command("alpha")])
    api = _api(return_value=[{"id": "1"}, {"id": "2"}])

    result = await export_commands(registry, api, "123")

    assert result == [{"id": "1"}, {"id": "2"}]
    api.put_application_commands.assert_awaited_once()
    args, kwargs = api.put_application_commands.call_args
    assert args[0] == "123"
    assert [p["name"] for p in args[1]] == ["zeta", "alpha"]
    assert kwargs == {"guild_id": None}


async def test_guild_scope_is_forwarded(make_command) -> None:
    api = _api(return_value=[])
    await export_commands(CommandRegistry([make_command("a")]), api, "123", guild_id="456")
    assert api.put_application_commands.call_args.kwargs == {"guild_id": "456"}


async def test_publish_failure_names_step(make_command) -> None:
    cause = PlatformApiError(401, "Unauthorized", "bad token")
    api = _api(side_effect=cause)

    with pytest.raises(RegistrationError) as excinfo:
        await export_commands(CommandRegistry([make_command("a")]), api, "123")

    assert excinfo.value.step == "publish"
    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause


async def test_prepare_failure_names_step() -> None:
    registry = MagicMock()
    registry.registration_payloads.side_effect = ValueError("bad option")
    api = _api()

    with pytest.raises(RegistrationError) as excinfo:
        await export_commands(registry, api, "123")

    assert excinfo.value.step == "prepare"
    api.put_application_commands.assert_not_awaited()


async def test_logs_each_registered_command(make_command, caplog) -> None:
    registry = CommandRegistry([make_command("ping", "Utility"), make_command("info", "Utility")])
    with caplog.at_level("INFO", logger="slashbot.runtime.services.registration"):
        await export_commands(registry, _api(return_value=[{}, {}]), "123")

    messages = [r.getMessage() for r in caplog.records]
    assert any("/ping [Utility]" in m for m in messages)
    assert any("/info [Utility]" in m for m in messages)

"""Tests for the command contract -- descriptors, payloads, validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from slashbot.runtime.core.command import (
    CommandDescriptor,
    CommandOption,
    ContextRestriction,
    OptionType,
    SlashCommand,
    ValidationResult,
    subcommand,
)
from slashbot.runtime.core.errors import ConfigurationError
from slashbot.runtime.core.interaction import CapabilityContext

USER = "111111111111111111"
DEV = "999999999999999999"
GUILD = "222222222222222222"


async def _noop(dispatcher, request) -> None:
    return None


def _command(**kwargs) -> SlashCommand:
    descriptor = kwargs.pop(
        "descriptor",
        CommandDescriptor(name="thing", description="Does a thing", usage="/thing"),
    )
    return SlashCommand(descriptor=descriptor, handler=_noop, **kwargs)


class TestCommandDescriptor:
    def test_valid_name(self) -> None:
        d = CommandDescriptor(name="my-cmd_2", description="x", usage="/my-cmd_2")
        assert d.name == "my-cmd_2"

    @pytest.mark.parametrize("name", ["Ping", "has space", "", "x" * 33, "emoji😀"])
    def test_illegal_name_rejected(self, name: str) -> None:
        with pytest.raises(ConfigurationError):
            CommandDescriptor(name=name, description="x", usage="/x")

    def test_missing_description_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            CommandDescriptor(name="ok", description="", usage="/ok")

    def test_short_description_prefers_summary(self) -> None:
        d = CommandDescriptor(name="a", description="Long text", usage="/a", summary="Short")
        assert d.short_description == "Short"

    def test_short_description_truncates_long_text(self) -> None:
        d = CommandDescriptor(name="a", description="word " * 40, usage="/a")
        assert len(d.short_description) <= 100
        assert d.short_description.endswith("...")

    def test_descriptor_is_immutable(self) -> None:
        d = CommandDescriptor(name="a", description="b", usage="/a")
        with pytest.raises(AttributeError):
            d.name = "z"  # type: ignore[misc]


class TestRegistrationPayload:
    def test_minimal_payload(self) -> None:
        assert _command().registration_payload() == {
            "name": "thing",
            "description": "Does a thing",
            "type": 1,
            "options": [],
        }

    def test_options_and_subcommands(self) -> None:
        cmd = _command(options=(
            subcommand(
                "user",
                "Pick a user",
                CommandOption(type=OptionType.USER, name="target", description="Who", required=False),
            ),
            subcommand("server", "The server"),
        ))
        payload = cmd.registration_payload()
        assert payload["options"] == [
            {
                "type": 1,
                "name": "user",
                "description": "Pick a user",
                "options": [
                    {"type": 6, "name": "target", "description": "Who", "required": False},
                ],
            },
            {"type": 1, "name": "server", "description": "The server"},
        ]

    def test_payload_is_deterministic(self) -> None:
        cmd = _command(options=(
            CommandOption(type=OptionType.STRING, name="q", description="Query", autocomplete=True),
        ))
        assert cmd.registration_payload() == cmd.registration_payload()

    def test_invalid_option_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CommandOption(type=OptionType.STRING, name="Bad Name", description="x")

    def test_option_description_length_enforced(self) -> None:
        with pytest.raises(ValidationError):
            CommandOption(type=OptionType.STRING, name="ok", description="x" * 101)


class TestValidate:
    def test_unrestricted_command_is_valid_anywhere(self) -> None:
        result = _command().validate(CapabilityContext(user_id=USER))
        assert result == ValidationResult(valid=True)
        assert result.reason is None

    def test_context_only_outside_guild(self) -> None:
        cmd = _command(restriction=ContextRestriction.CONTEXT_ONLY)
        result = cmd.validate(CapabilityContext(user_id=USER))
        assert not result.valid
        assert result.reason == "This command can only be used in servers."

    def test_context_only_inside_guild(self) -> None:
        cmd = _command(restriction=ContextRestriction.CONTEXT_ONLY)
        assert cmd.validate(CapabilityContext(user_id=USER, guild_id=GUILD)).valid

    def test_missing_capabilities_are_listed(self) -> None:
        cmd = _command(required_capabilities=frozenset({"send_messages", "embed_links", "attach_files"}))
        ctx = CapabilityContext(user_id=USER, guild_id=GUILD, granted=frozenset({"embed_links"}))
        result = cmd.validate(ctx)
        assert not result.valid
        assert result.reason == "Bot missing required permissions: attach_files, send_messages"

    def test_all_capabilities_granted(self) -> None:
        cmd = _command(required_capabilities=frozenset({"send_messages"}))
        ctx = CapabilityContext(
            user_id=USER, guild_id=GUILD, granted=frozenset({"send_messages", "embed_links"}),
        )
        assert cmd.validate(ctx).valid

    def test_privileged_only_rejects_other_users(self) -> None:
        cmd = _command(restriction=ContextRestriction.PRIVILEGED_ONLY)
        ctx = CapabilityContext(user_id=USER, privileged_users=frozenset({DEV}))
        result = cmd.validate(ctx)
        assert not result.valid
        assert result.reason == "This command is for developers only."

    def test_privileged_only_accepts_privileged_user(self) -> None:
        cmd = _command(restriction=ContextRestriction.PRIVILEGED_ONLY)
        ctx = CapabilityContext(user_id=DEV, privileged_users=frozenset({DEV}))
        assert cmd.validate(ctx).valid

    def test_privileged_only_with_empty_set(self) -> None:
        cmd = _command(restriction=ContextRestriction.PRIVILEGED_ONLY)
        assert not cmd.validate(CapabilityContext(user_id=DEV)).valid

    def test_context_check_precedes_capability_check(self) -> None:
        cmd = _command(
            restriction=ContextRestriction.CONTEXT_ONLY,
            required_capabilities=frozenset({"send_messages"}),
        )
        result = cmd.validate(CapabilityContext(user_id=USER, guild_id=None, granted=frozenset()))
        assert result.reason == "This command can only be used in servers."

    def test_capability_check_precedes_privilege_check(self) -> None:
        cmd = _command(
            restriction=ContextRestriction.PRIVILEGED_ONLY,
            required_capabilities=frozenset({"send_messages"}),
        )
        result = cmd.validate(CapabilityContext(user_id=USER, granted=frozenset()))
        assert result.reason == "Bot missing required permissions: send_messages"

    def test_validate_returns_fresh_results(self) -> None:
        cmd = _command()
        ctx = CapabilityContext(user_id=USER)
        assert cmd.validate(ctx) is not cmd.validate(ctx)


class TestExecute:
    async def test_execute_awaits_handler(self) -> None:
        calls = []

        async def handler(dispatcher, request) -> None:
            calls.append((dispatcher, request))

        cmd = SlashCommand(
            descriptor=CommandDescriptor(name="x", description="x", usage="/x"),
            handler=handler,
        )
        await cmd.execute("dispatcher", "request")  # type: ignore[arg-type]
        assert calls == [("dispatcher", "request")]

    async def test_autocomplete_without_hook_is_empty(self) -> None:
        assert await _command().autocomplete(None, "p") == []  # type: ignore[arg-type]

from __future__ import annotations

import pytest

from velites.commands import (
    AssertResult,
    ClickCommand,
    Command,
    ScrollCommand,
    create_command,
    get_command,
    has_command,
    iter_commands,
    register_command,
    unregister_command,
)
from velites.errors import CommandValidationError, UnsupportedCommandError

from fakes import ElementMissing, FakeProvider


def test_registry_resolves_builtin_commands() -> None:
    assert has_command("wait")
    assert get_command("click") is ClickCommand
    assert get_command("swipe") is get_command("scroll") is ScrollCommand
    assert {"launch_app", "input", "assertVisible", "assertTextEquals"} <= set(iter_commands())


def test_unknown_command_is_rejected() -> None:
    with pytest.raises(UnsupportedCommandError, match='Command "teleport" is not supported'):
        create_command("teleport", {})


@pytest.mark.parametrize(
    ("name", "params", "fragment"),
    [
        ("launch_app", {}, "app_id"),
        ("launch_app", {"app_id": 42}, "app_id"),
        ("wait", {"duration": -1}, "duration"),
        ("wait", {"duration": "soon"}, "duration"),
        ("click", {}, "selector, pos"),
        ("click", {"pos": [1]}, "pos"),
        ("click", {"selector": 123, "pos": [1, 2]}, "selector"),
        ("click", {"selector": "", "pos": [1, 2]}, "selector"),
        ("scroll", {"to": [0, 0]}, "from"),
        ("scroll", {"from": [0, 0], "to": [0, "x"]}, "to"),
        ("scroll", {"from": [0, 0], "to": [1, 1], "duration": -5}, "duration"),
        ("input", {"text": "hi"}, "selector"),
        ("input", {"selector": "input.username"}, "text"),
        ("assertVisible", {}, "selector"),
        ("assertTextEquals", {"expect": "x"}, "selector"),
        ("assertTextEquals", {"selector": "button.login"}, "expect"),
    ],
)
def test_validation_names_offending_parameter(name: str, params: dict, fragment: str) -> None:
    with pytest.raises(CommandValidationError) as excinfo:
        create_command(name, params)
    assert fragment in str(excinfo.value)


def test_non_mapping_params_are_rejected() -> None:
    with pytest.raises(CommandValidationError, match="must be a mapping"):
        create_command("wait", 100)


def test_control_keys_are_not_command_params() -> None:
    command = create_command("wait", {"duration": 0, "on_success": {"action": "break"}})
    assert command.params == {"duration": 0}


@pytest.mark.asyncio
async def test_click_by_selector_and_position(provider: FakeProvider) -> None:
    await create_command("click", {"selector": "button.login"}).execute(provider)
    await create_command("click", {"pos": [10, 20]}).execute(provider)

    assert ("tap_element", "button.login") in provider.actions
    assert ("tap", 10, 20) in provider.actions


@pytest.mark.asyncio
async def test_click_propagates_provider_failure(provider: FakeProvider) -> None:
    with pytest.raises(ElementMissing):
        await create_command("click", {"selector": "button.absent"}).execute(provider)


@pytest.mark.asyncio
async def test_scroll_uses_default_duration(provider: FakeProvider) -> None:
    await create_command("scroll", {"from": [0, 500], "to": [0, 100]}).execute(provider)
    await create_command("swipe", {"from": [0, 0], "to": [5, 5], "duration": 80}).execute(provider)
    await create_command("scroll", {"from": [0, 0], "to": [0, 9], "duration": 0}).execute(provider)

    assert provider.actions == [
        ("swipe", (0, 500), (0, 100), 250),
        ("swipe", (0, 0), (5, 5), 80),
        ("swipe", (0, 0), (0, 9), 0),
    ]


@pytest.mark.asyncio
async def test_launch_app_and_input(provider: FakeProvider) -> None:
    assert await create_command("launch_app", {"app_id": "com.example"}).execute(provider) == "com.example"
    await create_command("input", {"selector": "input.username", "text": "alice"}).execute(provider)

    assert provider.elements["input.username"] == "alice"


@pytest.mark.asyncio
async def test_assertions_return_structured_outcome(provider: FakeProvider) -> None:
    visible = await create_command(
        "assertVisible", {"selector": "button.login", "case": "login shown"}
    ).execute(provider)
    text = await create_command(
        "assertTextEquals", {"selector": "button.submit", "expect": "Send"}
    ).execute(provider)

    assert visible == AssertResult(name="login shown", passed=True, expect=True, actual=True)
    assert text.to_dict() == {"name": "", "pass": False, "expect": "Send", "actual": "Submit"}


def test_soft_flag_defaults_to_false() -> None:
    assert create_command("assertVisible", {"selector": "a"}).soft is False
    assert create_command("assertVisible", {"selector": "a", "soft": True}).soft is True


class _PingCommand(Command):
    name = "ping"
    description = "test-only command"

    async def execute(self, provider: object) -> str:
        return "pong"


def test_register_command_adds_new_kind() -> None:
    register_command("ping", _PingCommand)
    try:
        assert isinstance(create_command("ping", None), _PingCommand)
        with pytest.raises(ValueError):
            register_command("ping", _PingCommand)
    finally:
        unregister_command("ping")
    assert not has_command("ping")


def test_reserved_names_cannot_be_registered() -> None:
    with pytest.raises(ValueError):
        register_command("loop", _PingCommand)

"""Name to command-class table.

New action kinds are added with :func:`register_command`; the executor only
ever goes through :func:`create_command`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from ..errors import UnsupportedCommandError
from .actions import ClickCommand, InputCommand, LaunchAppCommand, ScrollCommand, WaitCommand
from .asserts import AssertTextEqualsCommand, AssertVisibleCommand
from .base import Command

logger = logging.getLogger(__name__)

# Step kinds handled by the executor itself; never resolved through the table.
RESERVED_NAMES = frozenset({"label", "callfunc", "loop"})

_COMMANDS: dict[str, type[Command]] = {
    "launch_app": LaunchAppCommand,
    "wait": WaitCommand,
    "click": ClickCommand,
    "scroll": ScrollCommand,
    "swipe": ScrollCommand,
    "input": InputCommand,
    "assertVisible": AssertVisibleCommand,
    "assertTextEquals": AssertTextEqualsCommand,
}


def register_command(name: str, command_cls: type[Command], *, replace: bool = False) -> None:
    if name in RESERVED_NAMES:
        msg = f"{name!r} is a built-in step kind and cannot be registered"
        raise ValueError(msg)
    if not (isinstance(command_cls, type) and issubclass(command_cls, Command)):
        msg = f"{command_cls!r} is not a Command subclass"
        raise TypeError(msg)
    if name in _COMMANDS and not replace:
        msg = f"Command {name!r} is already registered"
        raise ValueError(msg)
    _COMMANDS[name] = command_cls
    logger.debug("Registered command %s -> %s", name, command_cls.__name__)


def unregister_command(name: str) -> None:
    _COMMANDS.pop(name, None)


def has_command(name: str) -> bool:
    return name in _COMMANDS


def get_command(name: str) -> type[Command]:
    try:
        return _COMMANDS[name]
    except KeyError:
        raise UnsupportedCommandError(name) from None


def iter_commands() -> Iterator[str]:
    return iter(sorted(_COMMANDS))


def create_command(name: str, params: Mapping[str, Any] | None) -> Command:
    """Instantiate and validate the command registered under ``name``."""

    command = get_command(name)(params)
    command.validate()
    return command

from __future__ import annotations

from .actions import ClickCommand, InputCommand, LaunchAppCommand, ScrollCommand, WaitCommand
from .asserts import AssertCommand, AssertResult, AssertTextEqualsCommand, AssertVisibleCommand
from .base import Command
from .registry import (
    RESERVED_NAMES,
    create_command,
    get_command,
    has_command,
    iter_commands,
    register_command,
    unregister_command,
)

__all__ = [
    "AssertCommand",
    "AssertResult",
    "AssertTextEqualsCommand",
    "AssertVisibleCommand",
    "ClickCommand",
    "Command",
    "InputCommand",
    "LaunchAppCommand",
    "RESERVED_NAMES",
    "ScrollCommand",
    "WaitCommand",
    "create_command",
    "get_command",
    "has_command",
    "iter_commands",
    "register_command",
    "unregister_command",
]

"""Typed failure signals raised while loading, planning and executing scripts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .commands.asserts import AssertResult


class VelitesError(Exception):
    """Base class for every error raised by this package."""


class ScriptError(VelitesError):
    """Error tied to script execution.

    ``fatal`` errors abort the whole run even when the failing step declares
    ``on_failure``: they point at a defect in the script itself rather than at
    a runtime condition of the device under test.
    """

    fatal: bool = True


class ScriptLoadError(ScriptError):
    pass


class StepShapeError(ScriptError):
    def __init__(self, location: str, detail: str) -> None:
        super().__init__(f"{location}: {detail}")
        self.location = location


class ControlActionError(ScriptError):
    pass


class ControlFlowError(ScriptError):
    pass


class FunctionNotFoundError(ScriptError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Function {name} not found")
        self.name = name


class FunctionDuplicateError(ScriptError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Function {name} is duplicated")
        self.name = name


class LabelNotFoundError(ScriptError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Label {name} not found")
        self.name = name


class LabelDuplicateError(ScriptError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Label {name} is duplicated")
        self.name = name


class LabelEmptyError(ScriptError):
    def __init__(self) -> None:
        super().__init__("Label name is empty")


class LoopCountError(ScriptError):
    def __init__(self, count: Any) -> None:
        super().__init__(f"loop count must be a positive integer, got {count!r}")
        self.count = count


class StackOverflowError(ScriptError):
    def __init__(self, depth: int) -> None:
        super().__init__(f"Stack overflow: call depth exceeds {depth}")
        self.depth = depth


class UnsupportedCommandError(ScriptError):
    def __init__(self, name: str) -> None:
        super().__init__(f'Command "{name}" is not supported')
        self.name = name


class PlanningError(ScriptError):
    def __init__(self, location: str, command: str, cause: Exception) -> None:
        super().__init__(f"{location} ({command}): {cause}")
        self.location = location
        self.command = command


class CommandValidationError(ScriptError):
    fatal = False


class AssertionFailedError(ScriptError):
    fatal = False

    def __init__(self, outcome: AssertResult) -> None:
        label = outcome.name or "assertion"
        super().__init__(
            f"{label} failed: expected {outcome.expect!r}, got {outcome.actual!r}"
        )
        self.outcome = outcome


def is_fatal(exc: BaseException) -> bool:
    return isinstance(exc, ScriptError) and exc.fatal


def error_output(exc: BaseException) -> str:
    """Render an exception as ``"<TypeName>: <message>"`` for reports."""

    return f"{type(exc).__name__}: {exc}"

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from ..errors import CommandValidationError
from ..provider import AutomationProvider

# Attributes every step may carry; they steer the executor, not the command.
CONTROL_KEYS = frozenset({"on_success", "on_failure"})


class Command:
    """Base class for every action a script step can trigger.

    Subclasses set ``name``/``description``, override :meth:`validate` to
    reject malformed parameters and implement :meth:`execute` to perform one
    interaction against the provider.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    def __init__(self, params: Mapping[str, Any] | None) -> None:
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            msg = f"{self.name} command parameters must be a mapping, got {type(params).__name__}"
            raise CommandValidationError(msg)
        self.params: dict[str, Any] = {
            key: value for key, value in params.items() if key not in CONTROL_KEYS
        }

    def validate(self) -> None:
        """Raise :class:`CommandValidationError` when parameters are unusable."""

    async def execute(self, provider: AutomationProvider) -> Any:
        msg = f"{self.name} command must implement execute"
        raise NotImplementedError(msg)

    def _fail(self, detail: str) -> CommandValidationError:
        return CommandValidationError(f"{self.name} command {detail}")

    def _require_str(self, key: str) -> str:
        value = self.params.get(key)
        if not isinstance(value, str) or not value:
            raise self._fail(f"must have a valid {key} parameter (non-empty string)")
        return value

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"{type(self).__name__}({self.params!r})"


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_point(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(is_number(item) for item in value)
    )

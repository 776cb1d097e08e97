from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from ..errors import (
    ControlActionError,
    FunctionDuplicateError,
    LoopCountError,
    ScriptLoadError,
    StepShapeError,
)
from .schema import validate_script


class ActionKind(str, Enum):
    GOTO = "goto"
    BREAK = "break"
    RETURN = "return"


@dataclass(slots=True)
class ControlAction:
    """Directive attached to a step's ``on_success`` / ``on_failure``."""

    action: ActionKind
    target: str | None = None

    def __post_init__(self) -> None:
        try:
            self.action = ActionKind(self.action)
        except ValueError:
            msg = f"Unknown control action: {self.action!r}"
            raise ControlActionError(msg) from None
        if self.target is not None:
            self.target = str(self.target)
        if self.action is ActionKind.GOTO and not self.target:
            msg = "goto action requires a target label"
            raise ControlActionError(msg)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ControlAction:
        if not isinstance(payload, Mapping) or "action" not in payload:
            msg = f"Control action must be a mapping with an 'action' key, got {payload!r}"
            raise ControlActionError(msg)
        return cls(action=payload["action"], target=payload.get("target"))


@dataclass(slots=True)
class Step:
    name: str
    params: Any = None
    on_success: ControlAction | None = None
    on_failure: ControlAction | None = None
    body: tuple[Step, ...] = ()

    @property
    def is_label(self) -> bool:
        return self.name == "label"

    @property
    def label_name(self) -> str | None:
        if not self.is_label or self.params is None:
            return None
        return str(self.params)


@dataclass(slots=True)
class FunctionDef:
    name: str
    steps: tuple[Step, ...]
    description: str | None = None


@dataclass(slots=True)
class Script:
    steps: tuple[Step, ...]
    functions: dict[str, FunctionDef] = field(default_factory=dict)
    name: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        self.steps = tuple(self.steps)
        if not self.steps:
            msg = "Script must contain at least one step"
            raise ScriptLoadError(msg)

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Script"


def load_script(source: Path | str | Mapping[str, Any]) -> Script:
    """Build a :class:`Script` from a YAML/JSON file, YAML text or a mapping."""

    if isinstance(source, Path):
        data = _parse_text(source.read_text(encoding="utf-8"), origin=str(source))
    elif isinstance(source, str):
        data = _parse_text(source, origin="<string>")
    else:
        data = source
    if not isinstance(data, Mapping):
        msg = f"Invalid script format: expected a mapping, got {type(data).__name__}"
        raise ScriptLoadError(msg)
    data = dict(data)
    validate_script(data)

    return Script(
        steps=parse_steps(data["steps"], location="steps"),
        functions=_parse_functions(data.get("functions")),
        name=data.get("name"),
        description=data.get("description"),
    )


def parse_steps(payload: Any, *, location: str) -> tuple[Step, ...]:
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise StepShapeError(location, "steps must be a list")
    return tuple(
        parse_step(raw, location=f"{location}[{index}]")
        for index, raw in enumerate(payload)
    )


def parse_step(payload: Any, *, location: str) -> Step:
    if not isinstance(payload, Mapping) or len(payload) != 1:
        raise StepShapeError(location, "step must contain exactly one command")
    ((name, params),) = payload.items()
    if not isinstance(name, str) or not name:
        raise StepShapeError(location, f"command name must be a string, got {name!r}")

    if not isinstance(params, Mapping):
        return Step(name=name, params=params)

    body: tuple[Step, ...] = ()
    if name == "loop":
        if "steps" not in params:
            raise StepShapeError(location, "loop must contain a steps list")
        body = parse_steps(params["steps"], location=f"{location}.loop.steps")

    return Step(
        name=name,
        params=params,
        on_success=_parse_control(params.get("on_success"), location),
        on_failure=_parse_control(params.get("on_failure"), location),
        body=body,
    )


def _parse_control(payload: Any, location: str) -> ControlAction | None:
    if payload is None:
        return None
    try:
        return ControlAction.from_dict(payload)
    except ControlActionError as exc:
        msg = f"{location}: {exc}"
        raise ControlActionError(msg) from exc


def _parse_functions(payload: Any) -> dict[str, FunctionDef]:
    functions: dict[str, FunctionDef] = {}
    if payload is None:
        return functions
    if isinstance(payload, Mapping):
        for name, steps in payload.items():
            functions[name] = FunctionDef(
                name=name,
                steps=parse_steps(steps, location=f"functions.{name}.steps"),
            )
        return functions
    for raw in payload:
        name = raw["name"]
        if name in functions:
            raise FunctionDuplicateError(name)
        functions[name] = FunctionDef(
            name=name,
            steps=parse_steps(raw["steps"], location=f"functions.{name}.steps"),
            description=raw.get("description"),
        )
    return functions


def _parse_text(text: str, *, origin: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse script {origin}: {exc}"
        raise ScriptLoadError(msg) from exc


def loop_count(step: Step) -> int:
    """Return the iteration count of a ``loop`` step, rejecting non-positive values."""

    params = step.params if isinstance(step.params, Mapping) else {}
    count = params.get("count")
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise LoopCountError(count)
    return count


def callfunc_target(step: Step) -> str:
    params = step.params if isinstance(step.params, Mapping) else {}
    name = params.get("name")
    if not isinstance(name, str) or not name:
        raise StepShapeError("callfunc", f"name must be a non-empty string, got {name!r}")
    return name

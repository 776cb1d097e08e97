from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..commands import Command, create_command
from ..config import ExecutorConfig
from ..errors import (
    CommandValidationError,
    ControlFlowError,
    FunctionNotFoundError,
    PlanningError,
    StackOverflowError,
    UnsupportedCommandError,
)
from ..scope import Scope, ScopeKind
from .model import ActionKind, Script, Step, callfunc_target, loop_count

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlannedCommand:
    location: str
    command: Command


@dataclass(slots=True)
class ScriptPlan:
    """Result of checking a script end to end before anything runs."""

    script: Script
    commands: list[PlannedCommand] = field(default_factory=list)
    call_depth: int = 0
    recursive_functions: list[str] = field(default_factory=list)

    @property
    def script_name(self) -> str:
        return self.script.display_name

    @property
    def description(self) -> str:
        return self.script.description or ""

    @property
    def command_count(self) -> int:
        return len(self.script.steps)

    @property
    def function_names(self) -> list[str]:
        return sorted(self.script.functions)


def plan_script(script: Script, config: ExecutorConfig | None = None) -> ScriptPlan:
    """Validate every body of ``script`` without touching a device.

    Label tables are built for each scope, loop counts and call targets are
    checked, and every command is instantiated and validated so that a
    malformed step is reported before the first side effect.
    """

    config = config or ExecutorConfig()
    plan = ScriptPlan(script=script)
    _plan_body(script.steps, "steps", ScopeKind.ROOT, script, config, plan)
    for function in script.functions.values():
        _plan_body(
            function.steps,
            f"functions.{function.name}.steps",
            ScopeKind.FUNCTION,
            script,
            config,
            plan,
        )
    _check_calls(script, config, plan)
    logger.debug(
        "Planned %s: %d root steps, %d commands, call depth %d, functions=%s",
        plan.script_name,
        plan.command_count,
        len(plan.commands),
        plan.call_depth,
        plan.function_names,
    )
    return plan


def _callees(steps: Sequence[Step]) -> list[str]:
    names: list[str] = []
    for step in steps:
        if step.name == "callfunc":
            names.append(callfunc_target(step))
        elif step.name == "loop":
            names.extend(_callees(step.body))
    return names


def _check_calls(script: Script, config: ExecutorConfig, plan: ScriptPlan) -> None:
    """Walk the call graph from the top-level steps.

    A chain of distinct nested calls longer than ``max_call_depth`` always
    overflows once reached. A cycle only overflows when no ``goto`` skips the
    recursive call, so it is reported and rejected in strict mode only.
    """

    graph = {name: _callees(function.steps) for name, function in script.functions.items()}
    recursive: set[str] = set()

    def visit(name: str, path: list[str]) -> None:
        if name in path:
            recursive.update(path[path.index(name) :])
            return
        depth = len(path) + 1
        if depth > config.max_call_depth:
            raise StackOverflowError(config.max_call_depth)
        plan.call_depth = max(plan.call_depth, depth)
        for callee in dict.fromkeys(graph[name]):
            visit(callee, [*path, name])

    for name in dict.fromkeys(_callees(script.steps)):
        visit(name, [])

    plan.recursive_functions = sorted(recursive)
    if not recursive:
        return
    if config.strict_control_flow:
        msg = f"recursive functions may call themselves without bound: {', '.join(plan.recursive_functions)}"
        raise ControlFlowError(msg)
    logger.warning("Recursive functions %s rely on goto to terminate", plan.recursive_functions)


def _plan_body(
    steps: Sequence[Step],
    location: str,
    kind: ScopeKind,
    script: Script,
    config: ExecutorConfig,
    plan: ScriptPlan,
) -> None:
    Scope(location, steps, kind)
    for index, step in enumerate(steps):
        where = f"{location}[{index}]"
        if config.strict_control_flow and kind is ScopeKind.ROOT:
            _check_root_control(step, where)
        if step.is_label:
            continue
        if step.name == "callfunc":
            target = callfunc_target(step)
            if target not in script.functions:
                raise FunctionNotFoundError(target)
        elif step.name == "loop":
            loop_count(step)
            _plan_body(step.body, f"{where}.loop.steps", ScopeKind.LOOP, script, config, plan)
        else:
            try:
                command = create_command(step.name, step.params)
            except (CommandValidationError, UnsupportedCommandError) as exc:
                raise PlanningError(where, step.name, exc) from exc
            plan.commands.append(PlannedCommand(location=where, command=command))


def _check_root_control(step: Step, location: str) -> None:
    for control in (step.on_success, step.on_failure):
        if control is not None and control.action in (ActionKind.BREAK, ActionKind.RETURN):
            msg = (
                f"{location} ({step.name}): '{control.action.value}' has no enclosing "
                "loop or function at the top level"
            )
            raise ControlFlowError(msg)

"""Step-by-step interpreter for a loaded :class:`~velites.dsl.Script`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .commands import AssertCommand, AssertResult, create_command
from .config import ExecutorConfig
from .dsl.model import ActionKind, ControlAction, Script, Step, callfunc_target, loop_count
from .errors import AssertionFailedError, FunctionNotFoundError, error_output, is_fatal
from .provider import AutomationProvider
from .scope import Scope, ScopeKind, ScopeStack

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass(slots=True)
class StepResult:
    step: int
    command: str
    params: Any
    success: bool
    result: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "command": self.command,
            "params": _plain(self.params),
            "success": self.success,
            "result": _plain(self.result),
        }


@dataclass(slots=True)
class ExecutionSummary:
    total: int = 0
    successful: int = 0
    failed: int = 0

    @classmethod
    def from_results(cls, results: Sequence[StepResult]) -> ExecutionSummary:
        successful = sum(1 for item in results if item.success)
        return cls(total=len(results), successful=successful, failed=len(results) - successful)

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "successful": self.successful, "failed": self.failed}


@dataclass(slots=True)
class ExecutionResult:
    success: bool
    results: list[StepResult] = field(default_factory=list)
    summary: ExecutionSummary = field(default_factory=ExecutionSummary)
    error: str | None = None

    @classmethod
    def build(
        cls,
        success: bool,
        results: list[StepResult],
        *,
        error: str | None = None,
    ) -> ExecutionResult:
        return cls(
            success=success,
            results=results,
            summary=ExecutionSummary.from_results(results),
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "results": [item.to_dict() for item in self.results],
            "summary": self.summary.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(slots=True)
class _Unwind:
    """Signals that a break/return ended the current function or loop body."""

    value: Any


class ScriptExecutor:
    """Run one script against one provider session.

    Only top-level steps are reported; a ``callfunc`` or ``loop`` step
    contributes a single entry carrying the value its body returned.
    """

    def __init__(
        self,
        provider: AutomationProvider,
        script: Script,
        config: ExecutorConfig | None = None,
    ) -> None:
        self._provider = provider
        self._script = script
        self._config = config or ExecutorConfig()
        self._functions = dict(script.functions)
        self._stack = ScopeStack(
            Scope("root", script.steps, ScopeKind.ROOT),
            max_call_depth=self._config.max_call_depth,
        )
        self._running = False

    @property
    def script(self) -> Script:
        return self._script

    @property
    def current_scope(self) -> Scope:
        return self._stack.current

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    async def execute(self) -> ExecutionResult:
        if self._running:
            msg = "ScriptExecutor is already running a script"
            raise RuntimeError(msg)
        self._running = True
        self._stack.reset()
        results: list[StepResult] = []
        logger.info("Executing script %s", self._script.display_name)
        try:
            await self._run_scope(self._stack.root, results)
        except Exception as exc:
            message = error_output(exc)
            logger.error("Script %s aborted: %s", self._script.display_name, message)
            return ExecutionResult.build(False, results, error=message)
        finally:
            self._running = False
        logger.info("Script %s finished: %d steps", self._script.display_name, len(results))
        return ExecutionResult.build(True, results)

    async def execute_step(self, step: Step) -> Any:
        logger.debug("Execute %s with params %r", step.name, step.params)
        if step.is_label:
            return f"label[{step.label_name}]"
        if step.name == "callfunc":
            return await self._call_function(callfunc_target(step))
        if step.name == "loop":
            return await self._run_loop(step)

        command = create_command(step.name, step.params)
        value = await command.execute(self._provider)
        if isinstance(command, AssertCommand) and isinstance(value, AssertResult) and not value.passed:
            if not command.soft:
                raise AssertionFailedError(value)
            logger.warning("Soft assertion %r failed: %r != %r", value.name, value.actual, value.expect)
        return value

    async def _run_scope(self, scope: Scope, results: list[StepResult] | None = None) -> _Unwind | None:
        while not scope.done:
            step = scope.current_step()
            try:
                value = await self.execute_step(step)
            except Exception as exc:
                self._record(results, step, False, error_output(exc))
                if is_fatal(exc) or step.on_failure is None:
                    raise
                logger.warning("Execute %s failed in %s: %s", step.name, scope.name, error_output(exc))
                control, outcome = step.on_failure, error_output(exc)
            else:
                self._record(results, step, True, value)
                control, outcome = step.on_success, value

            if control is None:
                scope.advance()
                continue
            unwind = self._resolve(scope, control, outcome)
            if unwind is not None:
                return unwind
        return None

    def _resolve(self, scope: Scope, control: ControlAction, outcome: Any) -> _Unwind | None:
        if control.action is ActionKind.GOTO:
            scope.jump(control.target)  # type: ignore[arg-type]
            logger.debug("goto %s in %s -> index %d", control.target, scope.name, scope.cursor)
            return None
        if scope.kind is ScopeKind.ROOT:
            # No enclosing loop or function: break/return fall through to the next step.
            logger.info("Ignoring top-level %s in %s", control.action.value, scope.name)
            scope.advance()
            return None
        return _Unwind(outcome)

    async def _call_function(self, name: str) -> Any:
        function = self._functions.get(name)
        if function is None:
            raise FunctionNotFoundError(name)
        scope = Scope(name, function.steps, ScopeKind.FUNCTION)
        with self._stack.enter(scope):
            unwind = await self._run_scope(scope)
        return None if unwind is None else unwind.value

    async def _run_loop(self, step: Step) -> Any:
        count = loop_count(step)
        scope = Scope("loop", step.body, ScopeKind.LOOP)
        with self._stack.enter(scope):
            for iteration in range(count):
                scope.reset()
                unwind = await self._run_scope(scope)
                if unwind is not None:
                    logger.debug("Loop exited early on iteration %d of %d", iteration + 1, count)
                    return unwind.value
        return None

    @staticmethod
    def _record(results: list[StepResult] | None, step: Step, success: bool, value: Any) -> None:
        if results is None:
            return
        results.append(
            StepResult(
                step=len(results) + 1,
                command=step.name,
                params=step.params,
                success=success,
                result=value,
            )
        )

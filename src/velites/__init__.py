"""Scripted UI-automation runtime: load, plan and execute step scripts."""

__version__ = "0.3.0"

from .commands import (
    AssertResult,
    Command,
    create_command,
    has_command,
    register_command,
)
from .config import ExecutorConfig
from .dsl import (
    ControlAction,
    FunctionDef,
    Script,
    ScriptPlan,
    Step,
    load_script,
    plan_script,
)
from .errors import (
    AssertionFailedError,
    CommandValidationError,
    FunctionNotFoundError,
    LabelDuplicateError,
    LabelEmptyError,
    LabelNotFoundError,
    LoopCountError,
    ScriptError,
    StackOverflowError,
    UnsupportedCommandError,
    VelitesError,
)
from .executor import ExecutionResult, ExecutionSummary, ScriptExecutor, StepResult
from .orchestrator import ExecutionOrchestrator, run_script
from .provider import AutomationProvider, ElementHandle
from .scope import Scope, ScopeKind, ScopeStack

__all__ = [
    "AssertResult",
    "AssertionFailedError",
    "AutomationProvider",
    "Command",
    "CommandValidationError",
    "ControlAction",
    "ElementHandle",
    "ExecutionOrchestrator",
    "ExecutionResult",
    "ExecutionSummary",
    "ExecutorConfig",
    "FunctionDef",
    "FunctionNotFoundError",
    "LabelDuplicateError",
    "LabelEmptyError",
    "LabelNotFoundError",
    "LoopCountError",
    "Scope",
    "ScopeKind",
    "ScopeStack",
    "Script",
    "ScriptError",
    "ScriptExecutor",
    "ScriptPlan",
    "StackOverflowError",
    "Step",
    "StepResult",
    "UnsupportedCommandError",
    "VelitesError",
    "create_command",
    "has_command",
    "load_script",
    "plan_script",
    "register_command",
    "run_script",
]

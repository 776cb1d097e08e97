from __future__ import annotations

from .model import (
    ActionKind,
    ControlAction,
    FunctionDef,
    Script,
    Step,
    load_script,
    parse_step,
    parse_steps,
)
from .planner import PlannedCommand, ScriptPlan, plan_script
from .schema import SCRIPT_SCHEMA, validate_script

__all__ = [
    "ActionKind",
    "ControlAction",
    "FunctionDef",
    "PlannedCommand",
    "SCRIPT_SCHEMA",
    "Script",
    "ScriptPlan",
    "Step",
    "load_script",
    "parse_step",
    "parse_steps",
    "plan_script",
    "validate_script",
]

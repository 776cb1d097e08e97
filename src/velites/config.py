from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_CALL_DEPTH = 64


@dataclass(slots=True)
class ExecutorConfig:
    """Tunables shared by the planner and the executor."""

    max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
    strict_control_flow: bool = False

    def __post_init__(self) -> None:
        if self.max_call_depth < 1:
            msg = "max_call_depth must be at least 1"
            raise ValueError(msg)

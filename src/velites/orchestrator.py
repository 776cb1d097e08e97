from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import jsonschema

from .config import ExecutorConfig
from .dsl import load_script, plan_script
from .errors import VelitesError, error_output
from .executor import ExecutionResult, ScriptExecutor
from .provider import AutomationProvider

logger = logging.getLogger(__name__)


class ExecutionOrchestrator:
    """High-level runner that ties script loading and planning with the executor."""

    def __init__(self, config: ExecutorConfig | None = None) -> None:
        self._config = config or ExecutorConfig()

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    async def execute(
        self,
        source: Path | str | Mapping[str, Any],
        provider: AutomationProvider,
    ) -> ExecutionResult:
        try:
            script = load_script(source)
            plan_script(script, self._config)
        except (VelitesError, jsonschema.ValidationError) as exc:
            message = error_output(exc)
            logger.error("Script rejected before execution: %s", message)
            return ExecutionResult.build(False, [], error=message)
        executor = ScriptExecutor(provider, script, config=self._config)
        return await executor.execute()


async def run_script(
    source: Path | str | Mapping[str, Any],
    provider: AutomationProvider,
    *,
    config: ExecutorConfig | None = None,
) -> ExecutionResult:
    """Load, plan and execute ``source`` in one call."""

    return await ExecutionOrchestrator(config).execute(source, provider)

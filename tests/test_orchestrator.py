from __future__ import annotations

from pathlib import Path

import pytest

from velites import ExecutionOrchestrator, ExecutorConfig, run_script

from fakes import FakeProvider

LOGIN = """
name: "login"
functions:
  - name: "sign_in"
    steps:
      - input: { selector: "input.username", text: "alice" }
      - click: { selector: "button.login" }
steps:
  - launch_app: { app_id: "com.example.app" }
  - callfunc: { name: "sign_in" }
  - assertTextEquals: { selector: "input.username", expect: "alice" }
"""


@pytest.mark.asyncio
async def test_orchestrator_runs_planned_script(provider: FakeProvider) -> None:
    result = await ExecutionOrchestrator().execute(LOGIN, provider)

    assert result.success is True
    assert result.summary.total == 3
    assert provider.names() == [
        "activate_app",
        "find_element",
        "set_value",
        "find_element",
        "tap_element",
        "find_element",
        "get_text",
    ]


@pytest.mark.asyncio
async def test_orchestrator_reads_script_file(tmp_path: Path, provider: FakeProvider) -> None:
    path = tmp_path / "login.yaml"
    path.write_text(LOGIN, encoding="utf-8")

    result = await run_script(path, provider)

    assert result.success is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("source", "error"),
    [
        ({"steps": []}, "ValidationError"),
        ({"steps": [{"teleport": {}}]}, "PlanningError"),
        ({"steps": [{"wait": {}}, {"click": {}}]}, "PlanningError"),
        ({"steps": [{"callfunc": {"name": "ghost"}}]}, "FunctionNotFoundError"),
        ({"steps": [{"label": "a"}, {"label": "a"}]}, "LabelDuplicateError"),
    ],
)
async def test_rejected_script_never_touches_provider(
    source: dict, error: str, provider: FakeProvider
) -> None:
    result = await run_script(source, provider)

    assert result.success is False
    assert result.results == []
    assert result.error is not None
    assert result.error.startswith(error)
    assert provider.actions == []


@pytest.mark.asyncio
async def test_strict_config_rejects_top_level_return(provider: FakeProvider) -> None:
    source = {"steps": [{"launch_app": {"app_id": "x", "on_success": {"action": "return"}}}]}

    relaxed = await run_script(source, provider)
    strict = await run_script(source, provider, config=ExecutorConfig(strict_control_flow=True))

    assert relaxed.success is True
    assert strict.success is False
    assert "ControlFlowError" in (strict.error or "")


def test_config_rejects_non_positive_depth() -> None:
    with pytest.raises(ValueError):
        ExecutorConfig(max_call_depth=0)

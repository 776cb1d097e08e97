from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..provider import AutomationProvider
from .base import Command


@dataclass(slots=True)
class AssertResult:
    """Outcome of an assertion; surfaced verbatim in the step report."""

    name: str
    passed: bool
    expect: Any = None
    actual: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "pass": self.passed,
            "expect": self.expect,
            "actual": self.actual,
        }


class AssertCommand(Command):
    """Assertions report mismatches instead of raising.

    ``soft`` assertions never fail their step; hard ones are escalated into a
    step failure by the executor. ``case`` labels the check in reports.
    """

    @property
    def soft(self) -> bool:
        return bool(self.params.get("soft", False))

    @property
    def case(self) -> str:
        return str(self.params.get("case") or "")

    @property
    def selector(self) -> str:
        return self.params.get("selector", "")

    def validate(self) -> None:
        self._require_str("selector")


class AssertVisibleCommand(AssertCommand):
    name = "assertVisible"
    description = "Assert that an element is displayed"

    async def execute(self, provider: AutomationProvider) -> AssertResult:
        element = await provider.find_element(self.selector)
        visible = bool(await element.is_displayed())
        return AssertResult(name=self.case, passed=visible, expect=True, actual=visible)


class AssertTextEqualsCommand(AssertCommand):
    name = "assertTextEquals"
    description = "Assert that an element's text equals the expected value"

    @property
    def expect(self) -> Any:
        return self.params.get("expect")

    def validate(self) -> None:
        super().validate()
        if "expect" not in self.params:
            raise self._fail("must have an expect parameter")

    async def execute(self, provider: AutomationProvider) -> AssertResult:
        element = await provider.find_element(self.selector)
        content = await element.get_text()
        return AssertResult(
            name=self.case,
            passed=content == self.expect,
            expect=self.expect,
            actual=content,
        )

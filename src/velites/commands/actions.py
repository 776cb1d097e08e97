from __future__ import annotations

import asyncio
from typing import Any, ClassVar

from ..provider import AutomationProvider
from .base import Command, is_number, is_point


class LaunchAppCommand(Command):
    name = "launch_app"
    description = "Activate the application with the given id"

    @property
    def app_id(self) -> str:
        return self.params.get("app_id", "")

    def validate(self) -> None:
        self._require_str("app_id")

    async def execute(self, provider: AutomationProvider) -> Any:
        return await provider.activate_app(self.app_id)


class WaitCommand(Command):
    name = "wait"
    description = "Pause for a number of milliseconds"

    @property
    def duration(self) -> float:
        return self.params.get("duration", 0)

    def validate(self) -> None:
        duration = self.params.get("duration", 0)
        if not is_number(duration) or duration < 0:
            raise self._fail("must have a valid duration parameter (non-negative number of ms)")

    async def execute(self, provider: AutomationProvider) -> Any:
        await asyncio.sleep(self.duration / 1000.0)
        return None


class ClickCommand(Command):
    name = "click"
    description = "Tap an element by selector or a screen position"

    @property
    def selector(self) -> str | None:
        return self.params.get("selector")

    @property
    def pos(self) -> list[float] | None:
        return self.params.get("pos")

    def validate(self) -> None:
        has_selector = isinstance(self.selector, str) and bool(self.selector)
        has_pos = is_point(self.pos)
        if self.selector is not None and not has_selector:
            raise self._fail("selector parameter must be a non-empty string")
        if self.pos is not None and not has_pos:
            raise self._fail("pos parameter must be an array of 2 numbers [x, y]")
        if not has_selector and not has_pos:
            raise self._fail("must have at least one of the following parameters: selector, pos")

    async def execute(self, provider: AutomationProvider) -> Any:
        if self.selector:
            element = await provider.find_element(self.selector)
            return await element.tap()
        x, y = self.pos  # type: ignore[misc]
        return await provider.tap(x, y)


class ScrollCommand(Command):
    name = "scroll"
    description = "Swipe from one screen position to another"

    default_duration: ClassVar[int] = 250

    def validate(self) -> None:
        for key in ("from", "to"):
            if not is_point(self.params.get(key)):
                raise self._fail(f"must have a valid {key} parameter (array of 2 numbers)")
        duration = self.params.get("duration")
        if duration is not None and (not is_number(duration) or duration < 0):
            raise self._fail("duration parameter must be a non-negative number")

    async def execute(self, provider: AutomationProvider) -> Any:
        duration = self.params.get("duration")
        if duration is None:
            duration = self.default_duration
        return await provider.swipe(
            tuple(self.params["from"]),
            tuple(self.params["to"]),
            int(duration),
        )


class InputCommand(Command):
    name = "input"
    description = "Type text into the element matched by selector"

    def validate(self) -> None:
        self._require_str("selector")
        if not isinstance(self.params.get("text"), str):
            raise self._fail("must have a valid text parameter (string)")

    async def execute(self, provider: AutomationProvider) -> Any:
        element = await provider.find_element(self.params["selector"])
        return await element.set_value(self.params["text"])

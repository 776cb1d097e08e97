"""Capability set the engine consumes from an automation session.

The engine never talks to a device directly. Commands receive an object that
satisfies :class:`AutomationProvider` and await its coroutines; any exception
those coroutines raise becomes a step failure.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ElementHandle(Protocol):
    async def tap(self) -> Any: ...

    async def is_displayed(self) -> bool: ...

    async def get_text(self) -> str: ...

    async def set_value(self, text: str) -> Any: ...


@runtime_checkable
class AutomationProvider(Protocol):
    async def find_element(self, selector: str) -> ElementHandle: ...

    async def tap(self, x: float, y: float) -> Any: ...

    async def swipe(
        self,
        from_: Sequence[float],
        to: Sequence[float],
        duration: int,
    ) -> Any: ...

    async def activate_app(self, app_id: str) -> Any: ...

from __future__ import annotations

from typing import Any, Sequence


class ElementMissing(Exception):
    pass


class FakeElement:
    def __init__(self, provider: "FakeProvider", selector: str) -> None:
        self._provider = provider
        self._selector = selector

    @property
    def exists(self) -> bool:
        return self._selector in self._provider.elements

    async def tap(self) -> None:
        if not self.exists:
            raise ElementMissing(f"Element not found: {self._selector}")
        self._provider.record("tap_element", self._selector)

    async def is_displayed(self) -> bool:
        self._provider.record("is_displayed", self._selector)
        return self.exists

    async def get_text(self) -> str:
        self._provider.record("get_text", self._selector)
        return self._provider.elements.get(self._selector, "")

    async def set_value(self, text: str) -> None:
        if not self.exists:
            raise ElementMissing(f"Element not found: {self._selector}")
        self._provider.record("set_value", self._selector, text)
        self._provider.elements[self._selector] = text


class FakeProvider:
    """In-memory automation session that records every interaction."""

    def __init__(self) -> None:
        self.elements: dict[str, str] = {
            "button.login": "Log in",
            "button.submit": "Submit",
            "input.username": "",
        }
        self.actions: list[tuple[Any, ...]] = []

    def record(self, *action: Any) -> None:
        self.actions.append(action)

    def names(self) -> list[str]:
        return [action[0] for action in self.actions]

    async def find_element(self, selector: str) -> FakeElement:
        self.record("find_element", selector)
        return FakeElement(self, selector)

    async def tap(self, x: float, y: float) -> None:
        self.record("tap", x, y)

    async def swipe(self, from_: Sequence[float], to: Sequence[float], duration: int) -> None:
        self.record("swipe", tuple(from_), tuple(to), duration)

    async def activate_app(self, app_id: str) -> str:
        self.record("activate_app", app_id)
        return app_id

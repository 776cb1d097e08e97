from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping, Sequence

from .errors import LabelDuplicateError, LabelEmptyError, LabelNotFoundError, StackOverflowError

if TYPE_CHECKING:  # pragma: no cover
    from .dsl.model import Step


class ScopeKind(str, Enum):
    ROOT = "root"
    FUNCTION = "function"
    LOOP = "loop"


class Scope:
    """Execution context for one step body: a cursor plus a private label table.

    Labels are resolved against this scope only; ancestors and nested bodies
    keep their own tables.
    """

    def __init__(self, name: str, steps: Sequence[Step], kind: ScopeKind = ScopeKind.ROOT) -> None:
        self._name = name
        self._kind = kind
        self._steps = tuple(steps)
        self._labels = self._collect_labels(self._steps)
        self._cursor = 0

    @staticmethod
    def _collect_labels(steps: Sequence[Step]) -> dict[str, int]:
        labels: dict[str, int] = {}
        for index, step in enumerate(steps):
            if not step.is_label:
                continue
            label = step.label_name
            if not label:
                raise LabelEmptyError()
            if label in labels:
                raise LabelDuplicateError(label)
            labels[label] = index
        return labels

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> ScopeKind:
        return self._kind

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def labels(self) -> Mapping[str, int]:
        return MappingProxyType(self._labels)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def done(self) -> bool:
        return self._cursor >= len(self._steps)

    def current_step(self) -> Step:
        return self._steps[self._cursor]

    def find_label(self, label: str) -> int:
        try:
            return self._labels[label]
        except KeyError:
            raise LabelNotFoundError(label) from None

    def advance(self) -> None:
        self._cursor += 1

    def jump(self, label: str) -> None:
        self._cursor = self.find_label(label)

    def reset(self) -> None:
        self._cursor = 0

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Scope({self._name!r}, kind={self._kind.value}, cursor={self._cursor}/{len(self._steps)})"


class ScopeStack:
    """LIFO of active scopes; the root is never popped."""

    def __init__(self, root: Scope, *, max_call_depth: int) -> None:
        self._scopes: list[Scope] = [root]
        self._max_call_depth = max_call_depth

    @property
    def root(self) -> Scope:
        return self._scopes[0]

    @property
    def current(self) -> Scope:
        return self._scopes[-1]

    @property
    def call_depth(self) -> int:
        return sum(1 for scope in self._scopes if scope.kind is ScopeKind.FUNCTION)

    def __len__(self) -> int:
        return len(self._scopes)

    @contextmanager
    def enter(self, scope: Scope) -> Iterator[Scope]:
        """Push ``scope`` for the duration of the block and always pop it."""

        if scope.kind is ScopeKind.ROOT:
            msg = "root scope cannot be pushed"
            raise ValueError(msg)
        if scope.kind is ScopeKind.FUNCTION and self.call_depth >= self._max_call_depth:
            raise StackOverflowError(self._max_call_depth)
        self._scopes.append(scope)
        try:
            yield scope
        finally:
            popped = self._scopes.pop()
            if popped is not scope:
                msg = f"scope stack out of sync: expected {scope.name!r}, popped {popped.name!r}"
                raise RuntimeError(msg)

    def reset(self) -> None:
        del self._scopes[1:]
        self.root.reset()

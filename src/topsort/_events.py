"""Observers receiving traversal events from the sort engine.

An observer is anything with ``enter(node)`` and ``exit(node, cause)``
methods. Notifications arrive synchronously, in traversal order, and their
return values are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, Protocol, assert_never, runtime_checkable

from ._states import ExitCause

logger = logging.getLogger(__name__)


class Observer[T: Hashable](Protocol):
    """Receives enter/exit notifications for every node encounter."""

    def enter(self, node: T) -> None: ...

    def exit(self, node: T, cause: ExitCause) -> None: ...


@runtime_checkable
class RunAwareObserver(Protocol):
    """Observer that wants to know when a sort run starts.

    ``TopSort.sort`` calls ``start_run`` before the first notification of
    each run. Observers without the method are not told.
    """

    def start_run(self) -> None: ...


class EventKind(StrEnum):
    """Kind of a recorded traversal event."""

    ENTER = auto()
    EXIT = auto()


@dataclass(frozen=True, slots=True)
class TraversalEvent[T: Hashable]:
    """A single notification delivered to an observer.

    Attributes:
        kind: Whether the node was entered or exited.
        node: The node concerned.
        cause: The exit cause. None for enter events.

    """

    kind: EventKind
    node: T
    cause: ExitCause | None = None

    @classmethod
    def entered(cls, node: T) -> TraversalEvent[T]:
        return cls(EventKind.ENTER, node)

    @classmethod
    def exited(cls, node: T, cause: ExitCause) -> TraversalEvent[T]:
        return cls(EventKind.EXIT, node, cause)


class NullObserver:
    """Observer that ignores every notification."""

    def enter(self, node: Any) -> None:
        pass

    def exit(self, node: Any, cause: ExitCause) -> None:
        pass


@dataclass(slots=True)
class CallbackObserver[T: Hashable]:
    """Observer forwarding notifications to plain callables.

    Either callback may be omitted.
    """

    on_enter: Callable[[T], object] | None = None
    on_exit: Callable[[T, ExitCause], object] | None = None

    def enter(self, node: T) -> None:
        if self.on_enter is not None:
            self.on_enter(node)

    def exit(self, node: T, cause: ExitCause) -> None:
        if self.on_exit is not None:
            self.on_exit(node, cause)


@dataclass(slots=True)
class RecordingObserver[T: Hashable]:
    """Observer keeping every notification in order."""

    events: list[TraversalEvent[T]] = field(default_factory=list)

    def enter(self, node: T) -> None:
        self.events.append(TraversalEvent.entered(node))

    def exit(self, node: T, cause: ExitCause) -> None:
        self.events.append(TraversalEvent.exited(node, cause))

    def exits(self, cause: ExitCause | None = None) -> list[T]:
        """Return the exited nodes in order, optionally only those with ``cause``."""
        return [
            event.node
            for event in self.events
            if event.kind is EventKind.EXIT and (cause is None or event.cause is cause)
        ]

    def clear(self) -> None:
        self.events.clear()


class LoggingObserver:
    """Observer writing every notification to a logger.

    Messages are indented by the current traversal depth. Failure causes are
    logged one level above successful ones.
    """

    def __init__(self, log: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self._log = log if log is not None else logger
        self._level = level
        self._depth = 0

    def start_run(self) -> None:
        """Restart indentation at the top level.

        A run ending on a cycle or a provider failure leaves frames that never
        exit, so depth is not carried over between runs.
        """
        self._depth = 0

    def enter(self, node: Any) -> None:
        self._log.log(self._level, "%senter %r", "  " * self._depth, node)
        self._depth += 1

    def exit(self, node: Any, cause: ExitCause) -> None:
        self._depth = max(self._depth - 1, 0)
        self._log.log(self._level_for(cause), "%sexit %r (%s)", "  " * self._depth, node, cause)

    def _level_for(self, cause: ExitCause) -> int:
        match cause:
            case ExitCause.SORTED | ExitCause.ALREADY_SORTED:
                return self._level
            case ExitCause.CYCLE | ExitCause.DEPENDENCY_CYCLE:
                return self._level + 10
            case _:
                assert_never(cause)


class CompositeObserver:
    """Observer forwarding every notification to several observers in turn."""

    def __init__(self, *observers: Observer[Any]) -> None:
        self.observers = list(observers)

    def start_run(self) -> None:
        for observer in self.observers:
            if isinstance(observer, RunAwareObserver):
                observer.start_run()

    def enter(self, node: Any) -> None:
        for observer in self.observers:
            observer.enter(node)

    def exit(self, node: Any, cause: ExitCause) -> None:
        for observer in self.observers:
            observer.exit(node, cause)

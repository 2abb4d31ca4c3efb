"""Depth-first topological sort over a lazily discovered graph.

The engine enters each root, asks the dependency provider for the node's
dependencies the first time the node is entered, and explores them in the
order given. A node re-entered while still in progress closes a cycle. Every
encounter is reported to the observer as an ``enter`` followed by an ``exit``
carrying an ExitCause.

The whole run stops at the first cycle: roots that were not entered yet are
left alone.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, assert_never

from ._errors import CycleError, DependencyProviderError, InvariantViolationError
from ._events import CompositeObserver, LoggingObserver, NullObserver, RunAwareObserver
from ._graph import DependencyGraph
from ._provider import as_provider
from ._registry import NodeRegistry
from ._states import ExitCause, TraversalState

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._config import TopSortConfig
    from ._events import Observer
    from ._provider import DependencyProvider, ProviderLike

logger = logging.getLogger(__name__)


class Traversal(StrEnum):
    """How the depth-first search keeps track of its path."""

    ITERATIVE = auto()  # Explicit stack of frames, no recursion limit
    RECURSIVE = auto()  # Native recursion, bounded by sys.getrecursionlimit()


@dataclass(frozen=True, slots=True)
class CycleReport[T: Hashable]:
    """Description of the cycle that ended a sort run.

    Attributes:
        node: The witness, i.e. the node re-entered while still in progress.
        path: The traversal path from the witness back to itself, starting and
            ending with the witness. A self dependency gives ``(node, node)``.
        root: The root whose exploration hit the cycle.
        dependents: Nodes that exited with DEPENDENCY_CYCLE, innermost first.

    """

    node: T
    path: tuple[T, ...]
    root: T
    dependents: tuple[T, ...] = ()

    @property
    def members(self) -> tuple[T, ...]:
        """The distinct nodes forming the cycle, in traversal order."""
        return self.path[:-1]


@dataclass(frozen=True, slots=True)
class SortResult[T: Hashable]:
    """Outcome of a sort run.

    Attributes:
        order: Finished order, dependencies first. Empty when a cycle was found.
        cycle: The cycle that ended the run, if any.
        graph: Every dependency list obtained from the provider during the run,
            with a dependency repeated in one answer recorded as a single edge.
            After a cycle, dependencies that were never explored show up as
            nodes without dependencies.

    """

    order: tuple[T, ...] = ()
    cycle: CycleReport[T] | None = None
    graph: DependencyGraph[T] = field(default_factory=DependencyGraph)

    @property
    def success(self) -> bool:
        """Check if the reachable graph was sorted without finding a cycle."""
        return self.cycle is None

    def unwrap(self) -> tuple[T, ...]:
        """Return the finished order.

        Raises:
            CycleError: If the run ended on a cycle.

        """
        if self.cycle is not None:
            raise CycleError(self.cycle)
        return self.order


@dataclass(slots=True)
class _Frame[T: Hashable]:
    node: T
    dependencies: tuple[T, ...]
    next_index: int = 0


class _Run[T: Hashable]:
    """Mutable state of a single sort run."""

    def __init__(self, provider: DependencyProvider[T], observer: Observer[T]) -> None:
        self.provider = provider
        self.observer = observer
        self.registry: NodeRegistry[T] = NodeRegistry()
        self.discovered: dict[T, tuple[T, ...]] = {}
        self.path: list[T] = []
        self.path_index: dict[T, int] = {}
        self.cycle_node: T | None = None
        self.cycle_path: tuple[T, ...] = ()
        self.failed_dependents: list[T] = []

    def open(self, node: T) -> _Frame[T] | ExitCause:
        """Enter a node.

        Returns:
            A frame if the node's dependencies must now be explored, otherwise
            the cause the node was exited with.

        """
        self.observer.enter(node)
        state = self.registry.state_of(node)
        match state:
            case TraversalState.FINISHED:
                self.observer.exit(node, ExitCause.ALREADY_SORTED)
                return ExitCause.ALREADY_SORTED
            case TraversalState.IN_PROGRESS:
                self.cycle_node = node
                self.cycle_path = (*self.path[self.path_index[node] :], node)
                logger.debug("Back-edge to %r closes a cycle of length %d", node, len(self.cycle_path) - 1)
                self.observer.exit(node, ExitCause.CYCLE)
                return ExitCause.CYCLE
            case TraversalState.UNVISITED:
                self.registry.mark_in_progress(node)
                self.path_index[node] = len(self.path)
                self.path.append(node)
                return _Frame(node, self._fetch(node))
            case _:
                assert_never(state)

    def close(self, frame: _Frame[T]) -> None:
        """Finish a node whose dependencies all succeeded."""
        self._leave(frame)
        self.registry.mark_finished(frame.node)
        self.observer.exit(frame.node, ExitCause.SORTED)

    def abandon(self, frame: _Frame[T]) -> None:
        """Leave a node one of whose dependencies hit a cycle.

        The witness already exited with CYCLE and is not reported again.
        """
        self._leave(frame)
        if frame.node == self.cycle_node:
            return
        self.failed_dependents.append(frame.node)
        self.observer.exit(frame.node, ExitCause.DEPENDENCY_CYCLE)

    def visit_iterative(self, root: T) -> bool:
        opened = self.open(root)
        if not isinstance(opened, _Frame):
            return not opened.is_failure

        stack = [opened]
        while stack:
            frame = stack[-1]
            if frame.next_index == len(frame.dependencies):
                stack.pop()
                self.close(frame)
                continue

            dep = frame.dependencies[frame.next_index]
            frame.next_index += 1
            opened = self.open(dep)
            if isinstance(opened, _Frame):
                stack.append(opened)
            elif opened.is_failure:
                while stack:
                    self.abandon(stack.pop())
                return False
        return True

    def visit_recursive(self, node: T) -> bool:
        opened = self.open(node)
        if not isinstance(opened, _Frame):
            return not opened.is_failure

        for dep in opened.dependencies:
            if not self.visit_recursive(dep):
                self.abandon(opened)
                return False
        self.close(opened)
        return True

    def report(self, root: T) -> CycleReport[T]:
        if not self.cycle_path:
            msg = "No cycle was recorded in this run"
            raise InvariantViolationError(msg)
        return CycleReport(
            node=self.cycle_node,
            path=self.cycle_path,
            root=root,
            dependents=tuple(self.failed_dependents),
        )

    def graph(self) -> DependencyGraph[T]:
        return DependencyGraph.from_mapping(self.discovered)

    def _leave(self, frame: _Frame[T]) -> None:
        self.path.pop()
        del self.path_index[frame.node]

    def _fetch(self, node: T) -> tuple[T, ...]:
        try:
            dependencies = tuple(self.provider.dependencies_of(node))
        except RecursionError:
            raise
        except Exception as e:
            logger.debug("Dependency provider failed for %r", node, exc_info=True)
            raise DependencyProviderError(node) from e
        self.discovered[node] = dependencies
        return dependencies


class TopSort[T: Hashable]:
    """Topological sorter bound to a dependency provider and an observer.

    Each call to ``sort`` is an independent run with its own registry, so one
    sorter may be reused, and separate sorters may run in separate threads.

    Example:
        >>> sorter = TopSort({"app": ["lib"], "lib": []})
        >>> sorter.sort(["app"]).order
        ('lib', 'app')

    """

    def __init__(
        self,
        provider: ProviderLike[T],
        *,
        observer: Observer[T] | None = None,
        traversal: Traversal | str = Traversal.ITERATIVE,
    ) -> None:
        self.provider: DependencyProvider[T] = as_provider(provider)
        self.observer: Observer[T] = observer if observer is not None else NullObserver()
        self.traversal = Traversal(traversal)

    @classmethod
    def from_config(
        cls,
        provider: ProviderLike[T],
        config: TopSortConfig,
        *,
        observer: Observer[T] | None = None,
    ) -> TopSort[T]:
        """Create a sorter using the traversal and logging settings of ``config``."""
        if config.log_events:
            observer = LoggingObserver() if observer is None else CompositeObserver(observer, LoggingObserver())
        return cls(provider, observer=observer, traversal=config.traversal)

    def sort(self, roots: Iterable[T]) -> SortResult[T]:
        """Sort the graph reachable from ``roots``.

        Roots are explored in the given order. A root already finished through
        an earlier root is skipped without notifications.

        Args:
            roots: Nodes to start from. A string is an iterable of characters,
                so wrap a single string root in a list.

        Returns:
            The SortResult. On a cycle, ``order`` is empty and ``cycle`` holds
            the report.

        Raises:
            DependencyProviderError: If the provider failed for some node. The
                run ends at once, without further notifications.
            RecursionError: If a RECURSIVE traversal goes deeper than the
                interpreter allows.

        """
        if isinstance(self.observer, RunAwareObserver):
            self.observer.start_run()
        run: _Run[T] = _Run(self.provider, self.observer)
        visit: Callable[[T], bool]
        match self.traversal:
            case Traversal.ITERATIVE:
                visit = run.visit_iterative
            case Traversal.RECURSIVE:
                visit = run.visit_recursive
            case _:
                assert_never(self.traversal)

        for root in roots:
            if run.registry.state_of(root) is not TraversalState.UNVISITED:
                continue
            if not visit(root):
                report = run.report(root)
                logger.info("Cycle detected at %r while sorting from root %r", report.node, root)
                return SortResult(cycle=report, graph=run.graph())

        order = run.registry.finished_order()
        logger.debug("Sorted %d nodes", len(order))
        return SortResult(order=order, graph=run.graph())


def sort[T: Hashable](
    roots: Iterable[T],
    provider: ProviderLike[T],
    *,
    observer: Observer[T] | None = None,
    traversal: Traversal | str = Traversal.ITERATIVE,
) -> SortResult[T]:
    """Sort the graph reachable from ``roots`` in one call.

    See ``TopSort.sort`` for details.

    Example:
        >>> sort(["a"], {"a": ["b", "c"], "b": [], "c": []}).order
        ('b', 'c', 'a')

    """
    return TopSort(provider, observer=observer, traversal=traversal).sort(roots)

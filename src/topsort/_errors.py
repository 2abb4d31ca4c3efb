"""Exceptions raised by topsort."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ._engine import CycleReport


class TopSortError(Exception):
    """Base class for ordinary failures of a sort run."""


class CycleError(TopSortError):
    """Raised when a topological order is requested for a cyclic graph."""

    def __init__(self, report: CycleReport[Any]) -> None:
        self.report = report
        path = " -> ".join(repr(node) for node in report.path)
        super().__init__(f"Cycle detected at {report.node!r}: {path}")


class DependencyProviderError(TopSortError):
    """Raised when the dependencies of a node could not be obtained."""

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"Could not obtain dependencies of {node!r}")


class UnknownNodeError(TopSortError, KeyError):
    """Raised by a provider asked about a node it does not know."""

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(node)

    def __str__(self) -> str:
        return f"Unknown node: {self.node!r}"


class InvariantViolationError(RuntimeError):
    """A node state transition was attempted from the wrong state.

    This signals a bug in the engine or in code driving a registry by hand,
    never a property of the graph being sorted.
    """


class ConfigError(TopSortError):
    """Error in the [tool.topsort] configuration."""


class GraphFileError(TopSortError):
    """A graph document could not be read or validated."""

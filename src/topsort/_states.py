"""Traversal states and exit causes reported by the sort engine."""

from enum import StrEnum
from typing import Self, assert_never


class StrEnumWithDoc(StrEnum):
    """String enum whose members carry their own docstring.

    Members are declared as ``NAME = "value", "documentation"``; the second
    element is optional.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a member storing ``doc`` as its ``__doc__``."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class TraversalState(StrEnumWithDoc):
    """Where a node stands within a single sort run."""

    UNVISITED = "unvisited", "The node has not been entered yet."
    IN_PROGRESS = (
        "in_progress",
        "The node has been entered and its dependencies are being explored.",
    )
    FINISHED = "finished", "The node and all its dependencies have been sorted."


class ExitCause(StrEnumWithDoc):
    """Why the engine stopped exploring a node."""

    ALREADY_SORTED = (
        "already_sorted",
        "The node was sorted earlier in this run. Neither it nor its dependencies are processed again.",
    )
    CYCLE = (
        "cycle",
        "The node was re-entered while still in progress: it is part of a cycle and the run is about to end.",
    )
    DEPENDENCY_CYCLE = (
        "dependency_cycle",
        "One of the node's dependencies is part of a cycle and the run is about to end.",
    )
    SORTED = (
        "sorted",
        "The node has been appended to the finished order. "
        "This happens at most once per node, and exactly once per reachable node when the graph has no cycle.",
    )

    @property
    def is_failure(self) -> bool:
        """Whether this cause ends the run without a topological order."""
        match self:
            case ExitCause.CYCLE | ExitCause.DEPENDENCY_CYCLE:
                return True
            case ExitCause.ALREADY_SORTED | ExitCause.SORTED:
                return False
            case _:
                assert_never(self)

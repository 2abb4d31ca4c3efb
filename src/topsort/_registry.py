"""Per-run bookkeeping of node states and finished positions."""

from collections.abc import Hashable

from ._errors import InvariantViolationError
from ._states import TraversalState


class NodeRegistry[T: Hashable]:
    """Track the traversal state of every node encountered during one run.

    Entries are created lazily: a node that was never marked reports
    ``TraversalState.UNVISITED``. The registry makes no algorithmic decisions;
    it only refuses transitions that skip or repeat a state.
    """

    def __init__(self) -> None:
        self._states: dict[T, TraversalState] = {}
        self._positions: dict[T, int] = {}
        self._order: list[T] = []

    def state_of(self, node: T) -> TraversalState:
        """Return the state of ``node``, ``UNVISITED`` if it was never seen."""
        return self._states.get(node, TraversalState.UNVISITED)

    def mark_in_progress(self, node: T) -> None:
        """Move ``node`` from ``UNVISITED`` to ``IN_PROGRESS``.

        Raises:
            InvariantViolationError: If the node is not ``UNVISITED``.

        """
        state = self.state_of(node)
        if state is not TraversalState.UNVISITED:
            msg = f"Cannot mark {node!r} in progress: it is {state}"
            raise InvariantViolationError(msg)
        self._states[node] = TraversalState.IN_PROGRESS

    def mark_finished(self, node: T) -> int:
        """Move ``node`` from ``IN_PROGRESS`` to ``FINISHED``.

        Returns:
            The position of the node in the finished order.

        Raises:
            InvariantViolationError: If the node is not ``IN_PROGRESS``.

        """
        state = self.state_of(node)
        if state is not TraversalState.IN_PROGRESS:
            msg = f"Cannot mark {node!r} finished: it is {state}"
            raise InvariantViolationError(msg)
        self._states[node] = TraversalState.FINISHED
        position = len(self._order)
        self._positions[node] = position
        self._order.append(node)
        return position

    def position_of(self, node: T) -> int | None:
        """Return the position of ``node`` in the finished order, if any."""
        return self._positions.get(node)

    def finished_order(self) -> tuple[T, ...]:
        """Return a snapshot of the finished order."""
        return tuple(self._order)

    def __len__(self) -> int:
        """Return the number of nodes encountered so far."""
        return len(self._states)

    def __contains__(self, node: object) -> bool:
        """Check whether ``node`` has been encountered."""
        return node in self._states

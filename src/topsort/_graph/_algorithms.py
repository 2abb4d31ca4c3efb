"""Graph algorithms for dependency graph operations."""

from collections.abc import Hashable, Iterable, Mapping, Sequence


def find_order_violations[T: Hashable](
    order: Sequence[T],
    dependencies: Mapping[T, Iterable[T]],
) -> list[tuple[T, T]]:
    """List the edges a sequence fails to respect as a topological order.

    An edge (dependent, dependency) is violated when the dependency does not
    appear before the dependent in ``order``. Edges whose dependent is not in
    ``order`` are ignored.

    Args:
        order: Candidate order, dependencies first.
        dependencies: Mapping from node to the nodes it depends on.

    Returns:
        Violated (dependent, dependency) edges, in the order they were found.
        Empty if ``order`` is a valid topological order.

    Example:
        >>> find_order_violations(["b", "a"], {"a": ["b"], "b": []})
        []
        >>> find_order_violations(["a", "b"], {"a": ["b"], "b": []})
        [('a', 'b')]

    """
    position = {node: index for index, node in enumerate(order)}
    violations: list[tuple[T, T]] = []
    for node in order:
        for dep in dependencies.get(node, ()):
            dep_position = position.get(dep)
            if dep_position is None or dep_position >= position[node]:
                violations.append((node, dep))
    return violations

"""Generic, ordered dependency graph."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field

from topsort._errors import UnknownNodeError


@dataclass(frozen=True, slots=True)
class DependencyGraph[T: Hashable]:
    """A directed graph of "depends on" relationships.

    This is an immutable data structure with query methods. Dependency lists
    keep the order in which they were given, so the graph can serve as a
    dependency provider whose answers are deterministic. It is generic over
    the node type T.

    - predecessors(b) == (a,) means "b depends on a"
    - successors(a) == (b,) means "a is depended on by b"

    Attributes:
        _predecessors: Mapping from node to its direct dependencies.
        _successors: Mapping from node to nodes that depend on it.

    """

    _predecessors: dict[T, tuple[T, ...]] = field(default_factory=dict)
    _successors: dict[T, tuple[T, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]]) -> DependencyGraph[T]:
        """Build a graph from (dependency, dependent) edges.

        An edge (a, b) means "b depends on a". Repeated edges are kept once.

        Example:
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.predecessors("b")
            ('a',)

        """
        predecessors: dict[T, list[T]] = {}
        successors: dict[T, list[T]] = {}

        for src, dst in edges:
            # Ensure both nodes exist in the graph
            predecessors.setdefault(src, [])
            successors.setdefault(src, [])
            preds = predecessors.setdefault(dst, [])
            successors.setdefault(dst, [])
            if src not in preds:
                preds.append(src)
                successors[src].append(dst)

        return cls._freeze(predecessors, successors)

    @classmethod
    def from_mapping(cls, dependencies: Mapping[T, Iterable[T]]) -> DependencyGraph[T]:
        """Build a graph from a mapping of node to its dependencies.

        Every key becomes a node even without dependencies; dependencies that
        are not keys become nodes without dependencies. A dependency listed
        twice for the same node is one edge.

        Example:
            >>> graph = DependencyGraph.from_mapping({"app": ["lib", "log"], "lib": ["log"]})
            >>> graph.dependencies_of("app")
            ('lib', 'log')

        """
        predecessors: dict[T, list[T]] = {}
        successors: dict[T, list[T]] = {}

        for node, deps in dependencies.items():
            preds = predecessors.setdefault(node, [])
            successors.setdefault(node, [])
            for dep in deps:
                if dep in preds:
                    continue
                preds.append(dep)
                successors.setdefault(dep, []).append(node)
                predecessors.setdefault(dep, [])

        return cls._freeze(predecessors, successors)

    @classmethod
    def _freeze(cls, predecessors: dict[T, list[T]], successors: dict[T, list[T]]) -> DependencyGraph[T]:
        return cls(
            _predecessors={k: tuple(v) for k, v in predecessors.items()},
            _successors={k: tuple(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> tuple[T, ...]:
        """All nodes in the graph, in insertion order."""
        return tuple(self._predecessors)

    def predecessors(self, node: T) -> tuple[T, ...]:
        """Get direct dependencies of a node, empty for unknown nodes."""
        return self._predecessors.get(node, ())

    def successors(self, node: T) -> tuple[T, ...]:
        """Get direct dependents of a node, empty for unknown nodes."""
        return self._successors.get(node, ())

    def dependencies_of(self, node: T) -> tuple[T, ...]:
        """Get direct dependencies of a node, as a dependency provider.

        Raises:
            UnknownNodeError: If the node is not in the graph.

        """
        try:
            return self._predecessors[node]
        except KeyError:
            raise UnknownNodeError(node) from None

    def dependents_of(self, node: T) -> tuple[T, ...]:
        """Get direct dependents of a node.

        Only edges known to this graph are considered. For a graph discovered
        during a sort run, a node may have dependents in the full graph that
        were never explored.

        Raises:
            UnknownNodeError: If the node is not in the graph.

        """
        if node not in self._predecessors:
            raise UnknownNodeError(node)
        return self._successors.get(node, ())

    def roots(self) -> tuple[T, ...]:
        """Get nodes that nothing depends on (entry points for sorting), in insertion order."""
        return tuple(n for n in self._predecessors if not self._successors.get(n))

    def leaves(self) -> tuple[T, ...]:
        """Get nodes without dependencies, in insertion order."""
        return tuple(n for n, deps in self._predecessors.items() if not deps)

    def ancestors(self, node: T) -> frozenset[T]:
        """Get all transitive dependencies of a node."""
        return _reachable(node, self._predecessors)

    def descendants(self, node: T) -> frozenset[T]:
        """Get all transitive dependents of a node."""
        return _reachable(node, self._successors)

    def subgraph(self, nodes: Iterable[T]) -> DependencyGraph[T]:
        """Create a subgraph containing only the specified nodes.

        Edges are kept only if both endpoints are in the node set.
        """
        keep = frozenset(nodes)
        return DependencyGraph(
            _predecessors={
                n: tuple(d for d in deps if d in keep) for n, deps in self._predecessors.items() if n in keep
            },
            _successors={
                n: tuple(d for d in deps if d in keep) for n, deps in self._successors.items() if n in keep
            },
        )

    def as_mapping(self) -> dict[T, tuple[T, ...]]:
        """Return a copy of the node to dependencies mapping."""
        return dict(self._predecessors)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors


def _reachable[T: Hashable](start: T, edges: Mapping[T, tuple[T, ...]]) -> frozenset[T]:
    """Nodes reachable from ``start`` by following ``edges``, at least one step away."""
    seen: set[T] = set()
    pending = list(edges.get(start, ()))
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        pending.extend(edges.get(current, ()))
    return frozenset(seen)

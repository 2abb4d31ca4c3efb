"""Graph module providing an ordered dependency graph.

This module contains:
- DependencyGraph[T]: A generic, immutable graph that doubles as a dependency provider
- find_order_violations: Check a sequence against the graph's dependency edges
"""

from ._algorithms import find_order_violations
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "find_order_violations"]

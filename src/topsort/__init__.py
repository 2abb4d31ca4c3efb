"""Topological sorting of lazily discovered dependency graphs."""

__all__ = [
    "CallableProvider",
    "CallbackObserver",
    "CompositeObserver",
    "ConfigError",
    "CycleError",
    "CycleReport",
    "DependencyGraph",
    "DependencyProvider",
    "DependencyProviderError",
    "EventKind",
    "ExitCause",
    "GraphDocument",
    "GraphFileError",
    "InvariantViolationError",
    "LoggingObserver",
    "MappingProvider",
    "NodeRegistry",
    "NullObserver",
    "Observer",
    "RecordingObserver",
    "RunAwareObserver",
    "SortResult",
    "StrEnumWithDoc",
    "TopSort",
    "TopSortConfig",
    "TopSortError",
    "Traversal",
    "TraversalEvent",
    "TraversalState",
    "UnknownNodeError",
    "as_provider",
    "configure_logging",
    "find_order_violations",
    "find_pyproject_toml",
    "get_config",
    "load_config",
    "load_graph_document",
    "parse_graph_document",
    "sort",
]

from ._config import TopSortConfig, find_pyproject_toml, get_config, load_config
from ._engine import CycleReport, SortResult, TopSort, Traversal, sort
from ._errors import (
    ConfigError,
    CycleError,
    DependencyProviderError,
    GraphFileError,
    InvariantViolationError,
    TopSortError,
    UnknownNodeError,
)
from ._events import (
    CallbackObserver,
    CompositeObserver,
    EventKind,
    LoggingObserver,
    NullObserver,
    Observer,
    RecordingObserver,
    RunAwareObserver,
    TraversalEvent,
)
from ._graph import DependencyGraph, find_order_violations
from ._io import GraphDocument, load_graph_document, parse_graph_document
from ._logging import configure_logging
from ._provider import CallableProvider, DependencyProvider, MappingProvider, as_provider
from ._registry import NodeRegistry
from ._states import ExitCause, StrEnumWithDoc, TraversalState

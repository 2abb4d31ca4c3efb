"""Dependency providers: where the engine learns a node's dependencies."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ._errors import UnknownNodeError


@runtime_checkable
class DependencyProvider[T: Hashable](Protocol):
    """Answers which nodes a given node depends on.

    The order of the answer is authoritative: the engine explores
    dependencies in exactly that order. The answer may describe a filtered or
    partial view of some larger graph; the engine makes no completeness
    assumption.
    """

    def dependencies_of(self, node: T) -> Iterable[T]: ...


@dataclass(frozen=True, slots=True)
class CallableProvider[T: Hashable]:
    """Provider backed by a function from node to dependencies."""

    func: Callable[[T], Iterable[T]]

    def dependencies_of(self, node: T) -> Iterable[T]:
        return self.func(node)


@dataclass(frozen=True, slots=True)
class MappingProvider[T: Hashable]:
    """Provider backed by a mapping from node to dependencies.

    Nodes absent from the mapping are unknown, unless ``missing_as_leaf`` is
    set, in which case they have no dependencies.
    """

    mapping: Mapping[T, Iterable[T]]
    missing_as_leaf: bool = False

    def dependencies_of(self, node: T) -> Iterable[T]:
        try:
            return self.mapping[node]
        except KeyError:
            if self.missing_as_leaf:
                return ()
            raise UnknownNodeError(node) from None


type ProviderLike[T: Hashable] = DependencyProvider[T] | Mapping[T, Iterable[T]] | Callable[[T], Iterable[T]]


def as_provider[T: Hashable](source: ProviderLike[T]) -> DependencyProvider[T]:
    """Turn a provider, a mapping or a callable into a provider.

    Args:
        source: An object with ``dependencies_of``, a mapping from node to
            dependencies, or a function from node to dependencies.

    Returns:
        A DependencyProvider.

    Raises:
        TypeError: If ``source`` is none of the above.

    """
    if isinstance(source, DependencyProvider):
        return source
    if isinstance(source, Mapping):
        return MappingProvider(source)
    if callable(source):
        return CallableProvider(source)
    msg = f"Cannot use {type(source).__name__} as a dependency provider"
    raise TypeError(msg)

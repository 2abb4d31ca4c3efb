"""Tests for dependency provider adapters."""

import pytest

from topsort import (
    CallableProvider,
    DependencyGraph,
    DependencyProvider,
    MappingProvider,
    UnknownNodeError,
    as_provider,
)


class TestMappingProvider:
    """Tests for MappingProvider."""

    def test_known_node(self) -> None:
        """Should return the dependencies listed for a node."""
        provider = MappingProvider({"a": ["b"]})
        assert list(provider.dependencies_of("a")) == ["b"]

    def test_unknown_node_raises(self) -> None:
        """Should raise UnknownNodeError for nodes missing from the mapping."""
        provider = MappingProvider({"a": ["b"]})
        with pytest.raises(UnknownNodeError, match="Unknown node: 'b'"):
            provider.dependencies_of("b")

    def test_unknown_node_is_a_key_error(self) -> None:
        """Should raise an error usable as a KeyError."""
        with pytest.raises(KeyError):
            MappingProvider({}).dependencies_of("x")

    def test_missing_as_leaf(self) -> None:
        """Should treat missing nodes as leaves when asked to."""
        provider = MappingProvider({"a": ["b"]}, missing_as_leaf=True)
        assert list(provider.dependencies_of("b")) == []


class TestAsProvider:
    """Tests for as_provider."""

    def test_provider_is_returned_unchanged(self) -> None:
        """Should return an object that already is a provider."""
        graph = DependencyGraph.from_mapping({"a": []})
        assert as_provider(graph) is graph
        assert isinstance(graph, DependencyProvider)

    def test_mapping(self) -> None:
        """Should wrap a mapping in a MappingProvider."""
        provider = as_provider({"a": ["b"]})
        assert isinstance(provider, MappingProvider)
        assert list(provider.dependencies_of("a")) == ["b"]

    def test_callable(self) -> None:
        """Should wrap a callable."""
        provider = as_provider(lambda node: [node + 1])
        assert isinstance(provider, CallableProvider)
        assert list(provider.dependencies_of(1)) == [2]

    def test_unsupported(self) -> None:
        """Should reject objects that cannot provide dependencies."""
        with pytest.raises(TypeError, match="int"):
            as_provider(42)  # type: ignore[arg-type]

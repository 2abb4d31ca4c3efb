"""Reading dependency graphs from TOML documents.

A graph document looks like::

    roots = ["app"]

    [dependencies]
    app = ["lib", "log"]
    lib = ["log"]

Nodes that only appear as dependencies have no dependencies of their own.
"""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._errors import GraphFileError
from ._graph import DependencyGraph

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class GraphDocument(BaseModel):
    """Validated content of a graph document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    roots: list[str] = Field(default_factory=list)
    dependencies: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_roots(self) -> GraphDocument:
        known = set(self.dependencies)
        for deps in self.dependencies.values():
            known.update(deps)
        missing = [root for root in self.roots if root not in known]
        if missing:
            msg = f"Roots not declared in [dependencies]: {', '.join(missing)}"
            raise ValueError(msg)
        return self

    def to_graph(self) -> DependencyGraph[str]:
        """Build the DependencyGraph described by this document."""
        return DependencyGraph.from_mapping(self.dependencies)

    def default_roots(self) -> list[str]:
        """Return the declared roots, or every node nothing depends on."""
        if self.roots:
            return list(self.roots)
        return list(self.to_graph().roots())


def parse_graph_document(text: str) -> GraphDocument:
    """Parse a graph document from TOML text.

    Raises:
        GraphFileError: If the text is not valid TOML or not a valid document.

    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML: {e}"
        raise GraphFileError(msg) from e

    try:
        return GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph document: {e}"
        raise GraphFileError(msg) from e


def load_graph_document(path: Path) -> GraphDocument:
    """Load a graph document from a TOML file.

    Raises:
        GraphFileError: If the file cannot be read or is not a valid document.

    """
    logger.debug("Loading graph document from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read graph document {path}: {e}"
        raise GraphFileError(msg) from e
    return parse_graph_document(text)

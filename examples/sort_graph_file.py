"""Sort a graph document and show the discovered dependents of each node."""

import sys
from pathlib import Path

from topsort import load_graph_document, sort


def main(path: Path) -> None:
    document = load_graph_document(path)
    result = sort(document.default_roots(), document.to_graph())
    for node in result.unwrap():
        dependents = ", ".join(result.graph.dependents_of(node)) or "-"
        print(f"{node:10} needed by {dependents}")  # noqa: T201


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).with_name("graph.toml"))

"""Compute a build order from per-package manifests read on demand.

Each package's manifest is only parsed when the sorter reaches the package,
so unrelated packages in the directory are never read.

Run with a directory of ``<name>.toml`` files, each holding
``requires = ["other", ...]``.
"""

import logging
import sys
import tomllib
from pathlib import Path

from topsort import LoggingObserver, configure_logging, sort

logger = logging.getLogger(__name__)


class ManifestDirectory:
    """Dependency provider reading ``<name>.toml`` manifests from a directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def dependencies_of(self, name: str) -> list[str]:
        path = self.root / f"{name}.toml"
        logger.debug("Reading %s", path)
        with path.open("rb") as f:
            return tomllib.load(f).get("requires", [])


def main(argv: list[str]) -> int:
    configure_logging(verbose="-v" in argv)
    args = [arg for arg in argv if arg != "-v"]
    root, targets = Path(args[0]), args[1:]

    result = sort(targets, ManifestDirectory(root), observer=LoggingObserver())
    if result.cycle is not None:
        logger.error("Cannot build, cycle: %s", " -> ".join(result.cycle.path))
        return 1

    for name in result.order:
        print(name)  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from ._engine import Traversal
from ._errors import ConfigError


@dataclass(slots=True, frozen=True)
class TopSortConfig:
    """Settings read from the [tool.topsort] table of pyproject.toml.

    Attributes:
        traversal: Depth-first strategy used by sorters built from this config.
        log_events: Log every enter/exit notification through LoggingObserver.
        project_root: Directory containing the pyproject.toml, if one was read.

    """

    traversal: Traversal = Traversal.ITERATIVE
    log_events: bool = False
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _parse_traversal(value: object) -> Traversal:
    if not isinstance(value, str):
        msg = "Invalid [tool.topsort].traversal: expected string"
        raise ConfigError(msg)
    try:
        return Traversal(value)
    except ValueError:
        choices = ", ".join(f"'{t}'" for t in Traversal)
        msg = f"Invalid [tool.topsort].traversal '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> TopSortConfig:
    """Load and validate [tool.topsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TopSortConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("topsort", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.topsort]: expected a table"
        raise ConfigError(msg)

    unknown = sorted(set(section) - {"traversal", "log_events"})
    if unknown:
        msg = f"Unknown [tool.topsort] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    traversal = Traversal.ITERATIVE
    if "traversal" in section:
        traversal = _parse_traversal(section["traversal"])

    log_events = section.get("log_events", False)
    if not isinstance(log_events, bool):
        msg = "Invalid [tool.topsort].log_events: expected boolean"
        raise ConfigError(msg)

    return TopSortConfig(traversal=traversal, log_events=log_events, project_root=project_root)


def get_config() -> TopSortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TopSortConfig (defaults if no pyproject.toml or no [tool.topsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TopSortConfig()
    return load_config(pyproject_path)

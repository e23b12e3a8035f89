"""
Project Configuration Resolver.

Finds .vcp.json by walking upward from the working directory of the call,
never above the project root, and extracts the CWE ignore list.

Configuration problems only ever disable suppression. A missing, unreadable
or malformed file behaves exactly like no file, so findings still block.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from vcpgate.config.settings import GateSettings, DEFAULT_SETTINGS
from vcpgate.policy.rules import KNOWN_CWES


@dataclass(frozen=True)
class GateConfig:
    """Per-project gate configuration."""

    ignore: tuple[str, ...] = ()

    # File the config came from (None when no file was found)
    path: Optional[Path] = None

    # Why a found file was ignored, if it was
    error: Optional[str] = None


# Empty configuration: nothing suppressed
EMPTY_CONFIG = GateConfig()


def _process_cwd() -> Optional[str]:
    try:
        return os.getcwd()
    except OSError:
        # Working directory was removed underneath us
        return None


def _absolute(path: str) -> Optional[Path]:
    try:
        return Path(path).expanduser().resolve()
    except (OSError, RuntimeError, ValueError):
        # Unresolvable (embedded NUL, unknown ~user, loops)
        return None


def ancestor_dirs(start: Path, root: Path) -> list[Path]:
    """
    List directories from start up to and including root.

    Args:
        start: Directory the search begins in
        root: Project root; never searched above

    Returns:
        Ordered list [start, parent, ..., root]

    Raises:
        ValueError: If start is not root or inside it
    """
    chain = [start, *start.parents]

    if root not in chain:
        raise ValueError(f"{start} is not inside project root {root}")

    return chain[: chain.index(root) + 1]


def resolve_search_dirs(
    project_dir: Optional[str],
    cwd: Optional[str] = None,
) -> list[Path]:
    """
    Work out which directories may hold the config file.

    Args:
        project_dir: Project root from the environment (empty means unset)
        cwd: Working directory reported with the tool call

    Returns:
        Directories to search, nearest first (empty if none can be resolved)
    """
    root_hint = (project_dir or "").strip()
    start_hint = (cwd or "").strip() or root_hint or _process_cwd()

    if not start_hint:
        return []

    start = _absolute(start_hint)
    if start is None:
        return []

    root = _absolute(root_hint) if root_hint else start
    if root is None:
        return []

    # A call from outside the project only sees the root's config
    if start != root and root not in start.parents:
        start = root

    return ancestor_dirs(start, root)


def find_config_file(
    search_dirs: list[Path],
    filename: str = DEFAULT_SETTINGS.config_filename,
) -> Optional[Path]:
    """Return the nearest config file in search_dirs, if any."""
    for directory in search_dirs:
        candidate = directory / filename
        try:
            if candidate.is_file():
                return candidate
        except (OSError, ValueError):
            # Name too long or otherwise unusable: no config here
            continue

    return None


def parse_ignore_list(data: Any) -> tuple[str, ...]:
    """
    Extract CWE ids from a parsed config object.

    Entries outside the gate's CWE vocabulary (for example standards rule
    ids such as "core-security/rule-3") are meaningful only to the review
    skills and are dropped here.
    """
    if not isinstance(data, dict):
        return ()

    entries = data.get("ignore")
    if not isinstance(entries, list):
        return ()

    ignore = []
    for entry in entries:
        if isinstance(entry, str) and entry in KNOWN_CWES and entry not in ignore:
            ignore.append(entry)

    return tuple(ignore)


def load_config(path: Path) -> GateConfig:
    """
    Load a config file.

    Args:
        path: Path to .vcp.json

    Returns:
        GateConfig (with an empty ignore list if the file is unusable)
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        return GateConfig(path=path, error=f"{type(e).__name__}: {e}")

    if not isinstance(data, dict):
        return GateConfig(path=path, error="top-level value is not an object")

    return GateConfig(ignore=parse_ignore_list(data), path=path)


def resolve_config(
    cwd: Optional[str] = None,
    settings: Optional[GateSettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GateConfig:
    """
    Locate and load the project config for a tool call.

    Args:
        cwd: Working directory reported with the tool call
        settings: Gate settings (uses default if not provided)
        environ: Environment mapping (uses os.environ if not provided)

    Returns:
        GateConfig, EMPTY_CONFIG when nothing is found
    """
    if settings is None:
        settings = DEFAULT_SETTINGS
    if environ is None:
        environ = os.environ

    try:
        search_dirs = resolve_search_dirs(environ.get(settings.project_dir_env), cwd)
        path = find_config_file(search_dirs, settings.config_filename)
    except (OSError, ValueError):
        return EMPTY_CONFIG

    if path is None:
        return EMPTY_CONFIG

    return load_config(path)

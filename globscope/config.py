"""
Configuration model for globscope.

The CLI constructs a Config instance and passes it down into the menu
and search code so behavior can be adjusted without relying on global
state. The glob group registry is built here from the built-in groups
and an optional JSON group file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .domain import GlobRegistry, SearchMode
from .errors import ConfigError, InvalidGroupIdError

LOG = logging.getLogger(__name__)

# Keys the menu keeps for itself; no group mnemonic may use them.
SEARCH_KEYS = ("", "/")
RESET_KEY = "0"
MODE_KEY = "~"
QUIT_KEY = "."
RESERVED_KEYS = frozenset((*SEARCH_KEYS, RESET_KEY, MODE_KEY, QUIT_KEY))

DEFAULT_GROUPS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("_c_pp", ("*.h", "*.hh", "*.hpp", "*.hxx", "*.c", "*.cc", "*.cpp", "*.cxx")),
    ("_p_ython", ("*.py", "*.pyi")),
    ("_j_avascript", ("*.js", "*.jsx", "*.mjs", "*.ts", "*.tsx")),
    ("_w_eb", ("*.html", "*.htm", "*.css", "*.scss")),
    ("_s_hell", ("*.sh", "*.bash", "*.zsh")),
    ("_d_ocs", ("*.md", "*.rst", "*.txt", "*.org")),
    ("co_n_fig", ("*.json", "*.yaml", "*.yml", "*.toml", "*.ini", "*.cfg")),
    ("_t_ests", ("test_*", "*_test.*", "*_tests.*", "tests/**", "test/**")),
    ("_b_uild", ("Makefile", "*.mk", "CMakeLists.txt", "*.cmake", "BUILD", "*.bazel")),
)


@dataclass
class Config:
    """
    Top-level configuration for a globscope run.
    """

    query: Optional[str] = None
    root: Optional[str] = None
    mode: SearchMode = SearchMode.REGEX
    groups_file: Optional[str] = None
    rg_executable: str = "rg"
    extra_rg_args: List[str] = field(default_factory=list)
    include_groups: List[str] = field(default_factory=list)
    exclude_groups: List[str] = field(default_factory=list)
    interactive: bool = True
    verbosity: int = 0


def load_groups_file(path: str) -> Dict[str, List[str]]:
    """
    Load glob groups from a JSON file.

    The file holds one object mapping group identifiers to lists of
    glob patterns, e.g. ``{"_r_ust": ["*.rs", "Cargo.toml"]}``.
    """

    try:
        raw = json.loads(Path(path).read_text())
    except OSError as exc:
        raise ConfigError(f"cannot read glob group file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"glob group file {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"glob group file {path} must contain a JSON object")

    groups: Dict[str, List[str]] = {}
    for group_id, patterns in raw.items():
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigError(f"group {group_id!r} in {path} must map to a list of strings")
        groups[group_id] = patterns
    return groups


def validate_bindings(registry: GlobRegistry) -> None:
    """
    Check that every mnemonic can be bound to exactly one menu key.

    Groups without a mnemonic are accepted; they simply get no key.
    """

    seen: Dict[str, str] = {}
    for group_id in registry:
        key = group_id.mnemonic
        if key is None:
            LOG.debug("group %s has no mnemonic; no menu key bound", group_id)
            continue
        if key in RESERVED_KEYS:
            raise InvalidGroupIdError(f"group {group_id} uses reserved menu key {key!r}")
        if key in seen:
            raise InvalidGroupIdError(
                f"groups {seen[key]} and {group_id} share the mnemonic {key!r}"
            )
        seen[key] = group_id.value


def build_registry(config: Config) -> GlobRegistry:
    """
    Build the glob registry for a session.

    Built-in groups come first; entries from ``config.groups_file``
    replace built-ins with the same id or are appended after them.
    """

    registry = GlobRegistry(DEFAULT_GROUPS)
    if config.groups_file:
        for group_id, patterns in load_groups_file(config.groups_file).items():
            registry.register(group_id, patterns)
        LOG.info("loaded glob groups from %s", config.groups_file)

    validate_bindings(registry)
    return registry

"""
Project discovery for globscope.

Finds the directory a search should be rooted at and collects the
project's default ignore lists. The classification core only sees the
resulting strings; it never reasons about ignore files itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .errors import ProjectError

LOG = logging.getLogger(__name__)

ROOT_MARKERS = (
    ".git",
    ".hg",
    ".svn",
    ".bzr",
    ".projectile",
    "pyproject.toml",
    "setup.py",
    "package.json",
    "Cargo.toml",
    "go.mod",
)

IGNORE_FILE = ".projectile"

DEFAULT_IGNORED_DIRECTORIES = (
    ".git/",
    ".hg/",
    ".svn/",
    ".bzr/",
    ".idea/",
    ".tox/",
    ".venv/",
    "__pycache__/",
    "node_modules/",
)


@dataclass
class IgnoreLists:
    """
    Files and directories the project never wants searched.
    """

    files: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)

    def as_globs(self) -> List[str]:
        """Files first, then directories, each in load order."""
        return [*self.files, *self.directories]


def find_project_root(start: Optional[str] = None) -> Path:
    """
    Return the closest ancestor of ``start`` holding a root marker.

    Falls back to ``start`` itself when no marker is found. ``start``
    defaults to the current working directory.
    """

    origin = Path(start) if start else Path.cwd()
    if not origin.exists():
        raise ProjectError(f"search root does not exist: {origin}")
    origin = origin.resolve()
    if not origin.is_dir():
        raise ProjectError(f"search root is not a directory: {origin}")

    for candidate in (origin, *origin.parents):
        for marker in ROOT_MARKERS:
            if (candidate / marker).exists():
                LOG.debug("found project root %s (marker %s)", candidate, marker)
                return candidate

    LOG.debug("no project marker above %s; using it as root", origin)
    return origin


def load_ignore_lists(root: Path) -> IgnoreLists:
    """
    Collect ignored files and directories for the project at ``root``.

    Besides the built-in VCS and cache directories, lines of the form
    ``-entry`` in ``.projectile`` are honoured: entries ending in ``/``
    are directories, everything else is a file glob. A leading ``/``
    anchors the entry at the project root, as in a gitignore file.
    Blank lines and ``#`` comments are skipped; other lines are not
    ignore rules.
    """

    ignores = IgnoreLists(directories=list(DEFAULT_IGNORED_DIRECTORIES))

    ignore_file = root / IGNORE_FILE
    if not ignore_file.is_file():
        return ignores

    try:
        text = ignore_file.read_text()
    except OSError as exc:
        raise ProjectError(f"cannot read {ignore_file}: {exc}") from exc

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line.startswith("-"):
            continue
        entry = line[1:].strip()
        if entry in ("", "/") or entry.startswith("#"):
            continue
        if entry.endswith("/"):
            if entry not in ignores.directories:
                ignores.directories.append(entry)
        elif entry not in ignores.files:
            ignores.files.append(entry)

    LOG.debug(
        "ignore lists for %s: %d files, %d directories",
        root,
        len(ignores.files),
        len(ignores.directories),
    )
    return ignores

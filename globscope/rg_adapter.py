"""
ripgrep integration for globscope.

This module turns a compiled argument list, a query and a root path
into an ``rg`` invocation and parses its output into match records.
All ripgrep calls go through ``_run_rg`` so error handling and logging
are centralized.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .errors import SearchToolError

LOG = logging.getLogger(__name__)

BASE_ARGS = ("--line-number", "--no-heading", "--color=never", "--with-filename", "--null")

# rg exit codes: 0 matches, 1 no matches, 2 error (possibly after some matches).
_NO_MATCHES = 1
_ERROR = 2

# Fallback for output printed without --null; the path is the shortest
# prefix followed by ":<line>:".
_LINE_RE = re.compile(r"^(.*?):(\d+):(.*)$")


@dataclass
class SearchMatch:
    """
    A single matching line reported by ripgrep.
    """

    path: str
    line_number: int
    text: str


@dataclass
class SearchResult:
    """
    Outcome of one ripgrep run.

    command is the full argv that was executed; matches holds parsed
    lines in the order ripgrep printed them.
    """

    command: List[str]
    returncode: int
    matches: List[SearchMatch] = field(default_factory=list)


def build_command(
    arguments: Sequence[str],
    query: str,
    root: Union[str, Path],
    rg_executable: str = "rg",
    extra_args: Sequence[str] = (),
) -> List[str]:
    """
    Assemble the argv for ripgrep.

    The query follows ``--`` so patterns starting with a dash are not
    read as flags.
    """

    return [rg_executable, *BASE_ARGS, *arguments, *extra_args, "--", query, str(root)]


def _run_rg(cmd: List[str], cwd: Optional[str] = None) -> subprocess.CompletedProcess[str]:
    """
    Run ripgrep and return the completed process.

    Exit status 1 only means nothing matched and is returned normally.
    Status 2 with output means some files could not be searched; the
    matches found elsewhere are kept and the problem is logged.
    """

    LOG.debug("Running rg command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:  # noqa: BLE001
        raise SearchToolError(f"failed to execute {cmd[0]}: {exc}") from exc

    if completed.returncode in (0, _NO_MATCHES):
        return completed

    details = completed.stderr.strip()
    if completed.returncode == _ERROR and completed.stdout:
        LOG.warning("rg reported errors for some files: %s", details)
        return completed

    LOG.debug("rg stderr: %s", completed.stderr)
    message = f"rg command failed: {' '.join(cmd)}"
    if details:
        message = f"{message}\n{details}"
    raise SearchToolError(message)


def _split_line(line: str) -> Optional[SearchMatch]:
    if "\0" in line:
        path, _, rest = line.partition("\0")
        number, sep, text = rest.partition(":")
        if not sep or not number.isdigit():
            return None
        return SearchMatch(path=path, line_number=int(number), text=text)

    found = _LINE_RE.match(line)
    if found is None:
        return None
    return SearchMatch(path=found.group(1), line_number=int(found.group(2)), text=found.group(3))


def parse_output(stdout: str) -> List[SearchMatch]:
    """
    Parse ripgrep's ``--no-heading`` output into match records.

    With ``--null`` the path ends at the NUL byte, so paths containing
    colons survive. Plain ``path:line:text`` lines are also accepted.
    Lines that do not carry a line number (for example, binary file
    notices) are skipped.
    """

    matches: List[SearchMatch] = []
    for line in stdout.splitlines():
        match = _split_line(line)
        if match is None:
            LOG.debug("skipping unparsed rg line: %s", line)
            continue
        matches.append(match)
    return matches


def run_search(
    arguments: Sequence[str],
    query: str,
    root: Union[str, Path],
    rg_executable: str = "rg",
    extra_args: Sequence[str] = (),
) -> SearchResult:
    """
    Search ``root`` for ``query`` using the compiled filter arguments.
    """

    cmd = build_command(arguments, query, root, rg_executable=rg_executable, extra_args=extra_args)
    LOG.info("searching with: %s", " ".join(cmd))
    completed = _run_rg(cmd)
    return SearchResult(
        command=cmd,
        returncode=completed.returncode,
        matches=parse_output(completed.stdout),
    )

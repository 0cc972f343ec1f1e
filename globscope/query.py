"""
Compile a classification state into ripgrep filter arguments.

ripgrep lets later ``--glob`` flags override earlier ones, so the order
of the produced list is significant: exclusions first (user excludes,
then project ignores), then inclusions. The literal-mode flag, when
present, leads the list.
"""

from __future__ import annotations

from typing import List, Sequence

from .domain import ClassificationState, SearchMode

LITERAL_FLAG = "--fixed-strings"
GLOB_FLAG = "--glob"


def _glob_arg(pattern: str, negate: bool = False) -> str:
    prefix = "!" if negate else ""
    return f"{GLOB_FLAG}={prefix}{pattern}"


def build_arguments(
    state: ClassificationState,
    default_ignores: Sequence[str],
    mode: SearchMode,
) -> List[str]:
    """
    Return the ordered argument list for the search tool.

    Set members are sorted so the same state always yields the same
    command line. ``default_ignores`` keeps the order it was given in.
    """

    arguments: List[str] = []
    if mode is SearchMode.LITERAL:
        arguments.append(LITERAL_FLAG)

    arguments.extend(_glob_arg(pattern, negate=True) for pattern in sorted(state.exclude))
    arguments.extend(_glob_arg(ignore, negate=True) for ignore in default_ignores)
    arguments.extend(_glob_arg(pattern) for pattern in sorted(state.include))
    return arguments

"""
Three-state classification of glob groups.

Each call to ``classify`` moves one group a single step around the
cycle neutral -> included -> excluded -> neutral. The decision is made
from the membership of every pattern in the group, so groups that share
a literal pattern influence each other.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

from .domain import ClassificationState

LOG = logging.getLogger(__name__)

GroupStatus = Literal["included", "excluded", "neutral"]


def reset() -> ClassificationState:
    """Return the empty classification state."""

    return ClassificationState()


def classify(group_patterns: Sequence[str], state: ClassificationState) -> ClassificationState:
    """
    Advance the group made of ``group_patterns`` by one step.

    The input state is never modified; a new state is returned. An
    empty group leaves the state as it is.
    """

    patterns = frozenset(group_patterns)
    if not patterns:
        return state

    all_included = patterns <= state.include
    all_excluded = patterns <= state.exclude

    if all_included and not all_excluded:
        LOG.debug("included -> excluded: %s", ", ".join(group_patterns))
        return ClassificationState(
            include=state.include - patterns,
            exclude=state.exclude | patterns,
        )

    if all_excluded and not all_included:
        LOG.debug("excluded -> neutral: %s", ", ".join(group_patterns))
        return ClassificationState(
            include=state.include,
            exclude=state.exclude - patterns,
        )

    # Neutral or partially classified. Only patterns entering the include
    # set leave the exclude set; every other exclusion is kept.
    LOG.debug("neutral -> included: %s", ", ".join(group_patterns))
    return ClassificationState(
        include=state.include | patterns,
        exclude=state.exclude - patterns,
    )


def group_status(group_patterns: Sequence[str], state: ClassificationState) -> GroupStatus:
    """
    Report how a group currently reads in the menu.

    Uses the same all-members checks as ``classify``; anything partial
    shows as neutral, which is also what the next toggle treats it as.
    """

    patterns = frozenset(group_patterns)
    if not patterns:
        return "neutral"
    if patterns <= state.include:
        return "included"
    if patterns <= state.exclude:
        return "excluded"
    return "neutral"

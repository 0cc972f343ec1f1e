"""
Core domain models for globscope.

These types describe glob groups, the registry that holds them, and the
classification state a menu session builds up before searching. They
intentionally avoid any terminal, filesystem or ripgrep dependencies so
they can be reused by different parts of the system.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import InvalidGroupIdError

MNEMONIC_DELIMITER = "_"

_MNEMONIC_RE = re.compile(r"_([^_])_")


class SearchMode(enum.Enum):
    """How ripgrep should interpret the query string."""

    LITERAL = "literal"
    REGEX = "regex"


@dataclass(frozen=True)
class GlobGroupId:
    """
    Identifier of a glob group, e.g. ``_c_pp`` or ``py_t_hon``.

    The character wrapped in delimiters is the mnemonic the menu binds
    to the group. Identifiers without one are valid but get no key.
    """

    value: str
    mnemonic: Optional[str] = field(default=None, compare=False)

    @classmethod
    def parse(cls, value: str) -> "GlobGroupId":
        if not value:
            raise InvalidGroupIdError("glob group identifier must not be empty")
        found = _MNEMONIC_RE.findall(value)
        if len(found) > 1:
            raise InvalidGroupIdError(
                f"glob group {value!r} has more than one mnemonic: {', '.join(found)}"
            )
        return cls(value=value, mnemonic=found[0] if found else None)

    @property
    def display_name(self) -> str:
        if self.mnemonic is None:
            return self.value
        marked = f"{MNEMONIC_DELIMITER}{self.mnemonic}{MNEMONIC_DELIMITER}"
        return self.value.replace(marked, self.mnemonic, 1)

    def __str__(self) -> str:
        return self.value


GroupKey = Union[str, GlobGroupId]


class GlobRegistry:
    """
    Ordered mapping from glob group identifiers to their patterns.

    The registry is filled during configuration and only read while a
    menu session is running. Registering an existing id replaces its
    patterns but keeps its original position.
    """

    def __init__(self, groups: Optional[Iterable[Tuple[GroupKey, Iterable[str]]]] = None) -> None:
        self._groups: Dict[GlobGroupId, Tuple[str, ...]] = {}
        for group_id, patterns in groups or ():
            self.register(group_id, patterns)

    def register(self, group_id: GroupKey, patterns: Iterable[str]) -> GlobGroupId:
        if not isinstance(group_id, GlobGroupId):
            group_id = GlobGroupId.parse(group_id)
        self._groups[group_id] = tuple(patterns)
        return group_id

    def patterns_for(self, group_id: GroupKey) -> Tuple[str, ...]:
        key = group_id.value if isinstance(group_id, GlobGroupId) else group_id
        # GlobGroupId equality ignores the mnemonic, so a bare value is enough.
        return self._groups.get(GlobGroupId(value=key), ())

    def items(self) -> List[Tuple[GlobGroupId, Tuple[str, ...]]]:
        return list(self._groups.items())

    def __contains__(self, group_id: object) -> bool:
        if isinstance(group_id, str):
            group_id = GlobGroupId(value=group_id)
        return group_id in self._groups

    def __iter__(self) -> Iterator[GlobGroupId]:
        return iter(list(self._groups))

    def __len__(self) -> int:
        return len(self._groups)


@dataclass(frozen=True)
class ClassificationState:
    """
    Patterns the user has included in or excluded from the search.

    Classification works on individual pattern strings, not on group
    ids. A pattern is never a member of both sets.
    """

    include: FrozenSet[str] = frozenset()
    exclude: FrozenSet[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.include and not self.exclude

"""
Interactive glob group menu for globscope.

A MenuSession owns the classification state for one menu run and maps
keys onto it: a group's mnemonic toggles that group, a few reserved
keys search, reset, switch the search mode or quit. Rendering and key
reading are kept outside the session so the dispatch logic can be
driven directly.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import MODE_KEY, QUIT_KEY, RESET_KEY, SEARCH_KEYS
from .domain import ClassificationState, GlobGroupId, GlobRegistry, SearchMode
from .toggle import classify, group_status, reset

LOG = logging.getLogger(__name__)

STATUS_STYLES = {
    "included": "bold green",
    "excluded": "bold red",
    "neutral": "dim",
}


class MenuAction(enum.Enum):
    TOGGLED = "toggled"
    SEARCH = "search"
    RESET = "reset"
    MODE = "mode"
    QUIT = "quit"
    UNKNOWN = "unknown"


class MenuSession:
    """
    Classification state and key bindings for one menu run.
    """

    def __init__(
        self,
        registry: GlobRegistry,
        state: Optional[ClassificationState] = None,
        mode: SearchMode = SearchMode.REGEX,
    ) -> None:
        self.registry = registry
        self.state = state if state is not None else reset()
        self.mode = mode
        self._bindings = self._build_bindings(registry)
        self.unbound_keys: List[str] = []

    @staticmethod
    def _build_bindings(registry: GlobRegistry) -> Dict[str, GlobGroupId]:
        bindings: Dict[str, GlobGroupId] = {}
        for group_id in registry:
            # Unbindable ids are a configuration omission, not an error.
            if group_id.mnemonic is None or group_id.mnemonic in bindings:
                continue
            bindings[group_id.mnemonic] = group_id
        return bindings

    def bindings(self) -> Dict[str, GlobGroupId]:
        return dict(self._bindings)

    def toggle(self, group_id: GlobGroupId) -> None:
        self.state = classify(self.registry.patterns_for(group_id), self.state)

    def apply_groups(self, group_names: Iterable[str], target: str) -> None:
        """
        Classify groups by name until each reaches ``target``.

        Names match either the raw id (``_c_pp``) or its display name
        (``cpp``). Unknown names are skipped. At most three steps are
        taken per group, one full turn of the cycle.
        """

        by_name = {}
        for group_id in self.registry:
            by_name[group_id.value] = group_id
            by_name.setdefault(group_id.display_name, group_id)

        for name in group_names:
            group_id = by_name.get(name)
            if group_id is None:
                LOG.warning("unknown glob group %r", name)
                continue
            patterns = self.registry.patterns_for(group_id)
            for _ in range(3):
                if group_status(patterns, self.state) == target:
                    break
                self.state = classify(patterns, self.state)

    def handle_key(self, key: str) -> MenuAction:
        if key in SEARCH_KEYS:
            return MenuAction.SEARCH
        if key == QUIT_KEY:
            return MenuAction.QUIT
        if key == RESET_KEY:
            self.state = reset()
            return MenuAction.RESET
        if key == MODE_KEY:
            self.mode = SearchMode.REGEX if self.mode is SearchMode.LITERAL else SearchMode.LITERAL
            return MenuAction.MODE

        group_id = self._bindings.get(key)
        if group_id is None:
            return MenuAction.UNKNOWN
        self.toggle(group_id)
        return MenuAction.TOGGLED

    def handle_line(self, line: str) -> MenuAction:
        """
        Dispatch a typed line, one key per character.

        An empty line is the Enter key. Processing stops at the first
        search or quit key. Keys with no binding are collected in
        ``unbound_keys`` and do not decide the returned action; UNKNOWN
        is returned only when no key on the line did anything.
        """

        self.unbound_keys = []
        line = line.strip()
        if not line:
            return self.handle_key("")
        action = MenuAction.UNKNOWN
        for key in line:
            result = self.handle_key(key)
            if result is MenuAction.UNKNOWN:
                self.unbound_keys.append(key)
                continue
            action = result
            if action in (MenuAction.SEARCH, MenuAction.QUIT):
                break
        return action


def groups_table(registry: GlobRegistry, state: Optional[ClassificationState] = None) -> Table:
    table = Table(title="Glob groups")
    table.add_column("Key", style="bold cyan")
    table.add_column("Group")
    table.add_column("Patterns", style="dim")
    if state is not None:
        table.add_column("Status")

    for group_id, patterns in registry.items():
        row = [
            escape(group_id.mnemonic or "-"),
            escape(group_id.display_name),
            escape(" ".join(patterns)),
        ]
        if state is not None:
            status = group_status(patterns, state)
            row.append(f"[{STATUS_STYLES[status]}]{status}[/{STATUS_STYLES[status]}]")
        table.add_row(*row)
    return table


def render(console: Console, session: MenuSession) -> None:
    console.print(groups_table(session.registry, session.state))
    console.print(
        f"[dim]mode:[/dim] {session.mode.value}   "
        f"[dim]keys:[/dim] group key toggles, "
        f"Enter or {SEARCH_KEYS[1]} search, {RESET_KEY} reset, "
        f"{MODE_KEY} literal/regex, {QUIT_KEY} quit"
    )


def run_menu(
    session: MenuSession,
    console: Console,
    read_line: Optional[Callable[[], str]] = None,
) -> Optional[MenuSession]:
    """
    Loop until the user asks to search or quits.

    Returns the session when a search was requested and None when the
    menu was abandoned (quit key or end of input).
    """

    if read_line is None:
        read_line = lambda: console.input("[bold blue]globs>[/bold blue] ")  # noqa: E731

    while True:
        render(console, session)
        try:
            line = read_line()
        except EOFError:
            return None

        action = session.handle_line(line)
        if action is MenuAction.SEARCH:
            return session
        if action is MenuAction.QUIT:
            return None
        if session.unbound_keys:
            keys = ", ".join(repr(key) for key in session.unbound_keys)
            console.print(f"[yellow]No action bound to {escape(keys)}[/yellow]")

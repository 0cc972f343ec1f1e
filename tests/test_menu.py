import io

from rich.console import Console

from globscope.domain import GlobRegistry, SearchMode
from globscope.menu import MenuAction, MenuSession, run_menu
from globscope.toggle import reset


def _registry() -> GlobRegistry:
    return GlobRegistry(
        [
            ("_c_pp", ["*.h", "*.c", "*.cc"]),
            ("_t_ests", ["test_*"]),
            ("misc", ["*.txt"]),
        ]
    )


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


def test_bindings_skip_groups_without_mnemonic():
    session = MenuSession(_registry())
    bindings = session.bindings()
    assert sorted(bindings) == ["c", "t"]
    assert bindings["c"].value == "_c_pp"


def test_handle_key_toggles_bound_group():
    session = MenuSession(_registry())

    assert session.handle_key("c") is MenuAction.TOGGLED
    assert session.state.include == {"*.h", "*.c", "*.cc"}

    assert session.handle_key("c") is MenuAction.TOGGLED
    assert session.state.exclude == {"*.h", "*.c", "*.cc"}

    assert session.handle_key("c") is MenuAction.TOGGLED
    assert session.state == reset()


def test_handle_key_reserved_keys():
    session = MenuSession(_registry(), mode=SearchMode.REGEX)
    session.handle_key("t")

    assert session.handle_key("~") is MenuAction.MODE
    assert session.mode is SearchMode.LITERAL
    assert session.handle_key("0") is MenuAction.RESET
    assert session.state == reset()
    assert session.handle_key("") is MenuAction.SEARCH
    assert session.handle_key("/") is MenuAction.SEARCH
    assert session.handle_key(".") is MenuAction.QUIT
    assert session.handle_key("z") is MenuAction.UNKNOWN


def test_handle_line_processes_each_key_until_search():
    session = MenuSession(_registry())

    assert session.handle_line("ct/c") is MenuAction.SEARCH
    assert session.state.include == {"*.h", "*.c", "*.cc", "test_*"}


def test_apply_groups_reaches_requested_status():
    session = MenuSession(_registry())
    session.apply_groups(["cpp"], "included")
    session.apply_groups(["_t_ests", "nope"], "excluded")

    assert session.state.include == {"*.h", "*.c", "*.cc"}
    assert session.state.exclude == {"test_*"}


def test_run_menu_returns_session_on_search():
    session = MenuSession(_registry())
    lines = iter(["c", "t", ""])

    result = run_menu(session, _console(), read_line=lambda: next(lines))

    assert result is session
    assert session.state.include == {"*.h", "*.c", "*.cc", "test_*"}


def test_run_menu_returns_none_on_quit_or_eof():
    lines = iter(["c", "."])
    assert run_menu(MenuSession(_registry()), _console(), read_line=lambda: next(lines)) is None

    def eof():
        raise EOFError

    assert run_menu(MenuSession(_registry()), _console(), read_line=eof) is None


def test_run_menu_renders_group_status():
    console = _console()
    session = MenuSession(_registry())
    lines = iter(["c", "/"])

    run_menu(session, console, read_line=lambda: next(lines))

    output = console.file.getvalue()
    assert "cpp" in output
    assert "included" in output


def test_handle_line_reports_only_unbound_keys():
    session = MenuSession(_registry())

    assert session.handle_line("cx") is MenuAction.TOGGLED
    assert session.state.include == {"*.h", "*.c", "*.cc"}
    assert session.unbound_keys == ["x"]

    assert session.handle_line("zq") is MenuAction.UNKNOWN
    assert session.unbound_keys == ["z", "q"]

    assert session.handle_line("t") is MenuAction.TOGGLED
    assert session.unbound_keys == []


def test_run_menu_warns_about_unbound_keys_only():
    console = _console()
    session = MenuSession(_registry())
    lines = iter(["cx", "t", "/"])

    run_menu(session, console, read_line=lambda: next(lines))

    output = console.file.getvalue()
    assert "No action bound to 'x'" in output
    assert "'c'" not in output
    assert output.count("No action bound") == 1

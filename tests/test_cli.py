from globscope import cli
from globscope.query import LITERAL_FLAG
from globscope.rg_adapter import SearchMatch, SearchResult


def _fake_search(calls):
    def fake_run_search(arguments, query, root, rg_executable="rg", extra_args=()):
        calls.append({"arguments": list(arguments), "query": query, "root": root, "rg": rg_executable})
        return SearchResult(
            command=["rg"],
            returncode=0,
            matches=[SearchMatch(path="src/a.h", line_number=1, text="needle")],
        )

    return fake_run_search


def test_main_without_menu_builds_scoped_search(tmp_path, monkeypatch, capsys):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".projectile").write_text("-/build/\n")
    calls = []
    monkeypatch.setattr(cli, "run_search", _fake_search(calls))

    exit_code = cli.main(
        [
            "needle",
            "--root",
            str(tmp_path),
            "--literal",
            "--no-menu",
            "--include",
            "cpp",
            "--exclude",
            "tests",
        ]
    )

    assert exit_code == 0
    assert len(calls) == 1
    arguments = calls[0]["arguments"]
    assert arguments[0] == LITERAL_FLAG
    assert "--glob=!test_*" in arguments
    assert arguments.index("--glob=!/build/") < arguments.index("--glob=*.h")
    assert calls[0]["query"] == "needle"
    assert calls[0]["root"] == tmp_path.resolve()
    assert "src/a.h" in capsys.readouterr().out


def test_main_returns_zero_when_menu_is_abandoned(monkeypatch):
    def fail_search(*args, **kwargs):
        raise AssertionError("search should not run after quitting the menu")

    monkeypatch.setattr(cli, "run_menu", lambda session, console: None)
    monkeypatch.setattr(cli, "run_search", fail_search)

    assert cli.main(["needle"]) == 0


def test_main_reports_configuration_errors(tmp_path, capsys):
    groups_path = tmp_path / "groups.json"
    groups_path.write_text("[]")

    exit_code = cli.main(["needle", "--no-menu", "--groups", str(groups_path)])

    assert exit_code == 1
    assert "globscope: error:" in capsys.readouterr().err


def test_main_lists_groups(capsys):
    assert cli.main(["--list-groups"]) == 0
    assert "cpp" in capsys.readouterr().out


def test_main_passes_extra_rg_args(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    calls = []
    seen = {}

    def fake_run_search(arguments, query, root, rg_executable="rg", extra_args=()):
        seen["extra_args"] = list(extra_args)
        return _fake_search(calls)(arguments, query, root, rg_executable=rg_executable)

    monkeypatch.setattr(cli, "run_search", fake_run_search)

    exit_code = cli.main(
        ["needle", "--root", str(tmp_path), "--no-menu", "--rg-arg=--hidden", "--rg-arg=--max-count=1"]
    )

    assert exit_code == 0
    assert seen["extra_args"] == ["--hidden", "--max-count=1"]


def test_main_rejects_bad_root_before_menu(tmp_path, monkeypatch, capsys):
    def fail_menu(session, console):
        raise AssertionError("menu should not open for a missing root")

    monkeypatch.setattr(cli, "run_menu", fail_menu)

    exit_code = cli.main(["needle", "--root", str(tmp_path / "missing")])

    assert exit_code == 1
    assert "does not exist" in capsys.readouterr().err

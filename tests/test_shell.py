import io
import os
import sys

import pytest

from shell42.history import History
from shell42.shell import Shell, main, split_and, split_or

PY = sys.executable


@pytest.fixture
def shell(tmp_path):
    sh = Shell(
        env={"PATH": os.environ.get("PATH", ""), "HOME": str(tmp_path / "home")},
        stdin=io.StringIO(),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )
    sh.state.history = History(tmp_path / "history")
    return sh


def test_split_and():
    assert split_and("a&&b") == ["a", "b"]
    assert split_and("a&b&&&c") == ["a", "b", "c"]
    assert split_and("&&") == []


def test_split_or():
    assert split_or("a||b") == ["a", "b"]
    assert split_or("a|||b") == ["a", "|b"]
    assert split_or("a||") == ["a"]
    assert split_or("||a") == ["", "a"]
    assert split_or("") == []
    assert split_or("a|b") == ["a|b"]


def test_semicolons(shell):
    shell.run_line("echo a ; echo b")
    assert shell.stdout.getvalue() == "a\nb\n"


def test_and_runs_after_success(shell):
    shell.run_line("setenv FOO bar && echo ok")
    assert shell.state.env.get("FOO") == "bar"
    assert shell.stdout.getvalue() == "ok\n"


def test_and_stops_after_failure(shell):
    status = shell.run_line(f"{PY} -c exit(1) && echo no")
    assert status == 1
    assert shell.stdout.getvalue() == ""


def test_or_runs_after_failure(shell):
    assert shell.run_line(f"{PY} -c exit(1) || echo yes") == 0
    assert shell.stdout.getvalue() == "yes\n"


def test_or_skips_after_success(shell):
    shell.run_line("echo a || echo b")
    assert shell.stdout.getvalue() == "a\n"


def test_pipe(shell):
    shell.run_line(f"echo abc | {PY} -c print(open(0).read().upper(),end='')")
    assert shell.stdout.getvalue() == "ABC\n"


def test_invalid_null_command(shell):
    assert shell.run_line("echo a | | echo b") == 1
    assert shell.stderr.getvalue() == "Invalid null command.\n"


def test_output_redirection(shell, tmp_path):
    shell.run_line(f"echo hi > {tmp_path}/o.txt")
    assert (tmp_path / "o.txt").read_text() == "hi\n"


def test_append_redirection(shell, tmp_path):
    shell.run_line(f"echo one >> {tmp_path}/o.txt")
    shell.run_line(f"echo two >> {tmp_path}/o.txt")
    assert (tmp_path / "o.txt").read_text() == "one\ntwo\n"


def test_history_expansion(shell):
    shell.state.history.add("echo first")
    shell.run_line("!1")
    assert shell.stdout.getvalue() == "first\n"


def test_history_event_not_found(shell):
    assert shell.run_line("!9") == 1
    assert shell.stdout.getvalue() == "9: Event not found.\n"
    assert shell.state.should_continue is True


def test_alias_expansion(shell):
    shell.run_line("alias hello echo hi")
    shell.run_line("hello")
    assert shell.stdout.getvalue() == "echo hi\nhi\n"


def test_prompt_shows_directory(shell, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert shell.prompt() == f"\x1b[1;32m-> \x1b[1;36m{tmp_path.name}:\x1b[0m "
    shell.state.last_status = 1
    assert shell.prompt().startswith("\x1b[1;31m-> ")


def test_prompt_home_is_tilde(shell, tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(home)
    assert shell.prompt() == "\x1b[1;32m-> \x1b[1;36m~:\x1b[0m "


def test_loop_exit_code_and_history(shell):
    shell.stdin = io.StringIO("echo hi\nexit 3\n")
    assert shell.loop() == 3
    assert shell.stdout.getvalue() == "hi\nexit\n"
    assert shell.state.history.entries() == ["echo hi", "exit 3"]


def test_loop_end_of_input_returns_last_status(shell):
    shell.stdin = io.StringIO("cd /nonexistent-dir-xyz\n")
    assert shell.loop() == 1


def test_main_rejects_arguments():
    assert main(["extra"]) == 84
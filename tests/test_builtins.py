import io
import os
from pathlib import Path

import pytest

from shell42.builtins import (
    CD_TOO_MANY,
    EXPRESSION_SYNTAX,
    ShellExit,
    change_directory,
    exit_command,
    is_exit_number,
    run_builtin,
)
from shell42.environment import Environment
from shell42.history import History
from shell42.state import ShellState


@pytest.fixture
def state(tmp_path):
    return ShellState(env=Environment(["A=1"]), history=History(tmp_path / "h.txt"))


@pytest.mark.parametrize("text,expected", [("42", True), ("0", True), ("", False), ("4a", False), ("-1", False)])
def test_is_exit_number(text, expected):
    assert is_exit_number(text) is expected


def test_exit_without_args():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_command(["exit"], out)
    assert info.value.code == 0
    assert out.getvalue() == "exit\n"


def test_exit_with_code():
    with pytest.raises(ShellExit) as info:
        exit_command(["exit", "3"], io.StringIO())
    assert info.value.code == 3


@pytest.mark.parametrize("args", [["exit", "1", "2"], ["exit", "abc"]])
def test_exit_syntax_error(args):
    out = io.StringIO()
    assert exit_command(args, out) == 1
    assert out.getvalue() == EXPRESSION_SYNTAX


def test_cd_into_directory(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    assert change_directory(state, ["cd", str(target)], io.StringIO()) == 0
    assert Path(os.getcwd()) == target.resolve()
    assert state.env.get("PWD") == os.getcwd()
    assert Path(state.env.get("OLDPWD")) == tmp_path.resolve()


def test_cd_home(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state.env.set("HOME", str(home))
    assert change_directory(state, ["cd"], io.StringIO()) == 0
    assert Path(os.getcwd()) == home.resolve()
    monkeypatch.chdir(tmp_path)
    assert change_directory(state, ["cd", "~"], io.StringIO()) == 0
    assert Path(os.getcwd()) == home.resolve()


def test_cd_dash_without_oldpwd(state):
    err = io.StringIO()
    assert change_directory(state, ["cd", "-"], err) == 1
    assert "No such file or directory" in err.getvalue()


def test_cd_too_many(state):
    err = io.StringIO()
    assert change_directory(state, ["cd", "a", "b"], err) == 1
    assert err.getvalue() == CD_TOO_MANY


def test_cd_missing_directory(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    missing = str(tmp_path / "nope")
    assert change_directory(state, ["cd", missing], err) == 1
    assert err.getvalue().startswith(f"{missing}: ")
    assert Path(os.getcwd()) == tmp_path.resolve()


def test_run_builtin_env(state):
    out = io.StringIO()
    assert run_builtin(state, ["env"], out, io.StringIO()) == 0
    assert out.getvalue() == "A=1\n"


def test_run_builtin_setenv_and_unsetenv(state):
    out = io.StringIO()
    assert run_builtin(state, ["setenv", "B", "2"], out, io.StringIO()) == 0
    assert state.env.get("B") == "2"
    assert run_builtin(state, ["unsetenv", "B"], out, io.StringIO()) == 0
    assert state.env.get("B") is None


def test_run_builtin_echo_uses_status(state):
    state.last_status = 1
    out = io.StringIO()
    assert run_builtin(state, ["echo", "$?"], out, io.StringIO()) == 0
    assert out.getvalue() == "1\n"


def test_run_builtin_alias(state):
    run_builtin(state, ["alias", "ll", "ls", "-l"], io.StringIO(), io.StringIO())
    assert state.aliases.expand("ll") == "ls -l"


def test_run_builtin_exit_raises(state):
    with pytest.raises(ShellExit):
        run_builtin(state, ["exit"], io.StringIO(), io.StringIO())


def test_run_builtin_unknown(state):
    assert run_builtin(state, ["ls", "-l"], io.StringIO(), io.StringIO()) is None
    assert run_builtin(state, [""], io.StringIO(), io.StringIO()) is None
import pytest

from shell42.textutils import (
    count_pipes,
    find_number,
    is_viable,
    last_path_component,
    normalize_spaces,
    parse_args,
    rstrip_spaces,
    split_words,
)
from shell42.textutils import prefix_matches


@pytest.mark.parametrize(
    "word,name,expected",
    [("ex", "exit", True), ("exit", "exit", True), ("exits", "exit", False), ("", "cd", True), ("cx", "cd", False)],
)
def test_prefix_matches(word, name, expected):
    assert prefix_matches(word, name) is expected


def test_find_number_reads_digits_after_start():
    assert find_number("!12", 1) == 12


def test_find_number_joins_scattered_digits():
    assert find_number("!1a2", 1) == 12


def test_find_number_without_digits_is_zero():
    assert find_number("!abc", 1) == 0


def test_normalize_spaces_collapses_runs():
    assert normalize_spaces("   ls    -l   ") == "ls -l"


def test_normalize_spaces_turns_tabs_into_spaces():
    assert normalize_spaces("ls\t-l\t") == "ls -l"


@pytest.mark.parametrize("line", ["  a  b   c ", "\tx\t\ty ", "plain", "", "   "])
def test_normalize_spaces_invariants(line):
    result = normalize_spaces(line)
    assert "  " not in result
    assert "\t" not in result
    assert result == result.strip(" \n")
    assert normalize_spaces(result) == result


def test_split_words():
    assert split_words("a b c") == ["a", "b", "c"]


def test_split_words_empty_line():
    assert split_words("") == [""]


def test_parse_args_round_trip():
    words = ["grep", "-n", "pattern", "file.txt"]
    assert parse_args("  " + "   ".join(words) + "\t ") == words


def test_parse_args_blank_line():
    assert parse_args(" \t ") == [""]


def test_rstrip_spaces():
    assert rstrip_spaces("file  ") == "file"
    assert rstrip_spaces("file") == "file"
    assert rstrip_spaces(" file") == " file"


@pytest.mark.parametrize("parts", [["a"], ["ls", "wc"], ["cat x", "grep y", "wc -l", "sort"]])
def test_count_pipes(parts):
    assert count_pipes("|".join(parts)) == len(parts) - 1


def test_is_viable():
    assert is_viable("  x ") is True
    assert is_viable(" \t ") is False
    assert is_viable("") is False


def test_last_path_component():
    assert last_path_component("/home/user") == "user"
    assert last_path_component("/") == ""
"""Small text helpers used by the command-line parser."""

from __future__ import annotations

from itertools import zip_longest

_BLANKS = ("", " ", "\n", "\t")


def prefix_matches(word: str, name: str) -> bool:
    """Return True when ``word`` is a prefix of ``name`` (so "ex" matches "exit")."""
    return name.startswith(word)


def find_number(text: str, start: int = 0) -> int:
    """Collect every digit found from ``start`` onwards into one number.

    Returns 0 when no digit is present.
    """
    digits = "".join(ch for ch in text[start:] if "0" <= ch <= "9")
    return int(digits) if digits else 0


def normalize_spaces(line: str) -> str:
    """Drop leading and trailing blanks, collapse runs of blanks and turn tabs into spaces."""
    text = line.lstrip(" \t\n")
    out: list[str] = []
    for ch, nxt in zip_longest(text, text[1:], fillvalue=""):
        if ch == "\t":
            if nxt not in ("\t", " ", ""):
                out.append(" ")
        elif ch in (" ", "\n"):
            if nxt not in _BLANKS:
                out.append(ch)
        else:
            out.append(ch)
    return "".join(out)


def split_words(line: str) -> list[str]:
    """Split a line on spaces; an empty line gives a single empty word."""
    words = [word for word in line.split(" ") if word]
    return words or [""]


def parse_args(line: str) -> list[str]:
    """Turn a raw command line into its argument list."""
    return split_words(normalize_spaces(line))


def rstrip_spaces(text: str) -> str:
    """Remove trailing space characters."""
    return text.rstrip(" ")


def count_pipes(line: str) -> int:
    """Count the ``|`` characters in a line."""
    return line.count("|")


def is_viable(text: str) -> bool:
    """Return True when the text holds something other than spaces and tabs."""
    return any(ch not in " \t" for ch in text)


def last_path_component(path: str) -> str:
    """Return the part of a path after its last slash."""
    return path.rsplit("/", 1)[-1]
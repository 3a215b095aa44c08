"""The echo builtin."""

from __future__ import annotations

from typing import TextIO

_CONTROL_NAMES = {
    "\n": "\\n",
    "\a": "\\a",
    "\b": "\\b",
    "\x1b": "\\e",
    "\f": "\\f",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_FLAGS = {"-n": 1, "-E": 2, "-e": 3}


def escape_controls(text: str) -> str:
    """Show control characters as backslash escapes and drop quotes."""
    return "".join(
        _CONTROL_NAMES.get(ch, ch) for ch in text if ch not in ("'", '"')
    )


def unescape_newlines(text: str) -> str:
    """Drop leading zeros and quotes, and turn a literal ``\\n`` into a newline."""
    body = text.lstrip("0").replace("\\n", "\n")
    return body.replace('"', "").replace("'", "")


def render_echo(args: list[str], last_status: int = 0) -> str:
    """Return what echo prints for ``args`` (which include the command name)."""
    if len(args) < 2:
        return "\n"
    flag = _FLAGS.get(args[1], 0)
    start = 2 if flag else 1
    words = args[start:]
    pieces: list[str] = []
    for position, word in enumerate(words, start):
        if word == "$?":
            pieces.append(str(last_status))
        elif position == 2:
            pieces.append(escape_controls(word))
        else:
            pieces.append(unescape_newlines(word))
    text = " ".join(pieces)
    if words and flag != 1:
        text += "\n"
    return text


def echo_command(args: list[str], last_status: int, out: TextIO) -> int:
    """Run the echo builtin."""
    out.write(render_echo(args, last_status))
    return 0
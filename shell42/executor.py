"""Running external commands and pipelines."""

from __future__ import annotations

import errno
import io
import os
import signal
import subprocess
import threading
from contextlib import ExitStack, nullcontext
from dataclasses import dataclass
from typing import IO, TextIO, Union

from .builtins import run_builtin
from .environment import Environment
from .redirect import Redirections, Streams
from .state import ShellState
from .textutils import prefix_matches

INVALID_NULL_COMMAND = "Invalid null command.\n"

_Upstream = Union[None, bytes, IO[bytes]]


@dataclass
class Stage:
    """One command of a pipeline: its words, resolved program and redirections."""

    args: list[str]
    command: str = ""
    redirections: Redirections | None = None

    def __post_init__(self) -> None:
        if not self.command:
            self.command = self.args[0] if self.args else ""


def search_path(env: Environment) -> list[str]:
    """Return the directories listed in PATH, skipping empty entries."""
    path = env.get("PATH")
    if path is None:
        return []
    return [directory for directory in path.split(":") if directory]


def resolve_command(path_dirs: list[str], name: str) -> str:
    """Find ``name`` in the search path; names that need no search come back as they are."""
    if (
        not name
        or name[0] in "/."
        or prefix_matches(name, "exit")
        or prefix_matches(name, "env")
    ):
        return name
    for directory in path_dirs:
        candidate = f"{directory}/{name}"
        if os.path.exists(candidate):
            return candidate
    return name


def describe_status(returncode: int) -> tuple[str, int]:
    """Turn a child's return code into the message to print and the shell status."""
    if returncode >= 0:
        return "", returncode
    messages = {
        signal.SIGSEGV: "Segmentation fault",
        signal.SIGFPE: "Floating exception",
    }
    return messages.get(-returncode, "") + "\n", 0


def _not_found(name: str) -> tuple[str, int]:
    return f"{name}: Command not found.\n", 1


def _precheck(command: str, args: list[str]) -> tuple[str, int] | None:
    """Report a command that cannot be run before trying to start it."""
    if command.startswith("/") and not os.path.exists(command):
        return _not_found(command)
    if command.startswith(".") or "/" in command:
        return None
    if prefix_matches(command, args[0]):
        return _not_found(command)
    return None


def _exec_failure(command: str, args: list[str], error: OSError) -> tuple[str, int]:
    if command.startswith(".") or "/" in command:
        if error.errno == errno.ENOEXEC:
            return f"{command}: Exec format error. Wrong Architecture.\n", 0
        if error.errno == errno.ENOENT:
            return f"{command}: Command not found.\n", 0
        reason = os.strerror(error.errno) if error.errno else str(error.strerror)
        return f"{command}: {reason}.\n", 0
    return _not_found(args[0])


def _fd_of(stream: TextIO | None) -> int | None:
    """Return the descriptor behind a stream after flushing it, or None if it has none."""
    if stream is None:
        return None
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    stream.flush()
    return fd


def _run_external(
    state: ShellState, args: list[str], stdin: TextIO | None, out: TextIO, err: TextIO
) -> int:
    command = resolve_command(search_path(state.env), args[0])
    failure = _precheck(command, args)
    if failure is not None:
        out.write(failure[0])
        return failure[1]
    out_fd = _fd_of(out)
    err_fd = _fd_of(err)
    try:
        process = subprocess.Popen(
            args,
            executable=command,
            env=state.env.as_dict(),
            stdin=stdin,
            stdout=out_fd if out_fd is not None else subprocess.PIPE,
            stderr=err_fd if err_fd is not None else subprocess.PIPE,
        )
    except OSError as error:
        message, status = _exec_failure(command, args, error)
        out.write(message)
        return status
    captured_out, captured_err = process.communicate()
    if captured_out:
        out.write(captured_out.decode(errors="replace"))
    if captured_err:
        err.write(captured_err.decode(errors="replace"))
    message, status = describe_status(process.returncode)
    out.write(message)
    return status


def run_command(
    state: ShellState,
    args: list[str],
    redirections: Redirections | None,
    out: TextIO,
    err: TextIO,
) -> int:
    """Run one command, builtin or external, and record its status."""
    if not args or not args[0]:
        return state.last_status
    opener = (
        redirections.open_streams()
        if redirections is not None
        else nullcontext(Streams(None, None))
    )
    with opener as streams:
        target = streams.stdout if streams.stdout is not None else out
        status = run_builtin(state, args, target, err)
        if status is None:
            status = _run_external(state, args, streams.stdin, target, err)
    state.last_status = status
    return status


def _discard(upstream: _Upstream) -> None:
    if upstream is not None and not isinstance(upstream, bytes):
        upstream.close()


def _feed(pipe: IO[bytes], data: bytes) -> None:
    try:
        pipe.write(data)
    except BrokenPipeError:
        pass
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


def run_pipeline(state: ShellState, stages: list[Stage], out: TextIO, err: TextIO) -> int:
    """Run stages with each one's output feeding the next; return the last one's status."""
    processes: list[subprocess.Popen[bytes]] = []
    feeders: list[threading.Thread] = []
    previous: _Upstream = None
    last_process: subprocess.Popen[bytes] | None = None
    last_sink: TextIO = out
    status = 0
    env = state.env.as_dict()
    err_fd = _fd_of(err)
    with ExitStack() as stack:
        for index, stage in enumerate(stages):
            is_last = index == len(stages) - 1
            streams = (
                stack.enter_context(stage.redirections.open_streams())
                if stage.redirections is not None
                else Streams(None, None)
            )
            target = streams.stdout
            if is_last:
                last_sink = target if target is not None else out
                builtin = run_builtin(state, stage.args, last_sink, err)
                if builtin is not None:
                    _discard(previous)
                    previous = None
                    status = builtin
                    break
            else:
                buffer = io.StringIO()
                builtin = run_builtin(
                    state, stage.args, target if target is not None else buffer, err
                )
                if builtin is not None:
                    _discard(previous)
                    previous = buffer.getvalue().encode()
                    continue

            failure = _precheck(stage.command, stage.args)
            if failure is not None:
                err.write(failure[0])
                _discard(previous)
                previous = b""
                if is_last:
                    status = failure[1]
                continue

            data: bytes | None = None
            if streams.stdin is not None:
                _discard(previous)
                previous = None
                stdin_value: object = streams.stdin
            elif isinstance(previous, bytes):
                stdin_value = subprocess.PIPE
                data = previous
            else:
                stdin_value = previous

            if is_last:
                sink_fd = _fd_of(last_sink)
                stdout_value: object = sink_fd if sink_fd is not None else subprocess.PIPE
            else:
                target_fd = _fd_of(target)
                stdout_value = target_fd if target_fd is not None else subprocess.PIPE

            try:
                process = subprocess.Popen(
                    stage.args,
                    executable=stage.command,
                    env=env,
                    stdin=stdin_value,
                    stdout=stdout_value,
                    stderr=err_fd,
                )
            except OSError as error:
                message, failed = _exec_failure(stage.command, stage.args, error)
                err.write(message)
                _discard(previous)
                previous = b""
                if is_last:
                    status = failed
                continue

            _discard(previous)
            if data is not None and process.stdin is not None:
                feeder = threading.Thread(target=_feed, args=(process.stdin, data), daemon=True)
                feeder.start()
                feeders.append(feeder)
            processes.append(process)
            if is_last:
                last_process = process
                previous = None
            else:
                previous = process.stdout if process.stdout is not None else b""

        _discard(previous)
        if last_process is not None:
            if last_process.stdout is not None:
                captured = last_process.stdout.read()
                last_process.stdout.close()
                if captured:
                    last_sink.write(captured.decode(errors="replace"))
            last_process.wait()
            message, status = describe_status(last_process.returncode)
            out.write(message)
        for feeder in feeders:
            feeder.join()
        for process in processes:
            process.wait()
    state.last_status = status
    return status
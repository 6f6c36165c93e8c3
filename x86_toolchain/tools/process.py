"""Blocking execution of external tools."""

from __future__ import annotations

import signal
import subprocess
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import structlog

log = structlog.get_logger("x86_toolchain.tools")


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external invocation. Streams are None unless captured."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str | None = None
    stderr: str | None = None


def exit_status(returncode: int) -> int:
    """Map a child killed by signal N (returncode -N) to the shell's 128 + N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


@contextmanager
def _sigint_ignored() -> Iterator[None]:
    """Let Ctrl-C reach only the child (e.g. to interrupt the debuggee)."""
    try:
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    except ValueError:
        # Not on the main thread; nothing to shield.
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def run_process(
    argv: list[str],
    *,
    interactive: bool = False,
    capture: bool = False,
) -> ProcessResult:
    """Run ``argv`` to completion and return its exit status.

    A child killed by a signal reports ``128 + signum`` like a shell would.
    Raises the builtin ``FileNotFoundError`` or ``PermissionError`` when
    ``argv[0]`` cannot be executed; callers translate them.
    """
    log.debug("exec", argv=argv, interactive=interactive)
    if interactive:
        with _sigint_ignored():
            completed = subprocess.run(argv, check=False)
    else:
        completed = subprocess.run(argv, check=False, capture_output=capture, text=True)
    log.debug("exit", program=argv[0], raw_returncode=completed.returncode)
    return ProcessResult(
        argv=tuple(argv),
        returncode=exit_status(completed.returncode),
        stdout=completed.stdout if capture else None,
        stderr=completed.stderr if capture else None,
    )

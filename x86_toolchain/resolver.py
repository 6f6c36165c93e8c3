"""Command-line tokens -> BuildConfig.

The resolver owns flag semantics; the click command in ``cli`` only forwards
raw tokens here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from x86_toolchain.exceptions import SourceNotFoundError, UsageError
from x86_toolchain.models.config import (
    DEFAULT_BREAKPOINT,
    Architecture,
    BuildConfig,
    RunMode,
)

logger = logging.getLogger(__name__)

USAGE = """\
Usage:

x86-toolchain [ options ] <assembly filename> [-o | --output <output filename>]

-v | --verbose                Show some information about steps performed.
-g | --gdb                    Run gdb command on executable.
-b | --break <break point>    Add breakpoint after running gdb. Default is _start.
-r | --run                    Run program in gdb automatically. Same as run command inside gdb env.
-q | --qemu                   Run executable in QEMU emulator. This will execute the program.
-64| --x86-64                 Compile for 64bit (x86-64) system.
-o | --output <filename>      Output filename."""

# (spellings, field): flags that take no value
_SWITCHES: list[tuple[tuple[str, ...], str]] = [
    (("-g", "--gdb"), "gdb"),
    (("-v", "--verbose"), "verbose"),
    (("-64", "--x86-64"), "x86_64"),
    (("-q", "--qemu"), "qemu"),
    (("-r", "--run"), "gdb_auto_run"),
]

# (spellings, field): flags that consume the next token
_VALUED: list[tuple[tuple[str, ...], str]] = [
    (("-o", "--output"), "output_path"),
    (("-b", "--break"), "breakpoint"),
]

_SWITCH_BY_TOKEN = {tok: name for spellings, name in _SWITCHES for tok in spellings}
_VALUED_BY_TOKEN = {tok: name for spellings, name in _VALUED for tok in spellings}


def derive_output_path(input_path: str) -> str:
    """Strip the final extension of the last path component.

    ``prog.asm`` -> ``prog``; ``noext`` -> ``noext``; ``a.b.asm`` -> ``a.b``.
    """
    root, _ext = os.path.splitext(input_path)
    return root


class ConfigResolver:
    """Single pass over the argument tokens producing a BuildConfig."""

    def __init__(self, *, check_exists: bool = True) -> None:
        self.check_exists = check_exists

    def resolve(self, args: Sequence[str]) -> BuildConfig:
        tokens = list(args)
        if not tokens:
            raise UsageError("no arguments given", USAGE)

        switches: dict[str, bool] = {}
        values: dict[str, str] = {}
        positional: list[str] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token in _SWITCH_BY_TOKEN:
                switches[_SWITCH_BY_TOKEN[token]] = True
            elif token in _VALUED_BY_TOKEN:
                if i + 1 >= len(tokens) or not tokens[i + 1]:
                    raise UsageError(f"option {token} requires an argument", USAGE)
                values[_VALUED_BY_TOKEN[token]] = tokens[i + 1]
                i += 1
            elif token.startswith("-"):
                raise UsageError(f"Unknown option {token}", USAGE)
            else:
                positional.append(token)
            i += 1

        if not positional:
            raise UsageError("missing assembly filename", USAGE)
        input_path = positional[0]
        if len(positional) > 1:
            logger.warning("Ignoring extra positional arguments: %s", positional[1:])

        if self.check_exists and not Path(input_path).is_file():
            raise SourceNotFoundError(input_path)

        # -q wins over -g whatever the order: the emulator branch is terminal.
        if switches.get("qemu"):
            run_mode = RunMode.QEMU
        elif switches.get("gdb"):
            run_mode = RunMode.GDB
        else:
            run_mode = RunMode.NONE

        return BuildConfig(
            input_path=input_path,
            output_path=values.get("output_path") or derive_output_path(input_path),
            architecture=Architecture.X86_64 if switches.get("x86_64") else Architecture.X86,
            verbose=switches.get("verbose", False),
            run_mode=run_mode,
            gdb_auto_run=switches.get("gdb_auto_run", False),
            breakpoint=values.get("breakpoint", DEFAULT_BREAKPOINT),
        )


def resolve(args: Sequence[str], *, check_exists: bool = True) -> BuildConfig:
    """Resolve ``args`` into a BuildConfig (see ``ConfigResolver``)."""
    return ConfigResolver(check_exists=check_exists).resolve(args)

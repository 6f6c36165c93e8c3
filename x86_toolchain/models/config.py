"""Resolved build configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum


class Architecture(Enum):
    """Target instruction-set width."""

    X86 = "32-bit"
    X86_64 = "64-bit"


class RunMode(Enum):
    """What to do with the executable once it is linked."""

    NONE = "none"
    QEMU = "qemu"
    GDB = "gdb"


DEFAULT_BREAKPOINT = "_start"


@dataclass(frozen=True)
class BuildConfig:
    """Immutable result of resolving the command line."""

    input_path: str
    output_path: str
    architecture: Architecture = Architecture.X86
    verbose: bool = False
    run_mode: RunMode = RunMode.NONE
    gdb_auto_run: bool = False
    breakpoint: str = DEFAULT_BREAKPOINT

    @property
    def object_path(self) -> str:
        return f"{self.output_path}.o"

    def describe(self) -> list[str]:
        """Human-readable ``name = value`` dump of every field."""
        lines = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            lines.append(f"{f.name} = {value}")
        return lines

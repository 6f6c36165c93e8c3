"""Data models for architecture-dependent tool selection and stage results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from x86_toolchain.models.config import Architecture


@dataclass(frozen=True)
class ArchProfile:
    """Per-architecture arguments for the external tools."""

    nasm_format: str  # nasm -f
    ld_machine: str  # ld -m
    qemu_binary: str  # user-mode emulator


# The only architecture-dependent branching in the pipeline goes through here.
ARCH_PROFILES: dict[Architecture, ArchProfile] = {
    Architecture.X86: ArchProfile(
        nasm_format="elf", ld_machine="elf_i386", qemu_binary="qemu-i386"
    ),
    Architecture.X86_64: ArchProfile(
        nasm_format="elf64", ld_machine="elf_x86_64", qemu_binary="qemu-x86_64"
    ),
}


class Stage(Enum):
    """Pipeline stages, valued by their progress phase name."""

    ASSEMBLE = "assemble"
    LINK = "link"
    RUN_QEMU = "qemu"
    RUN_GDB = "gdb"


@dataclass(frozen=True)
class StageResult:
    stage: Stage
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

"""Abstract interfaces for the external collaborators the pipeline drives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from x86_toolchain.tools.process import ProcessResult


class Assembler(ABC):
    """Translates an assembly source into a relocatable object file."""

    @abstractmethod
    def assemble(self, fmt: str, input_path: str, object_path: str) -> ProcessResult:
        """
        Assemble ``input_path`` into ``object_path``.

        Args:
            fmt: Object format token, e.g. ``elf`` or ``elf64``.
            input_path: Assembly source file.
            object_path: Object file to produce.
        """
        ...


class Linker(ABC):
    """Links an object file into an executable."""

    @abstractmethod
    def link(self, machine: str, object_path: str, output_path: str) -> ProcessResult:
        """
        Link ``object_path`` into ``output_path``.

        Args:
            machine: Emulation/machine token, e.g. ``elf_i386``.
        """
        ...


class Emulator(ABC):
    """Runs an executable under a user-mode CPU emulator."""

    @abstractmethod
    def run(self, binary: str, executable_path: str) -> ProcessResult:
        ...


class Debugger(ABC):
    """Starts an interactive debugging session; blocks until the user quits."""

    @abstractmethod
    def run(
        self,
        breakpoint_command: str,
        run_command: str | None,
        executable_path: str,
    ) -> ProcessResult:
        ...


@dataclass
class Toolchain:
    """One implementation of each collaborator."""

    assembler: Assembler
    linker: Linker
    emulator: Emulator
    debugger: Debugger

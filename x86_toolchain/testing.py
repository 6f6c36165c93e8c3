"""Test doubles for x86_toolchain: no nasm/ld/qemu/gdb needed.

Usage::

    from x86_toolchain.testing import FakeToolchain

    tools = FakeToolchain()                                   # everything exits 0
    tools = FakeToolchain(exit_codes={Stage.ASSEMBLE: 1})     # assembler fails
    tools = FakeToolchain(missing={Stage.LINK})               # ld not installed
    BuildPipeline(tools).execute(config)
    assert [c.stage for c in tools.calls] == [Stage.ASSEMBLE, Stage.LINK]
"""

from __future__ import annotations

from dataclasses import dataclass

from x86_toolchain.exceptions import ToolNotFoundError
from x86_toolchain.models.toolchain import Stage
from x86_toolchain.tools.base import Assembler, Debugger, Emulator, Linker, Toolchain
from x86_toolchain.tools.process import ProcessResult


@dataclass(frozen=True)
class FakeCall:
    stage: Stage
    binary: str
    args: tuple[str | None, ...]


class _Recorder:
    def __init__(self, owner: FakeToolchain) -> None:
        self._owner = owner

    def _record(self, stage: Stage, binary: str, *args: str | None) -> ProcessResult:
        owner = self._owner
        owner.calls.append(FakeCall(stage, binary, args))
        if stage in owner.missing:
            raise ToolNotFoundError(stage, binary)
        rc = owner.exit_codes.get(stage, 0)
        return ProcessResult(
            argv=(binary, *[a for a in args if a is not None]),
            returncode=rc,
            stderr=owner.stderr.get(stage),
        )


class FakeAssembler(_Recorder, Assembler):
    def assemble(self, fmt: str, input_path: str, object_path: str) -> ProcessResult:
        return self._record(Stage.ASSEMBLE, "nasm", fmt, input_path, object_path)


class FakeLinker(_Recorder, Linker):
    def link(self, machine: str, object_path: str, output_path: str) -> ProcessResult:
        return self._record(Stage.LINK, "ld", machine, object_path, output_path)


class FakeEmulator(_Recorder, Emulator):
    def run(self, binary: str, executable_path: str) -> ProcessResult:
        return self._record(Stage.RUN_QEMU, binary, executable_path)


class FakeDebugger(_Recorder, Debugger):
    def run(
        self,
        breakpoint_command: str,
        run_command: str | None,
        executable_path: str,
    ) -> ProcessResult:
        return self._record(
            Stage.RUN_GDB, "gdb", breakpoint_command, run_command, executable_path
        )


class FakeToolchain(Toolchain):
    """Drop-in Toolchain that records calls and returns scripted exit codes.

    Parameters
    ----------
    exit_codes:
        Exit code per stage; stages not listed exit 0.
    missing:
        Stages whose binary should look uninstalled (raises ToolNotFoundError).
    stderr:
        Captured stderr to attach to a stage's result.
    """

    def __init__(
        self,
        *,
        exit_codes: dict[Stage, int] | None = None,
        missing: set[Stage] | None = None,
        stderr: dict[Stage, str] | None = None,
    ) -> None:
        self.exit_codes = dict(exit_codes or {})
        self.missing = set(missing or ())
        self.stderr = dict(stderr or {})
        self.calls: list[FakeCall] = []
        super().__init__(
            assembler=FakeAssembler(self),
            linker=FakeLinker(self),
            emulator=FakeEmulator(self),
            debugger=FakeDebugger(self),
        )

    def calls_for(self, stage: Stage) -> list[FakeCall]:
        return [c for c in self.calls if c.stage is stage]

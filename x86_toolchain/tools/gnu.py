"""nasm / GNU ld / qemu user-mode / gdb implementations of the tool interfaces."""

from __future__ import annotations

from x86_toolchain.core.settings import ToolchainSettings
from x86_toolchain.exceptions import ToolNotExecutableError, ToolNotFoundError
from x86_toolchain.models.toolchain import Stage
from x86_toolchain.tools.base import Assembler, Debugger, Emulator, Linker, Toolchain
from x86_toolchain.tools.process import ProcessResult, run_process


def _invoke(stage: Stage, argv: list[str], interactive: bool = False) -> ProcessResult:
    try:
        return run_process(argv, interactive=interactive)
    except FileNotFoundError:
        raise ToolNotFoundError(stage, argv[0]) from None
    except PermissionError:
        raise ToolNotExecutableError(stage, argv[0]) from None


class NasmAssembler(Assembler):
    def __init__(self, binary: str = "nasm") -> None:
        self.binary = binary

    def assemble(self, fmt: str, input_path: str, object_path: str) -> ProcessResult:
        return _invoke(
            Stage.ASSEMBLE,
            [self.binary, "-f", fmt, input_path, "-o", object_path],
        )


class LdLinker(Linker):
    def __init__(self, binary: str = "ld") -> None:
        self.binary = binary

    def link(self, machine: str, object_path: str, output_path: str) -> ProcessResult:
        return _invoke(
            Stage.LINK,
            [self.binary, "-m", machine, object_path, "-o", output_path],
        )


class QemuEmulator(Emulator):
    """The binary name is chosen per architecture by the caller."""

    def run(self, binary: str, executable_path: str) -> ProcessResult:
        return _invoke(Stage.RUN_QEMU, [binary, executable_path])


class GdbDebugger(Debugger):
    def __init__(self, binary: str = "gdb") -> None:
        self.binary = binary

    def build_argv(
        self,
        breakpoint_command: str,
        run_command: str | None,
        executable_path: str,
    ) -> list[str]:
        argv = [self.binary, "-ex", breakpoint_command]
        if run_command:
            argv += ["-ex", run_command]
        argv.append(executable_path)
        return argv

    def run(
        self,
        breakpoint_command: str,
        run_command: str | None,
        executable_path: str,
    ) -> ProcessResult:
        argv = self.build_argv(breakpoint_command, run_command, executable_path)
        return _invoke(Stage.RUN_GDB, argv, interactive=True)


def default_toolchain(settings: ToolchainSettings | None = None) -> Toolchain:
    """Build the real toolchain, honoring binary overrides from ``settings``."""
    settings = settings or ToolchainSettings()
    return Toolchain(
        assembler=NasmAssembler(settings.nasm),
        linker=LdLinker(settings.ld),
        emulator=QemuEmulator(),
        debugger=GdbDebugger(settings.gdb),
    )

"""Tests for run_process and the nasm/ld/qemu/gdb wrappers."""

from __future__ import annotations

import signal
import sys
from unittest.mock import patch

import pytest

from x86_toolchain.core.settings import ToolchainSettings
from x86_toolchain.exceptions import ToolNotExecutableError, ToolNotFoundError
from x86_toolchain.models.toolchain import Stage
from x86_toolchain.tools.gnu import (
    GdbDebugger,
    LdLinker,
    NasmAssembler,
    QemuEmulator,
    default_toolchain,
)
from x86_toolchain.tools.process import ProcessResult, exit_status, run_process


class TestRunProcess:
    def test_exit_code(self):
        result = run_process([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.returncode == 3
        assert result.stdout is None
        assert result.stderr is None

    def test_killed_by_signal_reports_shell_status(self):
        result = run_process(
            [sys.executable, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"]
        )
        assert result.returncode == 128 + signal.SIGTERM

    @pytest.mark.parametrize("raw, expected", [(0, 0), (2, 2), (-11, 139), (-9, 137)])
    def test_exit_status(self, raw, expected):
        assert exit_status(raw) == expected

    def test_capture(self):
        result = run_process(
            [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"],
            capture=True,
        )
        assert result.returncode == 0
        assert result.stdout.strip() == "out"
        assert result.stderr.strip() == "err"

    def test_argv_recorded(self):
        argv = [sys.executable, "-c", "pass"]
        assert run_process(argv).argv == tuple(argv)

    def test_missing_binary(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_process([str(tmp_path / "no-such-tool")])

    def test_interactive_restores_sigint_handler(self):
        before = signal.getsignal(signal.SIGINT)
        seen = []

        def fake_run(argv, check):
            seen.append(signal.getsignal(signal.SIGINT))
            return type("Completed", (), {"returncode": 0, "stdout": None, "stderr": None})()

        with patch("x86_toolchain.tools.process.subprocess.run", side_effect=fake_run):
            run_process(["gdb"], interactive=True)

        assert seen == [signal.SIG_IGN]
        assert signal.getsignal(signal.SIGINT) is before

    def test_interactive_restores_handler_on_error(self):
        before = signal.getsignal(signal.SIGINT)
        with patch(
            "x86_toolchain.tools.process.subprocess.run", side_effect=FileNotFoundError
        ):
            with pytest.raises(FileNotFoundError):
                run_process(["gdb"], interactive=True)
        assert signal.getsignal(signal.SIGINT) is before


def _ok(argv, interactive=False):
    return ProcessResult(argv=tuple(argv), returncode=0)


@patch("x86_toolchain.tools.gnu.run_process", side_effect=_ok)
class TestCommandLines:
    def test_nasm(self, mock_run):
        result = NasmAssembler().assemble("elf64", "hello.asm", "hello.o")
        assert result.argv == ("nasm", "-f", "elf64", "hello.asm", "-o", "hello.o")

    def test_ld(self, mock_run):
        result = LdLinker("ld.bfd").link("elf_i386", "hello.o", "hello")
        assert result.argv == ("ld.bfd", "-m", "elf_i386", "hello.o", "-o", "hello")

    def test_qemu(self, mock_run):
        result = QemuEmulator().run("qemu-i386", "hello")
        assert result.argv == ("qemu-i386", "hello")
        assert mock_run.call_args.kwargs["interactive"] is False

    def test_gdb_with_run(self, mock_run):
        result = GdbDebugger().run("b main", "r", "hello")
        assert result.argv == ("gdb", "-ex", "b main", "-ex", "r", "hello")
        assert mock_run.call_args.kwargs["interactive"] is True

    def test_gdb_without_run(self, mock_run):
        result = GdbDebugger().run("b _start", None, "hello")
        assert result.argv == ("gdb", "-ex", "b _start", "hello")


class TestToolNotFound:
    @pytest.mark.parametrize(
        "call, stage, binary",
        [
            (lambda: NasmAssembler("no-nasm-here").assemble("elf", "a", "a.o"), Stage.ASSEMBLE, "no-nasm-here"),
            (lambda: LdLinker("no-ld-here").link("elf_i386", "a.o", "a"), Stage.LINK, "no-ld-here"),
            (lambda: QemuEmulator().run("no-qemu-here", "a"), Stage.RUN_QEMU, "no-qemu-here"),
            (lambda: GdbDebugger("no-gdb-here").run("b _start", "r", "a"), Stage.RUN_GDB, "no-gdb-here"),
        ],
    )
    def test_translated(self, call, stage, binary):
        with patch("x86_toolchain.tools.gnu.run_process", side_effect=FileNotFoundError):
            with pytest.raises(ToolNotFoundError) as exc:
                call()
        assert exc.value.stage is stage
        assert exc.value.binary == binary
        assert exc.value.exit_code == 127

    @pytest.mark.parametrize(
        "call, stage",
        [
            (lambda: NasmAssembler("/opt/nasm").assemble("elf", "a", "a.o"), Stage.ASSEMBLE),
            (lambda: GdbDebugger("/opt/gdb").run("b _start", None, "a"), Stage.RUN_GDB),
        ],
    )
    def test_permission_denied(self, call, stage):
        with patch("x86_toolchain.tools.gnu.run_process", side_effect=PermissionError):
            with pytest.raises(ToolNotExecutableError) as exc:
                call()
        assert exc.value.stage is stage
        assert exc.value.exit_code == 126
        assert str(exc.value).endswith(": permission denied")

    def test_non_executable_file(self, tmp_path):
        script = tmp_path / "nasm"
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o644)
        with pytest.raises(ToolNotExecutableError) as exc:
            NasmAssembler(str(script)).assemble("elf", "a.asm", "a.o")
        assert exc.value.binary == str(script)

    def test_directory_as_binary(self, tmp_path):
        with pytest.raises(ToolNotExecutableError):
            LdLinker(str(tmp_path)).link("elf_i386", "a.o", "a")


class TestDefaultToolchain:
    def test_defaults(self):
        tools = default_toolchain()
        assert tools.assembler.binary == "nasm"
        assert tools.linker.binary == "ld"
        assert tools.debugger.binary == "gdb"

    def test_overrides(self):
        tools = default_toolchain(ToolchainSettings(nasm="yasm", ld="ld.gold", gdb="gdb-multiarch"))
        assert tools.assembler.binary == "yasm"
        assert tools.linker.binary == "ld.gold"
        assert tools.debugger.binary == "gdb-multiarch"

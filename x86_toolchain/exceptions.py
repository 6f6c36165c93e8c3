"""Custom exceptions for x86-toolchain."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from x86_toolchain.models.toolchain import Stage


class ToolchainError(Exception):
    """Base exception for all toolchain errors."""

    exit_code: int = 1


class UsageError(ToolchainError):
    """Raised when the command line is missing or malformed."""

    def __init__(self, message: str, usage: str) -> None:
        self.usage = usage
        super().__init__(message)


class SourceNotFoundError(ToolchainError, FileNotFoundError):
    """Raised when the assembly source path is not an existing regular file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Specified file does not exist: {path}")


class StageError(ToolchainError):
    """Raised when an external tool exits non-zero and halts the pipeline."""

    def __init__(self, stage: Stage, exit_code: int, stderr: str | None = None) -> None:
        self.stage = stage
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"{stage.value} failed (rc={exit_code})")


class ToolLaunchError(StageError):
    """Raised when an external tool binary cannot be started at all."""

    reason = "cannot be started"
    launch_exit_code = 1

    def __init__(self, stage: Stage, binary: str) -> None:
        self.binary = binary
        super().__init__(stage, self.launch_exit_code)
        self.args = (f"{binary}: {self.reason}",)


class ToolNotFoundError(ToolLaunchError):
    """Raised when an external tool binary is not on PATH."""

    reason = "command not found"
    launch_exit_code = 127


class ToolNotExecutableError(ToolLaunchError):
    """Raised when the tool path exists but cannot be executed (mode, directory)."""

    reason = "permission denied"
    launch_exit_code = 126

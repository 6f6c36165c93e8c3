"""x86-toolchain: assemble, link and run x86 / x86-64 programs with nasm, ld, qemu and gdb."""

__version__ = "0.1.0"

from x86_toolchain.exceptions import (
    SourceNotFoundError,
    StageError,
    ToolchainError,
    ToolLaunchError,
    ToolNotExecutableError,
    ToolNotFoundError,
    UsageError,
)
from x86_toolchain.models.config import Architecture, BuildConfig, RunMode
from x86_toolchain.models.toolchain import ARCH_PROFILES, ArchProfile, Stage, StageResult
from x86_toolchain.pipeline import BuildPipeline
from x86_toolchain.resolver import ConfigResolver, resolve

__all__ = [
    "ARCH_PROFILES",
    "ArchProfile",
    "Architecture",
    "BuildConfig",
    "BuildPipeline",
    "ConfigResolver",
    "RunMode",
    "SourceNotFoundError",
    "Stage",
    "StageError",
    "StageResult",
    "ToolLaunchError",
    "ToolNotExecutableError",
    "ToolNotFoundError",
    "ToolchainError",
    "UsageError",
    "resolve",
]

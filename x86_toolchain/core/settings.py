"""Environment-driven settings for the external tools and logging."""

from __future__ import annotations

import os
from dataclasses import dataclass

_ENV_PREFIX = "X86_TOOLCHAIN_"


@dataclass(frozen=True)
class ToolchainSettings:
    """Binary names and logging options.

    Reads from environment variables:
        X86_TOOLCHAIN_NASM       assembler binary (default: nasm)
        X86_TOOLCHAIN_LD         linker binary (default: ld)
        X86_TOOLCHAIN_GDB        debugger binary (default: gdb)
        X86_TOOLCHAIN_LOG_LEVEL  log level (default: WARNING)
        X86_TOOLCHAIN_LOG_FORMAT console | json (default: console)
    """

    nasm: str = "nasm"
    ld: str = "ld"
    gdb: str = "gdb"
    log_level: str = "WARNING"
    log_format: str = "console"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ToolchainSettings:
        env = os.environ if environ is None else environ

        def get(name: str, default: str) -> str:
            return env.get(_ENV_PREFIX + name) or default

        return cls(
            nasm=get("NASM", cls.nasm),
            ld=get("LD", cls.ld),
            gdb=get("GDB", cls.gdb),
            log_level=get("LOG_LEVEL", cls.log_level).upper(),
            log_format=get("LOG_FORMAT", cls.log_format).lower(),
        )

"""Build pipeline: assemble -> link -> (qemu | gdb)."""

from __future__ import annotations

import structlog

from x86_toolchain.exceptions import StageError
from x86_toolchain.models.config import BuildConfig, RunMode
from x86_toolchain.models.toolchain import ARCH_PROFILES, Stage, StageResult
from x86_toolchain.progress import ProgressTracker
from x86_toolchain.tools.base import Toolchain
from x86_toolchain.tools.process import ProcessResult

log = structlog.get_logger("x86_toolchain.pipeline")

GDB_BREAK_COMMAND = "b {label}"
GDB_RUN_COMMAND = "r"


class BuildPipeline:
    """
    Drive the external tools for one BuildConfig.

    Stage 1: assemble (nasm)
    Stage 2: link (ld)
    Stage 3: qemu or gdb, depending on run_mode; qemu wins if both were asked

    Stages run strictly in sequence. A non-zero assembler or linker exit
    raises StageError and nothing after it runs. The run stages are terminal
    and their exit code becomes the pipeline's.
    """

    def __init__(self, toolchain: Toolchain, progress: ProgressTracker | None = None) -> None:
        self.toolchain = toolchain
        self.progress = progress or ProgressTracker()
        self.last_results: list[StageResult] = []

    def execute(self, config: BuildConfig) -> int:
        """Run the pipeline and return the process exit code."""
        self.last_results = []
        profile = ARCH_PROFILES[config.architecture]
        bound = log.bind(input=config.input_path, arch=config.architecture.value)

        self._run_stage(
            Stage.ASSEMBLE,
            lambda: self.toolchain.assembler.assemble(
                profile.nasm_format, config.input_path, config.object_path
            ),
            detail=config.object_path,
            fatal=True,
        )
        self._run_stage(
            Stage.LINK,
            lambda: self.toolchain.linker.link(
                profile.ld_machine, config.object_path, config.output_path
            ),
            detail=config.output_path,
            fatal=True,
        )

        if config.run_mode is RunMode.QEMU:
            self.progress.skip_phase(Stage.RUN_GDB.value, "qemu selected")
            rc = self._run_stage(
                Stage.RUN_QEMU,
                lambda: self.toolchain.emulator.run(profile.qemu_binary, config.output_path),
                detail=profile.qemu_binary,
            )
        elif config.run_mode is RunMode.GDB:
            self.progress.skip_phase(Stage.RUN_QEMU.value, "gdb selected")
            run_command = GDB_RUN_COMMAND if config.gdb_auto_run else None
            rc = self._run_stage(
                Stage.RUN_GDB,
                lambda: self.toolchain.debugger.run(
                    GDB_BREAK_COMMAND.format(label=config.breakpoint),
                    run_command,
                    config.output_path,
                ),
                detail=f"break {config.breakpoint}",
            )
        else:
            self.progress.skip_phase(Stage.RUN_QEMU.value, "no run mode")
            self.progress.skip_phase(Stage.RUN_GDB.value, "no run mode")
            rc = 0

        bound.info("Pipeline finished", output=config.output_path, exit_code=rc)
        return rc

    def _run_stage(self, stage: Stage, invoke, detail: str = "", fatal: bool = False) -> int:
        self.progress.start_phase(stage.value)
        try:
            result: ProcessResult = invoke()
        except StageError as e:
            self.progress.fail_phase(stage.value, e.exit_code, str(e))
            self.last_results.append(StageResult(stage, e.exit_code))
            raise

        rc = result.returncode
        self.last_results.append(StageResult(stage, rc))
        if rc != 0 and fatal:
            log.debug("Stage failed", stage=stage.value, exit_code=rc)
            self.progress.fail_phase(stage.value, rc, detail)
            raise StageError(stage, rc, result.stderr)
        self.progress.complete_phase(stage.value, rc, detail)
        return rc

"""Progress tracking for the build pipeline stages."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "skipped": "-",
    "running": "~",
    "pending": ".",
}


@dataclass
class PhaseProgress:
    phase: str
    status: str = "pending"  # "pending" | "running" | "completed" | "failed" | "skipped"
    start_time: float | None = None
    end_time: float | None = None
    exit_code: int | None = None
    detail: str = ""

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 2)
        return None


class ProgressTracker:
    """Track the stages of one pipeline run.

    Every transition is pushed to ``callbacks``; a failing callback is logged
    and does not affect the pipeline.
    """

    def __init__(self) -> None:
        self.phases: list[PhaseProgress] = []
        self._by_name: dict[str, PhaseProgress] = {}
        self.callbacks: list[Callable[[PhaseProgress], None]] = []

    def get(self, phase: str) -> PhaseProgress | None:
        return self._by_name.get(phase)

    def start_phase(self, phase: str) -> None:
        p = PhaseProgress(phase=phase, status="running", start_time=time.monotonic())
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    def complete_phase(self, phase: str, exit_code: int = 0, detail: str = "") -> None:
        self._finish(phase, "completed", exit_code, detail)

    def fail_phase(self, phase: str, exit_code: int, detail: str = "") -> None:
        self._finish(phase, "failed", exit_code, detail)

    def skip_phase(self, phase: str, reason: str) -> None:
        p = PhaseProgress(phase=phase, status="skipped", detail=reason)
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    def format_summary(self) -> list[str]:
        """One ``[icon] phase (duration) - detail`` line per phase."""
        total = round(sum(p.duration or 0 for p in self.phases), 2)
        lines = [f"Pipeline summary (total: {total}s):"]
        for p in self.phases:
            icon = _STATUS_ICONS.get(p.status, "?")
            duration = f" ({p.duration}s)" if p.duration is not None else ""
            rc = f" rc={p.exit_code}" if p.exit_code else ""
            detail = f" - {p.detail}" if p.detail else ""
            lines.append(f"  [{icon}] {p.phase}{duration}{rc}{detail}")
        return lines

    def _finish(self, phase: str, status: str, exit_code: int, detail: str) -> None:
        p = self._by_name.get(phase)
        if p:
            p.status = status
            p.end_time = time.monotonic()
            p.exit_code = exit_code
            p.detail = detail
            self._notify(p)

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                logger.debug("Progress callback error for phase %s", p.phase, exc_info=True)

"""Build report: per-file outcomes and the run-wide failure tally."""

from __future__ import annotations

import time
from collections import Counter
from pathlib import Path
from typing import Any, Callable

import structlog

from shader_precompiler.models.build import (
    BuildAction,
    CompileResult,
    FileOutcome,
    OutcomeKind,
    ShaderStage,
)

log = structlog.get_logger("shader_precompiler.report")


class BuildReport:
    """Accumulate outcomes across the whole tree walk.

    ``failures`` only ever grows. Unclassified files are recorded as warnings
    and never count as failures.
    """

    def __init__(self) -> None:
        self.outcomes: list[FileOutcome] = []
        self.failures = 0
        self.started_at = time.monotonic()
        self.finished_at: float | None = None
        self.callbacks: list[Callable[[FileOutcome], None]] = []

    @property
    def success(self) -> bool:
        return self.failures == 0

    @property
    def duration(self) -> float | None:
        if self.finished_at is None:
            return None
        return round(self.finished_at - self.started_at, 2)

    def record_unclassified(self, path: Path) -> None:
        self._add(FileOutcome(path=path, kind=OutcomeKind.UNCLASSIFIED, detail="unsure of shader type"))

    def record_skipped(self, path: Path, stage: ShaderStage, detail: str = "") -> None:
        self._add(
            FileOutcome(
                path=path, kind=OutcomeKind.SKIPPED, stage=stage, action=BuildAction.SKIP, detail=detail
            )
        )

    def record_deleted(self, path: Path, stage: ShaderStage) -> None:
        self._add(
            FileOutcome(path=path, kind=OutcomeKind.DELETED, stage=stage, action=BuildAction.DELETE_STALE)
        )

    def record_compiled(self, path: Path, stage: ShaderStage, result: CompileResult) -> None:
        if result.ok:
            outcome = FileOutcome(
                path=path,
                kind=OutcomeKind.COMPILED,
                stage=stage,
                action=BuildAction.COMPILE,
                compile_result=result,
            )
        else:
            outcome = FileOutcome(
                path=path,
                kind=OutcomeKind.FAILED,
                stage=stage,
                action=BuildAction.COMPILE,
                detail=result.status.value,
                compile_result=result,
            )
        self._add(outcome)

    def record_failure(self, path: Path, detail: str, stage: ShaderStage | None = None) -> None:
        self._add(FileOutcome(path=path, kind=OutcomeKind.FAILED, stage=stage, detail=detail))

    def finish(self) -> None:
        self.finished_at = time.monotonic()

    def counts(self) -> dict[str, int]:
        counter = Counter(o.kind.value for o in self.outcomes)
        return {kind.value: counter.get(kind.value, 0) for kind in OutcomeKind}

    def get_summary(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "failures": self.failures,
            "counts": self.counts(),
            "failed": [
                {"path": str(o.path), "detail": o.detail}
                for o in self.outcomes
                if o.kind is OutcomeKind.FAILED
            ],
            "duration": self.duration,
        }

    def _add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.kind is OutcomeKind.FAILED:
            self.failures += 1
        self._notify(outcome)

    def _notify(self, outcome: FileOutcome) -> None:
        for cb in self.callbacks:
            try:
                cb(outcome)
            except Exception:
                log.debug("report.callback_error", path=str(outcome.path), exc_info=True)

"""Shader build orchestrator: one directory at a time, depth-first."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import structlog

from shader_precompiler.build.classifier import ShaderClassifier
from shader_precompiler.build.includes import IncludeGraphResolver
from shader_precompiler.build.invoker import CompilerInvoker
from shader_precompiler.build.policy import BuildPolicyEngine, read_precompile_eligibility
from shader_precompiler.build.sweeper import CleanSweeper
from shader_precompiler.build.walker import DirectoryListing, DirectoryWalker
from shader_precompiler.exceptions import IncludeError, InputDirectoryError
from shader_precompiler.models.build import (
    BuildAction,
    BuildOptions,
    CompiledArtifact,
    CompileStatus,
    ShaderSourceFile,
)
from shader_precompiler.progress import BuildReport

log = structlog.get_logger("shader_precompiler.build")


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class ShaderBuildOrchestrator:
    """
    Drive one incremental build over a shader tree.

    For every directory (parent before children):
      1. CleanSweeper (clean mode only)
      2. for each source file: classify -> eligibility -> freshness -> decide -> act
    Compile and include errors are local to the file; the walk always continues.
    """

    def __init__(
        self,
        invoker: CompilerInvoker | None = None,
        resolver: IncludeGraphResolver | None = None,
        policy: BuildPolicyEngine | None = None,
        sweeper: CleanSweeper | None = None,
        emit: Callable[[str], None] | None = None,
    ) -> None:
        self.invoker = invoker or CompilerInvoker()
        self.resolver = resolver or IncludeGraphResolver()
        self.policy = policy or BuildPolicyEngine()
        self.sweeper = sweeper or CleanSweeper()
        # Compiler output and IDE-parsable diagnostics go here, verbatim.
        self.emit = emit or _write_stdout
        # Report of the last run; None until run() is called.
        self.report: BuildReport | None = None

    def run(self, options: BuildOptions) -> BuildReport:
        root = Path(options.input_dir)
        if not root.is_dir():
            raise InputDirectoryError(root)

        report = BuildReport()
        self.report = report
        walker = DirectoryWalker(options.source_extension)
        classifier = ShaderClassifier(options.source_extension)

        log.info(
            "build.start",
            input_dir=str(root),
            force=options.force_build,
            clean=options.clean_build,
            debug=options.debug,
            shader_model=options.shader_model_version,
        )
        for listing in walker.walk(root):
            self._process_directory(listing, classifier, options, report)

        report.finish()
        log.info(
            "build.done",
            failures=report.failures,
            duration=report.duration,
            **report.counts(),
        )
        return report

    def _process_directory(
        self,
        listing: DirectoryListing,
        classifier: ShaderClassifier,
        options: BuildOptions,
        report: BuildReport,
    ) -> None:
        # Sweep finishes before any decision in this directory.
        self.sweeper.sweep(listing.directory, options)
        for path in listing.files:
            self._process_file(path, classifier, options, report)

    def _process_file(
        self,
        path: Path,
        classifier: ShaderClassifier,
        options: BuildOptions,
        report: BuildReport,
    ) -> None:
        stage = classifier.classify(path.name)
        if stage is None:
            log.warning("shader.unclassified", path=str(path))
            self.emit(f"{path}(1,1): WARNING: Unsure of shader type - skipping\n")
            report.record_unclassified(path)
            return

        try:
            eligible = read_precompile_eligibility(path)
        except OSError as exc:
            detail = f"cannot read '{path}': {exc.strerror or exc}"
            log.error("shader.unreadable", path=str(path), error=str(exc))
            self.emit(f"{path}(1,1): error - {detail}\n")
            report.record_failure(path, detail, stage=stage)
            return

        freshness: int | None = None
        if eligible:
            try:
                freshness = self.resolver.resolve_freshness(path)
            except IncludeError as exc:
                log.error("shader.include_error", path=str(path), error=str(exc))
                self.emit(f"{path}(1,1): error - {exc}\n")
                report.record_failure(path, str(exc), stage=stage)
                return

        source = ShaderSourceFile(
            path=path,
            stage=stage,
            precompile_eligible=eligible,
            effective_modified_time=freshness,
        )
        artifact = CompiledArtifact.observe(
            options.artifact_path(path), debug_info_path=options.debug_info_path(path)
        )
        action = self.policy.decide(source, artifact, options)
        log.debug("shader.decision", path=str(path), stage=stage.value, action=action.value)

        if action is BuildAction.SKIP:
            report.record_skipped(path, stage, detail="" if eligible else "noprecompile")
            return

        self.policy.apply(action, artifact)
        if action is BuildAction.DELETE_STALE:
            report.record_deleted(path, stage)
            return

        log.info("shader.compile", path=str(path), profile=stage.profile(options.shader_model_version))
        result = self.invoker.invoke(path, stage, options)
        if result.status is CompileStatus.TIMEOUT:
            self.emit(f"{path}(1,1): error - compiler timed out\n")
        elif result.output:
            self.emit(result.output)
        report.record_compiled(path, stage, result)

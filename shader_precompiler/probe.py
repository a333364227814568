"""Shader tree probe: classification and planned actions, without touching anything."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from shader_precompiler.build.classifier import ShaderClassifier
from shader_precompiler.build.includes import IncludeGraphResolver
from shader_precompiler.build.policy import BuildPolicyEngine, read_precompile_eligibility
from shader_precompiler.build.walker import DirectoryWalker
from shader_precompiler.exceptions import IncludeError, InputDirectoryError
from shader_precompiler.models.build import (
    BuildAction,
    BuildOptions,
    CompiledArtifact,
    ShaderSourceFile,
    ShaderStage,
)


@dataclass
class PlannedAction:
    path: str
    stage: ShaderStage
    action: BuildAction | None  # None when the include closure could not be resolved
    error: str | None = None


@dataclass
class ProbeReport:
    """Probe result."""

    input_dir: str
    stage_counts: dict[str, int] = field(default_factory=dict)  # {"vs": 3, "ps": 5, ...}
    unclassified: list[str] = field(default_factory=list)
    opted_out: list[str] = field(default_factory=list)
    planned: list[PlannedAction] = field(default_factory=list)

    def actions(self, action: BuildAction) -> list[str]:
        return [p.path for p in self.planned if p.action is action]

    @property
    def errors(self) -> list[PlannedAction]:
        return [p for p in self.planned if p.error is not None]


class ShaderTreeProbe:
    """Report what a build would do for a tree. Never deletes or compiles."""

    def __init__(
        self,
        resolver: IncludeGraphResolver | None = None,
        policy: BuildPolicyEngine | None = None,
    ) -> None:
        self.resolver = resolver or IncludeGraphResolver()
        self.policy = policy or BuildPolicyEngine()

    def probe(self, options: BuildOptions) -> ProbeReport:
        root = Path(options.input_dir)
        if not root.is_dir():
            raise InputDirectoryError(root)

        walker = DirectoryWalker(options.source_extension)
        classifier = ShaderClassifier(options.source_extension)
        report = ProbeReport(input_dir=str(root.resolve()))
        stages: Counter[str] = Counter()

        for listing in walker.walk(root):
            for path in listing.files:
                stage = classifier.classify(path.name)
                if stage is None:
                    report.unclassified.append(str(path))
                    continue
                stages[stage.value] += 1
                report.planned.append(self._plan(path, stage, options, report))

        report.stage_counts = dict(stages)
        return report

    def _plan(
        self, path: Path, stage: ShaderStage, options: BuildOptions, report: ProbeReport
    ) -> PlannedAction:
        try:
            eligible = read_precompile_eligibility(path)
        except OSError as exc:
            return PlannedAction(path=str(path), stage=stage, action=None, error=str(exc))
        if not eligible:
            report.opted_out.append(str(path))

        freshness = None
        if eligible:
            try:
                freshness = self.resolver.resolve_freshness(path)
            except IncludeError as exc:
                return PlannedAction(path=str(path), stage=stage, action=None, error=str(exc))

        # Clean mode would remove every artifact before deciding.
        if options.clean_build:
            artifact = CompiledArtifact(path=options.artifact_path(path), exists=False)
        else:
            artifact = CompiledArtifact.observe(options.artifact_path(path))
        source = ShaderSourceFile(
            path=path, stage=stage, precompile_eligible=eligible, effective_modified_time=freshness
        )
        return PlannedAction(path=str(path), stage=stage, action=self.policy.decide(source, artifact, options))

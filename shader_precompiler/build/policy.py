"""Build policy: decide per source file whether to skip, delete stale output, or compile."""

from __future__ import annotations

from pathlib import Path

import structlog

from shader_precompiler.models.build import (
    BuildAction,
    BuildOptions,
    CompiledArtifact,
    ShaderSourceFile,
)

log = structlog.get_logger("shader_precompiler.build")

# First-line pragma that opts a shader out of precompilation.
NO_PRECOMPILE_MARKER = '#pragma message "noprecompile"'


def read_precompile_eligibility(path: Path) -> bool:
    """Inspect only the first line of ``path``.

    An empty file, or one whose first line starts with the opt-out pragma
    (case-insensitive), is not eligible for precompilation.
    """
    with path.open("r", encoding="utf-8-sig", errors="replace") as fh:
        first_line = fh.readline()
    if not first_line:
        return False
    return not first_line.casefold().startswith(NO_PRECOMPILE_MARKER.casefold())


class BuildPolicyEngine:
    """Decide and carry out the filesystem side of one file's build action.

    Decision table, evaluated in order:
      1. opted out            -> DELETE_STALE if the artifact exists, else SKIP
      2. missing / not newer  -> COMPILE (equal timestamps count as stale)
         or force build
      3. otherwise            -> SKIP
    """

    def decide(
        self,
        source: ShaderSourceFile,
        artifact: CompiledArtifact,
        options: BuildOptions,
    ) -> BuildAction:
        if not source.precompile_eligible:
            return BuildAction.DELETE_STALE if artifact.exists else BuildAction.SKIP

        if not artifact.exists or options.force_build:
            return BuildAction.COMPILE

        if source.effective_modified_time is None or artifact.modified_time is None:
            raise ValueError(f"freshness of {source.path} was not resolved")
        if artifact.modified_time <= source.effective_modified_time:
            return BuildAction.COMPILE
        return BuildAction.SKIP

    def apply(self, action: BuildAction, artifact: CompiledArtifact) -> list[Path]:
        """Perform the deletions an action requires before compilation.

        DELETE_STALE removes the artifact and its debug companion. COMPILE
        removes a pre-existing artifact so a failed compile never leaves an old
        one behind. Returns the paths that were removed.
        """
        removed: list[Path] = []
        if action is BuildAction.SKIP:
            return removed

        if artifact.exists and artifact.path.exists():
            artifact.path.unlink()
            removed.append(artifact.path)

        if action is BuildAction.DELETE_STALE:
            if artifact.debug_info_path is not None and artifact.debug_info_path.exists():
                artifact.debug_info_path.unlink()
                removed.append(artifact.debug_info_path)

        for path in removed:
            log.info("artifact.deleted", path=str(path), action=action.value)
        return removed

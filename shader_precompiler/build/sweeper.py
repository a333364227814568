"""Clean-mode removal of previously compiled outputs."""

from __future__ import annotations

from pathlib import Path

import structlog

from shader_precompiler.models.build import BuildOptions

log = structlog.get_logger("shader_precompiler.build")


class CleanSweeper:
    """Delete every compiled artifact in one directory (not recursive)."""

    def sweep(self, directory: Path, options: BuildOptions) -> list[Path]:
        if not options.clean_build:
            return []

        ext = options.artifact_extension.lower()
        removed: list[Path] = []
        for artifact in sorted(directory.iterdir(), key=lambda p: p.name):
            if not (artifact.is_file() and artifact.name.lower().endswith(ext)):
                continue
            companion = options.debug_info_path(artifact)
            if options.can_generate_pdbs and companion.exists():
                log.info("clean.delete", path=str(companion))
                companion.unlink()
                removed.append(companion)
            log.info("clean.delete", path=str(artifact))
            artifact.unlink()
            removed.append(artifact)
        return removed

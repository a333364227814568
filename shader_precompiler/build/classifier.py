"""Shader stage classification from the filename suffix."""

from __future__ import annotations

from pathlib import Path

from shader_precompiler.models.build import ShaderStage

# Suffix immediately before the source extension, e.g. ``lighting_ps.hlsl``.
STAGE_SUFFIXES: dict[str, ShaderStage] = {
    "_vs": ShaderStage.VERTEX,
    "_ps": ShaderStage.PIXEL,
    "_gs": ShaderStage.GEOMETRY,
    "_ds": ShaderStage.DOMAIN,
    "_hs": ShaderStage.HULL,
}


class ShaderClassifier:
    def __init__(self, extension: str = ".hlsl") -> None:
        self.extension = extension.lower()

    def classify(self, file_name: str | Path) -> ShaderStage | None:
        """Return the stage for ``file_name``, or None when no suffix matches."""
        name = Path(file_name).name.lower()
        if not name.endswith(self.extension):
            return None
        stem = name[: -len(self.extension)]
        for suffix, stage in STAGE_SUFFIXES.items():
            if stem.endswith(suffix):
                return stage
        return None

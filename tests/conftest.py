"""Shared pytest fixtures for shader precompiler tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from shader_precompiler.models.build import BuildOptions


@pytest.fixture
def make_options(tmp_path: Path):
    """Factory for BuildOptions rooted at tmp_path."""

    def _make(**overrides) -> BuildOptions:
        overrides.setdefault("input_dir", tmp_path)
        overrides.setdefault("compiler_path", "fxc.exe")
        return BuildOptions(**overrides)

    return _make

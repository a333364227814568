"""Build option construction from CLI values and environment."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from shader_precompiler.build.locator import CompilerLocator
from shader_precompiler.exceptions import InputDirectoryError
from shader_precompiler.models.build import BuildOptions

log = structlog.get_logger("shader_precompiler.config")

DEFAULT_SHADER_MODEL = "5_0"

_ENV_COMPILER = "SHADER_PRECOMPILER_COMPILER"
_ENV_SHADER_MODEL = "SHADER_PRECOMPILER_SHADER_MODEL"


def load_options(
    input_dir: str | None = None,
    *,
    force: bool = False,
    clean: bool = False,
    debug: bool = False,
    shader_model: str | None = None,
    compiler: str | None = None,
    pdbs: bool | None = None,
    locator: CompilerLocator | None = None,
) -> BuildOptions:
    """Resolve a complete BuildOptions value.

    ``pdbs=None`` means probe the compiler for debug-info support.

    Raises:
        InputDirectoryError: the input directory does not exist.
    """
    if input_dir:
        root = Path(input_dir)
    else:
        root = Path.cwd()
        log.warning("config.no_input_dir", assumed=str(root))
    if not root.is_dir():
        raise InputDirectoryError(root)

    locator = locator or CompilerLocator()
    compiler_path = locator.locate(compiler or os.environ.get(_ENV_COMPILER))

    if pdbs is None:
        pdbs = locator.supports_debug_info(compiler_path)

    return BuildOptions(
        input_dir=root,
        compiler_path=compiler_path,
        force_build=force,
        clean_build=clean,
        debug=debug,
        can_generate_pdbs=pdbs,
        shader_model_version=shader_model or os.environ.get(_ENV_SHADER_MODEL) or DEFAULT_SHADER_MODEL,
    )

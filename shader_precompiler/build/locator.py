"""Locate the fxc shader compiler and probe its debug-info support."""

from __future__ import annotations

import os
import re
import shutil
import subprocess
from pathlib import Path

import structlog


log = structlog.get_logger("shader_precompiler.compiler")

_BANNER_VERSION_RE = re.compile(r"Direct3D Shader Compiler\s+(\d+)\.(\d+)", re.IGNORECASE)

# Oldest compiler release that accepts /Zi /Fd.
MIN_PDB_VERSION = (9, 30)


def _program_files() -> Path:
    return Path(os.environ.get("ProgramFiles", r"C:\Program Files"))


def default_candidates() -> list[tuple[str, Path]]:
    """Known install locations, in order of preference."""
    base = _program_files()
    return [
        ("windows 8 SDK", base / "Windows Kits" / "8.0" / "bin" / "x86" / "fxc.exe"),
        (
            "June 2010 DX SDK",
            base / "Microsoft DirectX SDK (June 2010)" / "Utilities" / "bin" / "x86" / "fxc.exe",
        ),
    ]


class CompilerLocator:
    """Find fxc.

    Search order:
      1. explicit path, if it is a file
      2. the Windows 8 SDK install path
      3. the June 2010 DirectX SDK install path
      4. ``fxc`` on PATH, else the bare name ``fxc.exe``
    """

    def locate(self, explicit: str | None = None) -> str:
        if explicit:
            if Path(explicit).is_file():
                log.info("compiler.located", path=explicit, source="explicit")
                return explicit
            log.warning(
                "compiler.explicit_missing",
                path=explicit,
                hint="attempting to locate from default paths",
            )

        for label, candidate in default_candidates():
            if candidate.is_file():
                log.info("compiler.located", path=str(candidate), source=label)
                return str(candidate)

        on_path = shutil.which("fxc") or shutil.which("fxc.exe")
        if on_path:
            log.info("compiler.located", path=on_path, source="PATH")
            return on_path

        log.warning("compiler.not_found", hint="assuming fxc.exe is on the PATH")
        return "fxc.exe"

    def supports_debug_info(self, compiler_path: str) -> bool:
        """Return True if the compiler banner reports a version that can emit PDBs."""
        try:
            result = subprocess.run(
                [compiler_path, "/?"],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=5,
            )
        except (subprocess.SubprocessError, OSError):
            log.warning("compiler.version_unknown", path=compiler_path)
            return False

        version = parse_banner_version(result.stdout + result.stderr)
        if version is None:
            log.warning("compiler.version_unknown", path=compiler_path)
            return False
        log.debug("compiler.version", path=compiler_path, version=".".join(map(str, version)))
        return version >= MIN_PDB_VERSION


def parse_banner_version(text: str) -> tuple[int, int] | None:
    m = _BANNER_VERSION_RE.search(text)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))

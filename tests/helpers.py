"""Filesystem helpers shared by the test modules."""

from __future__ import annotations

import os
from pathlib import Path

# Fixed timestamps (ns) so freshness comparisons never depend on the clock.
T_OLD = 1_600_000_000 * 10**9
T_MID = 1_650_000_000 * 10**9
T_NEW = 1_700_000_000 * 10**9


def set_mtime(path: Path, ns: int) -> None:
    os.utime(path, ns=(ns, ns))


def write_file(path: Path, text: str = "", mtime: int | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    if mtime is not None:
        set_mtime(path, mtime)
    return path

"""Transitive include resolution and effective modification time."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from shader_precompiler.exceptions import (
    CircularIncludeError,
    MissingIncludeError,
    UnreadableIncludeError,
)

log = structlog.get_logger("shader_precompiler.build")

# Matches `#include "relative/path.hlsli"`; angle-bracket includes are not followed.
INCLUDE_RE = re.compile(r'#include\s*"([^"]+)"')


def extract_includes(text: str) -> list[str]:
    """Return the relative paths of every quoted include directive, in order."""
    return INCLUDE_RE.findall(text)


class IncludeGraphResolver:
    """Compute the newest modification time across a file and its include closure.

    Nothing is memoized across calls: every ``resolve_freshness`` re-reads the
    tree so a run always observes the current filesystem.
    """

    def resolve_freshness(self, path: Path) -> int:
        """Return the maximum ``st_mtime_ns`` over ``path`` and everything it includes.

        Raises:
            MissingIncludeError: an include directive names a file that does not exist.
            UnreadableIncludeError: a file in the closure cannot be stat'ed or read.
            CircularIncludeError: a file includes itself, directly or indirectly.
        """
        return self._resolve(path, stack=[], in_progress=set())

    def _resolve(self, path: Path, stack: list[Path], in_progress: set[Path]) -> int:
        included_from = stack[-1] if stack else None
        try:
            key = path.resolve()
            if key in in_progress:
                raise CircularIncludeError(stack + [path])
            latest = path.stat().st_mtime_ns
            text = path.read_text(encoding="utf-8-sig", errors="replace")
        except FileNotFoundError as exc:
            if included_from is None:
                raise UnreadableIncludeError(path, exc.strerror or str(exc)) from exc
            raise MissingIncludeError(path, included_from=included_from) from exc
        except OSError as exc:
            raise UnreadableIncludeError(path, exc.strerror or str(exc), included_from) from exc

        in_progress.add(key)
        stack.append(path)
        try:
            for rel in extract_includes(text):
                included = path.parent / rel
                try:
                    found = included.is_file()
                except OSError as exc:
                    raise UnreadableIncludeError(included, exc.strerror or str(exc), path) from exc
                if not found:
                    raise MissingIncludeError(included, included_from=path)
                latest = max(latest, self._resolve(included, stack, in_progress))
        finally:
            stack.pop()
            in_progress.discard(key)

        log.debug("include.resolved", path=str(path), effective_mtime_ns=latest)
        return latest

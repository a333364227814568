"""Custom exceptions for the shader precompiler."""

from __future__ import annotations

from pathlib import Path


class PrecompilerError(Exception):
    """Base exception for all precompiler errors."""


class InputDirectoryError(PrecompilerError):
    """Raised when the input root directory does not exist."""

    def __init__(self, input_dir: Path | str):
        self.input_dir = Path(input_dir)
        super().__init__(f"Input directory {input_dir} doesn't exist")


class IncludeError(PrecompilerError):
    """Raised when the include closure of a shader cannot be resolved."""


class MissingIncludeError(IncludeError):
    """Raised when an include directive points to a file that does not exist."""

    def __init__(self, path: Path, included_from: Path):
        self.path = path
        self.included_from = included_from
        super().__init__(f"Included file '{path}' not found (included from '{included_from}')")


class CircularIncludeError(IncludeError):
    """Raised when a file is reached again while its own includes are being resolved."""

    def __init__(self, chain: list[Path]):
        self.chain = chain
        super().__init__("Circular include: " + " -> ".join(str(p) for p in chain))


class UnreadableIncludeError(IncludeError):
    """Raised when a file in the include closure exists but cannot be stat'ed or read."""

    def __init__(self, path: Path, reason: str, included_from: Path | None = None):
        self.path = path
        self.reason = reason
        self.included_from = included_from
        where = f" (included from '{included_from}')" if included_from is not None else ""
        super().__init__(f"Cannot read '{path}'{where}: {reason}")

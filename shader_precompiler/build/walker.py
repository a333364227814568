"""Directory enumeration for the shader tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class DirectoryListing:
    """Files matching the pattern in one directory, plus its immediate sub-directories."""

    directory: Path
    files: list[Path] = field(default_factory=list)
    subdirectories: list[Path] = field(default_factory=list)


class DirectoryWalker:
    """Enumerate a directory tree depth-first, pre-order, one directory at a time.

    Entries are sorted by name so the order is deterministic for a given tree.
    There is no depth limit and no symlink-cycle protection.
    """

    def __init__(self, extension: str) -> None:
        self.extension = extension.lower()

    def list_directory(self, directory: Path) -> DirectoryListing:
        listing = DirectoryListing(directory=directory)
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                listing.subdirectories.append(entry)
            elif entry.is_file() and entry.name.lower().endswith(self.extension):
                listing.files.append(entry)
        return listing

    def walk(self, root: Path) -> Iterator[DirectoryListing]:
        """Yield one listing per directory; the parent is always yielded before its children."""
        listing = self.list_directory(root)
        yield listing
        for sub in listing.subdirectories:
            yield from self.walk(sub)

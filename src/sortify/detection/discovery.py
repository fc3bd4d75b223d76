"""File discovery utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


class DirectoryScanner:
    """Enumerate the regular files directly inside one directory."""

    def __init__(
        self,
        *,
        include_hidden: bool,
        follow_symlinks: bool,
        exclude: Iterable[Path] = (),
    ) -> None:
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks
        self.exclude = {path.resolve() for path in exclude}

    def scan(self, root: Path) -> Iterator[Path]:
        """Yield files in ``root`` sorted by name; subdirectories are not entered."""
        root = root.expanduser().resolve()
        if not root.is_dir():
            return

        for path in sorted(root.iterdir(), key=lambda entry: entry.name):
            if path.is_symlink() and not self.follow_symlinks:
                continue
            if not path.is_file():
                continue
            if not self.include_hidden and path.name.startswith("."):
                continue
            if path.resolve() in self.exclude:
                continue
            yield path


__all__ = ["DirectoryScanner"]

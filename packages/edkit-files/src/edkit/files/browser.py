"""Directory browser: shows a directory's contents with type indicators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from edkit.files.errors import IOFailure

MAX_ENTRIES = 500


class DirectoryBrowser(Protocol):
    def open(self, directory: str) -> str: ...


@dataclass
class ListingBrowser:
    """Renders a sorted listing, directories suffixed with ``/``.

    Every directory opened is remembered in ``history``.
    """

    limit: int = MAX_ENTRIES
    history: list[str] = field(default_factory=list)

    def open(self, directory: str) -> str:
        dir_path = Path(directory)

        if not dir_path.exists():
            raise IOFailure(f"Directory not found: {dir_path}")

        if not dir_path.is_dir():
            raise IOFailure(f"Not a directory: {dir_path}")

        try:
            items = sorted(dir_path.iterdir(), key=lambda p: p.name.lower())
        except PermissionError as e:
            raise IOFailure(f"Permission denied: {dir_path}", e) from e

        entries: list[str] = []
        for item in items:
            if len(entries) >= self.limit:
                entries.append(f"... ({len(items) - self.limit} more)")
                break
            try:
                entries.append(item.name + "/" if item.is_dir() else item.name)
            except OSError:
                continue

        self.history.append(str(dir_path))
        return "\n".join(entries) if entries else "(empty directory)"

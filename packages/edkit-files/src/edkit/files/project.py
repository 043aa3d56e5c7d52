"""Project root detection."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PROJECT_MARKERS = [".git", ".hg", ".svn", ".edkit", "pyproject.toml"]


class ProjectDetector:
    """Finds the nearest ancestor directory containing a project marker.

    Paths in ``ignore`` never count as markers, so the global config
    directory (``~/.edkit``) does not turn the home directory into a project.
    """

    def __init__(self, markers: list[str] | None = None, ignore: list[str] | None = None) -> None:
        self.markers = list(markers if markers is not None else DEFAULT_PROJECT_MARKERS)
        self.ignore = {os.path.abspath(p) for p in ignore or []}

    def find_root(self, path: str) -> str | None:
        start = Path(os.path.abspath(path))
        if not start.is_dir():
            start = start.parent
        for directory in (start, *start.parents):
            if any(self._is_marker(directory / marker) for marker in self.markers):
                return str(directory)
        return None

    def relative_path(self, path: str) -> str:
        """``path`` relative to its project root, or absolute when there is none."""
        absolute = os.path.abspath(path)
        root = self.find_root(absolute)
        if root is None:
            return absolute
        return os.path.relpath(absolute, root)

    def _is_marker(self, candidate: Path) -> bool:
        return candidate.exists() and str(candidate) not in self.ignore

"""In-memory buffer table.

The table is the single source of truth for which buffers are open, which
one is current, and which file each one visits. Buffer names are unique;
collisions are resolved with the editor's ``name<N>`` suffix rule.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from edkit.files.errors import IOFailure

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Buffer:
    """An open, named text region, optionally visiting a file."""

    name: str
    content: str = ""
    file: str | None = None
    modified: bool = False
    default_directory: str = field(default_factory=os.getcwd)

    def insert(self, text: str) -> None:
        self.content += text
        self.modified = True

    def __repr__(self) -> str:
        return f"<Buffer {self.name!r}>"


class BufferTable:
    """Ordered collection of open buffers with a current buffer."""

    def __init__(self, default_directory: str | None = None) -> None:
        self._buffers: list[Buffer] = []
        self._current: Buffer | None = None
        self._default_directory = default_directory or os.getcwd()

    # --- Queries ---

    @property
    def current(self) -> Buffer | None:
        return self._current

    @property
    def default_directory(self) -> str:
        return self._default_directory

    def get(self, name: str) -> Buffer | None:
        """Look up an open buffer by exact name."""
        for buf in self._buffers:
            if buf.name == name:
                return buf
        return None

    def find_by_file(self, path: str) -> Buffer | None:
        """Return the buffer visiting ``path``, if any."""
        target = os.path.abspath(path)
        for buf in self._buffers:
            if buf.file and os.path.abspath(buf.file) == target:
                return buf
        return None

    def is_live(self, buf: Buffer) -> bool:
        return any(b is buf for b in self._buffers)

    def buffers(self) -> list[Buffer]:
        return list(self._buffers)

    def generate_name(self, base: str, *, exclude: Buffer | None = None) -> str:
        """Return ``base``, or ``base<N>`` with the smallest free N >= 2.

        ``exclude`` is ignored when checking for collisions, so a buffer can
        keep its own name.
        """
        taken = {b.name for b in self._buffers if b is not exclude}
        if base not in taken:
            return base
        n = 2
        while f"{base}<{n}>" in taken:
            n += 1
        return f"{base}<{n}>"

    # --- Mutations ---

    def create(self, name: str, *, content: str = "", file: str | None = None) -> Buffer:
        """Create a buffer, disambiguating the name, and make it current."""
        directory = os.path.dirname(file) if file else self._default_directory
        buf = Buffer(
            name=self.generate_name(name),
            content=content,
            file=file,
            default_directory=directory,
        )
        self._buffers.append(buf)
        self._current = buf
        logger.debug("Created buffer %s", buf.name)
        return buf

    def rename(self, buf: Buffer, name: str) -> str:
        """Rename ``buf``, disambiguating against other buffers.

        Returns the name actually assigned.
        """
        new_name = self.generate_name(name, exclude=buf)
        if new_name != buf.name:
            logger.debug("Renaming buffer %s -> %s", buf.name, new_name)
        buf.name = new_name
        return new_name

    def set_visited_file(self, buf: Buffer, path: str | None) -> None:
        buf.file = os.path.abspath(path) if path else None
        if buf.file:
            buf.default_directory = os.path.dirname(buf.file)

    def kill(self, buf: Buffer) -> None:
        """Close ``buf``. The most recently created remaining buffer becomes current."""
        self._buffers = [b for b in self._buffers if b is not buf]
        if self._current is buf:
            self._current = self._buffers[-1] if self._buffers else None
        logger.debug("Killed buffer %s", buf.name)

    def visit(self, path: str) -> Buffer:
        """Open ``path`` in a buffer, reusing one that already visits it.

        A missing file yields an empty, unmodified buffer visiting the path.
        Bytes that are not valid UTF-8 are shown as U+FFFD.
        """
        file_path = os.path.abspath(os.path.join(self._default_directory, path))
        existing = self.find_by_file(file_path)
        if existing is not None:
            self._current = existing
            return existing

        p = Path(file_path)
        try:
            content = read_buffer_text(p) if p.is_file() else ""
        except OSError as e:
            raise IOFailure(f"Could not read {file_path}", e) from e
        return self.create(p.name, content=content, file=file_path)


def read_buffer_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")

"""Clipboard-like register storage: a kill ring plus named slots."""

from __future__ import annotations


class Register:
    """Stores yanked text for reuse across commands.

    Unnamed yanks go onto a ring: peek returns the most recent entry and
    rotate cycles through older ones. Named yanks overwrite a single slot.
    """

    def __init__(self, max_entries: int = 60) -> None:
        self._ring: list[str] = []
        self._named: dict[str, str] = {}
        self._max_entries = max_entries

    def push(self, text: str, *, name: str | None = None) -> None:
        """Store text in the named slot, or on the ring when no name is given."""
        if not text:
            return

        if name is not None:
            self._named[name] = text
            return

        self._ring.append(text)
        if len(self._ring) > self._max_entries:
            del self._ring[0]

    def peek(self, name: str | None = None) -> str | None:
        """Get the named slot, or the most recent ring entry."""
        if name is not None:
            return self._named.get(name)
        return self._ring[-1] if self._ring else None

    def rotate(self) -> None:
        """Move the last ring entry to the front."""
        if len(self._ring) > 1:
            last = self._ring.pop()
            self._ring.insert(0, last)

    @property
    def length(self) -> int:
        return len(self._ring)

"""Tests for buffer reference resolution."""

from __future__ import annotations

import pytest

from edkit.files.buffers import BufferTable
from edkit.files.errors import InvalidArgument, NotFound
from edkit.files.resolver import coerce_buffer_ref, resolve, resolve_buffer
from edkit.files.types import ByHandle, ByName, Unspecified


@pytest.fixture
def table(tmp_path):
    table = BufferTable(default_directory=str(tmp_path))
    table.create("notes.txt")
    table.create("*scratch*")
    return table


class TestCoerceBufferRef:
    def test_none_is_unspecified(self) -> None:
        assert coerce_buffer_ref(None) == Unspecified()

    def test_string_is_by_name(self) -> None:
        assert coerce_buffer_ref("notes.txt") == ByName("notes.txt")

    def test_buffer_is_by_handle(self, table: BufferTable) -> None:
        buf = table.get("notes.txt")
        ref = coerce_buffer_ref(buf)
        assert isinstance(ref, ByHandle)
        assert ref.buffer is buf

    def test_ref_passes_through(self) -> None:
        ref = ByName("x")
        assert coerce_buffer_ref(ref) is ref

    def test_other_values_name_value_and_type(self) -> None:
        with pytest.raises(InvalidArgument, match=r"42 \(int\)"):
            coerce_buffer_ref(42)


class TestResolve:
    def test_unspecified_is_current(self, table: BufferTable) -> None:
        assert resolve(Unspecified(), table) is table.current
        assert table.current.name == "*scratch*"

    def test_unspecified_without_buffers(self, tmp_path) -> None:
        with pytest.raises(NotFound, match="No current buffer"):
            resolve(Unspecified(), BufferTable(default_directory=str(tmp_path)))

    def test_by_name(self, table: BufferTable) -> None:
        assert resolve(ByName("notes.txt"), table) is table.get("notes.txt")

    def test_by_name_missing_names_buffer(self, table: BufferTable) -> None:
        with pytest.raises(NotFound, match="no-such-buffer"):
            resolve(ByName("no-such-buffer"), table)

    def test_by_handle_round_trips_every_buffer(self, table: BufferTable) -> None:
        for buf in table.buffers():
            assert resolve(ByHandle(buf), table) is buf

    def test_by_handle_killed_buffer(self, table: BufferTable) -> None:
        buf = table.get("notes.txt")
        table.kill(buf)
        with pytest.raises(NotFound):
            resolve(ByHandle(buf), table)

    def test_non_ref_rejected(self, table: BufferTable) -> None:
        with pytest.raises(InvalidArgument):
            resolve("notes.txt", table)  # type: ignore[arg-type]

    def test_resolve_buffer_accepts_loose_values(self, table: BufferTable) -> None:
        assert resolve_buffer(None, table) is table.current
        assert resolve_buffer("notes.txt", table).name == "notes.txt"

import os
from pathlib import Path

import pytest

from edkit.files.context import create_context
from edkit.files.settings import SettingsManager
from edkit.files.vc import VCRegistry


class RecordingBackend:
    """Fake VC backend that tracks a fixed set of paths and records calls."""

    name = "fakevc"

    def __init__(self, tracked: set[str] | None = None) -> None:
        self.tracked = {os.path.abspath(p) for p in tracked or set()}
        self.calls: list[tuple] = []

    def is_tracked(self, path: str) -> bool:
        return os.path.abspath(path) in self.tracked

    def rename(self, src: str, dst: str, *, force: bool = False) -> None:
        self.calls.append(("rename", src, dst, force))
        os.replace(src, dst)
        self.tracked.discard(os.path.abspath(src))
        self.tracked.add(os.path.abspath(dst))

    def delete(self, path: str) -> None:
        self.calls.append(("delete", path))
        os.remove(path)
        self.tracked.discard(os.path.abspath(path))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.edkit."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("EDKIT_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def ctx(tmp_path, backend):
    workdir = tmp_path / "work"
    workdir.mkdir()
    settings = SettingsManager.in_memory({"trashDirectory": str(tmp_path / "trash")})
    return create_context(settings, cwd=str(workdir), vc=VCRegistry([backend]))


@pytest.fixture
def workdir(ctx):
    return Path(ctx.table.default_directory)

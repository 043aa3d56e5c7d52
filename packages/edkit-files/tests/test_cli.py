"""Tests for the edkit command line."""

from __future__ import annotations

import os

import pytest
from click.testing import CliRunner

from edkit.files.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "notes.txt").write_text("hello")
    return root


def invoke(runner, project, *args, input=None):
    return runner.invoke(main, ["--cwd", str(project), *args], input=input)


class TestRename:
    def test_rename(self, runner, project) -> None:
        result = invoke(runner, project, "rename", "notes.txt", "todo.txt")
        assert result.exit_code == 0, result.output
        assert "Renamed notes.txt" in result.output
        assert (project / "todo.txt").read_text() == "hello"
        assert not (project / "notes.txt").exists()

    def test_declined_overwrite_exits_nonzero(self, runner, project) -> None:
        (project / "todo.txt").write_text("keep")
        result = invoke(runner, project, "rename", "notes.txt", "todo.txt", input="n\n")
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (project / "todo.txt").read_text() == "keep"

    def test_rename_binary_file(self, runner, project) -> None:
        (project / "img.bin").write_bytes(b"\xff\xfe\x00")
        result = invoke(runner, project, "rename", "img.bin", "moved.bin")
        assert result.exit_code == 0, result.output
        assert (project / "moved.bin").read_bytes() == b"\xff\xfe\x00"

    def test_yes_flag_overwrites(self, runner, project) -> None:
        (project / "todo.txt").write_text("old")
        result = runner.invoke(main, ["--cwd", str(project), "-y", "rename", "notes.txt", "todo.txt"])
        assert result.exit_code == 0, result.output
        assert (project / "todo.txt").read_text() == "hello"


class TestDelete:
    def test_delete_to_trash(self, runner, project, isolated_config) -> None:
        result = invoke(runner, project, "delete", "notes.txt")
        assert result.exit_code == 0, result.output
        assert "Deleted" in result.output
        assert not (project / "notes.txt").exists()
        assert len(os.listdir(isolated_config / "trash")) == 1

    def test_permanent(self, runner, project, isolated_config) -> None:
        result = invoke(runner, project, "delete", "--permanent", "notes.txt")
        assert result.exit_code == 0, result.output
        assert not (project / "notes.txt").exists()
        assert not (isolated_config / "trash").exists()


class TestCopy:
    def test_copy(self, runner, project) -> None:
        result = invoke(runner, project, "copy", "notes.txt", "sub/copy.txt")
        assert result.exit_code == 0, result.output
        assert (project / "sub" / "copy.txt").read_text() == "hello"
        assert (project / "notes.txt").exists()
        assert "opened as copy.txt" in result.output

    def test_copy_binary_file(self, runner, project) -> None:
        data = b"\x89PNG\xff\xfe"
        (project / "img.bin").write_bytes(data)
        result = invoke(runner, project, "copy", "img.bin", "out.bin", "--force")
        assert result.exit_code == 0, result.output
        assert (project / "out.bin").read_bytes() == data
        assert "opened as out.bin" in result.output

    def test_copy_onto_itself(self, runner, project) -> None:
        result = invoke(runner, project, "copy", "notes.txt", "notes.txt")
        assert result.exit_code == 1
        assert "onto itself" in result.output


class TestAccessors:
    def test_yank_name(self, runner, project) -> None:
        result = invoke(runner, project, "yank-name", "notes.txt")
        assert result.output.strip() == "Copied buffer name: notes.txt"

    def test_yank_path_relative(self, runner, project) -> None:
        (project / ".edkit").mkdir()
        result = invoke(runner, project, "yank-path", "--relative", "notes.txt")
        assert result.output.strip() == "Copied path: notes.txt"

    def test_yank_path_absolute(self, runner, project) -> None:
        result = invoke(runner, project, "yank-path", "notes.txt")
        assert result.output.strip() == f"Copied path: {project / 'notes.txt'}"

    def test_open_directory(self, runner, project) -> None:
        (project / "docs").mkdir()
        result = invoke(runner, project, "open-directory", "notes.txt")
        assert result.exit_code == 0, result.output
        assert "docs/" in result.output
        assert "notes.txt" in result.output

    def test_revert_unmodified(self, runner, project) -> None:
        result = invoke(runner, project, "revert", "notes.txt")
        assert result.exit_code == 0, result.output
        assert "Reverted notes.txt" in result.output

    def test_kill(self, runner, project) -> None:
        result = invoke(runner, project, "kill", "notes.txt")
        assert result.output.strip() == "Killed buffer notes.txt"


def test_corrupt_settings_warns(runner, project, isolated_config) -> None:
    isolated_config.mkdir()
    (isolated_config / "settings.json").write_text("{oops")
    result = invoke(runner, project, "yank-name", "notes.txt")
    assert result.exit_code == 0
    assert "could not load settings" in result.output

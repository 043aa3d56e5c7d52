"""Tests for project root detection."""

from __future__ import annotations

import os

from edkit.files.project import ProjectDetector


def test_finds_nearest_marker(tmp_path):
    (tmp_path / "outer" / ".git").mkdir(parents=True)
    (tmp_path / "outer" / "inner" / "pkg").mkdir(parents=True)
    (tmp_path / "outer" / "inner" / "pyproject.toml").write_text("")
    detector = ProjectDetector()
    file_path = str(tmp_path / "outer" / "inner" / "pkg" / "mod.py")
    assert detector.find_root(file_path) == str(tmp_path / "outer" / "inner")


def test_directory_argument(tmp_path):
    (tmp_path / ".hg").mkdir()
    assert ProjectDetector().find_root(str(tmp_path)) == str(tmp_path)


def test_no_project(tmp_path):
    detector = ProjectDetector(markers=["no-such-marker-anywhere"])
    assert detector.find_root(str(tmp_path / "a.txt")) is None
    assert detector.relative_path(str(tmp_path / "a.txt")) == str(tmp_path / "a.txt")


def test_relative_path(tmp_path):
    (tmp_path / ".edkit").mkdir()
    detector = ProjectDetector()
    path = str(tmp_path / "src" / "app.py")
    assert detector.relative_path(path) == os.path.join("src", "app.py")


def test_custom_markers(tmp_path):
    (tmp_path / "WORKSPACE").write_text("")
    detector = ProjectDetector(markers=["WORKSPACE"])
    assert detector.find_root(str(tmp_path / "x" / "y.py")) == str(tmp_path)


def test_ignored_marker_path(tmp_path):
    (tmp_path / ".edkit" / "trash").mkdir(parents=True)
    detector = ProjectDetector(markers=[".edkit"], ignore=[str(tmp_path / ".edkit")])
    path = str(tmp_path / "docs" / "notes.txt")
    assert detector.find_root(path) is None
    assert detector.relative_path(path) == path

"""Hierarchical settings manager with JSON persistence.

Supports three-level precedence: global > project > CLI overrides.
Tracks per-field modifications so saving never clobbers external edits.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from edkit.files.project import DEFAULT_PROJECT_MARKERS
from edkit.files.types import OverwritePolicy, PreserveFlags

CONFIG_DIR_NAME = ".edkit"

DEFAULT_VC_BACKENDS = ["git", "hg"]


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Migrations ---


def _migrate_settings(settings: dict[str, Any]) -> dict[str, Any]:
    """Apply all settings migrations."""
    # Migration 1: useTrash -> deleteToTrash
    if "useTrash" in settings and "deleteToTrash" not in settings:
        settings["deleteToTrash"] = settings.pop("useTrash")
    elif "useTrash" in settings:
        del settings["useTrash"]

    # Migration 2: comma-separated vcBackends string -> list
    backends = settings.get("vcBackends")
    if isinstance(backends, str):
        settings["vcBackends"] = [b.strip() for b in backends.split(",") if b.strip()]

    return settings


# --- SettingsManager ---


class SettingsManager:
    """Manages hierarchical settings with JSON file persistence.

    Use factory methods (create, in_memory) instead of calling constructor directly.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        persist: bool = True,
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._persist = persist
        self._load_error = load_error
        self._modified_fields: set[str] = set()
        self._modified_nested_fields: dict[str, set[str]] = {}

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager with file persistence."""
        cdir = config_dir or _default_config_dir()
        settings_path = os.path.join(cdir, "settings.json")
        project_settings_path = os.path.join(cwd, CONFIG_DIR_NAME, "settings.json")

        settings, error = _load_from_file(settings_path)
        return cls(
            settings_path=settings_path,
            project_settings_path=project_settings_path,
            initial_settings=settings,
            persist=True,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
            persist=False,
        )

    # --- Core operations ---

    def reload(self) -> None:
        """Reload all settings from disk."""
        if self._settings_path:
            self._global_settings, self._load_error = _load_from_file(self._settings_path)
        self._modified_fields.clear()
        self._modified_nested_fields.clear()

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply CLI-level overrides on top of merged settings."""
        self._settings = deep_merge_settings(self._settings, overrides)

    @property
    def config_dir(self) -> str:
        """Directory holding the global settings file and the default trash."""
        if self._settings_path:
            return os.path.dirname(self._settings_path)
        return _default_config_dir()

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings (read-only view)."""
        return self._settings

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    # --- Modification tracking ---

    def _mark_modified(self, field_name: str, nested_key: str | None = None) -> None:
        self._modified_fields.add(field_name)
        if nested_key:
            self._modified_nested_fields.setdefault(field_name, set()).add(nested_key)

    # --- Persistence ---

    def _save(self) -> None:
        """Write only modified fields to global settings file, preserving external changes."""
        # Don't overwrite corrupted files
        if self._persist and self._settings_path and not self._load_error:
            current_file, _ = _load_from_file(self._settings_path)
            merged: dict[str, Any] = dict(current_file)

            for field_name in self._modified_fields:
                value = self._global_settings.get(field_name)
                nested_keys = self._modified_nested_fields.get(field_name)

                if nested_keys and isinstance(value, dict):
                    if not isinstance(merged.get(field_name), dict):
                        merged[field_name] = {}
                    for nk in nested_keys:
                        merged[field_name][nk] = value.get(nk)
                else:
                    merged[field_name] = value

            merged = {k: v for k, v in merged.items() if v is not None}

            os.makedirs(os.path.dirname(self._settings_path), exist_ok=True)
            Path(self._settings_path).write_text(
                json.dumps(merged, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    def _load_project_settings(self) -> dict[str, Any]:
        if not self._project_settings_path:
            return {}
        settings, _ = _load_from_file(self._project_settings_path)
        return settings

    def _set(self, field_name: str, value: Any) -> None:
        self._global_settings[field_name] = value
        self._mark_modified(field_name)
        self._save()

    # --- Getters: Delete ---

    def get_delete_to_trash(self) -> bool:
        val = self._settings.get("deleteToTrash")
        return val if val is not None else True

    def get_trash_directory(self) -> str:
        configured = self._settings.get("trashDirectory")
        if configured:
            return os.path.expanduser(configured)
        return os.path.join(self.config_dir, "trash")

    # --- Setters: Delete ---

    def set_delete_to_trash(self, enabled: bool) -> None:
        self._set("deleteToTrash", enabled)

    # --- Getters: Overwrite & copy ---

    def get_overwrite_policy(self) -> OverwritePolicy:
        confirm = self._settings.get("confirmOverwrite")
        return "force" if confirm is False else "ask"

    def get_preserve_flags(self) -> PreserveFlags:
        preserve = self._settings.get("preserve") or {}
        return PreserveFlags(
            timestamps=preserve.get("timestamps", True),
            ownership=preserve.get("ownership", True),
            permissions=preserve.get("permissions", True),
        )

    def get_create_parent_directories(self) -> bool:
        val = self._settings.get("createParentDirectories")
        return val if val is not None else True

    # --- Setters: Overwrite & copy ---

    def set_confirm_overwrite(self, confirm: bool) -> None:
        self._set("confirmOverwrite", confirm)

    def set_preserve_flag(self, flag: str, enabled: bool) -> None:
        if flag not in PreserveFlags.model_fields:
            raise ValueError(f"Unknown preserve flag: {flag}")
        if not isinstance(self._global_settings.get("preserve"), dict):
            self._global_settings["preserve"] = {}
        self._global_settings["preserve"][flag] = enabled
        self._mark_modified("preserve", flag)
        self._save()

    # --- Getters: Version control & projects ---

    def get_vc_backends(self) -> list[str]:
        backends = self._settings.get("vcBackends")
        return list(backends) if isinstance(backends, list) else list(DEFAULT_VC_BACKENDS)

    def get_project_markers(self) -> list[str]:
        markers = self._settings.get("projectMarkers")
        return list(markers) if isinstance(markers, list) else list(DEFAULT_PROJECT_MARKERS)

    def get_yank_relative_to_project(self) -> bool:
        return self._settings.get("yankRelativeToProject") or False


# --- Helpers ---


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
        return _migrate_settings(settings), None
    except (OSError, json.JSONDecodeError) as e:
        return {}, e


def _default_config_dir() -> str:
    """Default config directory (~/.edkit, or $EDKIT_CONFIG_DIR)."""
    return os.environ.get("EDKIT_CONFIG_DIR") or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)

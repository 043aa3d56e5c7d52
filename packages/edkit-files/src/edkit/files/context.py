"""Explicit command context.

Everything a command touches (buffer table, filesystem, version control,
register, browser, prompts, settings) is passed in through this object
rather than read from module globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from edkit.files.browser import DirectoryBrowser, ListingBrowser
from edkit.files.buffers import BufferTable
from edkit.files.fs import FileSystem
from edkit.files.project import ProjectDetector
from edkit.files.prompt import AlwaysNo, Prompter
from edkit.files.register import Register
from edkit.files.settings import SettingsManager
from edkit.files.vc import VCRegistry


@dataclass
class CommandContext:
    table: BufferTable
    fs: FileSystem
    vc: VCRegistry
    settings: SettingsManager
    projects: ProjectDetector = field(default_factory=ProjectDetector)
    register: Register = field(default_factory=Register)
    browser: DirectoryBrowser = field(default_factory=ListingBrowser)
    prompter: Prompter = field(default_factory=AlwaysNo)


def create_context(
    settings: SettingsManager,
    *,
    cwd: str | None = None,
    prompter: Prompter | None = None,
    vc: VCRegistry | None = None,
) -> CommandContext:
    """Build a context whose collaborators are configured from ``settings``."""
    return CommandContext(
        table=BufferTable(default_directory=cwd or os.getcwd()),
        fs=FileSystem(trash_dir=settings.get_trash_directory()),
        vc=vc if vc is not None else VCRegistry.from_names(settings.get_vc_backends()),
        settings=settings,
        projects=ProjectDetector(settings.get_project_markers(), ignore=[settings.config_dir]),
        prompter=prompter or AlwaysNo(),
    )

"""edkit-files: version-control-aware file and buffer commands."""

from edkit.files.buffers import Buffer, BufferTable
from edkit.files.commands import (
    copy_file,
    delete_file,
    kill_buffer,
    open_directory,
    rename_file,
    revert_buffer,
    yank_buffer_name,
    yank_buffer_path,
)
from edkit.files.context import CommandContext, create_context
from edkit.files.dispatcher import dispatch
from edkit.files.errors import (
    DestinationExists,
    FileCommandError,
    InvalidArgument,
    IOFailure,
    NotFound,
)
from edkit.files.resolver import coerce_buffer_ref, resolve, resolve_buffer
from edkit.files.settings import SettingsManager
from edkit.files.types import (
    BufferRef,
    ByHandle,
    ByName,
    OperationRequest,
    OperationResult,
    PreserveFlags,
    TrackedBy,
    Unspecified,
    Untracked,
    VCStatus,
)

__all__ = [
    # Buffers
    "Buffer",
    "BufferTable",
    # References
    "BufferRef",
    "ByHandle",
    "ByName",
    "Unspecified",
    "coerce_buffer_ref",
    "resolve",
    "resolve_buffer",
    # Operations
    "OperationRequest",
    "OperationResult",
    "PreserveFlags",
    "TrackedBy",
    "Untracked",
    "VCStatus",
    "dispatch",
    # Commands
    "CommandContext",
    "create_context",
    "copy_file",
    "delete_file",
    "kill_buffer",
    "open_directory",
    "rename_file",
    "revert_buffer",
    "yank_buffer_name",
    "yank_buffer_path",
    # Errors
    "FileCommandError",
    "InvalidArgument",
    "NotFound",
    "DestinationExists",
    "IOFailure",
    # Settings
    "SettingsManager",
]

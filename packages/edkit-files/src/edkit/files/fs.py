"""Filesystem primitives used by the dispatcher.

All OSErrors are wrapped in IOFailure so callers see one error type for
any failed file step.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from edkit.files.errors import IOFailure
from edkit.files.types import PreserveFlags

logger = logging.getLogger(__name__)


class FileSystem:
    """Plain filesystem operations with trash support for deletes."""

    def __init__(self, trash_dir: str | None = None) -> None:
        self.trash_dir = trash_dir

    # --- Queries ---

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def read_text(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise IOFailure(f"Could not read {path}", e) from e

    # --- Mutations ---

    def make_dirs(self, path: str) -> None:
        """Create ``path`` and any missing parents. Existing directories are fine."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Could not create directory {path}", e) from e

    def write_text(self, path: str, content: str) -> None:
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as e:
            raise IOFailure(f"Could not write {path}", e) from e
        logger.info("Wrote %d bytes to %s", len(content.encode("utf-8")), path)

    def rename(self, src: str, dst: str) -> None:
        """Move ``src`` to ``dst``, replacing an existing file at ``dst``."""
        try:
            os.replace(src, dst)
        except OSError as e:
            # Cross-device moves need a copy + unlink.
            if e.errno != errno.EXDEV:
                raise IOFailure(f"Could not rename {src} to {dst}", e) from e
            try:
                shutil.move(src, dst)
            except OSError as e2:
                raise IOFailure(f"Could not move {src} to {dst}", e2) from e2
        logger.info("Renamed %s -> %s", src, dst)

    def copy(self, src: str, dst: str, preserve: PreserveFlags | None = None) -> None:
        """Copy file contents, then each requested attribute independently."""
        preserve = preserve or PreserveFlags()
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            raise IOFailure(f"Could not copy {src} to {dst}", e) from e

        st = os.stat(src)
        if preserve.permissions:
            self._try(lambda: os.chmod(dst, st.st_mode & 0o7777), "permissions", dst)
        if preserve.ownership and hasattr(os, "chown"):
            self._try(lambda: os.chown(dst, st.st_uid, st.st_gid), "ownership", dst)
        if preserve.timestamps:
            self._try(lambda: os.utime(dst, ns=(st.st_atime_ns, st.st_mtime_ns)), "timestamps", dst)
        logger.info("Copied %s -> %s", src, dst)

    def delete(self, path: str, *, to_trash: bool = True) -> str | None:
        """Delete ``path``. Returns the trash location when moved to trash."""
        if to_trash and self.trash_dir:
            return self._move_to_trash(path, self.trash_dir)
        try:
            os.remove(path)
        except OSError as e:
            raise IOFailure(f"Could not delete {path}", e) from e
        logger.info("Deleted %s", path)
        return None

    # --- Helpers ---

    @staticmethod
    def _move_to_trash(path: str, trash_dir: str) -> str:
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        base = os.path.basename(path.rstrip("\\/"))
        target = os.path.join(trash_dir, f"{stamp}-{base}")
        n = 1
        while os.path.lexists(target):
            n += 1
            target = os.path.join(trash_dir, f"{stamp}-{n}-{base}")
        try:
            os.makedirs(trash_dir, exist_ok=True)
            shutil.move(path, target)
        except OSError as e:
            raise IOFailure(f"Could not move {path} to trash", e) from e
        logger.info("Moved %s to trash at %s", path, target)
        return target

    @staticmethod
    def _try(action, attribute: str, path: str) -> None:
        try:
            action()
        except (OSError, NotImplementedError) as e:
            logger.warning("Could not preserve %s on %s: %s", attribute, path, e)

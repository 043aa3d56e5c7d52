"""Version-control backends.

Each backend shells out to its command-line tool. A file is handled by the
first configured backend that reports it as tracked; status is recomputed
on every call.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Protocol

from edkit.files.errors import IOFailure
from edkit.files.types import TrackedBy, Untracked, VCStatus

logger = logging.getLogger(__name__)


class VCBackend(Protocol):
    name: str

    def is_tracked(self, path: str) -> bool: ...

    def rename(self, src: str, dst: str, *, force: bool = False) -> None: ...

    def delete(self, path: str) -> None: ...


class CommandBackend:
    """Shared plumbing for backends driven by a CLI binary."""

    name = ""
    binary = ""

    def available(self) -> bool:
        return shutil.which(self.binary) is not None

    def _run(self, args: list[str], cwd: str, *, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = [self.binary, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            return subprocess.run(
                cmd,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=check,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip() or f"exit code {e.returncode}"
            raise IOFailure(f"{self.binary} {args[0]} failed", RuntimeError(detail)) from e
        except OSError as e:
            raise IOFailure(f"Could not run {self.binary}", e) from e

    def is_tracked(self, path: str) -> bool:
        directory = os.path.dirname(path)
        if not self.available() or not os.path.isdir(directory):
            return False
        result = self._run(self._tracked_args(os.path.basename(path)), directory, check=False)
        return result.returncode == 0

    def _tracked_args(self, filename: str) -> list[str]:
        raise NotImplementedError


class GitBackend(CommandBackend):
    name = "git"
    binary = "git"

    def _tracked_args(self, filename: str) -> list[str]:
        return ["ls-files", "--error-unmatch", "--", filename]

    def rename(self, src: str, dst: str, *, force: bool = False) -> None:
        args = ["mv", *(["-f"] if force else []), "--", src, dst]
        self._run(args, os.path.dirname(src))
        logger.info("git mv %s -> %s", src, dst)

    def delete(self, path: str) -> None:
        self._run(["rm", "-f", "-q", "--", path], os.path.dirname(path))
        logger.info("git rm %s", path)


class HgBackend(CommandBackend):
    name = "hg"
    binary = "hg"

    def _tracked_args(self, filename: str) -> list[str]:
        return ["files", "--", filename]

    def rename(self, src: str, dst: str, *, force: bool = False) -> None:
        args = ["mv", *(["--force"] if force else []), "--", src, dst]
        self._run(args, os.path.dirname(src))
        logger.info("hg mv %s -> %s", src, dst)

    def delete(self, path: str) -> None:
        self._run(["rm", "--force", "--", path], os.path.dirname(path))
        logger.info("hg rm %s", path)


KNOWN_BACKENDS: dict[str, type[CommandBackend]] = {
    "git": GitBackend,
    "hg": HgBackend,
}


class VCRegistry:
    """Ordered set of backends consulted for a path's status."""

    def __init__(self, backends: list[VCBackend] | None = None) -> None:
        self._backends: list[VCBackend] = list(backends or [])

    @classmethod
    def from_names(cls, names: list[str]) -> VCRegistry:
        backends: list[VCBackend] = []
        for name in names:
            backend_cls = KNOWN_BACKENDS.get(name)
            if backend_cls is None:
                logger.warning("Unknown version-control backend %r ignored", name)
                continue
            backends.append(backend_cls())
        return cls(backends)

    def status(self, path: str) -> VCStatus:
        for backend in self._backends:
            if backend.is_tracked(path):
                logger.debug("%s is tracked by %s", path, backend.name)
                return TrackedBy(backend.name)
        return Untracked()

    def get(self, name: str) -> VCBackend:
        for backend in self._backends:
            if backend.name == name:
                return backend
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [b.name for b in self._backends]

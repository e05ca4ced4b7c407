"""Resolution of client-supplied directory strings under the storage root.

Raw values are untrusted: they may be blank, carry stray slashes, or try to
climb out of the root with ``..`` segments, absolute prefixes or symlinks.
``PathResolver`` turns them into a ``ResolvedPath`` that is guaranteed to
live inside the root, or raises ``PathEscapeError``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from filestore.services.exceptions import NotADirError, PathEscapeError

logger = structlog.get_logger()


def normalize_dir(raw: str | None) -> str:
    """Trim whitespace and strip every leading and trailing ``/``."""
    if not raw:
        return ""
    return raw.strip().lstrip("/").rstrip("/")


@dataclass(frozen=True)
class ResolvedPath:
    relative: str
    absolute: Path

    def child(self, name: str) -> "ResolvedPath":
        relative = f"{self.relative}/{name}" if self.relative else name
        return ResolvedPath(relative=relative, absolute=self.absolute / name)


class PathResolver:
    def __init__(self, root: Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, raw: str | None) -> ResolvedPath:
        cleaned = normalize_dir(raw)
        if "\x00" in cleaned:
            raise PathEscapeError(message=f"invalid path: {raw!r}")

        # Lexical collapse of "." and ".." against the root
        joined = os.path.normpath(os.path.join(self._root, cleaned))
        candidate = Path(joined)
        if not self.contains(candidate):
            logger.warning("path_escape_rejected", raw=raw, reason="traversal")
            raise PathEscapeError(message=f"path escapes storage root: {raw!r}")

        # Symlinks inside the tree must not point outside of it either
        if not self.contains(candidate.resolve()):
            logger.warning("path_escape_rejected", raw=raw, reason="symlink")
            raise PathEscapeError(message=f"path escapes storage root: {raw!r}")

        relative = candidate.relative_to(self._root).as_posix()
        if relative == ".":
            relative = ""
        return ResolvedPath(relative=relative, absolute=candidate)

    def ensure_dir(self, raw: str | None) -> ResolvedPath:
        """Resolve ``raw`` for writing, creating missing directories."""
        resolved = self.resolve(raw)
        try:
            resolved.absolute.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as exc:
            raise NotADirError(message=f"not a directory: {resolved.relative}") from exc
        # mkdir may have followed a symlink planted after resolution
        if not self.contains(resolved.absolute.resolve()):
            raise PathEscapeError(message=f"path escapes storage root: {raw!r}")
        return resolved

    def contains(self, target: Path) -> bool:
        return target == self._root or self._root in target.parents

from __future__ import annotations

import errno
import itertools
import os
import uuid
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

import structlog

from filestore.services.exceptions import NotADirError, NotAFileError, NotFoundError
from filestore.storage.base import StorageAdapter
from filestore.storage.naming import iter_candidates
from filestore.storage.paths import PathResolver, ResolvedPath
from filestore.storage.records import ObjectRecord

logger = structlog.get_logger()

TEMP_PREFIX = ".filestore-"
TEMP_SUFFIX = ".part"

# errno values meaning the filesystem cannot hard link at all
_LINK_UNSUPPORTED = {errno.EPERM, errno.EOPNOTSUPP, errno.ENOTSUP, errno.EMLINK, errno.ENOSYS}


def is_temporary(name: str) -> bool:
    return name.startswith(TEMP_PREFIX) and name.endswith(TEMP_SUFFIX)


class LocalStorageAdapter(StorageAdapter):
    def __init__(self, root: Path, atomic: bool = True, chunk_size: int = 1024 * 1024) -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._resolver = PathResolver(self._root)
        self._atomic = atomic
        self._chunk_size = chunk_size

    @property
    def root(self) -> Path:
        return self._root

    def put_file(
        self,
        directory: str | None,
        fileobj: BinaryIO,
        original_name: str,
        desired_name: str | None = None,
    ) -> ObjectRecord:
        target = self._resolver.ensure_dir(directory)
        candidates = iter_candidates(original_name, desired_name)
        if self._atomic:
            name = self._write_then_publish(target, fileobj, candidates)
        else:
            name = self._write_exclusive(target, fileobj, candidates)
        return self._record(target.child(name))

    def list_dir(self, directory: str | None) -> list[ObjectRecord]:
        target = self._resolver.resolve(directory)
        if not target.absolute.exists():
            raise NotFoundError(message="Directory not found.")
        if not target.absolute.is_dir():
            raise NotADirError(message="The path specified is not a directory.")

        records = []
        with os.scandir(target.absolute) as entries:
            for entry in entries:
                if is_temporary(entry.name):
                    continue
                child = target.child(entry.name)
                if entry.is_symlink() and not self._resolver.contains(child.absolute.resolve()):
                    continue
                try:
                    records.append(self._record(child))
                except (FileNotFoundError, NotADirectoryError):
                    # removed between enumeration and stat, or a dangling symlink
                    continue
        return records

    def stat(self, path: str) -> ObjectRecord:
        target = self._resolver.resolve(path)
        try:
            return self._record(target)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError(message="File not found.") from exc

    def delete(self, path: str) -> str:
        target = self._resolver.resolve(path)
        if not os.path.lexists(target.absolute):
            raise NotFoundError(message="File not found.")
        if not target.absolute.is_file():
            raise NotAFileError(message="The path specified is not a file.")
        try:
            target.absolute.unlink()
        except FileNotFoundError as exc:
            raise NotFoundError(message="File not found.") from exc
        return target.relative

    def _record(self, target: ResolvedPath) -> ObjectRecord:
        return ObjectRecord.from_stat(
            name=target.absolute.name,
            path=str(target.absolute),
            relative_path=target.relative,
            result=target.absolute.stat(),
        )

    def _copy(self, fileobj: BinaryIO, out: BinaryIO) -> None:
        while True:
            chunk = fileobj.read(self._chunk_size)
            if not chunk:
                break
            out.write(chunk)

    def _write_exclusive(self, target: ResolvedPath, fileobj: BinaryIO, candidates: Iterator[str]) -> str:
        for name in candidates:
            path = target.absolute / name
            try:
                out = path.open("xb")
            except FileExistsError:
                logger.info("upload_name_collision", directory=target.relative, name=name)
                continue
            try:
                with out:
                    self._copy(fileobj, out)
            except Exception:
                path.unlink(missing_ok=True)
                raise
            return name
        raise RuntimeError("candidate names exhausted")

    def _write_then_publish(self, target: ResolvedPath, fileobj: BinaryIO, candidates: Iterator[str]) -> str:
        tmp_path = target.absolute / f"{TEMP_PREFIX}{uuid.uuid4().hex}{TEMP_SUFFIX}"
        try:
            with tmp_path.open("xb") as out:
                self._copy(fileobj, out)
                out.flush()
                os.fsync(out.fileno())
            return self._link_into_place(tmp_path, target, candidates)
        finally:
            tmp_path.unlink(missing_ok=True)

    def _link_into_place(self, tmp_path: Path, target: ResolvedPath, candidates: Iterator[str]) -> str:
        for name in candidates:
            try:
                os.link(tmp_path, target.absolute / name)
            except FileExistsError:
                logger.info("upload_name_collision", directory=target.relative, name=name)
                continue
            except OSError as exc:
                if exc.errno not in _LINK_UNSUPPORTED:
                    raise
                return self._rename_into_place(tmp_path, target, itertools.chain([name], candidates))
            return name
        raise RuntimeError("candidate names exhausted")

    def _rename_into_place(self, tmp_path: Path, target: ResolvedPath, candidates: Iterator[str]) -> str:
        for name in candidates:
            dest = target.absolute / name
            try:
                dest.open("xb").close()
            except FileExistsError:
                logger.info("upload_name_collision", directory=target.relative, name=name)
                continue
            os.replace(tmp_path, dest)
            return name
        raise RuntimeError("candidate names exhausted")

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO

import structlog

from filestore.services.exceptions import IOFailureError, NoFileProvidedError
from filestore.storage.base import StorageAdapter
from filestore.storage.paths import normalize_dir
from filestore.storage.records import ObjectRecord

logger = structlog.get_logger()


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if value is not None and value.strip():
            return value
    return None


@dataclass(frozen=True)
class UploadRequest:
    directory: str | None = None
    desired_name: str | None = None
    stream: BinaryIO | None = None
    original_name: str | None = None
    # Form values exactly as sent, echoed back to the caller
    body_dir: str | None = None
    body_name: str | None = None

    @classmethod
    def from_sources(
        cls,
        body_dir: str | None = None,
        query_dir: str | None = None,
        body_name: str | None = None,
        query_name: str | None = None,
        stream: BinaryIO | None = None,
        original_name: str | None = None,
    ) -> "UploadRequest":
        """Merge form and query values; a non-blank form value always wins."""
        desired_name = _first_present(body_name, query_name)
        return cls(
            directory=_first_present(body_dir, query_dir),
            desired_name=desired_name.strip() if desired_name else None,
            stream=stream,
            original_name=original_name,
            body_dir=body_dir,
            body_name=body_name,
        )


@dataclass(frozen=True)
class UploadResult:
    record: ObjectRecord
    folder: str
    raw_dir: str
    custom_file_name: str


@dataclass(frozen=True)
class DirectoryListing:
    folder: str
    records: list[ObjectRecord]

    @property
    def total(self) -> int:
        return len(self.records)


@contextmanager
def _disk_errors(operation: str, **context):
    try:
        yield
    except OSError as exc:
        logger.exception("storage_io_failure", operation=operation, **context)
        raise IOFailureError(message=exc.strerror or str(exc)) from exc


def upload_object(storage: StorageAdapter, request: UploadRequest, base_url: str) -> UploadResult:
    if request.stream is None:
        raise NoFileProvidedError(message="No file uploaded.")

    with _disk_errors("upload", directory=request.directory):
        record = storage.put_file(
            request.directory,
            request.stream,
            request.original_name or "",
            request.desired_name,
        )

    record = record.with_url(base_url)
    logger.info(
        "object_uploaded",
        relative_path=record.relative_path,
        size=record.size,
        original_name=request.original_name,
    )
    return UploadResult(
        record=record,
        folder=normalize_dir(request.directory),
        raw_dir=request.body_dir or "",
        custom_file_name=request.body_name or "",
    )


def delete_object(storage: StorageAdapter, path: str) -> str:
    with _disk_errors("delete", path=path):
        relative = storage.delete(path)
    logger.info("object_deleted", relative_path=relative)
    return relative


def get_object_info(storage: StorageAdapter, path: str, base_url: str) -> ObjectRecord:
    with _disk_errors("info", path=path):
        record = storage.stat(path)
    return record.with_url(base_url)


def list_objects(storage: StorageAdapter, folder: str | None, base_url: str) -> DirectoryListing:
    with _disk_errors("list", folder=folder):
        records = storage.list_dir(folder)
    logger.info("directory_listed", folder=folder or "", total=len(records))
    return DirectoryListing(
        folder=folder or "",
        records=[record.with_url(base_url) for record in records],
    )

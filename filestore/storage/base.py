from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from filestore.storage.records import ObjectRecord


class StorageAdapter(ABC):
    @abstractmethod
    def put_file(
        self,
        directory: str | None,
        fileobj: BinaryIO,
        original_name: str,
        desired_name: str | None = None,
    ) -> ObjectRecord:
        """Store content under a collision-free name in directory and return its record."""

    @abstractmethod
    def list_dir(self, directory: str | None) -> list[ObjectRecord]:
        """Return records for the immediate children of directory."""

    @abstractmethod
    def stat(self, path: str) -> ObjectRecord:
        """Return the record for a single file or directory."""

    @abstractmethod
    def delete(self, path: str) -> str:
        """Delete a single file and return its path relative to the root."""

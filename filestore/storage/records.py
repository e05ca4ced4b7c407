from __future__ import annotations

import os
import stat
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from urllib.parse import quote


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True)
class ObjectRecord:
    """Metadata snapshot of an entry under the storage root."""

    name: str
    path: str
    relative_path: str
    size: int
    created: datetime
    modified: datetime
    accessed: datetime
    is_file: bool
    is_directory: bool
    url: str | None = None

    @classmethod
    def from_stat(cls, name: str, path: str, relative_path: str, result: os.stat_result) -> "ObjectRecord":
        # st_birthtime only exists on some platforms
        created = getattr(result, "st_birthtime", None) or result.st_ctime
        return cls(
            name=name,
            path=path,
            relative_path=relative_path,
            size=result.st_size,
            created=_timestamp(created),
            modified=_timestamp(result.st_mtime),
            accessed=_timestamp(result.st_atime),
            is_file=stat.S_ISREG(result.st_mode),
            is_directory=stat.S_ISDIR(result.st_mode),
        )

    def with_url(self, base_url: str) -> "ObjectRecord":
        if not self.is_file:
            return self
        return replace(self, url=build_url(base_url, self.relative_path))


def build_url(base_url: str, relative_path: str) -> str:
    return f"{base_url.rstrip('/')}/{quote(relative_path, safe='/')}"

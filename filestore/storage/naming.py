"""Final filename allocation for uploads.

The candidate name comes from the desired name (if any) or the original
upload name. When something already occupies that name in the target
directory the candidate is rewritten as ``{base}_{n}{ext}`` for n = 1, 2, ...
until a free name is found, so an upload never overwrites an object.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

FALLBACK_NAME = "upload"


def _last_segment(name: str | None) -> str:
    if not name:
        return ""
    segment = PurePosixPath(name.strip().replace("\\", "/")).name
    if segment in {".", ".."}:
        return ""
    return segment


def candidate_name(original_name: str | None, desired_name: str | None = None) -> str:
    original = _last_segment(original_name) or FALLBACK_NAME
    desired = _last_segment(desired_name)
    if not desired:
        return original

    _, desired_ext = os.path.splitext(desired)
    if desired_ext:
        return desired
    _, original_ext = os.path.splitext(original)
    return f"{desired}{original_ext}"


def iter_candidates(original_name: str | None, desired_name: str | None = None) -> Iterator[str]:
    first = candidate_name(original_name, desired_name)
    yield first

    base, ext = os.path.splitext(first)
    counter = 1
    while True:
        yield f"{base}_{counter}{ext}"
        counter += 1


def allocate(directory: Path, original_name: str | None, desired_name: str | None = None) -> str:
    """Return the first candidate name not present in ``directory``.

    This is a point-in-time answer; callers that write the file should
    reserve the name atomically (see ``LocalStorageAdapter.put_file``).
    """
    return next(
        name
        for name in iter_candidates(original_name, desired_name)
        if not os.path.lexists(directory / name)
    )

from __future__ import annotations

from filestore.storage.base import StorageAdapter
from filestore.storage.local import LocalStorageAdapter
from filestore.storage.records import ObjectRecord


def create_storage(*args, **kwargs):
    from filestore.storage.factory import create_storage as _create_storage

    return _create_storage(*args, **kwargs)


def get_storage():
    from filestore.storage.factory import get_storage as _get_storage

    return _get_storage()


__all__ = ["StorageAdapter", "LocalStorageAdapter", "ObjectRecord", "create_storage", "get_storage"]

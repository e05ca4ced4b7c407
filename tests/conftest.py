from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Point the store at a throwaway root before app import
TEST_STORAGE_ROOT = Path(tempfile.mkdtemp(prefix="filestore-tests-")) / "public"
os.environ["STORAGE_ROOT"] = str(TEST_STORAGE_ROOT)
os.environ.setdefault("ENV", "local")
os.environ.setdefault("ATOMIC_UPLOADS", "true")

from filestore.main import app  # noqa: E402
from filestore.storage.factory import get_storage  # noqa: E402


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def storage_root() -> Path:
    return get_storage().root


@pytest.fixture(autouse=True)
def clean_storage():
    # Ensure a clean slate for each test
    root = get_storage().root
    for child in root.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    yield

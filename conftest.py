import shutil
from pathlib import Path

import pytest

from stella.persistence import JsonFileStore, MemoryStore

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-create data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    TEST_DATA_DIR.mkdir()
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


@pytest.fixture
def file_store() -> JsonFileStore:
    return JsonFileStore(TEST_DATA_DIR / "stats.json")


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()

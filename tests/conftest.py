import pytest

from core.indexing.scanner import ImageScanner
from core.vector_store.memory_store import InMemoryVectorStore


@pytest.fixture
def upload_dir(tmp_path):
    folder = tmp_path / "uploads"
    folder.mkdir()
    return folder


@pytest.fixture
def scanner(upload_dir):
    return ImageScanner(upload_dir)


@pytest.fixture
def store():
    return InMemoryVectorStore()

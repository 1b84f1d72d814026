import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def codec():
    """Provide a fresh FileCodec instance."""
    return importlib.import_module("codec").FileCodec()


@pytest.fixture()
def text_file(tmp_path: Path):
    """Write a small latin-1 text file and return its path."""
    path = tmp_path / "input.txt"
    path.write_bytes("abracadabra\r\nbar\n\n".encode("latin-1"))
    return path


def is_prefix_free(codes):
    """Return True if no code in ``codes`` is a prefix of another."""
    codes = list(codes)
    for i, a in enumerate(codes):
        for j, b in enumerate(codes):
            if i != j and b.startswith(a):
                return False
    return True


@pytest.fixture()
def prefix_free_fn():
    """Fixture that provides the is_prefix_free helper without importing conftest."""
    return is_prefix_free

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
def input_file(tmp_path: Path):
    """Return a factory writing bytes to a fresh file and returning its path."""
    counter = [0]

    def _make(data: bytes) -> str:
        counter[0] += 1
        path = tmp_path / f"input{counter[0]}.bin"
        path.write_bytes(data)
        return str(path)

    return _make


def bit_string(data: bytes) -> str:
    """Return ``data`` as a string of '0'/'1' characters, MSB first."""
    return "".join(format(b, "08b") for b in data)


@pytest.fixture()
def bit_string_fn():
    """
    Fixture that provides the bit_string helper without importing conftest.
    """
    return bit_string

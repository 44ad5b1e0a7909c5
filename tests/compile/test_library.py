"""Tests for compile/library.py."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from rs_import.compile import Library


def _add(a, b):
    return a + b


def test_library_exports():
    library = Library(Path("/tmp/libx.so"), {"add": _add})

    exports = library.exports()

    assert exports["add"] is _add
    assert exports["default"] == {"add": _add}
    assert "add" in library
    assert len(library) == 1
    assert list(library) == ["add"]


def test_library_close_is_idempotent():
    closer = MagicMock()
    library = Library(Path("/tmp/libx.so"), {"add": _add}, closer=closer)

    library.close()
    library.close()

    closer.assert_called_once()
    assert library.exports() == {"default": {}}


if __name__ == "__main__":
    pytest.main(sys.argv)

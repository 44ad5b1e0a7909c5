"""Process environment lookups."""

import os
import sys
from pathlib import Path


def get_project_root() -> Path:
    """Get the project root that import paths and the output directory are relative to.

    Returns
    -------
    Path
        ``RS_IMPORT_ROOT`` if set, otherwise the current working directory, as an absolute
        path.
    """
    root = os.environ.get("RS_IMPORT_ROOT")
    if root:
        return Path(root).expanduser().resolve()
    return Path.cwd().resolve()


def get_dynlib_suffix() -> str:
    """Get the file extension (without the dot) of dynamic libraries on this platform."""
    if sys.platform == "win32":
        return "dll"
    if sys.platform == "darwin":
        return "dylib"
    return "so"


def get_dynlib_prefix() -> str:
    """Get the file name prefix toolchains give dynamic libraries on this platform."""
    return "" if sys.platform == "win32" else "lib"

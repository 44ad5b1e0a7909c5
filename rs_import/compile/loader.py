"""Loading of compiled units into the running process."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from rs_import.data import FunctionSignature, SymbolManifest
from rs_import.errors import MissingManifestEntryError

from .library import Library
from .resolver import ImportUnit, relative_source_path

Opener = Callable[[Path, Mapping[str, FunctionSignature]], Library]
"""Dynamic loading capability: opens a library and binds the given signatures."""


def get_manifest_key(project_root: Union[str, Path], unit: ImportUnit) -> str:
    """Get the symbol-manifest key of a unit: its project-relative source path."""
    return relative_source_path(Path(project_root), unit.source_path).as_posix()


def load_unit(
    project_root: Union[str, Path],
    unit: ImportUnit,
    manifest: SymbolManifest,
    opener: Optional[Opener] = None,
) -> Library:
    """Bind the symbols a unit declares in the symbol manifest from its compiled artifact.

    Parameters
    ----------
    project_root : Union[str, Path]
        The project root the manifest keys are relative to.
    unit : ImportUnit
        A resolved, compiled unit.
    manifest : SymbolManifest
        The project's symbol manifest.
    opener : Optional[Opener]
        The dynamic loader. Defaults to ``rs_import.ffi.dlopen``.

    Returns
    -------
    Library
        The loaded library with one callable per declared symbol.

    Raises
    ------
    MissingManifestEntryError
        If the manifest has no entry for the unit.
    """
    key = get_manifest_key(project_root, unit)
    signatures = manifest.get(key)
    if signatures is None:
        raise MissingManifestEntryError(f"Missing manifest entry for '{key}'")

    if opener is None:
        from rs_import.ffi import dlopen

        opener = dlopen
    return opener(unit.artifact_path, signatures)

"""Content fingerprints of source files and source trees.

A fingerprint is the ordered list of content hashes of every tracked file. It is stored
verbatim in a hash record, so two fingerprints compare equal exactly when the tracked bytes
and the traversal order are unchanged.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Iterable, List, Union

from rs_import.errors import NotFoundError

from .resolver import ImportUnit, UnitKind

Fingerprint = List[str]
"""Ordered sequence of hex digests of tracked file contents."""

_CHUNK_SIZE = 1024 * 1024


def fingerprint_file(path: Union[str, Path]) -> Fingerprint:
    """Fingerprint a single file.

    Parameters
    ----------
    path : Union[str, Path]
        The file to hash.

    Returns
    -------
    Fingerprint
        A single-element list holding the SHA-256 hex digest of the file's bytes.

    Raises
    ------
    NotFoundError
        If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"The file could not be found: {path}")

    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return [h.hexdigest()]


def fingerprint_tree(
    path: Union[str, Path], excluded_paths: Iterable[Union[str, Path]] = (), recurse: bool = True
) -> Fingerprint:
    """Fingerprint every regular file below a directory.

    Entries are visited in the order the filesystem lists them. Subdirectories are hashed
    in place, so the result is a depth-first concatenation of file fingerprints.

    ``recurse`` only controls the top-level call: with ``recurse=False`` only the files
    directly inside ``path`` are tracked; with ``recurse=True`` subdirectories are
    descended to any depth. Exclusions are checked at every level.

    Parameters
    ----------
    path : Union[str, Path]
        Root of the tree.
    excluded_paths : Iterable[Union[str, Path]]
        Directories whose content is not tracked, such as build output directories.
    recurse : bool
        Whether to descend into subdirectories of ``path``.

    Returns
    -------
    Fingerprint
        The concatenated file fingerprints, or an empty list if ``path`` is excluded.

    Raises
    ------
    NotFoundError
        If ``path`` is not an existing directory.
    """
    excluded = {Path(p) for p in excluded_paths}
    return _fingerprint_tree(Path(path), excluded, recurse)


def _fingerprint_tree(path: Path, excluded: set, recurse: bool) -> Fingerprint:
    if path in excluded:
        return []
    if not path.is_dir():
        raise NotFoundError(f"The directory could not be found: {path}")

    hashes: Fingerprint = []
    with os.scandir(path) as entries:
        for entry in entries:
            entry_path = path / entry.name
            if entry.is_file(follow_symlinks=False):
                hashes.extend(fingerprint_file(entry_path))
            elif entry.is_dir(follow_symlinks=False) and recurse:
                hashes.extend(_fingerprint_tree(entry_path, excluded, True))
    return hashes


def fingerprint_unit(unit: ImportUnit) -> Fingerprint:
    """Fingerprint the sources of a unit.

    A single-file unit tracks its ``.rs`` file. A cargo unit tracks its whole crate
    directory except ``target/``, where cargo writes build output, and the project output
    directory, which lies inside the crate when the crate is the project root.
    """
    if unit.kind is UnitKind.CARGO:
        crate_dir = unit.source_dir
        excluded = [crate_dir / "target", unit.output_root]
        return fingerprint_tree(crate_dir, excluded, recurse=True)
    return fingerprint_file(unit.source_path)

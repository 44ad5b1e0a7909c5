"""Derivation of unit identities and artifact locations from import source paths.

Everything here except reading a ``Cargo.toml`` is pure path computation: nothing is
created, moved or deleted.
"""

from __future__ import annotations

import os
import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict

from rs_import.env import get_dynlib_suffix
from rs_import.errors import InvalidManifestError, InvalidSourceNameError, NotFoundError

CARGO_MANIFEST_NAME = "Cargo.toml"
"""File name that marks a package-manifest import."""
RUST_SOURCE_SUFFIX = ".rs"
"""Extension of single-file imports."""
HASH_RECORD_SUFFIX = ".hash"

_IDENTIFIER_TAIL = re.compile(r"\w+$")


class UnitKind(str, Enum):
    """How a unit is compiled. The value is also the first component of its slug."""

    RUSTC = "rustc"
    """A single ``.rs`` file compiled directly with ``rustc``."""
    CARGO = "cargo"
    """A crate described by a ``Cargo.toml``, built with ``cargo``."""

    @classmethod
    def from_source(cls, source_path: Path) -> "UnitKind":
        """Classify a source path.

        Raises
        ------
        InvalidSourceNameError
            If the path is neither a ``Cargo.toml`` nor a ``.rs`` file.
        """
        if source_path.name == CARGO_MANIFEST_NAME:
            return cls.CARGO
        if source_path.suffix == RUST_SOURCE_SUFFIX:
            return cls.RUSTC
        raise InvalidSourceNameError(
            f"Unsupported import '{source_path}': expected a '{RUST_SOURCE_SUFFIX}' file or "
            f"a '{CARGO_MANIFEST_NAME}'"
        )


class ImportUnit(BaseModel):
    """One native compilation target and the locations derived from it.

    Built fresh on every run; only the artifact and hash record it points to are persisted.
    """

    model_config = ConfigDict(frozen=True)

    kind: UnitKind
    """Whether the unit is a single file or a cargo crate."""
    display_name: str
    """Library name: the package name for crates, the file stem for single files."""
    slug: str
    """Identity of the unit: ``{kind}/{project-relative path without '.rs' or
    '/Cargo.toml'}``. Namespaces the artifact and hash-record directories."""
    source_path: Path
    """Absolute path of the ``.rs`` file or ``Cargo.toml``."""
    artifact_path: Path
    """Canonical location of the compiled dynamic library."""
    hash_record_path: Path
    """Canonical location of the unit's fingerprint record."""
    output_root: Path
    """The project output directory holding every artifact and hash record."""

    @property
    def source_dir(self) -> Path:
        """Directory holding the source; the crate root for cargo units."""
        return self.source_path.parent

    @property
    def artifact_dir(self) -> Path:
        return self.artifact_path.parent


def read_cargo_manifest(manifest_path: Path) -> Dict[str, Any]:
    """Parse a ``Cargo.toml``.

    Raises
    ------
    NotFoundError
        If the manifest does not exist.
    InvalidManifestError
        If the manifest is not valid TOML.
    """
    try:
        with open(manifest_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise NotFoundError(f"The manifest could not be found: {manifest_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise InvalidManifestError(f"Unable to parse '{manifest_path}': {e}") from e


def resolve_cargo_name(manifest_path: Path) -> str:
    """Read ``package.name`` from a ``Cargo.toml``.

    Raises
    ------
    InvalidManifestError
        If the manifest has no ``package.name`` string.
    """
    package = read_cargo_manifest(manifest_path).get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name:
        raise InvalidManifestError(
            f"Unable to parse '{manifest_path}' import: missing 'package.name'"
        )
    return name


def resolve_rustc_name(source_path: Path) -> str:
    """Take the library name of a single-file unit from its file name.

    The name is the trailing run of identifier characters of the stem, so ``hello.rs``
    gives ``hello`` and ``my-lib.rs`` gives ``lib``.

    Raises
    ------
    InvalidSourceNameError
        If the stem does not end in an identifier character.
    """
    match = _IDENTIFIER_TAIL.search(source_path.stem)
    if match is None:
        raise InvalidSourceNameError(f"Unable to parse rustc import path '{source_path}'")
    return match.group(0)


def make_slug(kind: UnitKind, relative_path: Path) -> str:
    """Build the slug of a unit from its kind and project-relative source path.

    ``a.rs`` gives ``rustc/a``; ``pkg/Cargo.toml`` gives ``cargo/pkg``. A ``Cargo.toml`` at
    the project root gives ``cargo/.``.
    """
    if kind is UnitKind.CARGO:
        stripped = relative_path.parent
    else:
        stripped = relative_path.with_suffix("")
    return f"{kind.value}/{stripped.as_posix()}"


def relative_source_path(project_root: Path, source_path: Path) -> Path:
    """Express a source path relative to the project root.

    Raises
    ------
    InvalidSourceNameError
        If the source lies outside the project root.
    """
    try:
        return source_path.relative_to(project_root)
    except ValueError as e:
        raise InvalidSourceNameError(
            f"Import '{source_path}' is outside the project root '{project_root}'"
        ) from e


def resolve(
    project_root: Union[str, Path], output_dir: Union[str, Path], source_path: Union[str, Path]
) -> ImportUnit:
    """Derive the unit identity and artifact locations of an import.

    Parameters
    ----------
    project_root : Union[str, Path]
        Absolute project root.
    output_dir : Union[str, Path]
        Output directory relative to the project root.
    source_path : Union[str, Path]
        The ``.rs`` file or ``Cargo.toml``, absolute or relative to the project root.

    Returns
    -------
    ImportUnit
        The resolved unit. Artifact path is
        ``{root}/{output_dir}/libs/{slug}/lib{name}.{suffix}`` and hash record path is
        ``{root}/{output_dir}/hash/{slug}/{name}.hash``.

    Raises
    ------
    InvalidSourceNameError
        If the path is not a supported import or its name cannot be parsed.
    InvalidManifestError
        If a ``Cargo.toml`` has no package name.
    NotFoundError
        If a ``Cargo.toml`` does not exist.
    """
    project_root = Path(project_root)
    source_path = Path(os.path.normpath(project_root / source_path))
    relative = relative_source_path(project_root, source_path)

    kind = UnitKind.from_source(source_path)
    if kind is UnitKind.CARGO:
        name = resolve_cargo_name(source_path)
    else:
        name = resolve_rustc_name(source_path)
    slug = make_slug(kind, relative)

    output_root = Path(os.path.normpath(project_root / output_dir))
    return ImportUnit(
        kind=kind,
        display_name=name,
        slug=slug,
        source_path=source_path,
        artifact_path=output_root / "libs" / slug / f"lib{name}.{get_dynlib_suffix()}",
        hash_record_path=output_root / "hash" / slug / f"{name}{HASH_RECORD_SUFFIX}",
        output_root=output_root,
    )

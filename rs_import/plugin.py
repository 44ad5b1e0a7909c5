"""Import hook adapter: builds declared units once and serves their symbols on import."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rs_import.compile import (
    BuilderRegistry,
    Library,
    UnitBuildResult,
    build_units,
    load_unit,
    resolve,
)
from rs_import.compile.loader import Opener
from rs_import.data import RsConfig, SymbolManifest, load_config, load_manifest
from rs_import.env import get_project_root
from rs_import.logging import get_logger

logger = get_logger(__name__)

NAMESPACE = "rs-import"
"""Specifier prefix (``rs-import:src/hello.rs``) routing an import to this plugin."""


class RsImport:
    """Entry point for hosts that import Rust sources.

    ``setup`` runs the incremental build over every unit in the symbol manifest.
    ``resolve`` and ``load`` are the two steps a host's import hook calls for each import:
    turning a specifier into an absolute source path, then into the unit's exports.

    Examples
    --------
    >>> plugin = RsImport()
    >>> plugin.setup()
    >>> exports = plugin.load(plugin.resolve("rs-import:src/hello.rs"))
    >>> exports["add"](1, 2)
    3
    """

    def __init__(
        self,
        project_root: Optional[Union[str, Path]] = None,
        config: Optional[RsConfig] = None,
        manifest: Optional[SymbolManifest] = None,
        registry: Optional[BuilderRegistry] = None,
        opener: Optional[Opener] = None,
    ) -> None:
        """Constructor for the RsImport plugin.

        Parameters
        ----------
        project_root : Optional[Union[str, Path]]
            Project root. Defaults to ``get_project_root()``.
        config : Optional[RsConfig]
            Build configuration. Loaded from ``rsconfig.json`` when not given.
        manifest : Optional[SymbolManifest]
            Symbol manifest. Loaded from the configured manifest file when not given.
        registry : Optional[BuilderRegistry]
            Builders to compile with. Defaults to the shared registry.
        opener : Optional[Opener]
            Dynamic loader. Defaults to ``rs_import.ffi.dlopen``.
        """
        self.project_root = Path(project_root).resolve() if project_root else get_project_root()
        self.config = config if config is not None else load_config(self.project_root)
        self.manifest = (
            manifest if manifest is not None else load_manifest(self.project_root, self.config)
        )
        self._registry = registry
        self._opener = opener
        self._libraries: Dict[Path, Library] = {}

    def setup(self, force: bool = False) -> List[UnitBuildResult]:
        """Rebuild every stale unit declared in the symbol manifest.

        Parameters
        ----------
        force : bool
            Rebuild every unit regardless of cache state.

        Returns
        -------
        List[UnitBuildResult]
            The build outcome of each unit.
        """
        return build_units(
            self.project_root, self.config, self.manifest, registry=self._registry, force=force
        )

    def resolve(self, specifier: str, importer: Optional[Union[str, Path]] = None) -> Path:
        """Turn an import specifier into the absolute path of its source.

        Parameters
        ----------
        specifier : str
            The imported path, optionally prefixed with ``rs-import:``.
        importer : Optional[Union[str, Path]]
            The file containing the import. Relative specifiers are resolved against its
            directory, or against the project root when there is no importer.

        Returns
        -------
        Path
            Absolute, normalized source path.
        """
        prefix = f"{NAMESPACE}:"
        if specifier.startswith(prefix):
            specifier = specifier[len(prefix) :]
        base = Path(importer).parent if importer else self.project_root
        return Path(os.path.normpath(base / specifier))

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a resolved import and return its exports.

        Parameters
        ----------
        path : Union[str, Path]
            Absolute source path, as returned by ``resolve``.

        Returns
        -------
        Dict[str, Any]
            Every declared symbol by name, plus ``default`` mapping to all of them.
        """
        unit = resolve(self.project_root, self.config.output_dir, path)
        library = self._libraries.get(unit.artifact_path)
        if library is None:
            library = load_unit(self.project_root, unit, self.manifest, opener=self._opener)
            self._libraries[unit.artifact_path] = library
            logger.debug(f"Loaded '{unit.slug}' from {unit.artifact_path}")
        return library.exports()

    def close(self) -> None:
        """Release every library loaded by this plugin."""
        for library in self._libraries.values():
            library.close()
        self._libraries.clear()

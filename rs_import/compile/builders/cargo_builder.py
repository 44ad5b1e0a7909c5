"""Builder for crates built with cargo."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from rs_import.compile.builder import Builder
from rs_import.compile.resolver import ImportUnit, UnitKind, read_cargo_manifest
from rs_import.data import RsConfig
from rs_import.env import get_dynlib_prefix, get_dynlib_suffix
from rs_import.errors import RenameFailedError
from rs_import.logging import get_logger

logger = get_logger(__name__)


class CargoBuilder(Builder):
    """Builder running ``cargo build --release`` on a crate manifest.

    Cargo places the library in the crate's own ``target/release`` directory; after a
    successful build it is moved to the unit's canonical artifact path.
    """

    kind: ClassVar[UnitKind] = UnitKind.CARGO
    toolchain: ClassVar[str] = "cargo"

    _RELEASE_DIR: ClassVar[str] = "target/release"
    """Location of release build output, relative to the crate directory."""

    def get_release_output_path(self, unit: ImportUnit) -> Path:
        """Get the path cargo writes the unit's library to.

        The file is named after the crate's library target: ``[lib] name`` if declared,
        otherwise the package name with dashes replaced by underscores.

        Parameters
        ----------
        unit : ImportUnit
            A cargo unit.

        Returns
        -------
        Path
            ``<crate>/target/release/<prefix><lib name>.<suffix>``.
        """
        lib = read_cargo_manifest(unit.source_path).get("lib")
        lib_name = lib.get("name") if isinstance(lib, dict) else None
        if not isinstance(lib_name, str) or not lib_name:
            lib_name = unit.display_name.replace("-", "_")
        file_name = f"{get_dynlib_prefix()}{lib_name}.{get_dynlib_suffix()}"
        return unit.source_dir / self._RELEASE_DIR / file_name

    def _build(self, executable: str, unit: ImportUnit, config: RsConfig) -> None:
        cmd = [
            executable,
            "build",
            "--release",
            f"--manifest-path={unit.source_path}",
            *config.build.cargo_args,
        ]
        self._run(cmd, unit)

        output_path = self.get_release_output_path(unit)
        logger.debug(f"Moving {output_path} to {unit.artifact_path}")
        try:
            os.replace(output_path, unit.artifact_path)
        except OSError as e:
            raise RenameFailedError(
                f"Cannot move the library of '{unit.slug}' from '{output_path}' to "
                f"'{unit.artifact_path}': {e}"
            ) from e

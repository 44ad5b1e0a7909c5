"""Builder for single ``.rs`` files compiled directly with rustc."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from rs_import.compile.builder import Builder
from rs_import.compile.resolver import ImportUnit, UnitKind
from rs_import.data import RsConfig
from rs_import.env import get_dynlib_prefix, get_dynlib_suffix
from rs_import.errors import RenameFailedError
from rs_import.logging import get_logger

logger = get_logger(__name__)


class RustcBuilder(Builder):
    """Builder compiling one Rust source file into a ``cdylib`` with ``rustc``.

    rustc writes ``<prefix><crate name>.<suffix>`` into ``--out-dir``. The crate name is set
    to the unit's display name and the output directory to the artifact directory. Where
    the platform prefix is ``lib`` the library lands at the canonical artifact path
    directly; on Windows, where rustc emits ``<crate name>.dll``, it is renamed afterwards.
    """

    kind: ClassVar[UnitKind] = UnitKind.RUSTC
    toolchain: ClassVar[str] = "rustc"

    def get_output_path(self, unit: ImportUnit) -> Path:
        """Get the path rustc writes the unit's library to."""
        file_name = f"{get_dynlib_prefix()}{unit.display_name}.{get_dynlib_suffix()}"
        return unit.artifact_dir / file_name

    def _build(self, executable: str, unit: ImportUnit, config: RsConfig) -> None:
        cmd = [
            executable,
            "--crate-type=cdylib",
            "--emit=link",
            f"--crate-name={unit.display_name}",
            f"--out-dir={unit.artifact_dir}",
            *config.build.rustc_args,
            str(unit.source_path),
        ]
        self._run(cmd, unit)

        output_path = self.get_output_path(unit)
        if output_path == unit.artifact_path:
            return
        logger.debug(f"Moving {output_path} to {unit.artifact_path}")
        try:
            os.replace(output_path, unit.artifact_path)
        except OSError as e:
            raise RenameFailedError(
                f"Cannot move the library of '{unit.slug}' from '{output_path}' to "
                f"'{unit.artifact_path}': {e}"
            ) from e

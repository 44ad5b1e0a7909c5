"""Abstract base class for unit builders."""

from __future__ import annotations

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import ClassVar, List

from rs_import.data import RsConfig
from rs_import.errors import BuildError, CompilationFailedError, ToolchainMissingError
from rs_import.logging import get_logger

from .resolver import ImportUnit, UnitKind

logger = get_logger(__name__)


class Builder(ABC):
    """Abstract base class for compiling an import unit into its dynamic library.

    A Builder runs one external toolchain for one kind of unit and leaves the compiled
    library at ``unit.artifact_path``. Deciding whether a build is needed is not the
    builder's concern; ``build`` always compiles.

    Subclasses set ``kind`` and ``toolchain`` and implement ``_build``.
    """

    kind: ClassVar[UnitKind]
    """The kind of unit this builder compiles."""

    toolchain: ClassVar[str]
    """Name of the executable this builder runs."""

    @classmethod
    def is_available(cls) -> bool:
        """Check if the toolchain executable can be found on PATH.

        Returns
        -------
        bool
            True if the builder can be used, False otherwise.
        """
        return shutil.which(cls.toolchain) is not None

    def can_build(self, unit: ImportUnit) -> bool:
        return unit.kind is self.kind

    def build(self, unit: ImportUnit, config: RsConfig) -> None:
        """Compile a unit and place its library at the canonical artifact path.

        Any previous artifact is removed first and the artifact directory is created.

        Parameters
        ----------
        unit : ImportUnit
            The unit to compile.
        config : RsConfig
            The build configuration providing extra toolchain arguments.

        Raises
        ------
        ToolchainMissingError
            If the toolchain executable cannot be found.
        CompilationFailedError
            If the toolchain exits with a non-zero status.
        BuildError
            If the artifact directory cannot be prepared or the artifact cannot be moved
            into place.
        """
        if not self.can_build(unit):
            raise BuildError(
                f"{type(self).__name__} cannot build {unit.kind.value} unit '{unit.slug}'"
            )
        executable = self._require_toolchain()
        self._prepare_artifact_dir(unit)
        self._build(executable, unit, config)

    @abstractmethod
    def _build(self, executable: str, unit: ImportUnit, config: RsConfig) -> None:
        """Run the toolchain for a unit whose artifact directory has been prepared."""
        ...

    def _require_toolchain(self) -> str:
        executable = shutil.which(self.toolchain)
        if executable is None:
            raise ToolchainMissingError(f"The `{self.toolchain}` utility must be installed")
        return executable

    def _prepare_artifact_dir(self, unit: ImportUnit) -> None:
        try:
            unit.artifact_dir.mkdir(parents=True, exist_ok=True)
            unit.artifact_path.unlink(missing_ok=True)
        except OSError as e:
            raise BuildError(
                f"Cannot prepare artifact directory for '{unit.slug}': {e}"
            ) from e

    def _run(self, cmd: List[str], unit: ImportUnit) -> None:
        """Run a toolchain command, streaming its output to the console.

        Raises
        ------
        CompilationFailedError
            If the command exits with a non-zero status.
        """
        logger.info(f"Compiling '{unit.slug}': {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise ToolchainMissingError(f"Cannot run `{self.toolchain}`: {e}") from e
        if result.returncode != 0:
            raise CompilationFailedError(
                f"Compilation of '{unit.slug}' failed: `{self.toolchain}` exited with "
                f"status {result.returncode}",
                result.returncode,
            )

"""Build configuration read from ``rsconfig.json``."""

from __future__ import annotations

from typing import List, Optional

from pydantic import ConfigDict, Field

from .utils import BaseModelWithDocstrings, NonEmptyString


class ImportOptions(BaseModelWithDocstrings):
    """Options controlling how imports are resolved and when they are rebuilt."""

    manifest: Optional[NonEmptyString] = None
    """Path of the symbol manifest, relative to the project root. Defaults to
    ``rsmanifest.json`` when not set."""
    always_recompile: bool = False
    """Rebuild every unit on every run, regardless of cache state."""


class BuildOptions(BaseModelWithDocstrings):
    """Options passed to the toolchains and controlling where artifacts are placed."""

    output_dir: NonEmptyString = "build"
    """Directory, relative to the project root, holding compiled libraries and hash records."""
    rustc_args: List[str] = Field(default_factory=list)
    """Extra arguments appended to every ``rustc`` invocation."""
    cargo_args: List[str] = Field(default_factory=list)
    """Extra arguments appended to every ``cargo build`` invocation."""


class RsConfig(BaseModelWithDocstrings):
    """The effective build configuration of a project.

    The configuration is constructed once per run and passed explicitly to every
    component that needs it. Its serialized form doubles as the configuration
    fingerprint: any change to it invalidates every cached unit.
    """

    model_config = ConfigDict(
        use_attribute_docstrings=True, extra="forbid", populate_by_name=True
    )

    import_: ImportOptions = Field(default_factory=ImportOptions, alias="import")
    """Import resolution options (the ``import`` section of ``rsconfig.json``)."""
    build: BuildOptions = Field(default_factory=BuildOptions)
    """Toolchain and output options (the ``build`` section of ``rsconfig.json``)."""

    @property
    def output_dir(self) -> str:
        return self.build.output_dir

    @property
    def force_recompile(self) -> bool:
        return self.import_.always_recompile

    def fingerprint(self) -> str:
        """Serialize the effective configuration into a stable string.

        Returns
        -------
        str
            Compact JSON of the configuration using the on-disk key names, with defaults
            included so that an explicit default and an omitted key compare equal.
        """
        return self.model_dump_json(by_alias=True)

"""Builder registry for dispatching unit builds by kind."""

from __future__ import annotations

from typing import ClassVar, Dict, List, Optional, Type

from rs_import.data import RsConfig
from rs_import.errors import BuildError

from .builder import Builder
from .builders import CargoBuilder, RustcBuilder
from .resolver import ImportUnit, UnitKind

_DEFAULT_BUILDERS: List[Type[Builder]] = [RustcBuilder, CargoBuilder]
"""Builder types registered by default, one per unit kind."""


class BuilderRegistry:
    """Registry mapping every unit kind to the builder that compiles it.

    Builders are registered regardless of whether their toolchain is installed: a missing
    toolchain is reported when a unit of that kind actually has to be built.

    Use get_instance() to obtain the shared default registry.
    """

    _instance: ClassVar[Optional["BuilderRegistry"]] = None
    """Shared instance of the BuilderRegistry."""

    _builders: Dict[UnitKind, Builder]
    """Builder for each unit kind."""

    def __init__(self, builders: List[Builder]) -> None:
        """Initialize the registry with a list of builders.

        Parameters
        ----------
        builders : List[Builder]
            Builder instances to use. Later builders replace earlier ones of the same kind.

        Raises
        ------
        ValueError
            If the builders list is empty.
        """
        if len(builders) == 0:
            raise ValueError("BuilderRegistry requires at least one builder")
        self._builders = {builder.kind: builder for builder in builders}

    @classmethod
    def get_instance(cls) -> "BuilderRegistry":
        """Get the shared registry holding the default rustc and cargo builders."""
        if cls._instance is None:
            cls._instance = BuilderRegistry([builder_type() for builder_type in _DEFAULT_BUILDERS])
        return cls._instance

    def get_builder(self, kind: UnitKind) -> Builder:
        """Get the builder for a unit kind.

        Raises
        ------
        BuildError
            If no builder is registered for the kind.
        """
        try:
            return self._builders[kind]
        except KeyError:
            raise BuildError(f"No registered builder can build {kind.value} units") from None

    def build(self, unit: ImportUnit, config: RsConfig) -> None:
        """Compile a unit with the builder registered for its kind.

        Raises
        ------
        BuildError
            If no builder handles the unit's kind, or the build fails.
        """
        self.get_builder(unit.kind).build(unit, config)

"""The incremental build run over every declared import unit."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel

from rs_import.data import RsConfig, SymbolManifest
from rs_import.errors import RsImportError
from rs_import.logging import get_logger

from .cache import check_config_hash, check_unit_hash, get_config_hash_path
from .registry import BuilderRegistry
from .resolver import ImportUnit, resolve

logger = get_logger(__name__)


class UnitBuildResult(BaseModel):
    """Outcome of the build step for one unit."""

    unit: ImportUnit
    """The resolved unit."""
    fresh: bool
    """Whether the unit's sources matched its hash record."""
    rebuilt: bool
    """Whether the toolchain was invoked for the unit this run."""


def needs_rebuild(fresh: bool, config_changed: bool, force: bool) -> bool:
    """A unit is rebuilt when its sources changed, the configuration changed, or a rebuild
    is forced. Each condition alone is sufficient."""
    return not fresh or config_changed or force


def build_units(
    project_root: Union[str, Path],
    config: RsConfig,
    manifest: SymbolManifest,
    registry: Optional[BuilderRegistry] = None,
    force: bool = False,
) -> List[UnitBuildResult]:
    """Bring the artifact of every unit in the symbol manifest up to date.

    Units are processed one at a time in manifest order. Each unit's hash record is
    checked (and refreshed on a miss) before the rebuild decision is made, so the record
    always reflects the current sources.

    Parameters
    ----------
    project_root : Union[str, Path]
        Absolute project root.
    config : RsConfig
        The build configuration.
    manifest : SymbolManifest
        The symbol manifest; its keys are the units to build.
    registry : Optional[BuilderRegistry]
        Builders to use. Defaults to the shared registry.
    force : bool
        Rebuild every unit regardless of cache state.

    Returns
    -------
    List[UnitBuildResult]
        One result per unit, in manifest order.

    Raises
    ------
    RsImportError
        On the first unit that cannot be resolved, fingerprinted or built. Later units
        are not processed.
    """
    project_root = Path(project_root)
    if registry is None:
        registry = BuilderRegistry.get_instance()
    force = force or config.force_recompile

    config_changed = not check_config_hash(config, get_config_hash_path(project_root, config))
    if config_changed:
        logger.info("Build configuration changed, rebuilding all units")

    results: List[UnitBuildResult] = []
    for key in manifest.keys():
        unit: ImportUnit = resolve(project_root, config.output_dir, key)
        fresh = check_unit_hash(unit)
        rebuilt = needs_rebuild(fresh, config_changed, force)
        if rebuilt:
            try:
                registry.build(unit, config)
            except RsImportError:
                # The record already matches the sources, so the next run would skip the unit
                logger.warning(
                    f"Building '{unit.slug}' failed; delete {unit.hash_record_path} or run with "
                    "force to rebuild it if the fix leaves its sources unchanged"
                )
                raise
            logger.info(f"Rebuilt '{unit.slug}' -> {unit.artifact_path}")
        else:
            logger.debug(f"'{unit.slug}' is up to date")
        results.append(UnitBuildResult(unit=unit, fresh=fresh, rebuilt=rebuilt))
    return results

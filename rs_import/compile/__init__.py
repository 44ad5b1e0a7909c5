"""Compiler subsystem package.

This package turns declared imports into loaded native libraries. It includes:
- Fingerprinting of source files and crate directories
- Resolution of units to their slug, artifact path and hash-record path
- Hash records deciding when a unit must be rebuilt
- Builders running rustc or cargo, dispatched by a BuilderRegistry
- Loading of compiled units into Library handles

The typical workflow is:
1. Build everything that is stale: results = build_units(root, config, manifest)
2. Resolve an import: unit = resolve(root, config.output_dir, "src/hello.rs")
3. Load it: library = load_unit(root, unit, manifest)
"""

from .builder import Builder
from .cache import check_config_hash, check_unit_hash, is_fresh, serialize_fingerprint
from .fingerprint import Fingerprint, fingerprint_file, fingerprint_tree, fingerprint_unit
from .library import Library
from .loader import get_manifest_key, load_unit
from .pipeline import UnitBuildResult, build_units, needs_rebuild
from .registry import BuilderRegistry
from .resolver import ImportUnit, UnitKind, resolve

__all__ = [
    "Builder",
    "BuilderRegistry",
    "Fingerprint",
    "ImportUnit",
    "Library",
    "UnitBuildResult",
    "UnitKind",
    "build_units",
    "check_config_hash",
    "check_unit_hash",
    "fingerprint_file",
    "fingerprint_tree",
    "fingerprint_unit",
    "get_manifest_key",
    "is_fresh",
    "load_unit",
    "needs_rebuild",
    "resolve",
    "serialize_fingerprint",
]

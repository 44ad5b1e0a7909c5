from rs_import.compile import (
    Builder,
    BuilderRegistry,
    ImportUnit,
    Library,
    UnitBuildResult,
    UnitKind,
    build_units,
    fingerprint_file,
    fingerprint_tree,
    is_fresh,
    load_unit,
    resolve,
)
from rs_import.data import (
    FFIType,
    FunctionSignature,
    RsConfig,
    SymbolManifest,
    load_config,
    load_manifest,
)
from rs_import.errors import (
    BuildError,
    CacheIOError,
    CompilationFailedError,
    InvalidConfigError,
    InvalidManifestError,
    InvalidSourceNameError,
    LoadError,
    MissingManifestEntryError,
    NotFoundError,
    RenameFailedError,
    RsImportError,
    ToolchainMissingError,
)
from rs_import.logging import configure_logging, get_logger
from rs_import.plugin import RsImport

__all__ = [
    # Plugin
    "RsImport",
    # Pipeline
    "Builder",
    "BuilderRegistry",
    "ImportUnit",
    "Library",
    "UnitBuildResult",
    "UnitKind",
    "build_units",
    "fingerprint_file",
    "fingerprint_tree",
    "is_fresh",
    "load_unit",
    "resolve",
    # Data
    "FFIType",
    "FunctionSignature",
    "RsConfig",
    "SymbolManifest",
    "load_config",
    "load_manifest",
    # Errors
    "RsImportError",
    "NotFoundError",
    "InvalidConfigError",
    "InvalidManifestError",
    "InvalidSourceNameError",
    "BuildError",
    "ToolchainMissingError",
    "CompilationFailedError",
    "RenameFailedError",
    "CacheIOError",
    "MissingManifestEntryError",
    "LoadError",
    # Logging
    "configure_logging",
    "get_logger",
]

"""Data layer with strongly-typed pydantic models for rs_import."""

from .config import BuildOptions, ImportOptions, RsConfig
from .json_codec import (
    CONFIG_FILE_NAME,
    DEFAULT_MANIFEST_FILE_NAME,
    get_manifest_path,
    load_config,
    load_json_file,
    load_manifest,
)
from .manifest import FFIType, FunctionSignature, SymbolManifest, SymbolTable

__all__ = [
    # Configuration
    "BuildOptions",
    "ImportOptions",
    "RsConfig",
    # Symbol manifest
    "FFIType",
    "FunctionSignature",
    "SymbolManifest",
    "SymbolTable",
    # JSON loading
    "CONFIG_FILE_NAME",
    "DEFAULT_MANIFEST_FILE_NAME",
    "get_manifest_path",
    "load_config",
    "load_json_file",
    "load_manifest",
]

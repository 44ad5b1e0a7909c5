"""Loading of the JSON files a project declares its imports in."""

from __future__ import annotations

from pathlib import Path
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from rs_import.errors import InvalidConfigError
from rs_import.logging import get_logger

from .config import RsConfig
from .manifest import SymbolManifest

logger = get_logger(__name__)

CONFIG_FILE_NAME = "rsconfig.json"
"""Name of the build configuration file at the project root."""
DEFAULT_MANIFEST_FILE_NAME = "rsmanifest.json"
"""Name of the symbol manifest when the configuration does not override it."""

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_json_file(model_cls: Type[ModelT], path: Union[str, Path]) -> ModelT:
    """Load and validate a JSON file into a pydantic model.

    Parameters
    ----------
    model_cls : Type[ModelT]
        The model to validate the file content against.
    path : Union[str, Path]
        The file to read.

    Returns
    -------
    ModelT
        The validated model.

    Raises
    ------
    InvalidConfigError
        If the file cannot be read or does not match the model.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidConfigError(f"Cannot read '{path}': {e}") from e
    try:
        return model_cls.model_validate_json(text)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid content in '{path}':\n{e}") from e


def load_config(project_root: Union[str, Path]) -> RsConfig:
    """Load ``rsconfig.json`` from the project root.

    Returns
    -------
    RsConfig
        The parsed configuration, or the default configuration if the file does not exist.
    """
    path = Path(project_root) / CONFIG_FILE_NAME
    if not path.is_file():
        logger.debug(f"No {CONFIG_FILE_NAME} in {project_root}, using defaults")
        return RsConfig()
    return load_json_file(RsConfig, path)


def get_manifest_path(project_root: Union[str, Path], config: RsConfig) -> Path:
    return Path(project_root) / (config.import_.manifest or DEFAULT_MANIFEST_FILE_NAME)


def load_manifest(project_root: Union[str, Path], config: RsConfig) -> SymbolManifest:
    """Load the symbol manifest named by the configuration.

    Returns
    -------
    SymbolManifest
        The parsed manifest, or an empty manifest if the file does not exist.
    """
    path = get_manifest_path(project_root, config)
    if not path.is_file():
        logger.debug(f"No symbol manifest at {path}, nothing to import")
        return SymbolManifest()
    return load_json_file(SymbolManifest, path)

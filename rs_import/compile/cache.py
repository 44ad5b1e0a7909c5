"""On-disk hash records deciding whether a unit has to be rebuilt.

Check-and-write is not atomic: records are assumed to be used by one process at a time.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from rs_import.data import RsConfig
from rs_import.errors import CacheIOError
from rs_import.logging import get_logger

from .fingerprint import Fingerprint, fingerprint_unit
from .resolver import ImportUnit

logger = get_logger(__name__)

CONFIG_HASH_FILE_NAME = "__rsconfig.hash"
"""Name of the configuration fingerprint record inside the output directory."""


def serialize_fingerprint(fingerprint: Fingerprint) -> str:
    """Serialize a fingerprint into the exact text stored in a hash record."""
    return json.dumps(fingerprint, separators=(",", ":"))


def _write_record(record_path: Path, value: str) -> None:
    try:
        record_path.parent.mkdir(parents=True, exist_ok=True)
        record_path.write_text(value, encoding="utf-8")
    except OSError as e:
        raise CacheIOError(f"Cannot write hash record '{record_path}': {e}") from e


def is_fresh(record_path: Union[str, Path], current: str) -> bool:
    """Compare a serialized fingerprint with the recorded one, recording it on a miss.

    Parameters
    ----------
    record_path : Union[str, Path]
        Location of the hash record.
    current : str
        The freshly computed, serialized fingerprint.

    Returns
    -------
    bool
        True if the record exists and holds exactly ``current``; the record is left
        untouched. False otherwise, after ``current`` has been written to the record
        (creating parent directories as needed).

    Raises
    ------
    CacheIOError
        If the record exists but cannot be read, or cannot be written.
    """
    record_path = Path(record_path)
    if record_path.is_file():
        try:
            saved = record_path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheIOError(f"Cannot read hash record '{record_path}': {e}") from e
        if saved == current:
            return True

    _write_record(record_path, current)
    return False


def check_unit_hash(unit: ImportUnit) -> bool:
    """Check whether the unit's sources match its hash record, refreshing it on a miss."""
    fresh = is_fresh(unit.hash_record_path, serialize_fingerprint(fingerprint_unit(unit)))
    logger.debug(f"Unit '{unit.slug}' is {'fresh' if fresh else 'stale'}")
    return fresh


def get_config_hash_path(project_root: Union[str, Path], config: RsConfig) -> Path:
    return Path(project_root) / config.output_dir / CONFIG_HASH_FILE_NAME


def check_config_hash(config: RsConfig, record_path: Union[str, Path]) -> bool:
    """Check whether the build configuration matches the recorded one, refreshing it on a
    miss. A miss means every unit has to be rebuilt."""
    return is_fresh(record_path, config.fingerprint())

"""YAML snapshots of plain record data.

Snapshots hold the stringified dump of a record, so every value is a
plain YAML scalar, list or mapping.
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..utils import SUPPORTED_SNAPSHOT_SUFFIXES, get_logger

logger = get_logger(__name__)


class SnapshotWriter:
    """Writes plain data to YAML snapshot files."""

    def __init__(self, overwrite: bool = True):
        """Initialize the writer.

        Args:
            overwrite: If False, refuses to replace an existing file
        """
        self.overwrite = overwrite

    def write(self, data: dict[str, Any], path: Union[str, Path]) -> Path:
        """Write `data` to `path` as YAML.

        Returns:
            Path of the written snapshot

        Raises:
            ValueError: If the suffix is not a YAML suffix
            FileExistsError: If the file exists and overwrite is False
            OSError: If the directory or file cannot be written
        """
        path = Path(path)
        if path.suffix.lower() not in SUPPORTED_SNAPSHOT_SUFFIXES:
            raise ValueError(
                f"Unsupported snapshot suffix: {path.suffix}. "
                f"Supported suffixes: {', '.join(SUPPORTED_SNAPSHOT_SUFFIXES)}"
            )
        if path.exists() and not self.overwrite:
            raise FileExistsError(f"Snapshot already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

        logger.info(f"Snapshot written to {path}")
        return path


def read_snapshot_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML snapshot.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        TypeError: If the snapshot does not hold a mapping
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise TypeError(f"Snapshot {path} must hold a mapping, got {type(data).__name__}")
    logger.debug(f"Snapshot read from {path}")
    return data

# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a data file cannot be read or written."""

    pass


def read_yaml(path: Path) -> Any:
    """Read a YAML file, returning None when it does not exist yet."""
    if not path.is_file():
        return None
    try:
        return load(path.read_text(encoding="utf-8"), Loader=Loader)
    except (OSError, yaml.YAMLError) as e:
        raise StorageError(f"could not read {path}: {e}") from e


def write_yaml_atomic(path: Path, data: Any) -> None:
    """
    Replace the contents of `path` with `data`.

    The document is written to a temporary file in the same directory and
    moved into place, so readers see either the old or the new file.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_descriptor, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(file_descriptor, "w", encoding="utf-8") as temp_file:
                temp_file.write(dump(data, Dumper=Dumper, allow_unicode=True))
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
    except (OSError, yaml.YAMLError) as e:
        raise StorageError(f"could not write {path}: {e}") from e
    logger.debug("wrote %s", path)

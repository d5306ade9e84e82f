"""Per-template data files and variable merging."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..errors import DataLoadError

logger = logging.getLogger(__name__)

VariableSet = Dict[str, Any]


def merge_variables(
    base: Optional[Mapping[str, Any]], overlay: Optional[Mapping[str, Any]]
) -> VariableSet:
    """Return a new mapping of base overlaid with overlay (overlay wins)."""
    merged: VariableSet = dict(base or {})
    merged.update(overlay or {})
    return merged


def read_data_file(path: Path) -> Any:
    """Parse a YAML (or JSON) data file and return its value."""
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"Malformed data file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Unable to read data file {path}: {e}") from e


def load_variables(
    data_file_path: Optional[Path],
    global_variables: Optional[Mapping[str, Any]],
    data_root: Optional[Path] = None,
) -> Tuple[VariableSet, bool]:
    """Merge a template's data file over the global variables.

    Returns the variables and whether the data file contributed to them. A
    missing data root, a missing data file or a file whose top level is not a
    mapping all fall back to the global variables.
    """
    if data_file_path is None:
        return merge_variables(global_variables, None), False
    if data_root is not None and not Path(data_root).is_dir():
        return merge_variables(global_variables, None), False
    if not data_file_path.is_file():
        return merge_variables(global_variables, None), False

    data = read_data_file(data_file_path)
    if not isinstance(data, Mapping):
        logger.warning(f"Ignoring {data_file_path}: top level is not a mapping")
        return merge_variables(global_variables, None), False

    return merge_variables(global_variables, data), True

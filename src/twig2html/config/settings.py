"""Project configuration file management.

Configuration discovery:
- Walk up from the current working directory looking for `twig2html.yml`.
- If not found, fall back to empty settings (every command-line default applies).
- Expose a memoized getter so callers can treat it like a constant.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TypedDict, cast

import yaml

from ..errors import ConfigError

CONFIG_FILE_NAME = "twig2html.yml"


class Settings(TypedDict, total=False):
    """Settings read from a twig2html.yml file."""

    source: str  # templates
    output: str  # public
    data: str  # data
    data_extension: str  # .yml
    jobs: int  # 1
    options: Dict[str, Any]  # engine options, e.g. {strict_variables: true}
    variables: Dict[str, Any]  # global template variables


_STRING_KEYS = ("source", "output", "data", "data_extension")
_MAPPING_KEYS = ("options", "variables")


def _parse_settings_dict(data: dict[str, object], origin: str) -> Settings:
    out = Settings()
    for key in data:
        if key not in Settings.__annotations__:
            raise ConfigError(f"{origin}: unknown setting '{key}'")
    for key in _STRING_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"{origin}: '{key}' must be a string")
        out[key] = value  # type: ignore[literal-required]
    jobs = data.get("jobs")
    if jobs is not None:
        if not isinstance(jobs, int) or isinstance(jobs, bool) or jobs < 1:
            raise ConfigError(f"{origin}: 'jobs' must be a positive integer")
        out["jobs"] = jobs
    for key in _MAPPING_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ConfigError(f"{origin}: '{key}' must be a mapping")
        out[key] = cast(Dict[str, Any], value)  # type: ignore[literal-required]
    return out


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file path."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Unable to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return _parse_settings_dict(data, str(path))


def discover_settings_path(start: Optional[Path] = None) -> Optional[Path]:
    """Discover the configuration file by walking parents of start.

    Returns a Path if `twig2html.yml` exists in start or any of its parents;
    otherwise returns None.
    """
    here = (start or Path.cwd()).resolve()
    for parent in (here, *here.parents):
        candidate = parent / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return discovered settings, or empty settings (memoized)."""
    path = discover_settings_path()
    if path is not None:
        return load_settings(path)
    return Settings()

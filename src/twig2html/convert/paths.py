"""Template discovery and output/data path resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from ..errors import InvalidPath
from ..templates import TEMPLATE_SUFFIX, is_template
from ..utils import iter_files

DEFAULT_DATA_EXTENSION = ".yml"
OUTPUT_EXTENSION = ".html"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class TemplateRef:
    """A template file discovered under a source root."""

    source_path: Path
    relative_path: str
    file_name: str


@dataclass(frozen=True)
class ConversionTarget:
    """Where a template renders to and where its data may live."""

    output_path: Path
    data_file_path: Optional[Path] = None


def normalize_root(path: PathLike) -> str:
    """Return path with exactly one trailing separator."""
    return str(path).rstrip("/\\") + os.sep


def _strip_template_suffix(relative_path: str) -> str:
    if not relative_path.endswith(TEMPLATE_SUFFIX):
        raise InvalidPath(f"Not a template path: {relative_path}")
    return relative_path[: -len(TEMPLATE_SUFFIX)]


def resolve_target(
    source_root: PathLike,
    output_root: PathLike,
    data_root: Optional[PathLike],
    relative_path: str,
    data_extension: str = DEFAULT_DATA_EXTENSION,
) -> ConversionTarget:
    """Compute the output path and candidate data file for a template.

    relative_path is taken relative to source_root; only the output and data
    roots take part in the join. The data file is a candidate and may not exist.
    """
    stem = _strip_template_suffix(relative_path)
    output_path = Path(normalize_root(output_root) + stem + OUTPUT_EXTENSION)
    data_file_path = None
    if data_root:
        data_file_path = Path(normalize_root(data_root) + stem + data_extension)
    return ConversionTarget(output_path=output_path, data_file_path=data_file_path)


def iter_templates(source_root: PathLike) -> Iterator[TemplateRef]:
    """Lazily yield every .twig file under source_root exactly once."""
    root = Path(source_root)
    for file_path in iter_files(root):
        if not is_template(file_path.name):
            continue
        yield TemplateRef(
            source_path=file_path.resolve(),
            relative_path=file_path.relative_to(root).as_posix(),
            file_name=file_path.name,
        )

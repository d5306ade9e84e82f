"""File system utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator


def iter_files(directory: Path) -> Iterator[Path]:
    """Yield every regular file under directory, depth-first in sorted order."""
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in sorted(files):
            file_path = Path(root) / name
            if file_path.is_file():
                yield file_path


def ensure_parent_dir(path: Path) -> None:
    """Create the missing parent directories of path."""
    path.parent.mkdir(parents=True, exist_ok=True)

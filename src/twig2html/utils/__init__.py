"""Utility modules for twig2html."""

from .console import console, err_console
from .filesystem import ensure_parent_dir, iter_files

__all__ = ["console", "err_console", "ensure_parent_dir", "iter_files"]

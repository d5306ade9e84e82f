"""Template file naming conventions."""

from __future__ import annotations

TEMPLATE_SUFFIX = ".twig"
PARTIAL_SUFFIX = ".part.twig"


def is_template(file_name: str) -> bool:
    """Return True if the file name carries the template extension."""
    return file_name.endswith(TEMPLATE_SUFFIX)


def is_partial(file_name: str) -> bool:
    """Return True if the file name denotes an include-only partial template."""
    return file_name.endswith(PARTIAL_SUFFIX)

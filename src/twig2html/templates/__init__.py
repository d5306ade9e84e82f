"""Template classification and rendering for twig2html."""

from .classifier import PARTIAL_SUFFIX, TEMPLATE_SUFFIX, is_partial, is_template
from .jinja_utils import (
    EngineOptions,
    build_environment,
    render_string,
    render_template,
)

__all__ = [
    "PARTIAL_SUFFIX",
    "TEMPLATE_SUFFIX",
    "is_partial",
    "is_template",
    "EngineOptions",
    "build_environment",
    "render_string",
    "render_template",
]

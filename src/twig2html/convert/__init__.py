"""Template-to-HTML conversion pipeline."""

from .converter import Converter
from .data import VariableSet, load_variables, merge_variables, read_data_file
from .paths import (
    DEFAULT_DATA_EXTENSION,
    ConversionTarget,
    TemplateRef,
    iter_templates,
    normalize_root,
    resolve_target,
)
from .report import ConversionOutcome, ConversionReport

__all__ = [
    "Converter",
    "VariableSet",
    "load_variables",
    "merge_variables",
    "read_data_file",
    "DEFAULT_DATA_EXTENSION",
    "ConversionTarget",
    "TemplateRef",
    "iter_templates",
    "normalize_root",
    "resolve_target",
    "ConversionOutcome",
    "ConversionReport",
]

"""twig2html - render Twig templates to HTML files."""

from .convert import ConversionOutcome, ConversionReport, Converter
from .errors import (
    ConfigError,
    DataLoadError,
    FileNotFound,
    InvalidPath,
    SourceNotFound,
    TemplateError,
    TemplateLoadError,
    TemplateNotFound,
    TemplateRuntimeError,
    TemplateSyntaxError,
    Twig2HtmlError,
    UnsupportedTemplate,
    WriteError,
)
from .templates import EngineOptions

__all__ = [
    "ConversionOutcome",
    "ConversionReport",
    "Converter",
    "EngineOptions",
    "ConfigError",
    "DataLoadError",
    "FileNotFound",
    "InvalidPath",
    "SourceNotFound",
    "TemplateError",
    "TemplateLoadError",
    "TemplateNotFound",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Twig2HtmlError",
    "UnsupportedTemplate",
    "WriteError",
]

"""Error types raised by twig2html."""

from __future__ import annotations


class Twig2HtmlError(Exception):
    """Base class for every error raised while converting templates"""


class ConfigError(Twig2HtmlError):
    """Raise when a twig2html.yml configuration file is invalid"""


class SourceNotFound(Twig2HtmlError):
    """Raise when the source directory of a batch conversion does not exist"""


class FileNotFound(Twig2HtmlError):
    """Raise when a template file to convert does not exist"""


class UnsupportedTemplate(Twig2HtmlError):
    """Raise when a partial template is used as a conversion root"""


class InvalidPath(Twig2HtmlError):
    """Raise when a relative template path does not end in .twig"""


class DataLoadError(Twig2HtmlError):
    """Raise when a template data file cannot be read or parsed"""


class TemplateError(Twig2HtmlError):
    """Base class for errors reported by the template engine"""


class TemplateSyntaxError(TemplateError):
    """Raise when a template source is malformed"""


class TemplateRuntimeError(TemplateError):
    """Raise when a template fails while being evaluated"""


class TemplateNotFound(TemplateError):
    """Raise when a template name cannot be resolved under the search root"""


class TemplateLoadError(TemplateError):
    """Raise when a template file exists but its source cannot be read or decoded"""


class WriteError(Twig2HtmlError):
    """Raise when rendered output cannot be written"""

"""Jinja rendering utilities.

Every render builds its own environment rooted at the template's directory, so
includes resolve next to the template being rendered and no loader state is
shared between calls or threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import jinja2

from ..errors import (
    ConfigError,
    TemplateLoadError,
    TemplateNotFound,
    TemplateRuntimeError,
    TemplateSyntaxError,
)

logger = logging.getLogger(__name__)

# camelCase spellings used by Twig's environment options
_OPTION_ALIASES = {
    "autoReload": "auto_reload",
    "strictVariables": "strict_variables",
}


@dataclass(frozen=True)
class EngineOptions:
    """Options passed through to the template engine."""

    cache: Union[bool, str, Path] = False
    debug: bool = False
    auto_reload: bool = True
    strict_variables: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EngineOptions":
        """Build options from a config mapping, accepting Twig-style keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown engine option: {key}")
            values[name] = value
        return cls(**values)

    def merged(self, **overrides: Any) -> "EngineOptions":
        """Return a copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return EngineOptions(**values)


def _bytecode_cache(cache: Union[bool, str, Path]) -> Optional[jinja2.BytecodeCache]:
    if cache is False or cache is None:
        return None
    if cache is True:
        return jinja2.FileSystemBytecodeCache()
    directory = Path(cache)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Unable to use cache directory {directory}: {e}") from e
    return jinja2.FileSystemBytecodeCache(str(directory))


def build_environment(
    options: EngineOptions, loader: Optional[jinja2.BaseLoader] = None
) -> jinja2.Environment:
    """Create a Jinja environment configured from engine options."""
    extensions = ["jinja2.ext.debug"] if options.debug else []
    return jinja2.Environment(
        loader=loader or jinja2.BaseLoader(),
        extensions=extensions,
        bytecode_cache=_bytecode_cache(options.cache),
        auto_reload=options.auto_reload,
        undefined=jinja2.StrictUndefined
        if options.strict_variables
        else jinja2.Undefined,
        keep_trailing_newline=True,
    )


def _render(
    env: jinja2.Environment,
    name: str,
    variables: Mapping[str, Any],
    source: Optional[str],
) -> str:
    try:
        if source is None:
            template = env.get_template(name)
        else:
            template = env.from_string(source)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateSyntaxError(
            f"{e.filename or name}:{e.lineno}: {e.message}"
        ) from e
    except jinja2.TemplateNotFound as e:
        raise TemplateNotFound(f"Template not found: {e.name}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"Unable to load template {name}: {e}") from e

    try:
        return template.render(dict(variables))
    except jinja2.TemplateSyntaxError as e:
        # raised lazily by includes and extends
        raise TemplateSyntaxError(
            f"{e.filename or name}:{e.lineno}: {e.message}"
        ) from e
    except jinja2.TemplateNotFound as e:
        raise TemplateNotFound(f"Template not found: {e.name}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"Unable to load template {name}: {e}") from e
    except Exception as e:
        raise TemplateRuntimeError(f"{name}: {e}") from e


def render_template(
    template_dir: Path,
    template_name: str,
    variables: Mapping[str, Any],
    options: Optional[EngineOptions] = None,
) -> str:
    """Render a template file found under template_dir only."""
    options = options or EngineOptions()
    env = build_environment(options, jinja2.FileSystemLoader([str(template_dir)]))
    if options.debug:
        logger.debug(f"Rendering {template_name} from {template_dir}")
    return _render(env, template_name, variables, None)


def render_string(
    template_string: str,
    variables: Mapping[str, Any],
    options: Optional[EngineOptions] = None,
) -> str:
    """Render an in-memory template string."""
    env = build_environment(options or EngineOptions())
    return _render(env, "<string>", variables, template_string)

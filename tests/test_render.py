from __future__ import annotations

from pathlib import Path

import pytest

from twig2html.errors import (
    ConfigError,
    TemplateLoadError,
    TemplateNotFound,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from twig2html.templates import EngineOptions, render_string, render_template


def test_render_template_file(tmp_path: Path) -> None:
    (tmp_path / "hello.twig").write_text("Hello {{ name }}!")
    assert render_template(tmp_path, "hello.twig", {"name": "World"}) == "Hello World!"


def test_trailing_newline_is_kept(tmp_path: Path) -> None:
    (tmp_path / "hello.twig").write_text("Hello {{ name }}!\n")
    assert render_template(tmp_path, "hello.twig", {"name": "World"}) == "Hello World!\n"


def test_includes_resolve_next_to_template(tmp_path: Path) -> None:
    (tmp_path / "header.part.twig").write_text("<h1>{{ title }}</h1>")
    (tmp_path / "page.twig").write_text('{% include "header.part.twig" %}<p>body</p>')
    html = render_template(tmp_path, "page.twig", {"title": "Home"})
    assert html == "<h1>Home</h1><p>body</p>"


def test_search_root_is_scoped_to_template_dir(tmp_path: Path) -> None:
    (tmp_path / "shared.part.twig").write_text("shared")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "page.twig").write_text('{% include "shared.part.twig" %}')
    with pytest.raises(TemplateNotFound):
        render_template(sub, "page.twig", {})


def test_missing_template_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(TemplateNotFound):
        render_template(tmp_path, "nope.twig", {})


def test_syntax_error(tmp_path: Path) -> None:
    (tmp_path / "bad.twig").write_text("{% if %}")
    with pytest.raises(TemplateSyntaxError):
        render_template(tmp_path, "bad.twig", {})


def test_undefined_variable_is_empty_by_default() -> None:
    assert render_string("[{{ missing }}]", {}) == "[]"


def test_strict_variables_raise_runtime_error() -> None:
    with pytest.raises(TemplateRuntimeError):
        render_string("{{ missing }}", {}, EngineOptions(strict_variables=True))


def test_evaluation_error_is_runtime_error() -> None:
    with pytest.raises(TemplateRuntimeError):
        render_string("{{ 1 / n }}", {"n": 0})


def test_cache_directory_is_created(tmp_path: Path) -> None:
    (tmp_path / "hello.twig").write_text("Hi {{ name }}")
    cache_dir = tmp_path / "cache"
    options = EngineOptions(cache=cache_dir)
    assert render_template(tmp_path, "hello.twig", {"name": "A"}, options) == "Hi A"
    assert cache_dir.is_dir()
    assert any(cache_dir.iterdir())
    assert render_template(tmp_path, "hello.twig", {"name": "B"}, options) == "Hi B"


def test_debug_option_renders() -> None:
    assert render_string("{{ 1 + 1 }}", {}, EngineOptions(debug=True)) == "2"


def test_options_from_mapping_accepts_twig_keys() -> None:
    options = EngineOptions.from_mapping(
        {"autoReload": False, "strictVariables": True, "cache": "/tmp/c"}
    )
    assert options == EngineOptions(
        cache="/tmp/c", debug=False, auto_reload=False, strict_variables=True
    )
    assert EngineOptions.from_mapping(None) == EngineOptions()


def test_options_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError):
        EngineOptions.from_mapping({"autoescape": True})


def test_merged_ignores_none() -> None:
    base = EngineOptions(debug=True)
    merged = base.merged(debug=None, strict_variables=True)
    assert merged.debug is True
    assert merged.strict_variables is True
    assert base.strict_variables is False


def test_non_utf8_template_is_load_error(tmp_path: Path) -> None:
    (tmp_path / "latin1.twig").write_bytes(b"caf\xe9 {{ x }}")
    with pytest.raises(TemplateLoadError):
        render_template(tmp_path, "latin1.twig", {"x": 1})


def test_non_utf8_include_is_load_error(tmp_path: Path) -> None:
    (tmp_path / "bad.part.twig").write_bytes(b"caf\xe9")
    (tmp_path / "page.twig").write_text('{% include "bad.part.twig" %}')
    with pytest.raises(TemplateLoadError):
        render_template(tmp_path, "page.twig", {})


def test_cache_path_that_is_a_file_is_config_error(tmp_path: Path) -> None:
    (tmp_path / "hello.twig").write_text("Hi")
    cache_file = tmp_path / "cache"
    cache_file.write_text("not a directory")
    with pytest.raises(ConfigError):
        render_template(tmp_path, "hello.twig", {}, EngineOptions(cache=cache_file))

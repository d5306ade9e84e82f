from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import twig2html.config.settings as settings_mod
from twig2html.cli import cli as twig2html_cli


@pytest.fixture(autouse=True)
def no_discovered_config(monkeypatch):
    # Keep the developer's own twig2html.yml out of the tests
    monkeypatch.setattr(settings_mod, "discover_settings_path", lambda: None)
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


def make_site(root: Path) -> Path:
    source = root / "source"
    (source / "blog").mkdir(parents=True)
    (source / "index.twig").write_text("Hello {{ name }}! {{ message }}")
    (source / "blog" / "post.twig").write_text("Post by {{ name }}")
    (source / "nav.part.twig").write_text("nav")
    return source


def test_convert_single_file(tmp_path: Path) -> None:
    template = tmp_path / "hello.twig"
    template.write_text("Hello {{ name }}!")
    output = tmp_path / "out" / "hello.html"

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli, ["convert", str(template), str(output), "--var", "name=World"]
    )
    assert result.exit_code == 0, result.output
    assert output.read_text() == "Hello World!"


def test_convert_partial_fails(tmp_path: Path) -> None:
    template = tmp_path / "nav.part.twig"
    template.write_text("nav")

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli, ["convert", str(template), str(tmp_path / "nav.html")]
    )
    assert result.exit_code == 1
    assert not (tmp_path / "nav.html").exists()


def test_convert_rejects_bad_var(tmp_path: Path) -> None:
    template = tmp_path / "hello.twig"
    template.write_text("x")
    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        ["convert", str(template), str(tmp_path / "h.html"), "--var", "novalue"],
    )
    assert result.exit_code == 2


def test_convert_dir_text_report(tmp_path: Path) -> None:
    source = make_site(tmp_path)
    output = tmp_path / "output"
    data = tmp_path / "data"
    data.mkdir()
    (data / "index.yml").write_text("message: Welcome\n")

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        [
            "convert-dir",
            str(source),
            str(output),
            "--data-dir",
            str(data),
            "--var",
            "name=World",
            "--var",
            "message=Default",
        ],
    )
    assert result.exit_code == 0, result.output
    assert (output / "index.html").read_text() == "Hello World! Welcome"
    assert (output / "blog" / "post.html").read_text() == "Post by World"
    assert "Successful: 2/3" in result.output
    assert "Skipped: 1/3" in result.output


def test_convert_dir_json_report(tmp_path: Path) -> None:
    source = make_site(tmp_path)
    output = tmp_path / "output"

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        ["convert-dir", str(source), str(output), "--format", "json", "--var", "name=A"],
    )
    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["skipped"] == ["📝source/nav.part.twig"]
    assert "📝source/index.twig => 📄output/index.html" in report["success"]
    assert report["failed"] == []


def test_convert_dir_exits_nonzero_on_failures(tmp_path: Path) -> None:
    source = make_site(tmp_path)
    (source / "broken.twig").write_text("{% if %}")

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli, ["convert-dir", str(source), str(tmp_path / "output")]
    )
    assert result.exit_code == 1
    assert "Failed: 1/4" in result.output
    assert (tmp_path / "output" / "index.html").exists()


def test_convert_dir_strict_flag(tmp_path: Path) -> None:
    source = make_site(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        ["convert-dir", str(source), str(tmp_path / "output"), "--strict"],
    )
    # index.twig and post.twig both reference undefined variables
    assert result.exit_code == 1
    assert "Failed: 2/3" in result.output


def test_convert_dir_missing_source(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        ["convert-dir", str(tmp_path / "missing"), str(tmp_path / "output")],
    )
    assert result.exit_code == 1
    assert not (tmp_path / "output").exists()


def test_convert_dir_uses_config_file(tmp_path: Path) -> None:
    make_site(tmp_path)
    (tmp_path / "vars.yml").write_text("message: From vars file\n")
    config = tmp_path / "twig2html.yml"
    config.write_text(
        f"""
source: {tmp_path / "source"}
output: {tmp_path / "public"}
variables:
  name: Config
  message: From config
""".lstrip()
    )

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        [
            "--config",
            str(config),
            "convert-dir",
            "--vars-file",
            str(tmp_path / "vars.yml"),
        ],
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "public" / "index.html").read_text() == (
        "Hello Config! From vars file"
    )


def test_convert_dir_requires_paths() -> None:
    runner = CliRunner()
    result = runner.invoke(twig2html_cli, ["convert-dir"])
    assert result.exit_code == 2


def test_invalid_config_file(tmp_path: Path) -> None:
    config = tmp_path / "twig2html.yml"
    config.write_text("options:\n  autoescape: true\n")
    template = tmp_path / "a.twig"
    template.write_text("a")

    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        ["--config", str(config), "convert", str(template), str(tmp_path / "a.html")],
    )
    assert result.exit_code == 1
    assert not (tmp_path / "a.html").exists()


def test_render_string() -> None:
    runner = CliRunner()
    result = runner.invoke(
        twig2html_cli,
        [
            "render",
            "{{ greeting }}, {{ name }}",
            "--var",
            "greeting=Hi",
            "--var",
            "name=Bo",
        ],
    )
    assert result.exit_code == 0, result.output
    assert result.output == "Hi, Bo\n"

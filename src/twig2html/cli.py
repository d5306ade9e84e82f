"""CLI interface for twig2html - Twig template to HTML converter."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, NoReturn, Optional, Tuple

import click
from rich.logging import RichHandler

from .config import Settings, get_settings, load_settings
from .convert import Converter, ConversionReport, merge_variables, read_data_file
from .errors import ConfigError, Twig2HtmlError
from .templates import EngineOptions, render_string
from .utils import console, err_console


_ENGINE_FLAGS = [
    click.option(
        "--cache/--no-cache",
        default=None,
        help="Cache compiled templates in the system temp dir.",
    ),
    click.option(
        "--cache-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Cache compiled templates in this directory.",
    ),
    click.option("--debug/--no-debug", default=None, help="Enable engine diagnostics."),
    click.option(
        "--auto-reload/--no-auto-reload",
        default=None,
        help="Re-check template sources before reusing cached templates.",
    ),
    click.option(
        "--strict/--no-strict",
        "strict_variables",
        default=None,
        help="Fail on undefined variables instead of rendering them empty.",
    ),
    click.option(
        "--var",
        "var_pairs",
        multiple=True,
        metavar="KEY=VALUE",
        help="Global template variable (repeatable).",
    ),
    click.option(
        "--vars-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML or JSON file of global template variables.",
    ),
]


def _engine_flags(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the engine and variable options shared by every command."""
    for flag in reversed(_ENGINE_FLAGS):
        func = flag(func)
    return func


def _parse_var_pairs(pairs: Tuple[str, ...]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"expected KEY=VALUE, got '{pair}'", param_hint="--var"
            )
        out[key] = value
    return out


def _global_variables(
    settings: Settings, vars_file: Optional[Path], var_pairs: Tuple[str, ...]
) -> Dict[str, Any]:
    """Config variables, overlaid by --vars-file, overlaid by --var."""
    variables = merge_variables(settings.get("variables"), None)
    if vars_file is not None:
        data = read_data_file(vars_file)
        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"{vars_file}: top level must be a mapping")
        variables = merge_variables(variables, data)
    return merge_variables(variables, _parse_var_pairs(var_pairs))


def _engine_options(
    settings: Settings,
    cache: Optional[bool],
    cache_dir: Optional[Path],
    debug: Optional[bool],
    auto_reload: Optional[bool],
    strict_variables: Optional[bool],
) -> EngineOptions:
    base = EngineOptions.from_mapping(settings.get("options"))
    return base.merged(
        cache=cache_dir if cache_dir is not None else cache,
        debug=debug,
        auto_reload=auto_reload,
        strict_variables=strict_variables,
    )


def _fail(message: str) -> NoReturn:
    err_console.print(f"❌ {message}", style="bold red", highlight=False, markup=False)
    raise SystemExit(1)


def _print_report(report: ConversionReport) -> None:
    sections = (
        ("Converted", report.success, "green"),
        ("Failed", report.failed, "red"),
        ("Skipped", report.skipped, "yellow"),
    )
    for title, outcomes, style in sections:
        if not outcomes:
            continue
        console.print(f"{title}:", style=f"bold {style}")
        for outcome in outcomes:
            console.print(
                f"  - {outcome.descriptor}", style=style, highlight=False, markup=False
            )

    console.print("\n📊 Summary:", style="bold")
    console.print(f"✓ Successful: {len(report.success)}/{report.total}", style="green")
    if report.skipped:
        console.print(f"↷ Skipped: {len(report.skipped)}/{report.total}", style="yellow")
    if report.failed:
        console.print(f"❌ Failed: {len(report.failed)}/{report.total}", style="red")


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a twig2html.yml file (default: discovered from the working directory).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Convert Twig templates to HTML."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    try:
        settings = load_settings(config_path) if config_path else get_settings()
    except ConfigError as e:
        _fail(str(e))
    ctx.obj = settings


@cli.command("convert")
@click.argument("template", type=click.Path(path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@_engine_flags
@click.pass_obj
def convert_cmd(
    settings: Settings,
    template: Path,
    output: Path,
    cache: Optional[bool],
    cache_dir: Optional[Path],
    debug: Optional[bool],
    auto_reload: Optional[bool],
    strict_variables: Optional[bool],
    var_pairs: Tuple[str, ...],
    vars_file: Optional[Path],
) -> None:
    """
    Convert a single template file to HTML.

    Partial templates (*.part.twig) cannot be converted directly.
    """
    try:
        options = _engine_options(
            settings, cache, cache_dir, debug, auto_reload, strict_variables
        )
        variables = _global_variables(settings, vars_file, var_pairs)
        Converter(options).convert(template, output, variables)
    except Twig2HtmlError as e:
        _fail(str(e))
    console.print(
        f"📄 {template} => {output}", style="green", highlight=False, markup=False
    )


@cli.command("convert-dir")
@click.argument(
    "source", type=click.Path(file_okay=False, path_type=Path), required=False
)
@click.argument(
    "output", type=click.Path(file_okay=False, path_type=Path), required=False
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of per-template data files mirroring the source layout.",
)
@click.option(
    "--data-extension", default=None, help="Data file extension (default: .yml)."
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Convert files in parallel.",
)
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
@_engine_flags
@click.pass_obj
def convert_dir_cmd(
    settings: Settings,
    source: Optional[Path],
    output: Optional[Path],
    data_dir: Optional[Path],
    data_extension: Optional[str],
    jobs: Optional[int],
    fmt: str,
    cache: Optional[bool],
    cache_dir: Optional[Path],
    debug: Optional[bool],
    auto_reload: Optional[bool],
    strict_variables: Optional[bool],
    var_pairs: Tuple[str, ...],
    vars_file: Optional[Path],
) -> None:
    """
    Convert every template under SOURCE into OUTPUT.

    - SOURCE/OUTPUT default to `source`/`output` from twig2html.yml
    - --data-dir: per-template data files (e.g. data/index.yml for index.twig)
    - Partial templates (*.part.twig) are skipped
    - Exits with status 1 if any template failed
    """
    source = source or (Path(settings["source"]) if "source" in settings else None)
    output = output or (Path(settings["output"]) if "output" in settings else None)
    if source is None or output is None:
        raise click.UsageError(
            "SOURCE and OUTPUT are required (or set them in twig2html.yml)"
        )
    if data_dir is None and "data" in settings:
        data_dir = Path(settings["data"])

    try:
        options = _engine_options(
            settings, cache, cache_dir, debug, auto_reload, strict_variables
        )
        variables = _global_variables(settings, vars_file, var_pairs)
        converter = Converter(
            options,
            data_extension=data_extension or settings.get("data_extension", ".yml"),
            jobs=jobs or settings.get("jobs", 1),
        )
        report = converter.convert_directory(source, output, data_dir, variables)
    except Twig2HtmlError as e:
        _fail(str(e))

    if fmt == "json":
        print(json.dumps(report.to_dict(), ensure_ascii=False))
    else:
        _print_report(report)

    if not report.ok:
        sys.exit(1)


@cli.command("render")
@click.argument("template_string")
@_engine_flags
@click.pass_obj
def render_cmd(
    settings: Settings,
    template_string: str,
    cache: Optional[bool],
    cache_dir: Optional[Path],
    debug: Optional[bool],
    auto_reload: Optional[bool],
    strict_variables: Optional[bool],
    var_pairs: Tuple[str, ...],
    vars_file: Optional[Path],
) -> None:
    """Render a template string to standard output."""
    try:
        options = _engine_options(
            settings, cache, cache_dir, debug, auto_reload, strict_variables
        )
        variables = _global_variables(settings, vars_file, var_pairs)
        click.echo(render_string(template_string, variables, options))
    except Twig2HtmlError as e:
        _fail(str(e))


if __name__ == "__main__":
    cli()

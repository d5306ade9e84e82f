"""Single-file and directory conversion of Twig templates to HTML."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..errors import (
    FileNotFound,
    SourceNotFound,
    Twig2HtmlError,
    UnsupportedTemplate,
    WriteError,
)
from ..templates import TEMPLATE_SUFFIX, EngineOptions, is_partial, render_template
from ..utils import ensure_parent_dir
from .data import load_variables
from .paths import (
    DEFAULT_DATA_EXTENSION,
    OUTPUT_EXTENSION,
    PathLike,
    TemplateRef,
    iter_templates,
    normalize_root,
    resolve_target,
)
from .report import ConversionOutcome, ConversionReport

logger = logging.getLogger(__name__)


def _root_label(root: str) -> str:
    return os.path.basename(root.rstrip("/\\"))


class Converter:
    """Render Twig templates to HTML files.

    Engine options default to no cache, no debug, auto reload on and lenient
    undefined variables. Passing ``jobs`` greater than one converts the files of
    a directory on a thread pool; the report is the same as a sequential run.
    """

    def __init__(
        self,
        options: Union[EngineOptions, Mapping[str, Any], None] = None,
        *,
        data_extension: str = DEFAULT_DATA_EXTENSION,
        jobs: int = 1,
    ) -> None:
        if isinstance(options, EngineOptions):
            self.options = options
        else:
            self.options = EngineOptions.from_mapping(options)
        if not data_extension.startswith("."):
            data_extension = "." + data_extension
        self.data_extension = data_extension
        self.jobs = max(1, jobs)

    def convert(
        self,
        template_path: PathLike,
        output_path: PathLike,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Render one template file and write the result to output_path."""
        template_path = Path(template_path)
        output_path = Path(output_path)

        if not template_path.is_file():
            raise FileNotFound(f"Template file does not exist: {template_path}")

        if is_partial(template_path.name):
            raise UnsupportedTemplate(
                f"partial templates cannot be converted directly: {template_path}"
            )

        html = render_template(
            template_path.parent, template_path.name, variables or {}, self.options
        )

        try:
            ensure_parent_dir(output_path)
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                f.write(html)
        except OSError as e:
            raise WriteError(f"Unable to write {output_path}: {e}") from e

        logger.info(f"Converted {template_path} -> {output_path}")
        return True

    def convert_directory(
        self,
        source_dir: PathLike,
        output_dir: PathLike,
        data_dir: Optional[PathLike] = None,
        global_variables: Optional[Mapping[str, Any]] = None,
    ) -> ConversionReport:
        """Convert every template under source_dir into output_dir.

        Partial templates are reported as skipped. Per-file errors are reported
        as failed and never stop the run; only a missing source directory raises.
        """
        if not Path(source_dir).is_dir():
            raise SourceNotFound(f"Source directory does not exist: {source_dir}")

        source_root = normalize_root(source_dir)
        output_root = normalize_root(output_dir)
        data_root = normalize_root(data_dir) if data_dir else None
        global_variables = dict(global_variables or {})

        def process(ref: TemplateRef) -> ConversionOutcome:
            return self._convert_ref(
                ref, source_root, output_root, data_root, global_variables
            )

        report = ConversionReport()
        templates = iter_templates(source_root)
        if self.jobs > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                for outcome in pool.map(process, templates):
                    report.record(outcome)
        else:
            for ref in templates:
                report.record(process(ref))

        logger.info(
            f"Converted {source_dir}: {len(report.success)} succeeded, "
            f"{len(report.failed)} failed, {len(report.skipped)} skipped"
        )
        return report

    def _convert_ref(
        self,
        ref: TemplateRef,
        source_root: str,
        output_root: str,
        data_root: Optional[str],
        global_variables: Mapping[str, Any],
    ) -> ConversionOutcome:
        source_label = _root_label(source_root)

        if is_partial(ref.file_name):
            logger.debug(f"Skipping partial template {ref.relative_path}")
            return ConversionOutcome(
                status="skipped",
                relative_path=ref.relative_path,
                source_label=source_label,
            )

        try:
            target = resolve_target(
                source_root,
                output_root,
                data_root,
                ref.relative_path,
                data_extension=self.data_extension,
            )
            variables, used_data_file = load_variables(
                target.data_file_path,
                global_variables,
                Path(data_root) if data_root else None,
            )
            self.convert(ref.source_path, target.output_path, variables)
        except Twig2HtmlError as e:
            logger.error(
                f"Failed to convert {ref.relative_path}: {e}",
                exc_info=self.options.debug,
            )
            return ConversionOutcome(
                status="failed",
                relative_path=ref.relative_path,
                source_label=source_label,
                error=str(e),
            )

        stem = ref.relative_path[: -len(TEMPLATE_SUFFIX)]
        return ConversionOutcome(
            status="success",
            relative_path=ref.relative_path,
            source_label=source_label,
            data_file=stem + self.data_extension if used_data_file else None,
            data_label=_root_label(data_root) if data_root else None,
            output_file=stem + OUTPUT_EXTENSION,
            output_label=_root_label(output_root),
        )

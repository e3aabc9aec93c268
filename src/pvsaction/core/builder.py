"""Translate action inputs into task descriptions.

Options come in as a flat mapping from action input name (``output-file``,
``excluded-dirs`` ...) to the raw string value, exactly as the runner
delivers them.
"""

import json
import logging
import os
from typing import TYPE_CHECKING, List, Mapping, Optional

from pvsaction.config.settings import ToolMode
from pvsaction.core.license import resolve_license
from pvsaction.exceptions import InputValidationError, MissingInputError, PVSError
from pvsaction.models.task import AnalyzeTask, ConvertTask, Task, TraceTask

if TYPE_CHECKING:
    from pvsaction.platforms.base import PlatformBackend


logger = logging.getLogger(__name__)

Options = Mapping[str, Optional[str]]

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


def split_values(text: Optional[str]) -> List[str]:
    """Split a multi-value input on ``;`` and newlines.

    Parts are trimmed and empty parts dropped; order and duplicates are kept.
    """
    if not text:
        return []
    parts = text.replace("\n", ";").split(";")
    return [part.strip() for part in parts if part.strip()]


def derive_raw_report_path(output_file: str) -> str:
    """Path of the raw analyzer log that belongs to a requested report.

    ``/out/report.html`` becomes ``/out/report-raw.log``.
    """
    directory, filename = os.path.split(output_file)
    stem, _ = os.path.splitext(filename)
    return os.path.join(directory, f"{stem}-raw.log")


def parse_parallel(text: Optional[str]) -> Optional[int]:
    """Parse the ``parallel`` input; ``"0"`` or empty means the tool default.

    Only plain ASCII digits are accepted.
    """
    text = (text or "").strip()
    if not text or text == "0":
        return None
    if text.startswith("-") and text[1:].isascii() and text[1:].isdigit():
        raise InputValidationError(
            "parallel", f"The 'parallel' input should be a positive number, got '{text}'"
        )
    if not (text.isascii() and text.isdigit()):
        raise InputValidationError(
            "parallel", f"The 'parallel' input should be a number, got '{text}'"
        )
    return int(text) or None


def parse_trace_command(text: Optional[str]) -> List[str]:
    """Decode the JSON encoded ``trace-args`` input into an argument list."""
    text = (text or "").strip()
    if not text:
        raise MissingInputError("trace-args")
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputValidationError(
            "trace-args", f"The 'trace-args' input is not valid JSON: {e.msg}"
        ) from e
    if not isinstance(value, list) or not all(isinstance(arg, str) for arg in value):
        raise InputValidationError(
            "trace-args", "The 'trace-args' input should be a JSON array of strings"
        )
    if not value:
        raise InputValidationError(
            "trace-args", "The 'trace-args' input should contain the command to trace"
        )
    return value


def parse_bool(options: Options, name: str, default: bool = False) -> bool:
    """Parse a boolean input the way the Actions runner does."""
    text = get_option(options, name)
    if not text:
        return default
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InputValidationError(
        name,
        f"The '{name}' input should be one of: true | True | TRUE | false | False | FALSE",
    )


def get_option(options: Options, name: str) -> str:
    """Trimmed value of an optional input ('' when unset)."""
    return (options.get(name) or "").strip()


def require_option(options: Options, name: str) -> str:
    """Trimmed value of a required input."""
    value = get_option(options, name)
    if not value:
        raise MissingInputError(name)
    return value


async def build_analyze_task(options: Options, backend: "PlatformBackend") -> AnalyzeTask:
    """Build an analysis task.

    Args:
        options: Action inputs
        backend: Platform backend used to export a license from the environment

    Returns:
        AnalyzeTask whose output artifact is the raw report path
    """
    file_to_analyze = require_option(options, "file-to-analyze")
    output_file = require_option(options, "output-file")
    parallel_count = parse_parallel(options.get("parallel"))

    license_path = await resolve_license(get_option(options, "licence-file"), backend)
    if license_path is None:
        raise MissingInputError(
            "licence-file",
            "The 'licence-file' input should be specified or the "
            "PVS_STUDIO_LICENSE_NAME and PVS_STUDIO_LICENSE_KEY "
            "environment variables should be set!",
        )

    return AnalyzeTask(
        file_to_analyze=file_to_analyze,
        raw_report_path=derive_raw_report_path(output_file),
        license_file_path=license_path,
        analysis_mode=get_option(options, "analysis-mode") or None,
        source_tree_root=get_option(options, "source-tree-root") or None,
        excluded_dirs=split_values(options.get("excluded-dirs")),
        suppress_files=split_values(options.get("suppress-files")),
        rules_config_files=split_values(options.get("rules-configs")),
        additional_args=split_values(options.get("additional-args")),
        parallel_count=parallel_count,
    )


def build_trace_task(options: Options) -> TraceTask:
    """Build a trace task."""
    trace_command = parse_trace_command(options.get("trace-args"))
    return TraceTask(
        trace_command=trace_command,
        output_file=require_option(options, "output-file"),
        ignore_return_code=parse_bool(options, "ignore-return-code"),
        additional_args=split_values(options.get("additional-args")),
    )


def build_convert_task(options: Options) -> ConvertTask:
    """Build a report conversion task."""
    output_file = require_option(options, "output-file")
    output_format = require_option(options, "output-format")

    source_tree_root = get_option(options, "source-tree-root")
    path_transform_mode = get_option(options, "path-transformation-mode")
    if path_transform_mode and not source_tree_root:
        raise InputValidationError(
            "source-tree-root",
            "The 'path-transformation-mode' input requires the "
            "'source-tree-root' input to be specified",
        )
    if source_tree_root and not path_transform_mode:
        raise InputValidationError(
            "path-transformation-mode",
            "The 'source-tree-root' input works only if the "
            "'path-transformation-mode' input is specified",
        )

    return ConvertTask(
        output_format=output_format,
        output_file=output_file,
        groups_and_levels=get_option(options, "analysis-mode") or None,
        source_tree_root=source_tree_root or None,
        path_transform_mode=path_transform_mode or None,
        excluded_paths=split_values(options.get("excluded-paths")),
        included_paths=split_values(options.get("included-paths")),
        keep_false_alarms=parse_bool(options, "keep-false-alarms"),
        additional_args=split_values(options.get("additional-args")),
        input_reports=split_values(options.get("input-reports")),
    )


async def build_task(
    mode: ToolMode,
    options: Options,
    backend: "PlatformBackend",
) -> Task:
    """Build the task for a tool mode."""
    try:
        mode = ToolMode(mode)
    except ValueError:
        raise PVSError(f"Unknown mode '{mode}'") from None

    if mode == ToolMode.ANALYZE:
        task: Task = await build_analyze_task(options, backend)
    elif mode == ToolMode.TRACE:
        task = build_trace_task(options)
    else:
        task = build_convert_task(options)
    logger.debug("Task: %r", task)
    return task

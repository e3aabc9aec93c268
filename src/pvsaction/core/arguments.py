"""Render tasks into PVS-Studio command lines.

The order of the arguments is part of the tools' command-line contract.
Multi-value options repeat their flag before every value.
"""

from functools import singledispatch
from typing import Iterable, List, Optional

from pvsaction.exceptions import PVSError
from pvsaction.models.task import AnalyzeTask, ConvertTask, TraceTask


def append_args(container: List[str], values: Iterable[str], flag: Optional[str] = None) -> None:
    """Append values to an argument list, each one preceded by ``flag``."""
    for value in values:
        if flag:
            container.append(flag)
        container.append(value)


@singledispatch
def assemble(task) -> List[str]:
    """Build the argument vector for a task."""
    raise PVSError(f"Unknown task type: {type(task).__name__}")


@assemble.register
def _(task: AnalyzeTask) -> List[str]:
    args = [
        "analyze",
        "-f", task.file_to_analyze,
        "-o", task.raw_report_path,
        "-l", task.license_file_path,
    ]
    if task.analysis_mode:
        args.extend(["-a", task.analysis_mode])
    if task.parallel_count:
        args.extend(["-j", str(task.parallel_count)])
    if task.source_tree_root:
        args.extend(["-r", task.source_tree_root])
    append_args(args, task.excluded_dirs, "-e")
    append_args(args, task.rules_config_files, "-R")
    append_args(args, task.suppress_files, "-s")
    append_args(args, task.additional_args)
    return args


@assemble.register
def _(task: TraceTask) -> List[str]:
    args = ["trace", "-o", task.output_file]
    if task.ignore_return_code:
        args.append("-i")
    append_args(args, task.additional_args)
    args.append("--")
    append_args(args, task.trace_command)
    return args


@assemble.register
def _(task: ConvertTask) -> List[str]:
    args = ["-t", task.output_format, "-o", task.output_file]
    if task.groups_and_levels:
        args.extend(["-a", task.groups_and_levels])
    if task.source_tree_root:
        args.extend(["-r", task.source_tree_root])
    if task.path_transform_mode:
        args.extend(["-R", task.path_transform_mode])
    append_args(args, task.excluded_paths, "-E")
    append_args(args, task.included_paths, "-I")
    append_args(args, task.additional_args)
    if task.keep_false_alarms:
        args.append("-f")
    # Raw logs to convert are positional and go last
    append_args(args, task.input_reports)
    return args

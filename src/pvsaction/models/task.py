"""Task descriptions for the three PVS-Studio tool modes.

A task is built fresh from the action inputs for every run, is never mutated
afterwards, and is rendered into a command line by
:func:`pvsaction.core.arguments.assemble`.
"""

from abc import abstractmethod
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Task(BaseModel):
    """Common configuration shared by all task kinds."""

    model_config = ConfigDict(frozen=True)

    additional_args: Tuple[str, ...] = Field(
        default=(),
        description="Arguments passed through to the tool unchanged",
    )

    @property
    @abstractmethod
    def output_artifact(self) -> str:
        """Path reported as the result of the step."""


class AnalyzeTask(_Task):
    """Analysis of a compilation database or trace file."""

    kind: Literal["analyze"] = "analyze"

    file_to_analyze: str
    raw_report_path: str
    license_file_path: str

    analysis_mode: Optional[str] = None
    source_tree_root: Optional[str] = None
    excluded_dirs: Tuple[str, ...] = ()
    suppress_files: Tuple[str, ...] = ()
    rules_config_files: Tuple[str, ...] = ()
    parallel_count: Optional[int] = Field(default=None, gt=0)

    @property
    def output_artifact(self) -> str:
        return self.raw_report_path


class TraceTask(_Task):
    """Build command tracing that records compiler invocations."""

    kind: Literal["trace"] = "trace"

    trace_command: Tuple[str, ...] = Field(min_length=1)
    output_file: str
    ignore_return_code: bool = False

    @property
    def output_artifact(self) -> str:
        return self.output_file


class ConvertTask(_Task):
    """Conversion of a raw analyzer log into a user-facing report."""

    kind: Literal["convert"] = "convert"

    output_format: str
    output_file: str
    groups_and_levels: Optional[str] = None
    source_tree_root: Optional[str] = None
    path_transform_mode: Optional[str] = None
    excluded_paths: Tuple[str, ...] = ()
    included_paths: Tuple[str, ...] = ()
    keep_false_alarms: bool = False
    input_reports: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_path_transformation(self) -> "ConvertTask":
        # source-tree-root and path-transformation-mode only make sense together
        if bool(self.source_tree_root) != bool(self.path_transform_mode):
            raise ValueError(
                "'source-tree-root' and 'path-transformation-mode' must be set together"
            )
        return self

    @property
    def output_artifact(self) -> str:
        return self.output_file


Task = Annotated[Union[AnalyzeTask, TraceTask, ConvertTask], Field(discriminator="kind")]

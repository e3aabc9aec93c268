"""Tests for building tasks from action inputs."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from pvsaction.config.settings import Settings, ToolMode
from pvsaction.core.builder import (
    build_analyze_task,
    build_convert_task,
    build_task,
    build_trace_task,
    derive_raw_report_path,
    parse_bool,
    parse_parallel,
    parse_trace_command,
    split_values,
)
from pvsaction.exceptions import InputValidationError, MissingInputError, PVSError
from pvsaction.models.task import AnalyzeTask, ConvertTask, TraceTask

from tests.fakes import FakeBackend


class TestSplitValues:
    """Test multi-value input splitting."""

    def test_semicolons_and_newlines(self):
        """Test that empty and blank parts are dropped, order kept."""
        assert split_values(";a; b ;;c\n d") == ["a", "b", "c", "d"]

    def test_duplicates_kept(self):
        """Test that duplicates are not removed."""
        assert split_values("x;y;x") == ["x", "y", "x"]

    @pytest.mark.parametrize("text", [None, "", "  ", ";;\n;"])
    def test_empty(self, text):
        """Test inputs without values."""
        assert split_values(text) == []


class TestRawReportPath:
    """Test derivation of the raw log path."""

    def test_derive(self):
        """Test the directory and stem are kept."""
        assert derive_raw_report_path("/out/report.html") == "/out/report-raw.log"

    def test_any_extension(self):
        """Test that the extension does not matter."""
        assert derive_raw_report_path("/out/report.sarif") == "/out/report-raw.log"
        assert derive_raw_report_path("/out/report") == "/out/report-raw.log"

    def test_bare_file_name(self):
        """Test a file name without a directory."""
        assert derive_raw_report_path("a.html") == "a-raw.log"


class TestParallel:
    """Test the parallel input."""

    @pytest.mark.parametrize("text", ["0", "", None])
    def test_default(self, text):
        """Test values meaning 'use the analyzer default'."""
        assert parse_parallel(text) is None

    def test_number(self):
        """Test a numeric value."""
        assert parse_parallel("4") == 4

    @pytest.mark.parametrize("text", ["abc", "4x", "-2", "1_0", "\u0664", " 4 2"])
    def test_invalid(self, text):
        """Test that invalid values name the input."""
        with pytest.raises(InputValidationError) as exc_info:
            parse_parallel(text)
        assert exc_info.value.input_name == "parallel"
        assert "parallel" in str(exc_info.value)


class TestTraceCommand:
    """Test decoding of the trace-args input."""

    def test_json_array(self):
        """Test a valid command."""
        assert parse_trace_command('["--","build"]') == ["--", "build"]

    def test_empty_array(self):
        """Test that an empty command is rejected."""
        with pytest.raises(InputValidationError):
            parse_trace_command("[]")

    def test_not_json(self):
        """Test that malformed JSON is a validation error, not a missing input."""
        with pytest.raises(InputValidationError) as exc_info:
            parse_trace_command("not json")
        assert not isinstance(exc_info.value, MissingInputError)
        assert exc_info.value.input_name == "trace-args"

    @pytest.mark.parametrize("text", ['"make"', '{"cmd": "make"}', '["make", 1]'])
    def test_wrong_shape(self, text):
        """Test that only arrays of strings are accepted."""
        with pytest.raises(InputValidationError):
            parse_trace_command(text)

    def test_missing(self):
        """Test that an empty input is reported as missing."""
        with pytest.raises(MissingInputError):
            parse_trace_command("  ")

    def test_unrelated_errors_propagate(self):
        """Test that errors other than JSON decoding are not converted."""
        with patch("pvsaction.core.builder.json.loads", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                parse_trace_command('["make"]')


class TestParseBool:
    """Test boolean inputs."""

    @pytest.mark.parametrize("text,expected", [
        ("true", True), ("True", True), ("TRUE", True),
        ("false", False), ("False", False), ("FALSE", False),
        ("", False), (None, False),
    ])
    def test_values(self, text, expected):
        """Test accepted spellings."""
        assert parse_bool({"flag": text}, "flag") is expected

    def test_invalid(self):
        """Test that other values are rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            parse_bool({"keep-false-alarms": "yes"}, "keep-false-alarms")
        assert exc_info.value.input_name == "keep-false-alarms"


class TestAnalyzeTask:
    """Test building analysis tasks."""

    @pytest.mark.asyncio
    async def test_full_task(self, settings):
        """Test every analysis input."""
        backend = FakeBackend(settings)
        options = {
            "file-to-analyze": " compile_commands.json ",
            "output-file": "/out/report.html",
            "licence-file": "PVS-Studio.lic",
            "analysis-mode": "GA;64",
            "source-tree-root": "/src",
            "excluded-dirs": "build;vendor",
            "suppress-files": "a.suppress\nb.suppress",
            "rules-configs": "rules.pvsconfig",
            "additional-args": "--incremental",
            "parallel": "8",
        }

        task = await build_analyze_task(options, backend)

        assert task == AnalyzeTask(
            file_to_analyze="compile_commands.json",
            raw_report_path="/out/report-raw.log",
            license_file_path="PVS-Studio.lic",
            analysis_mode="GA;64",
            source_tree_root="/src",
            excluded_dirs=["build", "vendor"],
            suppress_files=["a.suppress", "b.suppress"],
            rules_config_files=["rules.pvsconfig"],
            additional_args=["--incremental"],
            parallel_count=8,
        )
        assert task.output_artifact == "/out/report-raw.log"

    @pytest.mark.asyncio
    async def test_license_from_environment(self, tmp_path, monkeypatch):
        """Test that the license is exported when no file is given."""
        monkeypatch.setenv("PVS_STUDIO_LICENSE_NAME", "user")
        monkeypatch.setenv("PVS_STUDIO_LICENSE_KEY", "KEY-123")
        backend = FakeBackend(Settings(temp_dir=tmp_path))

        task = await build_analyze_task(
            {"file-to-analyze": "a.json", "output-file": "a.html"}, backend
        )

        license_file = Path(task.license_file_path)
        assert license_file.parent == tmp_path
        assert license_file.read_text() == "user\nKEY-123"

    @pytest.mark.asyncio
    async def test_license_files_are_unique(self, tmp_path):
        """Test that every export creates a new file."""
        backend = FakeBackend(Settings(temp_dir=tmp_path, license_name="u", license_key="k"))

        first = await backend.export_license_from_environment()
        second = await backend.export_license_from_environment()

        assert first != second

    @pytest.mark.asyncio
    async def test_missing_license(self, settings):
        """Test that a license is required."""
        with pytest.raises(MissingInputError) as exc_info:
            await build_analyze_task(
                {"file-to-analyze": "a.json", "output-file": "a.html"},
                FakeBackend(settings),
            )
        assert exc_info.value.input_name == "licence-file"

    @pytest.mark.asyncio
    async def test_half_license_pair(self, tmp_path):
        """Test that a name without a key is not a license."""
        backend = FakeBackend(Settings(temp_dir=tmp_path, license_name="user"))
        with pytest.raises(MissingInputError):
            await build_analyze_task(
                {"file-to-analyze": "a.json", "output-file": "a.html"}, backend
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["file-to-analyze", "output-file"])
    async def test_required_inputs(self, settings, missing):
        """Test that required inputs are reported by name."""
        options = {
            "file-to-analyze": "a.json",
            "output-file": "a.html",
            "licence-file": "a.lic",
        }
        options[missing] = "  "

        with pytest.raises(MissingInputError) as exc_info:
            await build_analyze_task(options, FakeBackend(settings))
        assert exc_info.value.input_name == missing

    @pytest.mark.asyncio
    async def test_parallel_zero_unset(self, settings):
        """Test that parallel=0 leaves the count unset."""
        task = await build_analyze_task(
            {
                "file-to-analyze": "a.json",
                "output-file": "a.html",
                "licence-file": "a.lic",
                "parallel": "0",
            },
            FakeBackend(settings),
        )
        assert task.parallel_count is None


class TestTraceTask:
    """Test building trace tasks."""

    def test_task(self):
        """Test every trace input."""
        task = build_trace_task({
            "trace-args": json.dumps(["make", "-j4"]),
            "output-file": "trace.log",
            "ignore-return-code": "true",
            "additional-args": "--verbose",
        })

        assert task == TraceTask(
            trace_command=["make", "-j4"],
            output_file="trace.log",
            ignore_return_code=True,
            additional_args=["--verbose"],
        )
        assert task.output_artifact == "trace.log"

    def test_output_file_required(self):
        """Test that the trace file must be named."""
        with pytest.raises(MissingInputError) as exc_info:
            build_trace_task({"trace-args": '["make"]'})
        assert exc_info.value.input_name == "output-file"


class TestConvertTask:
    """Test building conversion tasks."""

    def test_without_path_transformation(self):
        """Test that neither root nor mode is valid."""
        task = build_convert_task({"output-format": "html", "output-file": "report"})

        assert task.source_tree_root is None
        assert task.path_transform_mode is None
        assert task.output_artifact == "report"

    def test_root_without_mode(self):
        """Test that source-tree-root requires path-transformation-mode."""
        with pytest.raises(InputValidationError) as exc_info:
            build_convert_task({
                "output-format": "html",
                "output-file": "report",
                "source-tree-root": "/src",
            })
        assert exc_info.value.input_name == "path-transformation-mode"

    def test_mode_without_root(self):
        """Test that path-transformation-mode requires source-tree-root."""
        with pytest.raises(InputValidationError) as exc_info:
            build_convert_task({
                "output-format": "html",
                "output-file": "report",
                "path-transformation-mode": "toRelative",
            })
        assert exc_info.value.input_name == "source-tree-root"

    def test_full_task(self):
        """Test every conversion input."""
        task = build_convert_task({
            "output-format": "sarif",
            "output-file": "report.sarif",
            "analysis-mode": "GA:1,2",
            "source-tree-root": "/src",
            "path-transformation-mode": "toRelative",
            "excluded-paths": "third_party;build",
            "included-paths": "src",
            "keep-false-alarms": "TRUE",
            "additional-args": "--indicate-warnings",
            "input-reports": "a-raw.log",
        })

        assert task == ConvertTask(
            output_format="sarif",
            output_file="report.sarif",
            groups_and_levels="GA:1,2",
            source_tree_root="/src",
            path_transform_mode="toRelative",
            excluded_paths=["third_party", "build"],
            included_paths=["src"],
            keep_false_alarms=True,
            additional_args=["--indicate-warnings"],
            input_reports=["a-raw.log"],
        )

    @pytest.mark.parametrize("missing", ["output-format", "output-file"])
    def test_required_inputs(self, missing):
        """Test that format and file are required."""
        options = {"output-format": "html", "output-file": "report"}
        del options[missing]
        with pytest.raises(MissingInputError) as exc_info:
            build_convert_task(options)
        assert exc_info.value.input_name == missing


class TestBuildTask:
    """Test mode dispatch."""

    @pytest.mark.asyncio
    async def test_dispatch(self, settings):
        """Test that each mode produces its task type."""
        backend = FakeBackend(settings)
        task = await build_task(ToolMode.TRACE, {"trace-args": '["make"]', "output-file": "t"}, backend)
        assert isinstance(task, TraceTask)

        task = await build_task("convert", {"output-format": "html", "output-file": "r"}, backend)
        assert isinstance(task, ConvertTask)

    @pytest.mark.asyncio
    async def test_unknown_mode(self, settings):
        """Test that unknown modes are rejected."""
        with pytest.raises(PVSError):
            await build_task("lint", {}, FakeBackend(settings))

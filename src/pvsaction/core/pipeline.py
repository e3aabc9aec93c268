"""Main action pipeline orchestrator."""

import logging
from typing import Dict, Optional

from pvsaction.config.settings import ComponentKind, Settings, ToolMode
from pvsaction.core.builder import (
    Options,
    build_convert_task,
    derive_raw_report_path,
    get_option,
    require_option,
)
from pvsaction.exceptions import ComponentNotFoundError, PVSError
from pvsaction.platforms import PlatformBackend, get_backend
from pvsaction.tools.base import ToolWrapper
from pvsaction.tools.cpp_analyzer import CppAnalyzerWrapper
from pvsaction.tools.plog_converter import PlogConverterWrapper


logger = logging.getLogger(__name__)

# Step output published for each mode
OUTPUT_NAMES: Dict[ToolMode, str] = {
    ToolMode.ANALYZE: "raw-report",
    ToolMode.TRACE: "trace-file",
    ToolMode.CONVERT: "report",
}

# Used by the chained convert when only the source tree root is given
DEFAULT_PATH_TRANSFORMATION = "toRelative"


class ActionPipeline:
    """Locate, install if needed, and run a PVS-Studio tool.

    Every step is awaited before the next one starts; nothing is retried.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        backend: Optional[PlatformBackend] = None,
    ):
        """Initialize the pipeline with settings and a platform backend."""
        self.settings = settings or Settings()
        self.backend = backend or get_backend(settings=self.settings)

    def create_wrapper(self, mode: ToolMode) -> ToolWrapper:
        """Create the tool wrapper that handles a mode."""
        mode = ToolMode(mode)
        if mode == ToolMode.CONVERT:
            return PlogConverterWrapper(self.backend)
        return CppAnalyzerWrapper(self.backend, mode)

    async def ensure_available(self, wrapper: ToolWrapper) -> None:
        """Install the tool when it cannot be found.

        Raises:
            InstallationError: The installer failed
            ComponentNotFoundError: The tool is still missing after installation
        """
        if await wrapper.available():
            return

        logger.debug("%s not found. Installing...", wrapper.tool_name)
        await wrapper.install()
        if not await wrapper.available():
            raise ComponentNotFoundError(wrapper.tool_name)

    async def run(self, mode: ToolMode, options: Options) -> str:
        """Run one tool mode.

        Args:
            mode: analyze, trace or convert
            options: Action inputs

        Returns:
            Path of the artifact produced by the tool
        """
        wrapper = self.create_wrapper(mode)
        await self.ensure_available(wrapper)
        return await wrapper.run(options)

    async def run_analysis_and_convert(self, options: Options) -> Dict[str, str]:
        """Analyze, then convert the raw log into ``output-format``.

        Converter inputs are validated before the analyzer starts.

        Returns:
            Mapping of step output name to path
        """
        convert_options = None
        if get_option(options, "output-format"):
            convert_options = self.chained_convert_options(options)
            build_convert_task(convert_options)
        else:
            logger.info("No 'output-format' given, skipping report conversion")

        raw_report = await self.run(ToolMode.ANALYZE, options)
        outputs = {OUTPUT_NAMES[ToolMode.ANALYZE]: raw_report}
        if convert_options is None:
            return outputs

        outputs[OUTPUT_NAMES[ToolMode.CONVERT]] = await self.run(
            ToolMode.CONVERT, convert_options
        )
        return outputs

    def chained_convert_options(self, options: Options) -> Dict[str, Optional[str]]:
        """Converter inputs for the raw log written by an analysis."""
        convert_options = dict(options)
        convert_options["input-reports"] = derive_raw_report_path(
            require_option(options, "output-file")
        )
        # Analyzer specific inputs mean something else to the converter
        for name in ("analysis-mode", "additional-args"):
            convert_options.pop(name, None)
        if get_option(options, "source-tree-root") and not get_option(
            options, "path-transformation-mode"
        ):
            convert_options["path-transformation-mode"] = DEFAULT_PATH_TRANSFORMATION
        return convert_options

    async def verify_installation(self) -> str:
        """Check that the analyzer core runs and report its version."""
        core = await self.backend.locate(ComponentKind.ANALYZER_CORE)
        if core is None:
            raise ComponentNotFoundError("PVS-Studio")

        result = await self.backend.run_process(core, ["--version"])
        if "PVS-Studio " not in result.stdout:
            raise PVSError(f"Unexpected version output from {core}: {result.stdout.strip()}")
        return result.stdout.strip().splitlines()[0]

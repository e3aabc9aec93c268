"""PVS-Studio C and C++ analyzer wrapper."""

from pvsaction.config.settings import ComponentKind, ToolMode
from pvsaction.core.builder import Options, build_analyze_task, build_trace_task
from pvsaction.exceptions import PVSError
from pvsaction.models.task import Task
from pvsaction.tools.base import ToolWrapper


class CppAnalyzerWrapper(ToolWrapper):
    """Wrapper for the pvs-studio-analyzer front-end.

    The front-end either analyzes a compilation database or trace file
    (``analyze``) or records compiler invocations of a build (``trace``).
    """

    component = ComponentKind.ANALYZER_FRONT_END

    def __init__(self, backend, mode: ToolMode = ToolMode.ANALYZE):
        super().__init__(backend)
        self.mode = ToolMode(mode)
        if self.mode not in (ToolMode.ANALYZE, ToolMode.TRACE):
            raise PVSError(f"The C and C++ analyzer does not support the '{self.mode.value}' mode")

    async def build_task(self, options: Options) -> Task:
        if self.mode == ToolMode.TRACE:
            return build_trace_task(options)
        return await build_analyze_task(options, self.backend)

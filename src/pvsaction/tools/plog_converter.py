"""PVS-Studio report converter wrapper."""

from pvsaction.config.settings import ComponentKind
from pvsaction.core.builder import Options, build_convert_task
from pvsaction.models.task import Task
from pvsaction.tools.base import ToolWrapper


class PlogConverterWrapper(ToolWrapper):
    """Wrapper for plog-converter (HtmlGenerator on Windows)."""

    component = ComponentKind.REPORT_CONVERTER

    async def build_task(self, options: Options) -> Task:
        return build_convert_task(options)

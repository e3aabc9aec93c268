"""Base classes for PVS-Studio tool wrappers."""

from abc import ABC, abstractmethod
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pvsaction.config.settings import COMPONENT_NAMES, AnalyzerLanguage, ComponentKind
from pvsaction.core.arguments import assemble
from pvsaction.core.builder import Options
from pvsaction.exceptions import ComponentNotFoundError
from pvsaction.models.task import Task

if TYPE_CHECKING:
    from pvsaction.platforms.base import PlatformBackend


logger = logging.getLogger(__name__)


class ToolWrapper(ABC):
    """Abstract base class for all PVS-Studio tool wrappers."""

    component: ComponentKind
    language: AnalyzerLanguage = AnalyzerLanguage.CPP

    def __init__(self, backend: "PlatformBackend"):
        """Initialize tool wrapper.

        Args:
            backend: Platform backend used to locate, install and run the tool
        """
        self.backend = backend

    @property
    def tool_name(self) -> str:
        return COMPONENT_NAMES[self.component]

    async def executable(self) -> Optional[Path]:
        """Path to the tool executable, if installed."""
        return await self.backend.locate(self.component)

    async def available(self) -> bool:
        """Check if the tool is installed."""
        return await self.executable() is not None

    async def install(self) -> None:
        """Install the toolchain that provides this tool."""
        await self.backend.install(self.language)

    @abstractmethod
    async def build_task(self, options: Options) -> Task:
        """Build the task for this tool from action inputs."""

    async def run(self, options: Options) -> str:
        """Run the tool.

        Args:
            options: Action inputs

        Returns:
            The task's output artifact path
        """
        task = await self.build_task(options)
        args = assemble(task)
        logger.debug("Args: %s", args)

        executable = await self.executable()
        if executable is None:
            raise ComponentNotFoundError(self.tool_name)

        await self.backend.run_process(executable, args)
        return task.output_artifact

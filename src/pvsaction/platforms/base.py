"""Platform backend interface."""

from abc import ABC, abstractmethod
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

from pvsaction.actions.runtime import add_mask
from pvsaction.config.settings import AnalyzerLanguage, ComponentKind, Settings
from pvsaction.exceptions import PVSError
from pvsaction.tools.runner import ProcessResult, ProcessRunner


logger = logging.getLogger(__name__)


def path_readable(path: Optional[Union[str, os.PathLike]]) -> bool:
    """Check that a path exists and is readable.

    Any error while checking counts as "does not exist".
    """
    if not path:
        return False
    try:
        return os.access(path, os.R_OK)
    except (OSError, ValueError):
        return False


def parse_language(language: Union[AnalyzerLanguage, str]) -> AnalyzerLanguage:
    """Convert an analyzer name into an AnalyzerLanguage."""
    try:
        return AnalyzerLanguage(language)
    except ValueError:
        raise PVSError(f"Tried to install unknown analyzer '{language}'") from None


class PlatformBackend(ABC):
    """OS specific discovery, installation and execution of PVS-Studio."""

    name: str = "abstract"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        """Initialize backend.

        Args:
            settings: Global settings
            runner: Process runner used for package managers and tools
        """
        self.settings = settings or Settings()
        self.runner = runner or ProcessRunner()

    @abstractmethod
    async def locate(self, kind: ComponentKind) -> Optional[Path]:
        """Find a PVS-Studio component.

        Returns:
            Path to the executable, or None when it cannot be found
        """

    @abstractmethod
    async def install(self, language: Union[AnalyzerLanguage, str]) -> None:
        """Install the PVS-Studio toolchain for an analyzer language.

        Raises:
            InstallationError: The package manager failed
            UnimplementedError: The language is not supported on this platform
        """

    async def export_license_from_environment(self) -> Optional[Path]:
        """Write the license from PVS_STUDIO_LICENSE_NAME/KEY to a temp file.

        Returns:
            Path to a freshly created license file, or None when either
            variable is missing
        """
        name = self.settings.license_name
        key = self.settings.license_key
        if not name or not key:
            return None

        add_mask(key)
        fd, license_path = tempfile.mkstemp(
            prefix="pvs-",
            suffix=".lic",
            dir=self.settings.get_temp_dir(),
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(f"{name}\n{key}")
        logger.debug("License exported to %s", license_path)
        return Path(license_path)

    async def run_process(
        self,
        executable: Union[str, os.PathLike],
        args: Sequence[str] = (),
        check: bool = True,
    ) -> ProcessResult:
        """Run a PVS-Studio executable."""
        return await self.runner.run(executable, args, check=check)

"""Platform backends for locating, installing and running PVS-Studio."""

import logging
import sys
from typing import Optional

from pvsaction.config.settings import Settings
from pvsaction.exceptions import UnsupportedPlatformError
from pvsaction.platforms.base import PlatformBackend
from pvsaction.platforms.posix import LinuxBackend, MacOSBackend
from pvsaction.platforms.windows import WindowsBackend
from pvsaction.tools.runner import ProcessRunner


logger = logging.getLogger(__name__)


def get_backend(
    platform: Optional[str] = None,
    settings: Optional[Settings] = None,
    runner: Optional[ProcessRunner] = None,
) -> PlatformBackend:
    """Create the backend for the running OS.

    Args:
        platform: Platform identifier, ``sys.platform`` by default

    Raises:
        UnsupportedPlatformError: The OS is not Windows, Linux or macOS
    """
    platform = platform or sys.platform
    if platform == "win32":
        backend: PlatformBackend = WindowsBackend(settings, runner)
    elif platform == "darwin":
        backend = MacOSBackend(settings, runner)
    elif platform.startswith("linux"):
        backend = LinuxBackend(settings, runner)
    else:
        raise UnsupportedPlatformError(platform)
    logger.debug("Using the %s backend for '%s'", backend.name, platform)
    return backend


__all__ = [
    "PlatformBackend",
    "WindowsBackend",
    "LinuxBackend",
    "MacOSBackend",
    "get_backend",
]

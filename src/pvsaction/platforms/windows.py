"""Windows backend: registry discovery and Chocolatey installation."""

import logging
import os
import platform
from pathlib import Path
from typing import Optional, Union

from pvsaction.config.settings import (
    WINDOWS_EXECUTABLES,
    AnalyzerLanguage,
    ComponentKind,
    Settings,
)
from pvsaction.exceptions import InstallationError, RegistryUnavailableError
from pvsaction.platforms.base import PlatformBackend, parse_language, path_readable
from pvsaction.tools.runner import ProcessRunner


logger = logging.getLogger(__name__)

REGISTRY_KEY = r"SOFTWARE\ProgramVerificationSystems\PVS-Studio"
REGISTRY_KEY_WOW64 = r"SOFTWARE\Wow6432Node\ProgramVerificationSystems\PVS-Studio"
UNINSTALL_KEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall\PVS-Studio_is1"
UNINSTALL_KEY_WOW64 = r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall\PVS-Studio_is1"


def is_64bit() -> bool:
    """Check whether the host CPU is 64-bit."""
    return platform.machine().lower() in ("amd64", "x86_64", "arm64", "aarch64")


class WinRegReader:
    """Read string values under HKEY_LOCAL_MACHINE."""

    def read_value(self, key_path: str, value_name: str) -> Optional[str]:
        """Read a registry value.

        Returns:
            The value, or None when the key or value does not exist

        Raises:
            RegistryUnavailableError: The registry cannot be queried
        """
        try:
            import winreg
        except ImportError as e:
            raise RegistryUnavailableError("winreg module is not available") from e

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, key_path) as key:
                value, _ = winreg.QueryValueEx(key, value_name)
        except FileNotFoundError:
            return None
        except PermissionError as e:
            raise RegistryUnavailableError(f"Access to HKLM\\{key_path} denied") from e

        return str(value) if value else None


class WindowsBackend(PlatformBackend):
    """Backend for Windows hosts."""

    name = "windows"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        runner: Optional[ProcessRunner] = None,
        registry: Optional[WinRegReader] = None,
    ):
        super().__init__(settings, runner)
        self.registry = registry or WinRegReader()

    def registry_keys(self):
        """Registry keys to search, as (key path, value name) pairs."""
        if is_64bit():
            return [(REGISTRY_KEY_WOW64, "InstallDir"), (UNINSTALL_KEY_WOW64, "InstallLocation")]
        return [(REGISTRY_KEY, "InstallDir"), (UNINSTALL_KEY, "InstallLocation")]

    async def find_install_dir(self) -> Optional[str]:
        """Find the PVS-Studio installation directory."""
        try:
            for key_path, value_name in self.registry_keys():
                entry = self.registry.read_value(key_path, value_name)
                if path_readable(entry):
                    logger.debug("Install directory from HKLM\\%s: %s", key_path, entry)
                    return entry
        except RegistryUnavailableError as e:
            logger.info("Unable to find PVS-Studio via registry: %s", e)

        program_files = os.environ.get("ProgramFiles(x86)")
        if program_files:
            candidate = os.path.join(program_files, "PVS-Studio")
            if path_readable(candidate):
                logger.debug("Install directory from ProgramFiles(x86): %s", candidate)
                return candidate

        fallback = self.settings.windows_default_install_dir
        if path_readable(fallback):
            logger.debug("Install directory from default location: %s", fallback)
            return fallback

        return None

    async def locate(self, kind: ComponentKind) -> Optional[Path]:
        install_dir = await self.find_install_dir()
        if install_dir is None:
            return None
        return Path(os.path.join(install_dir, *WINDOWS_EXECUTABLES[ComponentKind(kind)]))

    async def install(self, language: Union[AnalyzerLanguage, str]) -> None:
        language = parse_language(language)
        logger.info("Installing PVS-Studio (%s) on Windows via choco", language.value)
        result = await self.runner.run(
            "choco", ["install", self.settings.choco_package], check=False
        )
        if result.exit_code != 0:
            raise InstallationError(
                f"Unable to install analyzer. Installer exit code is: {result.exit_code}",
                exit_code=result.exit_code,
                output=result.output,
            )
        logger.debug("PVS-Studio successfully installed")

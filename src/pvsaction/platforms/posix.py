"""Linux and macOS backends: PATH discovery, apt-get and brew installation."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

import httpx

from pvsaction.config.settings import POSIX_EXECUTABLES, AnalyzerLanguage, ComponentKind
from pvsaction.exceptions import InstallationError, PVSError, UnimplementedError
from pvsaction.platforms.base import PlatformBackend, parse_language, path_readable


logger = logging.getLogger(__name__)

LINUX_FORCED_DIRS = ("/usr/bin", "/usr/sbin")
MACOS_FORCED_DIRS = ("/usr/local/bin", "/usr/local/sbin")


def find_tool(tool: str, forced_dirs: Sequence[str] = ()) -> Optional[Path]:
    """Search for an executable.

    ``shutil.which`` is tried first. If it fails, ``forced_dirs`` followed by
    the PATH entries are scanned manually for a readable file.
    """
    found = shutil.which(tool)
    if found:
        return Path(found)

    path_entries = os.environ.get("PATH", "").split(os.pathsep)
    for entry in [*forced_dirs, *path_entries]:
        if not entry:
            continue
        candidate = os.path.join(entry, tool)
        if path_readable(candidate):
            return Path(candidate)

    logger.debug("%s not found on PATH", tool)
    return None


class LinuxBackend(PlatformBackend):
    """Backend for Linux hosts."""

    name = "linux"
    forced_dirs = LINUX_FORCED_DIRS

    async def locate(self, kind: ComponentKind) -> Optional[Path]:
        return find_tool(POSIX_EXECUTABLES[ComponentKind(kind)], self.forced_dirs)

    async def install(self, language: Union[AnalyzerLanguage, str]) -> None:
        language = parse_language(language)
        logger.info("Installing PVS-Studio (%s) on Linux via direct download", language.value)
        if language != AnalyzerLanguage.CPP:
            raise UnimplementedError(
                f"Installing the {language.value} analyzer is not supported on Linux"
            )

        dist_file = await self.download(self.settings.deb_download_url)
        # apt-get picks the package type from the file extension
        deb_file = dist_file.with_name(dist_file.name + ".deb")
        os.replace(dist_file, deb_file)

        result = await self.runner.run(
            "sudo", ["apt-get", "install", str(deb_file)], check=False
        )
        if result.exit_code != 0:
            raise InstallationError(
                f"Unable to install {language.value}. Installer exit code is: "
                f"{result.exit_code}. Details: {result.output}",
                exit_code=result.exit_code,
                output=result.output,
            )
        logger.debug("PVS-Studio successfully installed")

    async def download(self, url: str) -> Path:
        """Download a file into a fresh temporary file.

        Returns:
            Path to the downloaded file (without extension)
        """
        fd, dist_path = tempfile.mkstemp(prefix="pvs-", dir=self.settings.get_temp_dir())
        logger.debug("Downloading %s to %s", url, dist_path)
        completed = False
        try:
            with os.fdopen(fd, "wb") as f:
                async with httpx.AsyncClient(
                    follow_redirects=True,
                    timeout=self.settings.download_timeout,
                ) as client:
                    async with client.stream("GET", url) as response:
                        response.raise_for_status()
                        async for chunk in response.aiter_bytes():
                            f.write(chunk)
            completed = True
        except httpx.HTTPError as e:
            raise PVSError(f"Unable to download {url}: {e}") from e
        finally:
            # Remove partial downloads
            if not completed:
                os.unlink(dist_path)
        return Path(dist_path)


class MacOSBackend(PlatformBackend):
    """Backend for macOS hosts."""

    name = "macos"
    forced_dirs = MACOS_FORCED_DIRS

    async def locate(self, kind: ComponentKind) -> Optional[Path]:
        return find_tool(POSIX_EXECUTABLES[ComponentKind(kind)], self.forced_dirs)

    async def install(self, language: Union[AnalyzerLanguage, str]) -> None:
        language = parse_language(language)
        logger.info("Installing PVS-Studio (%s) on macOS via brew", language.value)
        if language == AnalyzerLanguage.JAVA:
            raise UnimplementedError("Installing the java analyzer is not supported on macOS")

        await self._brew("update")
        await self._brew("install", self.settings.brew_package)
        if language == AnalyzerLanguage.CSHARP:
            await self._brew("install", self.settings.brew_dotnet_package)
        logger.debug("PVS-Studio successfully installed")

    async def _brew(self, *args: str) -> None:
        result = await self.runner.run("brew", list(args), check=False)
        if result.exit_code != 0:
            raise InstallationError(
                f"'brew {' '.join(args)}' failed with exit code {result.exit_code}",
                exit_code=result.exit_code,
                output=result.output,
            )

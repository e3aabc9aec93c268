"""Configuration settings for pvsaction using Pydantic."""

from typing import Dict, Optional
from pathlib import Path
from enum import Enum
import os
import tempfile

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ComponentKind(str, Enum):
    """PVS-Studio components the action can locate."""

    ANALYZER_FRONT_END = "analyzer"
    ANALYZER_CORE = "core"
    REPORT_CONVERTER = "converter"


class AnalyzerLanguage(str, Enum):
    """Analyzer flavours accepted by the platform installers."""

    CPP = "cpp"
    CSHARP = "csharp"
    JAVA = "java"


class ToolMode(str, Enum):
    """Modes the action can run in."""

    ANALYZE = "analyze"
    TRACE = "trace"
    CONVERT = "convert"


class LogFormat(str, Enum):
    """Supported log output formats."""

    GITHUB = "github"
    TEXT = "text"
    JSON = "json"


# Executable names looked up on PATH (Linux and macOS)
POSIX_EXECUTABLES: Dict[ComponentKind, str] = {
    ComponentKind.ANALYZER_FRONT_END: "pvs-studio-analyzer",
    ComponentKind.ANALYZER_CORE: "pvs-studio",
    ComponentKind.REPORT_CONVERTER: "plog-converter",
}

# Paths relative to the installation directory (Windows)
WINDOWS_EXECUTABLES: Dict[ComponentKind, tuple] = {
    ComponentKind.ANALYZER_FRONT_END: ("CompilerCommandsAnalyzer.exe",),
    ComponentKind.ANALYZER_CORE: ("x64", "PVS-Studio.exe"),
    ComponentKind.REPORT_CONVERTER: ("HtmlGenerator.exe",),
}

# Names used in error messages
COMPONENT_NAMES: Dict[ComponentKind, str] = {
    ComponentKind.ANALYZER_FRONT_END: "CompilerCommandsAnalyzer",
    ComponentKind.ANALYZER_CORE: "PVS-Studio",
    ComponentKind.REPORT_CONVERTER: "PlogConverter",
}


class Settings(BaseSettings):
    """Global application settings.

    Every field can be overridden with a ``PVS_STUDIO_`` prefixed
    environment variable, e.g. ``PVS_STUDIO_LICENSE_NAME``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PVS_STUDIO_",
        case_sensitive=False,
        extra="ignore",
    )

    # License
    license_name: Optional[str] = Field(default=None, description="Registered license name")
    license_key: Optional[str] = Field(default=None, description="License key")

    # Installation sources
    deb_download_url: str = Field(
        default="https://cdn.pvs-studio.com/pvs-studio-latest.deb",
        description="Debian package downloaded by the Linux installer",
    )
    choco_package: str = Field(default="pvs-studio", description="Chocolatey package name")
    brew_package: str = Field(
        default="viva64/pvs-studio/pvs-studio",
        description="Homebrew formula for the C and C++ analyzer",
    )
    brew_dotnet_package: str = Field(
        default="viva64/pvs-studio/pvs-studio-dotnet",
        description="Homebrew formula for the C# analyzer",
    )
    download_timeout: float = Field(default=300.0, description="Download timeout in seconds")

    # Paths
    windows_default_install_dir: str = Field(
        default="C:\\Program Files (x86)\\PVS-Studio",
        description="Last-resort Windows installation directory",
    )
    temp_dir: Optional[Path] = Field(
        default=None,
        description="Directory for license files and downloads (system temp if unset)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Optional[LogFormat] = Field(
        default=None,
        description="Log format (github, text, json); detected when unset",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name so it matches the logging module."""
        return v.strip().upper()

    @field_validator("temp_dir", mode="before")
    @classmethod
    def empty_temp_dir(cls, v):
        """Treat an empty value as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_temp_dir(self) -> Path:
        """Directory used for temporary artifacts, created on demand."""
        if self.temp_dir is None:
            return Path(tempfile.gettempdir())
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self.temp_dir

    def resolve_log_format(self) -> LogFormat:
        """Pick the configured log format, or detect it from the environment."""
        if self.log_format is not None:
            return self.log_format
        if os.environ.get("GITHUB_ACTIONS") == "true":
            return LogFormat.GITHUB
        return LogFormat.TEXT

    def resolve_log_level(self) -> str:
        """Log level, forced to DEBUG when the runner has debug logging on."""
        if os.environ.get("RUNNER_DEBUG") == "1":
            return "DEBUG"
        return self.log_level

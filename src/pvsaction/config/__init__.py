"""Configuration for pvsaction."""

from pvsaction.config.settings import (
    Settings,
    ComponentKind,
    AnalyzerLanguage,
    ToolMode,
    LogFormat,
)

__all__ = [
    "Settings",
    "ComponentKind",
    "AnalyzerLanguage",
    "ToolMode",
    "LogFormat",
]

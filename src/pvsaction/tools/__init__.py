"""Tool wrapper implementations for pvsaction."""

from pvsaction.tools.runner import ProcessRunner, ProcessResult
from pvsaction.tools.base import ToolWrapper
from pvsaction.tools.cpp_analyzer import CppAnalyzerWrapper
from pvsaction.tools.plog_converter import PlogConverterWrapper

__all__ = [
    "ProcessRunner",
    "ProcessResult",
    "ToolWrapper",
    "CppAnalyzerWrapper",
    "PlogConverterWrapper",
]

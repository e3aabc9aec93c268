"""Data models for pvsaction."""

from pvsaction.models.task import AnalyzeTask, TraceTask, ConvertTask, Task

__all__ = [
    "AnalyzeTask",
    "TraceTask",
    "ConvertTask",
    "Task",
]

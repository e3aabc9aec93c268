"""pvsaction - PVS-Studio static analysis for GitHub Actions.

Locates or installs the PVS-Studio toolchain on Windows, Linux and macOS,
turns workflow inputs into analyzer, tracer and report converter command
lines, and publishes the produced files as step outputs.
"""

__version__ = "0.1.0"

from pvsaction.core.pipeline import ActionPipeline

__all__ = ["ActionPipeline"]

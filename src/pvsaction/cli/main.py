"""Main CLI entry point for pvsaction."""

import asyncio
import sys
from typing import Any, Awaitable, Dict, Iterable, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pvsaction import __version__
from pvsaction.actions.runtime import get_input, is_github_actions, set_failed, set_output
from pvsaction.config.settings import (
    COMPONENT_NAMES,
    AnalyzerLanguage,
    ComponentKind,
    Settings,
    ToolMode,
)
from pvsaction.core.pipeline import OUTPUT_NAMES, ActionPipeline
from pvsaction.log import setup_logging


console = Console()

INPUT_HELP: Dict[str, str] = {
    "file-to-analyze": "Compilation database or trace file to analyze",
    "analysis-mode": "Analyzer mode (analyze) or groups and levels to keep (convert)",
    "source-tree-root": "Root of the source tree for relative paths",
    "excluded-dirs": "Directories excluded from analysis (';' or newline separated)",
    "suppress-files": "Suppress files (';' or newline separated)",
    "rules-configs": "Diagnostic rules configuration files (';' or newline separated)",
    "additional-args": "Extra arguments passed to the tool (';' or newline separated)",
    "parallel": "Number of analysis threads, 0 for the analyzer default",
    "output-file": "Report file to produce",
    "output-format": "Report format produced by the converter",
    "licence-file": "License file (PVS_STUDIO_LICENSE_NAME/KEY are used when empty)",
    "trace-args": "Build command to trace, as a JSON array of strings",
    "ignore-return-code": "Ignore the exit code of the traced build (true/false)",
    "path-transformation-mode": "Path transformation mode (toAbsolute, toRelative)",
    "excluded-paths": "Paths excluded from the report (';' or newline separated)",
    "included-paths": "Paths included in the report (';' or newline separated)",
    "keep-false-alarms": "Keep warnings marked as false alarms (true/false)",
    "input-reports": "Raw analyzer logs to convert (';' or newline separated)",
}

ANALYZE_INPUTS = [
    "file-to-analyze",
    "output-file",
    "output-format",
    "licence-file",
    "analysis-mode",
    "source-tree-root",
    "excluded-dirs",
    "suppress-files",
    "rules-configs",
    "parallel",
    "additional-args",
    # Only used when the raw log is converted right away
    "path-transformation-mode",
    "excluded-paths",
    "included-paths",
    "keep-false-alarms",
]

TRACE_INPUTS = [
    "trace-args",
    "output-file",
    "ignore-return-code",
    "additional-args",
]

CONVERT_INPUTS = [
    "output-format",
    "output-file",
    "input-reports",
    "analysis-mode",
    "source-tree-root",
    "path-transformation-mode",
    "excluded-paths",
    "included-paths",
    "keep-false-alarms",
    "additional-args",
]


def action_inputs(names: Iterable[str]):
    """Add one ``--<input-name>`` option per action input."""
    def decorator(f):
        for name in reversed(list(names)):
            f = click.option(
                f"--{name}",
                name.replace("-", "_"),
                type=str,
                default=None,
                help=INPUT_HELP[name],
            )(f)
        return f
    return decorator


def collect_options(names: Iterable[str], values: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Merge command-line values with ``INPUT_*`` variables from the runner.

    Values given on the command line win.
    """
    options = {}
    for name in names:
        value = values.get(name.replace("-", "_"))
        options[name] = value if value is not None else get_input(name)
    return options


def run_action(ctx: click.Context, step: Awaitable[Any]) -> Any:
    """Run a pipeline step, reporting any error as a step failure."""
    try:
        return asyncio.run(step)
    except Exception as e:
        if is_github_actions():
            set_failed(str(e))
        else:
            console.print(f"\n[red]Error:[/red] {escape(str(e))}", style="bold red", markup=True)
        if ctx.obj.get("debug"):
            console.print_exception()
        sys.exit(1)


def publish(outputs: Dict[str, str]) -> None:
    """Set step outputs; outside a runner each one is printed as name=value."""
    for name, value in outputs.items():
        set_output(name, value)


def get_pipeline(ctx: click.Context) -> ActionPipeline:
    """Pipeline for this invocation, created on first use."""
    if "pipeline" not in ctx.obj:
        ctx.obj["pipeline"] = ActionPipeline(settings=ctx.obj["settings"])
    return ctx.obj["pipeline"]


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Verbose logging and tracebacks on error")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """pvsaction - PVS-Studio static analysis for GitHub Actions.

    Every input can be given as an option or, inside a workflow, through the
    INPUT_<NAME> variables the runner sets from the step's ``with`` block.
    """
    ctx.ensure_object(dict)
    settings = Settings()
    if debug:
        settings.log_level = "DEBUG"
    setup_logging(settings)

    ctx.obj["settings"] = settings
    ctx.obj["debug"] = debug


@cli.command()
@action_inputs(ANALYZE_INPUTS)
@click.option(
    "--convert",
    is_flag=True,
    help="Convert the raw log into --output-format after the analysis",
)
@click.pass_context
def analyze(ctx: click.Context, convert: bool, **inputs: Optional[str]) -> None:
    """Analyze a compilation database or trace file.

    Sets the ``raw-report`` output, and ``report`` with --convert.
    """
    options = collect_options(ANALYZE_INPUTS, inputs)

    async def step() -> Dict[str, str]:
        pipeline = get_pipeline(ctx)
        if convert:
            return await pipeline.run_analysis_and_convert(options)
        raw_report = await pipeline.run(ToolMode.ANALYZE, options)
        return {OUTPUT_NAMES[ToolMode.ANALYZE]: raw_report}

    publish(run_action(ctx, step()))


@cli.command()
@action_inputs(TRACE_INPUTS)
@click.pass_context
def trace(ctx: click.Context, **inputs: Optional[str]) -> None:
    """Trace a build to record compiler invocations.

    Sets the ``trace-file`` output.
    """
    options = collect_options(TRACE_INPUTS, inputs)

    async def step() -> Dict[str, str]:
        trace_file = await get_pipeline(ctx).run(ToolMode.TRACE, options)
        return {OUTPUT_NAMES[ToolMode.TRACE]: trace_file}

    publish(run_action(ctx, step()))


@cli.command()
@action_inputs(CONVERT_INPUTS)
@click.pass_context
def convert(ctx: click.Context, **inputs: Optional[str]) -> None:
    """Convert a raw analyzer log into a report.

    Sets the ``report`` output.
    """
    options = collect_options(CONVERT_INPUTS, inputs)

    async def step() -> Dict[str, str]:
        report = await get_pipeline(ctx).run(ToolMode.CONVERT, options)
        return {OUTPUT_NAMES[ToolMode.CONVERT]: report}

    publish(run_action(ctx, step()))


@cli.command()
@click.option(
    "--language",
    type=click.Choice([language.value for language in AnalyzerLanguage]),
    default=AnalyzerLanguage.CPP.value,
    show_default=True,
    help="Analyzer to install",
)
@click.pass_context
def install(ctx: click.Context, language: str) -> None:
    """Install PVS-Studio with the platform package manager."""

    async def step() -> None:
        await get_pipeline(ctx).backend.install(language)

    run_action(ctx, step())
    if not is_github_actions():
        console.print("\n[green]✓[/green] PVS-Studio installed")


@cli.command()
@click.option("--verify", is_flag=True, help="Run the analyzer core to check its version")
@click.pass_context
def locate(ctx: click.Context, verify: bool) -> None:
    """Show where the PVS-Studio components are installed."""

    async def step() -> Tuple[List[tuple], Optional[str]]:
        pipeline = get_pipeline(ctx)
        rows = []
        for kind in ComponentKind:
            rows.append((kind, await pipeline.backend.locate(kind)))
        version = await pipeline.verify_installation() if verify else None
        return rows, version

    rows, version = run_action(ctx, step())

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Path")
    for kind, path in rows:
        status = "[green]Found[/green]" if path else "[red]Missing[/red]"
        table.add_row(COMPONENT_NAMES[kind], status, str(path) if path else "N/A")
    console.print(table)

    if version:
        console.print(f"Version: {version}")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

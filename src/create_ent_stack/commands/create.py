"""create-ent-stack - Scaffold a new ENT Stack project."""

from pathlib import Path

import click

from create_ent_stack import __version__
from create_ent_stack.core.config import load_config
from create_ent_stack.core.errors import InputStreamError, MaterializationError
from create_ent_stack.core.rewriter import RewriteStatus
from create_ent_stack.core.scaffold import ScaffoldOrchestrator, ScaffoldResult
from create_ent_stack.ui import Symbols, configure_logging, console, err_console


@click.command()
@click.version_option(version=__version__, prog_name="create-ent-stack")
def create_cmd():
    """Scaffold a new ENT Stack project.

    Prompts for a project name, copies the bundled template into a new
    directory of that name, and personalizes it (package.json, .env files,
    web manifest, layout title and README).
    """
    configure_logging()
    config = load_config()

    orchestrator = ScaffoldOrchestrator(config, cwd=Path.cwd())
    try:
        result = orchestrator.run()
    except InputStreamError as e:
        err_console.print(f"Error reading project name: {e}", style="error", markup=False)
        raise SystemExit(1)
    except MaterializationError as e:
        err_console.print(f"Error copying source directory: {e}", style="error", markup=False)
        raise SystemExit(1)

    if result.degraded:
        _print_skipped(result)


def _print_skipped(result: ScaffoldResult):
    """List rewrite steps that did not apply."""
    console.print("\n[warning]Some files were not personalized:[/]")
    for rewrite in result.rewrites:
        if rewrite.status is RewriteStatus.APPLIED:
            continue
        symbol = Symbols.SKIPPED if rewrite.status is RewriteStatus.SKIPPED else Symbols.FAILED
        console.print(f"  {symbol} {rewrite.step}: {rewrite.message}", style="warning", markup=False)
    if not result.readme_written:
        console.print(f"  {Symbols.FAILED} README.md: not written", style="warning", markup=False)

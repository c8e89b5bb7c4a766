"""ent-stack-bundle - Maintainer commands for the bundled template."""

from pathlib import Path

import click
from rich.panel import Panel

from create_ent_stack.core.config import PackagingStrategy, ScaffoldConfig, load_config
from create_ent_stack.core.errors import PackagingError, VersionMarkerError
from create_ent_stack.packaging import (
    Bundler,
    is_semver,
    update_readme_version,
    write_version_marker,
)
from create_ent_stack.ui import configure_logging, console, err_console


@click.command()
@click.option(
    "--strategy",
    "-s",
    type=click.Choice([s.value for s in PackagingStrategy]),
    default=PackagingStrategy.TAR.value,
    help="How to bundle the template (default: tar)",
)
@click.option(
    "--install-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory that receives the bundle (default: the packaged bundle/ directory)",
)
@click.option(
    "--token",
    default=None,
    help="GitHub token for API requests (or set GH_TOKEN / GITHUB_TOKEN)",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    help="Show a download progress bar",
)
def prepack_cmd(strategy: str, install_root: Path, token: str, progress: bool):
    """Download the tagged ENT Stack release and bundle it.

    The release tag is read from ent-stack-version.txt in the install root.
    """
    configure_logging("INFO")
    base = load_config(install_root)
    config = ScaffoldConfig.from_dict({**base.to_dict(), "strategy": strategy})

    console.print(Panel.fit(
        f"[primary.bold]ent-stack-bundle prepack[/] - [secondary]{config.strategy.value}[/] bundle",
        border_style="primary",
    ))

    try:
        bundled = Bundler(config, token=token, show_progress=progress).run()
    except VersionMarkerError as e:
        err_console.print(f"Error: {e}", style="error", markup=False)
        raise SystemExit(1)
    except PackagingError as e:
        err_console.print(f"Error: {e}", style="error", markup=False)
        raise SystemExit(1)

    console.print(f"Bundled template: {bundled}", style="success", markup=False)


@click.command()
@click.argument("version")
@click.option(
    "--install-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding ent-stack-version.txt",
)
@click.option(
    "--readme",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("README.md"),
    show_default=True,
    help="README whose 'tagged with **X.Y.Z**' line is updated",
)
def set_version_cmd(version: str, install_root: Path, readme: Path):
    """Set the ENT Stack VERSION (X.Y.Z) that gets bundled."""
    configure_logging("INFO")

    if not is_semver(version):
        err_console.print(
            "Invalid version format. Must be a valid semver (e.g., 1.2.3).", style="error"
        )
        raise SystemExit(1)

    config = load_config(install_root)

    try:
        write_version_marker(config.version_path, version)
    except OSError as e:
        err_console.print(f"Failed to update {config.version_path}: {e}", style="error", markup=False)
        raise SystemExit(1)
    console.print(f"Updated {config.version_path} with version {version}", markup=False)

    try:
        updated = update_readme_version(readme, version)
    except OSError as e:
        err_console.print(f"Failed to update {readme}: {e}", style="error", markup=False)
        raise SystemExit(1)
    if updated:
        console.print(f"Updated {readme} with version {version}", markup=False)

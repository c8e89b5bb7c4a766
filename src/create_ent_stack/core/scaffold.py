"""Scaffold orchestration.

One run walks a fixed sequence of states:

    AWAITING_NAME → MATERIALIZING → REWRITING → FINALIZING → DONE

FAILED is reached only when the input stream fails while waiting for a name
or when the template cannot be extracted. Everything after materialization
is best-effort: per-file problems are logged and the run still completes.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from create_ent_stack.core.config import ScaffoldConfig
from create_ent_stack.core.errors import ScaffoldError, VersionMarkerError
from create_ent_stack.core.materialize import TemplateMaterializer
from create_ent_stack.core.naming import is_valid_project_name, prompt_project_name
from create_ent_stack.core.readme import read_version_marker, render_readme, write_readme
from create_ent_stack.core.rewriter import RewriteResult, TemplateRewriter

logger = logging.getLogger(__name__)


class ScaffoldState(str, Enum):
    AWAITING_NAME = "AWAITING_NAME"
    MATERIALIZING = "MATERIALIZING"
    REWRITING = "REWRITING"
    FINALIZING = "FINALIZING"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass
class ScaffoldResult:
    """Summary of a finished scaffolding run."""
    project_name: str
    project_path: Path
    state: ScaffoldState = ScaffoldState.DONE
    rewrites: List[RewriteResult] = field(default_factory=list)
    readme_written: bool = False
    version: Optional[str] = None

    @property
    def degraded(self) -> bool:
        """True if any rewrite was skipped or failed, or the README is missing."""
        return not self.readme_written or any(not r.ok for r in self.rewrites)


class ScaffoldOrchestrator:
    """Drive a single scaffolding run from name prompt to summary."""

    def __init__(
        self,
        config: ScaffoldConfig,
        cwd: Optional[Path] = None,
        read_line: Optional[Callable[[str], str]] = None,
        console: Optional[Console] = None,
    ):
        """Initialize orchestrator.

        Args:
            config: Resolved configuration (install root, strategy, ...)
            cwd: Directory project names are resolved against (defaults to cwd)
            read_line: Input function for the name prompt
            console: Console for user-facing output
        """
        if console is None:
            from create_ent_stack.ui import console
        self.config = config
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.read_line = read_line
        self.console = console
        self.state = ScaffoldState.AWAITING_NAME
        self.materializer = TemplateMaterializer(config)

    def _transition(self, state: ScaffoldState) -> None:
        logger.debug("Scaffold state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, project_name: Optional[str] = None) -> ScaffoldResult:
        """Scaffold one project.

        Args:
            project_name: Use this name instead of prompting

        Returns:
            ScaffoldResult for the finished run

        Raises:
            ValueError: If ``project_name`` is given but invalid
            InputStreamError: If the prompt cannot read input
            MaterializationError: If the template cannot be extracted
        """
        self._transition(ScaffoldState.AWAITING_NAME)
        if project_name is None:
            try:
                project_name = prompt_project_name(self.read_line, self.console)
            except ScaffoldError:
                self._transition(ScaffoldState.FAILED)
                raise
        elif not is_valid_project_name(project_name):
            raise ValueError(f"Invalid project name: {project_name!r}")

        project_path = (self.cwd / project_name).resolve()
        result = ScaffoldResult(project_name=project_name, project_path=project_path)

        # Materialize the template
        self._transition(ScaffoldState.MATERIALIZING)
        try:
            self.materializer.materialize(project_path)
        except ScaffoldError:
            self._transition(ScaffoldState.FAILED)
            raise
        self.console.print(f"Source directory copied to: {project_path}", style="success", markup=False)

        # Rewrite known files
        self._transition(ScaffoldState.REWRITING)
        rewriter = TemplateRewriter(project_path, project_name)
        result.rewrites = rewriter.rewrite_all()

        # README
        self._transition(ScaffoldState.FINALIZING)
        try:
            result.version = read_version_marker(self.config.version_path)
        except VersionMarkerError as e:
            logger.warning("README will not mention a template version: %s", e)

        readme = render_readme(
            project_name,
            result.version,
            uppercase=self.config.readme_uppercase,
            repository_url=self.config.repository_url,
            docs_url=self.config.docs_url,
            bootstrap_command=self.config.bootstrap_command,
        )
        result.readme_written = write_readme(project_path, readme)

        self._transition(ScaffoldState.DONE)
        result.state = self.state
        self._print_summary(result)
        return result

    def _print_summary(self, result: ScaffoldResult) -> None:
        """Print where the project went and what to do next."""
        self.console.print(f"\nProject scaffolded at: {result.project_path}\n", style="primary", markup=False)
        self.console.print(
            f'Now you can run "{self.config.bootstrap_command}" to setup the project, '
            f"and make sure to also read the Environment Variables section "
            f"{self.config.docs_url}",
            style="primary",
        )

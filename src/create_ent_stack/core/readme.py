"""README generation for scaffolded projects."""

import logging
from pathlib import Path
from typing import Optional

from create_ent_stack.core.config import DOCS_URL, REPOSITORY_URL
from create_ent_stack.core.errors import VersionMarkerError

logger = logging.getLogger(__name__)

README_NAME = "README.md"


def read_version_marker(path: Path) -> str:
    """Read the template version from the marker file.

    Raises:
        VersionMarkerError: If the file is missing, unreadable or empty
    """
    path = Path(path)
    if not path.is_file():
        raise VersionMarkerError(f"{path.name} not found.", path=path)
    try:
        version = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise VersionMarkerError(f"Could not read {path.name}: {e}", path=path) from e
    if not version:
        raise VersionMarkerError(f"{path.name} is empty.", path=path)
    return version


def render_readme(
    project_name: str,
    version: Optional[str] = None,
    *,
    uppercase: bool = True,
    repository_url: str = REPOSITORY_URL,
    docs_url: str = DOCS_URL,
    bootstrap_command: str = "pnpm fire",
) -> str:
    """Render the README for a new project."""
    heading = project_name.upper() if uppercase else project_name

    lines = [f"# {heading}", ""]
    if version:
        lines += [f"Based on version {version} of the [ENT Stack]({repository_url}).", ""]

    lines += [
        "## 🔥 Now Setup Your Project",
        "",
        "```bash",
        bootstrap_command,
        "```",
        "- Installs dependencies",
        "- Starts the local database in a Docker container",
        "- Creates the database and tables",
        "- Runs dev environments for both the backend and frontend",
        "",
        "## 🔐 Environment Variables",
        "",
        docs_url,
        "",
        "## 🧪 And Then Configure Mailing and Run Tests",
        "",
        f"{repository_url}?tab=readme-ov-file#3--configure-mailing-and-run-tests",
        "",
        "## Check the troubleshooting section if you encounter any issues",
        "",
        f"{repository_url}?tab=readme-ov-file#troubleshooting",
        "",
    ]
    return "\n".join(lines)


def write_readme(project_root: Path, content: str) -> bool:
    """Write README.md under ``project_root``, replacing any existing file.

    Returns:
        True if the file was written; failures are logged, not raised
    """
    path = Path(project_root) / README_NAME
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.warning("Error creating %s: %s", path, e)
        return False
    return True

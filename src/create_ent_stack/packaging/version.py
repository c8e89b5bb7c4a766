"""Bump the bundled ENT Stack version.

Writes the version marker read by the bundler and the scaffolder, and keeps
the "tagged with **X.Y.Z**" line of the project README in sync.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")
README_TAG_PATTERN = re.compile(r"tagged with \*\*([^*]+)\*\*")


def is_semver(version: str) -> bool:
    return SEMVER_PATTERN.fullmatch(version) is not None


def write_version_marker(marker_path: Path, version: str) -> None:
    """Write ``version`` to the marker file.

    Raises:
        ValueError: If ``version`` is not X.Y.Z
    """
    if not is_semver(version):
        raise ValueError("Invalid version format. Must be a valid semver (e.g., 1.2.3).")
    Path(marker_path).write_text(version, encoding="utf-8")
    logger.info("Updated %s with version %s", marker_path, version)


def update_readme_version(readme_path: Path, version: str) -> bool:
    """Replace the first "tagged with **...**" in the README.

    Returns:
        True if the README contained the marker text
    """
    readme_path = Path(readme_path)
    content = readme_path.read_text(encoding="utf-8")
    updated, count = README_TAG_PATTERN.subn(
        lambda _match: f"tagged with **{version}**", content, count=1
    )
    if not count:
        logger.warning("No 'tagged with **...**' line found in %s", readme_path)
        return False
    readme_path.write_text(updated, encoding="utf-8")
    logger.info("Updated %s with version %s", readme_path, version)
    return True

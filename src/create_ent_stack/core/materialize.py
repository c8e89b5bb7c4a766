"""Template materialization.

Reproduces the bundled template under a project directory. The template is
either a plain directory (copied file by file) or an archive (tar, tar.gz
or zip) extracted in place.

Packaging tools drop ``.gitignore`` files they consider unpublished, so the
bundler renames them to a placeholder before archiving
(``hide_ignore_files``) and scaffolding renames them back after
materialization (``restore_ignore_files``).
"""

import logging
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import List

from create_ent_stack.core.config import PackagingStrategy, ScaffoldConfig
from create_ent_stack.core.errors import MaterializationError

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"
DEFAULT_PLACEHOLDER = "keep.gitignore"


# =============================================================================
# Directory copy
# =============================================================================

def copy_tree(source: Path, destination: Path) -> None:
    """Recursively copy ``source`` into ``destination``.

    Missing sources are a no-op. Directories are created as needed (existing
    ones are reused) and files are copied byte-for-byte, overwriting any
    file already at the destination.
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        logger.debug("Template source %s does not exist, nothing to copy", source)
        return

    if source.is_dir():
        destination.mkdir(parents=True, exist_ok=True)
        for child in source.iterdir():
            copy_tree(child, destination / child.name)
    else:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)


# =============================================================================
# Archive extraction
# =============================================================================

def _ensure_within(destination: Path, member_name: str) -> None:
    target = (destination / member_name).resolve()
    if target != destination and destination not in target.parents:
        raise MaterializationError(f"Archive entry escapes destination: {member_name}")


def extract_archive(archive: Path, destination: Path, *, remove_archive: bool = True) -> None:
    """Extract a tar or zip archive under ``destination``.

    Relative paths inside the archive are preserved. After a successful
    extraction the archive is deleted when ``remove_archive`` is set; a
    failed delete is only logged.

    Raises:
        MaterializationError: If the archive is missing, corrupt, of an
            unsupported format, or cannot be written out
    """
    archive = Path(archive)
    destination = Path(destination).resolve()

    if not archive.is_file():
        raise MaterializationError(f"Template archive not found: {archive}", source=archive)

    destination.mkdir(parents=True, exist_ok=True)

    try:
        if tarfile.is_tarfile(archive):
            with tarfile.open(archive, "r:*") as tar:
                members = tar.getmembers()
                for member in members:
                    _ensure_within(destination, member.name)
                tar.extractall(destination, members=members, filter="data")
        elif zipfile.is_zipfile(archive):
            with zipfile.ZipFile(archive) as zf:
                names = zf.namelist()
                for name in names:
                    _ensure_within(destination, name)
                zf.extractall(destination)
        else:
            raise MaterializationError(f"Unsupported archive format: {archive}", source=archive)
    except MaterializationError:
        raise
    except (tarfile.TarError, zipfile.BadZipFile, OSError, EOFError) as e:
        raise MaterializationError(f"Failed to extract {archive}: {e}", source=archive) from e

    logger.debug("Extracted %s into %s", archive, destination)

    if remove_archive:
        try:
            archive.unlink()
        except OSError as e:
            logger.warning("Could not remove archive %s: %s", archive, e)


# =============================================================================
# Placeholder ignore-files
# =============================================================================

def _rename_all(root: Path, old_name: str, new_name: str) -> List[Path]:
    renamed = []
    if not root.is_dir():
        return renamed

    for child in sorted(root.iterdir()):
        if child.is_dir() and not child.is_symlink():
            renamed.extend(_rename_all(child, old_name, new_name))
        elif child.name == old_name:
            target = child.with_name(new_name)
            child.replace(target)
            renamed.append(target)
    return renamed


def restore_ignore_files(root: Path, placeholder: str = DEFAULT_PLACEHOLDER) -> List[Path]:
    """Rename every ``placeholder`` file under ``root`` to ``.gitignore``.

    Returns:
        The restored ``.gitignore`` paths
    """
    renamed = _rename_all(Path(root), placeholder, IGNORE_FILE_NAME)
    if renamed:
        logger.debug("Restored %d ignore files under %s", len(renamed), root)
    return renamed


def hide_ignore_files(root: Path, placeholder: str = DEFAULT_PLACEHOLDER) -> List[Path]:
    """Rename every ``.gitignore`` under ``root`` to ``placeholder``.

    Used at packaging time so ``restore_ignore_files`` can undo it.
    """
    return _rename_all(Path(root), IGNORE_FILE_NAME, placeholder)


# =============================================================================
# Materializer
# =============================================================================

class TemplateMaterializer:
    """Instantiate the bundled template at a project path.

    The bundled template itself is never modified: archives are staged into
    the destination, extracted from there, and the staged copy is removed.
    """

    def __init__(self, config: ScaffoldConfig):
        """Initialize materializer.

        Args:
            config: Resolved configuration holding the install root and
                packaging strategy
        """
        self.config = config

    @property
    def strategy(self) -> PackagingStrategy:
        return self.config.strategy

    @property
    def source(self) -> Path:
        return self.config.template_source

    def materialize(self, destination: Path) -> Path:
        """Populate ``destination`` with the template.

        Returns:
            The destination path

        Raises:
            MaterializationError: If the destination cannot be created or the
                template cannot be copied or extracted into it
        """
        destination = Path(destination)
        try:
            destination.mkdir(parents=True, exist_ok=True)
            if self.strategy.is_archive:
                self._extract(destination)
            else:
                copy_tree(self.source, destination)
            restore_ignore_files(destination, self.config.placeholder_ignore_name)
        except OSError as e:
            raise MaterializationError(
                f"Could not copy {self.source} to {destination}: {e}", source=self.source
            ) from e
        return destination

    def _extract(self, destination: Path) -> None:
        if not self.source.is_file():
            raise MaterializationError(
                f"Template archive not found: {self.source}", source=self.source
            )

        staged = destination / f".{self.source.name}"
        try:
            shutil.copyfile(self.source, staged)
            extract_archive(staged, destination, remove_archive=False)
        finally:
            staged.unlink(missing_ok=True)

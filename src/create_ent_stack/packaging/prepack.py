"""Build-time bundling of the ENT Stack template.

Fetches the tagged release named by the version marker and turns it into
the template that create-ent-stack materializes:

1. Read the version marker (fatal if missing or empty)
2. Check the tag exists through the GitHub API
3. Download the tag's zipball and extract it to ``source/``
4. Drop LICENSE, inject placeholder .env files
5. Rename .gitignore files to the placeholder name
6. Package ``source/`` for the chosen strategy and record it in bundle.json

Each step runs only after the previous one finished. A failure in a
required step raises PackagingError.
"""

import logging
import os
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Optional

import httpx
from tqdm import tqdm

from create_ent_stack.core.config import (
    PackagingStrategy,
    ScaffoldConfig,
    write_bundle_manifest,
)
from create_ent_stack.core.errors import MaterializationError, PackagingError
from create_ent_stack.core.materialize import extract_archive, hide_ignore_files
from create_ent_stack.core.readme import read_version_marker

logger = logging.getLogger(__name__)

REPO_OWNER = "ironexdev"
REPO_NAME = "ent-stack"
GITHUB_API = f"https://api.github.com/repos/{REPO_OWNER}/{REPO_NAME}"
ARCHIVE_URL = f"https://github.com/{REPO_OWNER}/{REPO_NAME}/archive/refs/tags/{{version}}.zip"

# Placeholder env files shipped next to the template, copied into source/
ENV_FILES = {
    "backend.env": "apps/backend/.env",
    "frontend.env": "apps/frontend/.env",
}

DEFAULT_TIMEOUT = 60


def github_token(cli_token: Optional[str] = None) -> Optional[str]:
    """Return a GitHub token from the argument or GH_TOKEN / GITHUB_TOKEN."""
    token = cli_token or os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")
    return token.strip() if token and token.strip() else None


def github_headers(token: Optional[str] = None) -> dict:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "create-ent-stack",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class Bundler:
    """Fetch a template release and package it into the install root."""

    def __init__(
        self,
        config: ScaffoldConfig,
        client: Optional[httpx.Client] = None,
        token: Optional[str] = None,
        show_progress: bool = True,
    ):
        """Initialize bundler.

        Args:
            config: Configuration whose install root and strategy are used
            client: HTTP client (a new one is created if omitted)
            token: GitHub token for API requests
            show_progress: Show a download progress bar
        """
        self.config = config
        self.install_root = config.install_root
        self.strategy = config.strategy
        self.client = client or httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
        self.headers = github_headers(github_token(token))
        self.show_progress = show_progress

    @property
    def source_dir(self) -> Path:
        return self.install_root / "source"

    def run(self) -> Path:
        """Run the whole pipeline.

        Returns:
            Path of the bundled template (archive or directory)

        Raises:
            VersionMarkerError: If the version marker is missing or empty
            PackagingError: If any required step fails
        """
        version = read_version_marker(self.config.version_path)

        self.check_version_exists(version)
        self.fetch_source(version)
        self.strip_license()
        self.inject_env_files()

        hidden = hide_ignore_files(self.source_dir, self.config.placeholder_ignore_name)
        logger.info("Renamed %d .gitignore files to %s", len(hidden), self.config.placeholder_ignore_name)

        bundled = self.package()
        write_bundle_manifest(self.install_root, self.strategy)
        return bundled

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def check_version_exists(self, version: str) -> None:
        """Fail unless ``version`` is one of the repository's tags."""
        url = f"{GITHUB_API}/tags"
        params = {"per_page": 100}

        try:
            while url:
                response = self.client.get(url, params=params, headers=self.headers)
                if response.status_code != 200:
                    raise PackagingError(
                        f"GitHub API returned status {response.status_code}: {response.reason_phrase}"
                    )
                tags = response.json()
                if not isinstance(tags, list) or not all(isinstance(tag, dict) for tag in tags):
                    raise PackagingError(f"Unexpected tag list from {url}: {str(tags)[:200]}")
                if any(tag.get("name") == version for tag in tags):
                    logger.info("Version %s exists in the repository.", version)
                    return
                url = response.links.get("next", {}).get("url")
                params = None
        except httpx.HTTPError as e:
            raise PackagingError(f"Could not list tags from {GITHUB_API}: {e}") from e
        except ValueError as e:
            raise PackagingError(f"Could not parse tag list: {e}") from e

        raise PackagingError(f"Version {version} does not exist in the repository.")

    def fetch_source(self, version: str) -> Path:
        """Download the tag's zipball and unpack it as ``source/``."""
        if self.source_dir.exists():
            logger.warning("The directory %s already exists. Removing it...", self.source_dir)
            try:
                shutil.rmtree(self.source_dir)
            except OSError as e:
                raise PackagingError(f"Could not remove {self.source_dir}: {e}") from e

        with tempfile.TemporaryDirectory(prefix="ent-stack-") as tmp:
            staging = Path(tmp)
            zip_path = staging / "source.zip"
            self.download(ARCHIVE_URL.format(version=version), zip_path)

            try:
                extract_archive(zip_path, staging / "extracted", remove_archive=True)
            except MaterializationError as e:
                raise PackagingError(str(e)) from e

            extracted = self._find_extracted_root(staging / "extracted", version)
            try:
                shutil.move(str(extracted), str(self.source_dir))
            except OSError as e:
                raise PackagingError(f"Could not move {extracted.name} to {self.source_dir}: {e}") from e

        logger.info("Download and extraction of %s successful", version)
        return self.source_dir

    def download(self, url: str, target: Path) -> Path:
        """Stream ``url`` into ``target``."""
        logger.info("Downloading %s", url)
        try:
            with self.client.stream("GET", url, headers=self.headers) as response:
                if response.status_code != 200:
                    raise PackagingError(f"Download of {url} failed with status {response.status_code}")
                total = int(response.headers.get("content-length", 0)) or None
                with open(target, "wb") as f, tqdm(
                    total=total,
                    unit="B",
                    unit_scale=True,
                    desc="Downloading",
                    disable=not self.show_progress,
                ) as pbar:
                    for chunk in response.iter_bytes(chunk_size=8192):
                        f.write(chunk)
                        pbar.update(len(chunk))
        except (httpx.HTTPError, OSError) as e:
            target.unlink(missing_ok=True)
            raise PackagingError(f"Error downloading {url}: {e}") from e
        return target

    def strip_license(self) -> None:
        """Remove the template's LICENSE file."""
        license_path = self.source_dir / "LICENSE"
        try:
            license_path.unlink()
        except OSError as e:
            logger.warning("Error deleting LICENSE file: %s", e)

    def inject_env_files(self) -> None:
        """Copy the placeholder env files into the template."""
        for name, relative in ENV_FILES.items():
            source = self.install_root / name
            target = self.source_dir / relative
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(source, target)
            except OSError as e:
                logger.warning("Error copying %s to %s: %s", name, target, e)

    def package(self) -> Path:
        """Package ``source/`` for the configured strategy."""
        self._remove_stale_bundles()

        if self.strategy is PackagingStrategy.DIRECTORY:
            logger.info("Keeping %s as a plain directory", self.source_dir)
            return self.source_dir

        bundle_path = self.install_root / self.strategy.source_name
        try:
            if self.strategy is PackagingStrategy.TAR:
                with tarfile.open(bundle_path, "w:gz") as tar:
                    tar.add(self.source_dir, arcname=".")
            else:
                with zipfile.ZipFile(bundle_path, "w", zipfile.ZIP_DEFLATED) as zf:
                    for path in sorted(self.source_dir.rglob("*")):
                        zf.write(path, path.relative_to(self.source_dir).as_posix())
        except (OSError, tarfile.TarError, zipfile.BadZipFile) as e:
            raise PackagingError(f"Error packaging source directory: {e}") from e
        logger.info("Packaged source directory to %s", bundle_path.name)

        try:
            shutil.rmtree(self.source_dir)
        except OSError as e:
            logger.warning("Error removing source directory: %s", e)

        return bundle_path

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_extracted_root(self, extracted: Path, version: str) -> Path:
        expected = extracted / f"{REPO_NAME}-{version}"
        if expected.is_dir():
            return expected

        # Tags with a leading "v" lose it in the zipball's root folder name
        children = [child for child in extracted.iterdir() if child.is_dir()]
        if len(children) == 1:
            return children[0]
        raise PackagingError(f"Could not find {expected.name} in the downloaded archive")

    def _remove_stale_bundles(self) -> None:
        for strategy in PackagingStrategy:
            if strategy is self.strategy or not strategy.is_archive:
                continue
            stale = self.install_root / strategy.source_name
            if stale.exists():
                logger.info("Removing stale bundle %s", stale)
                try:
                    stale.unlink()
                except OSError as e:
                    raise PackagingError(f"Could not remove stale bundle {stale}: {e}") from e

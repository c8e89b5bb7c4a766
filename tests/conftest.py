"""Shared test fixtures for create-ent-stack.

Provides:
- template_dir: A small ENT Stack-like template tree
- make_install_root: Factory building an install root for a packaging strategy
- cli_runner: Click CliRunner
"""

import io
import json
import shutil
import tarfile
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from create_ent_stack.core.config import PackagingStrategy, write_bundle_manifest
from create_ent_stack.ui import THEME

PACKAGE_JSON = {
    "name": "ent-stack",
    "version": "9.9.9",
    "author": "ironexdev",
    "license": "MIT",
    "description": "ENT Stack monorepo",
    "private": True,
    "scripts": {"fire": "node fire.js"},
}

BACKEND_ENV = "SITE_NAME=ENT Stack\nPORT=3001\nJWT_SECRET=changeme\n"
FRONTEND_ENV = "NEXT_PUBLIC_SITE_NAME=ENT Stack\nJWT_SECRET=changeme\n"

MANIFEST_TS = """export default function manifest() {
  return {
    name: "ENT Stack",
    short_name: 'ENT',
    start_url: "/",
  }
}
"""

LAYOUT_TSX = """export const metadata = {
  appleWebApp: {
    title: "ENT Stack",
  },
}
"""


@pytest.fixture
def template_dir(tmp_path):
    """Create a template tree shaped like the bundled ENT Stack source."""
    root = tmp_path / "template"
    (root / "apps/backend").mkdir(parents=True)
    (root / "apps/frontend/src/app").mkdir(parents=True)

    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2))
    (root / "apps/backend/.env").write_text(BACKEND_ENV)
    (root / "apps/frontend/.env").write_text(FRONTEND_ENV)
    (root / "apps/frontend/src/app/manifest.ts").write_text(MANIFEST_TS)
    (root / "apps/frontend/src/app/layout.tsx").write_text(LAYOUT_TSX)
    (root / "apps/frontend/public").mkdir()
    (root / "apps/frontend/public/favicon.ico").write_bytes(bytes(range(256)))

    (root / "keep.gitignore").write_text("node_modules\n")
    (root / "apps/backend/keep.gitignore").write_text("dist\n")
    return root


def _build_archive(source: Path, target: Path, strategy: PackagingStrategy) -> None:
    if strategy is PackagingStrategy.TAR:
        with tarfile.open(target, "w:gz") as tar:
            tar.add(source, arcname=".")
    else:
        with zipfile.ZipFile(target, "w") as zf:
            for path in sorted(source.rglob("*")):
                zf.write(path, path.relative_to(source).as_posix())


@pytest.fixture
def make_install_root(tmp_path, template_dir):
    """Factory: build an install root bundling ``template_dir``.

    Usage:
        root = make_install_root(PackagingStrategy.TAR)
        root = make_install_root("zip", version=None)
    """
    def factory(strategy=PackagingStrategy.DIRECTORY, version="1.4.2", manifest=True):
        strategy = PackagingStrategy(strategy)
        root = tmp_path / f"install-{strategy.value}"
        root.mkdir()

        if strategy is PackagingStrategy.DIRECTORY:
            shutil.copytree(template_dir, root / "source")
        else:
            _build_archive(template_dir, root / strategy.source_name, strategy)

        if version is not None:
            (root / "ent-stack-version.txt").write_text(f"{version}\n")
        if manifest:
            write_bundle_manifest(root, strategy)
        return root

    return factory


@pytest.fixture
def console():
    """Themed console writing into a buffer (read with ``console.file.getvalue()``)."""
    return Console(file=io.StringIO(), theme=THEME, width=200, soft_wrap=True)


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()

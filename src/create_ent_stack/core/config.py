"""Configuration for create-ent-stack.

The install root is the directory that ships next to the package and holds
the bundled template. It contains:
- source/, source.tar.gz or source.zip  → the template itself
- ent-stack-version.txt                 → version marker stamped into READMEs
- backend.env / frontend.env            → env files injected at packaging time
- bundle.json                           → strategy chosen by the bundler

Everything the scaffolder needs from the environment is resolved here once
and passed explicitly to the materializer and orchestrator.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, field
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

HOME_ENV = "CREATE_ENT_STACK_HOME"
BUNDLE_MANIFEST = "bundle.json"
DEFAULT_INSTALL_ROOT = Path(__file__).resolve().parent.parent / "bundle"

REPOSITORY_URL = "https://github.com/ironexdev/ent-stack"
DOCS_URL = "https://ironexdev.github.io/ent-stack-documentation/ent-stack/setup"


class PackagingStrategy(str, Enum):
    """How the template is bundled alongside the package."""

    DIRECTORY = "directory"
    TAR = "tar"
    ZIP = "zip"

    @property
    def source_name(self) -> str:
        """File or directory name of the bundled template."""
        return {
            PackagingStrategy.DIRECTORY: "source",
            PackagingStrategy.TAR: "source.tar.gz",
            PackagingStrategy.ZIP: "source.zip",
        }[self]

    @property
    def is_archive(self) -> bool:
        return self is not PackagingStrategy.DIRECTORY


def detect_strategy(install_root: Path) -> PackagingStrategy:
    """Pick a strategy from whichever template source exists.

    Archives win over a plain directory; tar wins over zip. Falls back to
    ``DIRECTORY`` when nothing is bundled yet.
    """
    for strategy in (PackagingStrategy.TAR, PackagingStrategy.ZIP):
        if (install_root / strategy.source_name).is_file():
            return strategy
    return PackagingStrategy.DIRECTORY


@dataclass
class ScaffoldConfig:
    """Resolved settings for one scaffolding run."""

    install_root: Path = field(default_factory=lambda: DEFAULT_INSTALL_ROOT)
    strategy: PackagingStrategy = PackagingStrategy.TAR
    version_file: str = "ent-stack-version.txt"
    placeholder_ignore_name: str = "keep.gitignore"
    readme_uppercase: bool = True
    bootstrap_command: str = "pnpm fire"
    repository_url: str = REPOSITORY_URL
    docs_url: str = DOCS_URL

    def __post_init__(self):
        self.install_root = Path(self.install_root)
        self.strategy = PackagingStrategy(self.strategy)

    @property
    def template_source(self) -> Path:
        """Path of the bundled template for the configured strategy."""
        return self.install_root / self.strategy.source_name

    @property
    def version_path(self) -> Path:
        return self.install_root / self.version_file

    def to_dict(self) -> dict:
        data = asdict(self)
        data["install_root"] = str(self.install_root)
        data["strategy"] = self.strategy.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ScaffoldConfig":
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })


def resolve_install_root(install_root: Optional[Path] = None) -> Path:
    """Resolve the install root from an argument, the environment, or the package."""
    if install_root is not None:
        return Path(install_root).expanduser().resolve()
    env_root = os.environ.get(HOME_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return DEFAULT_INSTALL_ROOT


def load_config(install_root: Optional[Path] = None) -> ScaffoldConfig:
    """Build a ScaffoldConfig for the given (or default) install root.

    ``bundle.json`` written by the bundler is overlaid when present. A
    malformed manifest is logged and ignored; the strategy is then detected
    from the files on disk.
    """
    root = resolve_install_root(install_root)
    data: dict = {}

    manifest = root / BUNDLE_MANIFEST
    if manifest.is_file():
        try:
            loaded = json.loads(manifest.read_text(encoding="utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("bundle manifest must be a JSON object")
            data.update(loaded)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", manifest, e)
            data = {}

    data["install_root"] = root
    if "strategy" in data:
        try:
            data["strategy"] = PackagingStrategy(data["strategy"])
        except ValueError:
            logger.warning("Unknown packaging strategy %r in %s", data["strategy"], manifest)
            del data["strategy"]
    if "strategy" not in data:
        data["strategy"] = detect_strategy(root)

    config = ScaffoldConfig.from_dict(data)
    logger.debug("Loaded config: %s", config.to_dict())
    return config


def write_bundle_manifest(install_root: Path, strategy: PackagingStrategy) -> Path:
    """Record the strategy chosen at build time."""
    manifest = Path(install_root) / BUNDLE_MANIFEST
    manifest.write_text(
        json.dumps({"strategy": strategy.value}, indent=2) + "\n",
        encoding="utf-8",
    )
    return manifest

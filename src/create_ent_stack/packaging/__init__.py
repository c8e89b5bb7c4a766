"""Build-time tooling: bundling the template and bumping its version."""

from create_ent_stack.packaging.prepack import Bundler
from create_ent_stack.packaging.version import (
    is_semver,
    update_readme_version,
    write_version_marker,
)

__all__ = [
    "Bundler",
    "is_semver",
    "update_readme_version",
    "write_version_marker",
]

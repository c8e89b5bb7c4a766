"""Targeted rewrites of a freshly materialized ENT Stack project.

Each step edits one known file. Steps are independent: a missing target is
skipped and a failing target is reported, and in both cases the remaining
steps still run.

package.json is parsed and re-serialized. Every other target gets a
first-match-only regex replacement, so later duplicate keys in a file keep
their original values.
"""

import base64
import json
import logging
import re
import secrets
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
BACKEND_ENV = "apps/backend/.env"
FRONTEND_ENV = "apps/frontend/.env"
APP_MANIFEST = "apps/frontend/src/app/manifest.ts"
APP_LAYOUT = "apps/frontend/src/app/layout.tsx"

INITIAL_VERSION = "0.0.1"
REMOVED_PACKAGE_KEYS = ("author", "license", "description")
SECRET_BYTES = 32


def generate_secret(length: int = SECRET_BYTES) -> str:
    """Return ``length`` random bytes, base64 encoded."""
    return base64.b64encode(secrets.token_bytes(length)).decode("ascii")


def replace_first(text: str, pattern: str, replacement: str) -> str:
    """Replace the first match of ``pattern`` with ``replacement`` taken literally."""
    return re.sub(pattern, lambda _match: replacement, text, count=1)


class RewriteStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RewriteResult:
    """Outcome of a single rewrite step."""
    step: str
    path: Path
    status: RewriteStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is RewriteStatus.APPLIED


class TemplateRewriter:
    """Apply project-specific edits to a materialized template."""

    def __init__(self, project_root: Path, project_name: str, secret: Optional[str] = None):
        """Initialize rewriter.

        Args:
            project_root: Root of the materialized project
            project_name: Validated project name
            secret: JWT secret shared by both env files (generated if omitted)
        """
        self.project_root = Path(project_root)
        self.project_name = project_name
        self.secret = secret if secret is not None else generate_secret()

    def rewrite_all(self) -> List[RewriteResult]:
        """Run every rewrite step in order."""
        return [
            self.rewrite_package_json(),
            self.rewrite_backend_env(),
            self.rewrite_frontend_env(),
            self.rewrite_app_manifest(),
            self.rewrite_layout(),
        ]

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def rewrite_package_json(self) -> RewriteResult:
        def edit(text: str) -> str:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("package.json is not a JSON object")
            data["name"] = self.project_name
            data["version"] = INITIAL_VERSION
            for key in REMOVED_PACKAGE_KEYS:
                data.pop(key, None)
            return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

        return self._apply("package.json", PACKAGE_JSON, edit)

    def rewrite_backend_env(self) -> RewriteResult:
        def edit(text: str) -> str:
            text = replace_first(text, r"SITE_NAME=.*", f"SITE_NAME={self.project_name}")
            return replace_first(text, r"JWT_SECRET=.*", f"JWT_SECRET={self.secret}")

        return self._apply("backend .env", BACKEND_ENV, edit)

    def rewrite_frontend_env(self) -> RewriteResult:
        def edit(text: str) -> str:
            text = replace_first(
                text, r"NEXT_PUBLIC_SITE_NAME=.*", f"NEXT_PUBLIC_SITE_NAME={self.project_name}"
            )
            return replace_first(text, r"JWT_SECRET=.*", f"JWT_SECRET={self.secret}")

        return self._apply("frontend .env", FRONTEND_ENV, edit)

    def rewrite_app_manifest(self) -> RewriteResult:
        def edit(text: str) -> str:
            text = replace_first(text, r"""name:\s*["'][^"']*["']""", f'name: "{self.project_name}"')
            return replace_first(
                text, r"""short_name:\s*["'][^"']*["']""", f'short_name: "{self.project_name}"'
            )

        return self._apply("manifest.ts", APP_MANIFEST, edit)

    def rewrite_layout(self) -> RewriteResult:
        def edit(text: str) -> str:
            return replace_first(text, r"""title:\s*["'][^"']*["']""", f'title: "{self.project_name}"')

        return self._apply("layout.tsx", APP_LAYOUT, edit)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _apply(self, step: str, relative_path: str, edit: Callable[[str], str]) -> RewriteResult:
        path = self.project_root / relative_path

        if not path.is_file():
            logger.warning("Skipping %s: %s not found", step, path)
            return RewriteResult(step, path, RewriteStatus.SKIPPED, "file not found")

        try:
            content = path.read_text(encoding="utf-8")
            path.write_text(edit(content), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.warning("Error updating %s (%s): %s", step, path, e)
            return RewriteResult(step, path, RewriteStatus.FAILED, str(e))

        logger.debug("Updated %s", path)
        return RewriteResult(step, path, RewriteStatus.APPLIED)

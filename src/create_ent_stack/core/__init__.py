"""Core modules for create-ent-stack.

This package contains the scaffolding pipeline used by the CLI:
- config: Install root, packaging strategy and constants
- naming: Project name validation and prompt
- materialize: Template copy / archive extraction
- rewriter: Per-file project personalization
- readme: README generation
- scaffold: Orchestration of a whole run
"""

from create_ent_stack.core.config import (
    PackagingStrategy,
    ScaffoldConfig,
    load_config,
)

from create_ent_stack.core.errors import (
    ScaffoldError,
    InputStreamError,
    MaterializationError,
    VersionMarkerError,
    PackagingError,
)

from create_ent_stack.core.naming import (
    PACKAGE_NAME_PATTERN,
    is_valid_project_name,
    prompt_project_name,
)

from create_ent_stack.core.materialize import (
    TemplateMaterializer,
    copy_tree,
    extract_archive,
    hide_ignore_files,
    restore_ignore_files,
)

from create_ent_stack.core.rewriter import (
    RewriteResult,
    RewriteStatus,
    TemplateRewriter,
    generate_secret,
)

from create_ent_stack.core.scaffold import (
    ScaffoldOrchestrator,
    ScaffoldResult,
    ScaffoldState,
)

__all__ = [
    # Config
    "PackagingStrategy",
    "ScaffoldConfig",
    "load_config",
    # Errors
    "ScaffoldError",
    "InputStreamError",
    "MaterializationError",
    "VersionMarkerError",
    "PackagingError",
    # Naming
    "PACKAGE_NAME_PATTERN",
    "is_valid_project_name",
    "prompt_project_name",
    # Materialization
    "TemplateMaterializer",
    "copy_tree",
    "extract_archive",
    "hide_ignore_files",
    "restore_ignore_files",
    # Rewriting
    "RewriteResult",
    "RewriteStatus",
    "TemplateRewriter",
    "generate_secret",
    # Orchestration
    "ScaffoldOrchestrator",
    "ScaffoldResult",
    "ScaffoldState",
]

"""Exceptions for create-ent-stack.

Only the conditions that end a run are exceptions. Per-file rewrite and
README failures are logged and reported, never raised.
"""


class ScaffoldError(Exception):
    """Base exception for fatal scaffolding failures."""
    pass


class InputStreamError(ScaffoldError):
    """The interactive input stream closed or failed."""
    pass


class MaterializationError(ScaffoldError):
    """The template could not be extracted into the project directory."""

    def __init__(self, message: str, source=None):
        super().__init__(message)
        self.source = source


class VersionMarkerError(Exception):
    """The version marker file is missing or empty."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class PackagingError(Exception):
    """A required step of the bundling pipeline failed."""
    pass

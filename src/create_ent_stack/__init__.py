"""create-ent-stack - Scaffold new ENT Stack projects from a bundled template."""

__version__ = "1.0.0"

"""Ink content scaffolding engine.

This package materializes content types (blog posts, FAQ entries, team members,
or user-defined types) into a Markdown-native Eleventy project, and removes
exactly what it added when asked to.

Content types and components are plain data. The scaffolding functions take an
explicit ``Project`` value plus a definition, apply idempotent filesystem
mutations, and return structured reports that the CLI renders.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

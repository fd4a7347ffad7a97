"""Utility functions for Ink.

Small string and filesystem helpers shared by the scaffolding modules.

Key functions:
    slugify: Convert a title to a URL slug.
    capitalize_field: Turn a field name into a display label.
    atomic_write_text: Write a file in one complete step.
    entry_files: List the Markdown entries of a content directory.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert a title to a URL slug.

    Lower-cases the text, collapses every run of non-alphanumeric characters
    into a single hyphen and trims hyphens from both ends.

    Args:
        text: Title or label.

    Returns:
        URL-friendly slug, possibly empty.

    Examples:
        >>> slugify("Jane Doe")
        'jane-doe'

        >>> slugify("5 Tips!!")
        '5-tips'
    """
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def capitalize_field(name: str) -> str:
    """Convert a frontmatter field name into a display label.

    Examples:
        >>> capitalize_field("price_note")
        'Price note'
    """
    if not name:
        return name
    return name[0].upper() + name[1:].replace("_", " ").replace("-", " ")


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file atomically.

    Writes to a temporary file in the same directory, then renames it over the
    target, so readers never see partial content.

    Args:
        path: Destination file.
        content: Full file content.
        encoding: Text encoding.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def entry_files(content_dir: Path) -> list[Path]:
    """Return the Markdown entry files in a content directory, sorted by name.

    Missing directories yield an empty list.
    """
    if not content_dir.is_dir():
        return []
    return sorted(
        p for p in content_dir.iterdir() if p.is_file() and p.suffix.lower() == ".md"
    )


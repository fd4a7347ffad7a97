"""Read-only views over a project's content.

Key functions:
- summarize_types: One row per content directory with its entry count.
- list_entries: One row per entry of a content directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from . import registry
from .custom_types import load_custom_types
from .frontmatter import read_entry
from .project import Project
from .utils import entry_files

# Directories under content/ that hold no content type
_SKIPPED_DIRS = frozenset({"pages"})


@dataclass
class TypeSummary:
    """A content directory found in the project.

    Attributes:
        dir: Directory name under ``content/``.
        type_id: Matching type identifier, or None if no type stores there.
        label: Display name (the directory name when no type matches).
        count: Number of entries.
        custom: True for user-defined types.
    """

    dir: str
    type_id: str | None
    label: str
    count: int
    custom: bool = False


@dataclass
class EntrySummary:
    slug: str
    title: str
    date: str
    published: bool


def summarize_types(project: Project) -> list[TypeSummary]:
    """Summarize every content directory, sorted by name."""
    content_root = project.root / "content"
    if not content_root.is_dir():
        return []
    custom = load_custom_types(project)
    summaries = []
    for path in sorted(p for p in content_root.iterdir() if p.is_dir()):
        if path.name in _SKIPPED_DIRS or path.name.startswith("."):
            continue
        match = registry.type_for_dir(path.name, custom)
        if match:
            type_id, definition = match
            summaries.append(TypeSummary(path.name, type_id, definition.label, len(entry_files(path)), definition.custom))
        else:
            summaries.append(TypeSummary(path.name, None, path.name, len(entry_files(path))))
    return summaries


def _as_text(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value)


def list_entries(project: Project, dir_name: str) -> list[EntrySummary]:
    """List the entries stored in ``content/<dir_name>/``, sorted by file name.

    The title falls back to the file stem; an entry counts as published
    unless its frontmatter says ``published: false``.
    """
    rows = []
    for path in entry_files(project.content_dir(dir_name)):
        data = read_entry(path).data
        rows.append(
            EntrySummary(
                slug=path.stem,
                title=_as_text(data.get("title")) or path.stem,
                date=_as_text(data.get("date")),
                published=data.get("published") is not False,
            )
        )
    return rows

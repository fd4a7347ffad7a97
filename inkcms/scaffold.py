"""Scaffolding and removal of content types and entries.

Given a ``Project`` and a ``ContentTypeDefinition``, ``scaffold`` applies the
ordered set of filesystem mutations a content type needs and ``remove`` takes
them back out. Every step is idempotent: a target that already exists (or is
already gone) is recorded as skipped rather than overwritten (or treated as
an error).

Results are returned as reports made of ``Step`` records; nothing here writes
to the console.

Key functions:
- scaffold: Materialize a content type into a project.
- remove: Delete a content type's files and registry entries.
- add_entry: Create one entry from the type's sample builder.
- delete_entry: Delete one entry and its media files.
- entry_path: Locate an entry by slug, rejecting malformed slugs.
"""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import EntryExistsError, EntryNotFoundError, InkError, InvalidSlugError
from .project import (
    Project,
    add_nav_entry,
    remove_nav_entry,
    remove_type_registry,
    upsert_type_registry,
)
from .schema import ContentTypeDefinition
from .utils import atomic_write_text, entry_files, slugify

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """What happened to one step's target."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    REFUSED = "refused"
    REMOVED = "removed"
    ABSENT = "absent"
    RETAINED = "retained"


@dataclass
class Step:
    """One mutation attempted by an operation.

    Attributes:
        action: Short description of the step (e.g. "layout").
        target: Project-relative path or registry name.
        outcome: What happened.
        detail: Optional explanation, mostly for skips and retentions.
    """

    action: str
    target: str
    outcome: Outcome
    detail: str = ""


@dataclass
class ScaffoldReport:
    """Result of ``scaffold``, ``add_entry``, component installs or sample generation.

    Attributes:
        type_id: Identifier the type was requested under.
        label: Display name of the type.
        steps: Steps in execution order.
        refused: True when the operation declined to touch anything.
        reason: Why it was refused.
    """

    type_id: str
    label: str
    steps: list[Step] = field(default_factory=list)
    refused: bool = False
    reason: str = ""

    @property
    def changed(self) -> bool:
        return any(s.outcome in (Outcome.CREATED, Outcome.UPDATED) for s in self.steps)


@dataclass
class RemovalReport:
    """Result of ``remove`` or ``delete_entry``.

    A removal that left something in place (a non-empty media directory or
    an edited component template) is a partial success: see ``retained``.
    """

    type_id: str
    label: str
    steps: list[Step] = field(default_factory=list)

    @property
    def removed(self) -> list[Step]:
        return [s for s in self.steps if s.outcome is Outcome.REMOVED]

    @property
    def retained(self) -> list[Step]:
        return [s for s in self.steps if s.outcome is Outcome.RETAINED]

    @property
    def partial(self) -> bool:
        return bool(self.retained)


@dataclass
class _PlannedStep:
    action: str
    target: str
    apply: Callable[[], Outcome]


def write_if_absent(path: Path, content: str) -> Outcome:
    if path.exists():
        return Outcome.SKIPPED
    atomic_write_text(path, content)
    logger.debug("Created %s", path)
    return Outcome.CREATED


def ensure_dir(path: Path) -> Outcome:
    if path.is_dir():
        return Outcome.SKIPPED
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Created directory %s", path)
    return Outcome.CREATED


def defaults_json(definition: ContentTypeDefinition) -> str:
    return json.dumps(dict(definition.directory_defaults), indent=2, ensure_ascii=False)


def _entry_slug(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise InkError(f'Cannot derive a file name from title "{title}"')
    return slug


def _plan_scaffold(project: Project, definition: ContentTypeDefinition) -> Iterator[_PlannedStep]:
    content_dir = project.content_dir(definition.dir)
    rel = project.relative

    yield _PlannedStep("content directory", rel(content_dir) + "/", lambda: ensure_dir(content_dir))

    defaults_path = project.defaults_path(definition.dir)
    yield _PlannedStep(
        "directory defaults",
        rel(defaults_path),
        lambda: write_if_absent(defaults_path, defaults_json(definition)),
    )

    if definition.layout_template:
        layout_path = project.layouts_dir / definition.layout_name
        yield _PlannedStep(
            "layout", rel(layout_path), lambda: write_if_absent(layout_path, definition.layout_template)
        )

    for extra in definition.additional_layouts:
        extra_path = project.layouts_dir / extra.filename
        yield _PlannedStep(
            "layout",
            rel(extra_path),
            lambda path=extra_path, content=extra.content: write_if_absent(path, content),
        )

    sample_title = definition.sample_title
    sample_slug = slugify(sample_title) or "sample-entry"
    sample_path = content_dir / f"{sample_slug}.md"
    yield _PlannedStep(
        "sample entry",
        rel(sample_path),
        lambda: write_if_absent(sample_path, definition.sample_entry(sample_title, sample_slug)),
    )

    if definition.archive_page:
        archive = definition.archive_page
        archive_path = project.pages_dir / archive.filename
        yield _PlannedStep("archive page", rel(archive_path), lambda: write_if_absent(archive_path, archive.content))

    yield _PlannedStep(
        "type registry",
        f"{rel(project.content_types_path)} [{definition.tag}]",
        lambda: Outcome.UPDATED if upsert_type_registry(project, definition) else Outcome.SKIPPED,
    )

    if definition.nav_entry:
        nav_entry = definition.nav_entry
        yield _PlannedStep(
            "navigation",
            f"{rel(project.navigation_path)} [{nav_entry.url}]",
            lambda: Outcome.UPDATED if add_nav_entry(project, nav_entry) else Outcome.SKIPPED,
        )

    media_dir = project.media_dir(definition.dir)
    yield _PlannedStep("media directory", rel(media_dir) + "/", lambda: ensure_dir(media_dir))


def scaffold(project: Project, definition: ContentTypeDefinition, type_id: str) -> ScaffoldReport:
    """Materialize a content type into a project.

    Creates, in order: the content directory, the per-directory defaults
    file, the layout (when the type has one), additional layouts, a sample
    entry, the archive page, the type-registry entry, the navigation entry and
    the media directory. Targets that already exist are skipped.

    If the content directory already holds an entry, nothing is touched: the
    report is marked refused and every step is reported as skipped.

    Args:
        project: Target project.
        definition: Content type to scaffold.
        type_id: Identifier the type was requested under.

    Returns:
        ScaffoldReport describing each step.
    """
    report = ScaffoldReport(type_id, definition.label)
    plan = list(_plan_scaffold(project, definition))

    existing = entry_files(project.content_dir(definition.dir))
    if existing:
        report.refused = True
        report.reason = (
            f'Content type "{type_id}" already exists at content/{definition.dir}/ '
            f"({len(existing)} entries)"
        )
        report.steps = [Step(p.action, p.target, Outcome.SKIPPED, report.reason) for p in plan]
        logger.debug("Refusing to scaffold %s: %s", type_id, report.reason)
        return report

    for planned in plan:
        report.steps.append(Step(planned.action, planned.target, planned.apply()))
    logger.debug("Scaffolded %s into %s", type_id, project.root)
    return report


def _unlink(path: Path) -> Outcome:
    if not path.is_file():
        return Outcome.ABSENT
    path.unlink()
    logger.debug("Deleted %s", path)
    return Outcome.REMOVED


def remove(project: Project, definition: ContentTypeDefinition, type_id: str) -> RemovalReport:
    """Delete everything a content type added to a project.

    The caller is responsible for confirming with the user first. Removes the
    content directory (recursively), the type's layouts unless shared, the
    type-registry and navigation entries and the archive page. The media
    directory is removed only if empty; otherwise it is kept and reported as
    retained.

    Args:
        project: Target project.
        definition: Content type to remove.
        type_id: Identifier the type was requested under.

    Returns:
        RemovalReport describing each step.
    """
    report = RemovalReport(type_id, definition.label)
    rel = project.relative
    add = report.steps.append

    content_dir = project.content_dir(definition.dir)
    if content_dir.is_dir():
        shutil.rmtree(content_dir)
        logger.debug("Deleted directory %s", content_dir)
        add(Step("content directory", rel(content_dir) + "/", Outcome.REMOVED))
    else:
        add(Step("content directory", rel(content_dir) + "/", Outcome.ABSENT))

    layout_names = [definition.layout_name, *(extra.filename for extra in definition.additional_layouts)]
    for name in layout_names:
        layout_path = project.layouts_dir / name
        if name in project.shared_layouts:
            add(Step("layout", rel(layout_path), Outcome.SKIPPED, "shared layout"))
        else:
            add(Step("layout", rel(layout_path), _unlink(layout_path)))

    removed = remove_type_registry(project, definition.tag)
    add(
        Step(
            "type registry",
            f"{rel(project.content_types_path)} [{definition.tag}]",
            Outcome.REMOVED if removed else Outcome.ABSENT,
        )
    )

    if definition.nav_entry:
        removed = remove_nav_entry(project, definition.nav_entry.url)
        add(
            Step(
                "navigation",
                f"{rel(project.navigation_path)} [{definition.nav_entry.url}]",
                Outcome.REMOVED if removed else Outcome.ABSENT,
            )
        )

    if definition.archive_page:
        archive_path = project.pages_dir / definition.archive_page.filename
        add(Step("archive page", rel(archive_path), _unlink(archive_path)))

    media_dir = project.media_dir(definition.dir)
    target = rel(media_dir) + "/"
    if not media_dir.is_dir():
        add(Step("media directory", target, Outcome.ABSENT))
    else:
        remaining = list(media_dir.iterdir())
        if remaining:
            add(Step("media directory", target, Outcome.RETAINED, f"{len(remaining)} files remaining"))
        else:
            media_dir.rmdir()
            logger.debug("Deleted directory %s", media_dir)
            add(Step("media directory", target, Outcome.REMOVED))
    return report


def add_entry(project: Project, definition: ContentTypeDefinition, type_id: str, title: str) -> ScaffoldReport:
    """Create one entry for a content type.

    Ensures the content directory and its defaults file exist, then writes
    ``content/<dir>/<slug>.md`` from the type's sample builder.

    Raises:
        EntryExistsError: When an entry with the same slug already exists.
            Nothing is written in that case.
    """
    slug = _entry_slug(title)
    content_dir = project.content_dir(definition.dir)
    entry_path = content_dir / f"{slug}.md"
    if entry_path.exists():
        raise EntryExistsError(project.relative(entry_path))

    report = ScaffoldReport(type_id, definition.label)
    report.steps.append(Step("content directory", project.relative(content_dir) + "/", ensure_dir(content_dir)))
    defaults_path = project.defaults_path(definition.dir)
    report.steps.append(
        Step("directory defaults", project.relative(defaults_path), write_if_absent(defaults_path, defaults_json(definition)))
    )
    report.steps.append(
        Step("entry", project.relative(entry_path), write_if_absent(entry_path, definition.sample_entry(title, slug)))
    )
    return report


def entry_path(project: Project, definition: ContentTypeDefinition, slug: str) -> Path:
    """Return the path of the entry named ``slug`` in the type's directory.

    Raises:
        InvalidSlugError: When ``slug`` is not in slug form, which keeps
            paths like ``../pages/faq`` out of the type directory.
    """
    if not slug or slugify(slug) != slug:
        raise InvalidSlugError(slug, "use lower-case letters, digits and hyphens")
    return project.content_dir(definition.dir) / f"{slug}.md"


def delete_entry(project: Project, definition: ContentTypeDefinition, type_id: str, slug: str) -> RemovalReport:
    """Delete one entry plus every media file named ``<slug>.<ext>``.

    Raises:
        InvalidSlugError: When ``slug`` is not in slug form.
        EntryNotFoundError: When the entry file does not exist.
    """
    path = entry_path(project, definition, slug)
    if not path.is_file():
        raise EntryNotFoundError(project.relative(path))

    report = RemovalReport(type_id, definition.label)
    report.steps.append(Step("entry", project.relative(path), _unlink(path)))

    media_dir = project.media_dir(definition.dir)
    if media_dir.is_dir():
        prefix = f"{slug}."
        for media_file in sorted(media_dir.iterdir()):
            if media_file.is_file() and media_file.name.startswith(prefix):
                report.steps.append(Step("media file", project.relative(media_file), _unlink(media_file)))
    return report

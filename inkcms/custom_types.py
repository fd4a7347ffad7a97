"""User-defined content types.

A ``CustomTypeConfig`` is what the user authors: a label, a slug, a collection
tag and a field list. ``build_custom_type`` turns it into a
``ContentTypeDefinition`` with the same shape as a built-in type, including a
render template generated from the field list.

Configs are persisted in ``ink-custom-types.json`` at the project root, keyed
by slug. The store is optional: a fresh project simply has no custom types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .errors import DuplicateCustomTypeError, InvalidSlugError
from .frontmatter import compose
from .project import PACKAGE_TEMPLATES_DIR, Project, read_json, write_json
from .registry import CONTENT_TYPES, PLUGINS, make_archive_page
from .schema import ContentTypeDefinition, FieldKind, FrontmatterField, NavEntry
from .utils import capitalize_field, entry_files, slugify

logger = logging.getLogger(__name__)

# Content directories no custom type may claim
RESERVED_DIRS = frozenset({"pages"})

# Fields the generated layout never renders on their own
RESERVED_FIELDS = frozenset({"title", "slug", "published", "order"})

# Nunjucks uses {{ }} and {% %}; generation uses square brackets so those pass through.
_env = Environment(
    loader=FileSystemLoader(str(PACKAGE_TEMPLATES_DIR / "scaffold")),
    block_start_string="[%",
    block_end_string="%]",
    variable_start_string="[[",
    variable_end_string="]]",
    comment_start_string="[#",
    comment_end_string="#]",
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
    undefined=StrictUndefined,
)


@dataclass(frozen=True)
class CustomTypeConfig:
    """A user-authored content type.

    Attributes:
        label: Display name, e.g. "Testimonials".
        slug: Identifier, storage directory and store key.
        tag: Collection key in the type registry.
        fields: Declared frontmatter fields.
        sort_key: ``"date"`` or ``"order"``.
        add_to_nav: Whether scaffolding adds a navigation entry.
    """

    label: str
    slug: str
    tag: str
    fields: tuple[FrontmatterField, ...] = field(default_factory=tuple)
    sort_key: str = "order"
    add_to_nav: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the store format."""
        return {
            "label": self.label,
            "slug": self.slug,
            "tag": self.tag,
            "fields": [f.to_dict() for f in self.fields],
            "sort": self.sort_key,
            "addToNav": self.add_to_nav,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomTypeConfig:
        """Deserialize from the store format."""
        slug = str(data["slug"])
        return cls(
            label=str(data.get("label") or slug),
            slug=slug,
            tag=str(data.get("tag") or slug),
            fields=tuple(
                FrontmatterField.from_dict(f)
                for f in data.get("fields") or ()
                if isinstance(f, dict) and (f.get("name") or f.get("key"))
            ),
            sort_key=str(data.get("sort") or "order"),
            add_to_nav=bool(data.get("addToNav", True)),
        )


def default_for_kind(kind: FieldKind) -> Any:
    """Default sample value for a field kind."""
    if kind is FieldKind.NUMBER:
        return 0
    if kind is FieldKind.BOOLEAN:
        return True
    if kind is FieldKind.DATE:
        return date.today()
    return ""


def render_layout(fields: tuple[FrontmatterField, ...]) -> str:
    """Generate the render template for a custom type.

    Emits one conditional line per field, skipping title, slug, published and
    order. Boolean fields are not rendered; date fields are formatted with the
    ``dateISO`` filter.
    """
    rendered = [
        {"name": f.name, "kind": f.kind.value, "label": capitalize_field(f.name)}
        for f in fields
        if f.name not in RESERVED_FIELDS and f.kind is not FieldKind.BOOLEAN
    ]
    return _env.get_template("custom_layout.njk.jinja").render(fields=rendered)


def build_custom_type(config: CustomTypeConfig) -> ContentTypeDefinition:
    """Build a full content type definition from a custom type config.

    Deterministic apart from the sample entry's date fields, which use today's
    date when the sample is generated.
    """
    collisions = sorted({f.name for f in config.fields} & RESERVED_FIELDS)
    if collisions:
        # Accepted as-is; reserved names are simply not rendered by the layout.
        logger.warning(
            "Custom type %r declares reserved field name(s): %s", config.slug, ", ".join(collisions)
        )

    slug = config.slug
    layout_name = f"{slug}.njk"
    fields = config.fields

    def sample_entry(title: str, entry_slug: str) -> str:
        record: dict[str, Any] = {"title": title, "slug": entry_slug}
        for f in fields:
            if f.name in ("title", "slug"):
                continue
            record[f.name] = default_for_kind(f.kind)
        record["published"] = True
        record["permalink"] = f"/{slug}/{entry_slug}/"
        return compose(record, "Add your content here.\n")

    return ContentTypeDefinition(
        label=config.label,
        dir=slug,
        layout_name=layout_name,
        tag=config.tag,
        sort_key=config.sort_key or "order",
        directory_defaults={"layout": layout_name, "tags": config.tag, "published": True},
        layout_template=render_layout(fields),
        sample_entry_builder=sample_entry,
        fields=fields,
        archive_page=make_archive_page(
            f"{slug}.md",
            config.label,
            config.label,
            f"Browse all {config.label.lower()} entries.",
            slug,
            config.tag,
        ),
        nav_entry=NavEntry(config.label, f"/{slug}/") if config.add_to_nav else None,
        custom=True,
    )


def load_custom_configs(project: Project) -> dict[str, CustomTypeConfig]:
    """Read the custom-type store.

    A missing or unreadable store yields an empty mapping; individual
    malformed records are skipped with a warning.
    """
    raw = read_json(project.custom_types_path, {})
    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: expected an object", project.custom_types_path)
        return {}
    configs: dict[str, CustomTypeConfig] = {}
    for type_id, data in raw.items():
        if not isinstance(data, dict):
            logger.warning("Skipping malformed custom type %r", type_id)
            continue
        try:
            configs[type_id] = CustomTypeConfig.from_dict({"slug": type_id, **data})
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed custom type %r: %s", type_id, exc)
    return configs


def load_custom_types(project: Project) -> dict[str, ContentTypeDefinition]:
    """Rebuild every stored custom type into a definition, keyed by slug."""
    return {type_id: build_custom_type(config) for type_id, config in load_custom_configs(project).items()}


def check_custom_slug(project: Project, slug: str) -> None:
    """Ensure a new custom type can own ``slug`` as its identifier and directory.

    Raises:
        InvalidSlugError: When the slug is not in slug form, names a built-in
            type or plugin, shares a directory with a built-in type, or its
            directory already holds entries.
        DuplicateCustomTypeError: When the slug is already stored.
    """
    if not slug or slugify(slug) != slug:
        raise InvalidSlugError(slug, "use lower-case letters, digits and hyphens")
    if slug in CONTENT_TYPES:
        raise InvalidSlugError(slug, "it is a built-in content type")
    if slug in PLUGINS:
        raise InvalidSlugError(slug, f"\"ink add {slug}\" installs a plugin")
    if slug in RESERVED_DIRS or any(d.dir == slug for d in CONTENT_TYPES.values()):
        raise InvalidSlugError(slug, f"content/{slug}/ is used by Ink")
    if slug in load_custom_configs(project):
        raise DuplicateCustomTypeError(slug)
    if entry_files(project.content_dir(slug)):
        raise InvalidSlugError(slug, f"content/{slug}/ already holds entries")


def save_custom_type(project: Project, config: CustomTypeConfig) -> None:
    """Persist a new custom type config.

    Raises:
        DuplicateCustomTypeError: When the slug is already stored; the store
            is left untouched.
    """
    raw = read_json(project.custom_types_path, {})
    if not isinstance(raw, dict):
        raw = {}
    if config.slug in raw:
        raise DuplicateCustomTypeError(config.slug)
    raw[config.slug] = config.to_dict()
    write_json(project.custom_types_path, raw)
    logger.debug("Saved custom type %r", config.slug)


def forget_custom_type(project: Project, slug: str) -> bool:
    """Remove a config from the store; True when something was removed."""
    if not project.custom_types_path.exists():
        return False
    raw = read_json(project.custom_types_path, {})
    if not isinstance(raw, dict) or slug not in raw:
        return False
    del raw[slug]
    write_json(project.custom_types_path, raw)
    return True

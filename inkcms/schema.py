"""Data model for content types and components.

Built-in and custom content types share one immutable record,
``ContentTypeDefinition``. Per-type render markup is carried as a literal
template string rather than behaviour, so scaffolding never needs to know
which flavour of type it is handling.

Key classes:
- FrontmatterField: One declared metadata field.
- ContentTypeDefinition: Everything needed to scaffold a content type.
- ComponentDefinition: An installable UI component and its files.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

#: Fields every content type carries whether declared or not.
IMPLICIT_FIELDS = ("title", "slug")


class FieldKind(str, Enum):
    """Value kinds a frontmatter field may declare."""

    STRING = "string"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"

    @classmethod
    def parse(cls, value: str | FieldKind) -> FieldKind:
        """Coerce a user-supplied kind name, defaulting unknown names to string."""
        if isinstance(value, FieldKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STRING


@dataclass(frozen=True)
class FrontmatterField:
    """A single frontmatter field declared by a content type.

    Attributes:
        name: Frontmatter key.
        kind: Value kind, used for defaults and rendering.
        required: Whether authors must fill the field in.
        label: Optional display label (e.g. "Question" for a FAQ title).
    """

    name: str
    kind: FieldKind = FieldKind.STRING
    required: bool = False
    label: str = ""

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "type": self.kind.value, "required": self.required}

    @classmethod
    def from_dict(cls, data: dict) -> FrontmatterField:
        name = str(data.get("name") or data.get("key") or "").strip()
        return cls(
            name=name,
            kind=FieldKind.parse(data.get("type", data.get("kind", "string"))),
            required=bool(data.get("required", False)),
        )


@dataclass(frozen=True)
class LayoutFile:
    """An extra layout written into ``src/_layouts``."""

    filename: str
    content: str


@dataclass(frozen=True)
class ArchivePage:
    """Collection index page written into ``content/pages``."""

    filename: str
    content: str


@dataclass(frozen=True)
class NavEntry:
    """A navigation link inserted into ``navigation.json``."""

    label: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "url": self.url}


SampleEntryBuilder = Callable[[str, str], str]


@dataclass(frozen=True)
class ContentTypeDefinition:
    """Immutable descriptor of a content type.

    ``dir``, ``tag`` and ``layout_name`` identify the type's footprint in a
    project. Changing them after the type has been scaffolded orphans the
    registry entries written for the old values.

    Attributes:
        label: Display name.
        dir: Storage subdirectory under ``content/``.
        layout_name: Render template filename in ``src/_layouts``.
        tag: Collection key used by the build registry.
        sort_key: ``"date"`` or ``"order"``.
        directory_defaults: Read-only record merged into every entry of the
            directory. Left out of the hash.
        layout_template: Render template text, may be empty.
        sample_entry_builder: Pure function ``(title, slug) -> entry text``.
        fields: Declared frontmatter fields.
        additional_layouts: Extra layout files, in write order.
        archive_page: Optional collection index page.
        nav_entry: Optional navigation link.
        sample_title: Title of the entry created on first scaffold.
        custom: True for types built from a CustomTypeConfig.
    """

    label: str
    dir: str
    layout_name: str
    tag: str
    sort_key: str
    directory_defaults: Mapping[str, object] = field(hash=False)
    layout_template: str
    sample_entry_builder: SampleEntryBuilder
    fields: tuple[FrontmatterField, ...] = ()
    additional_layouts: tuple[LayoutFile, ...] = ()
    archive_page: ArchivePage | None = None
    nav_entry: NavEntry | None = None
    sample_title: str = "Sample Entry"
    custom: bool = False

    def __post_init__(self):
        object.__setattr__(self, "directory_defaults", MappingProxyType(dict(self.directory_defaults)))

    @property
    def all_fields(self) -> tuple[FrontmatterField, ...]:
        """Declared fields with the implicit ``title``/``slug`` fields prepended if missing."""
        names = {f.name for f in self.fields}
        implicit = tuple(
            FrontmatterField(name, FieldKind.STRING, required=True)
            for name in IMPLICIT_FIELDS
            if name not in names
        )
        return implicit + self.fields

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self.all_fields)

    def sample_entry(self, title: str, slug: str) -> str:
        return self.sample_entry_builder(title, slug)

    @property
    def url_base(self) -> str:
        """Public URL prefix of entries, e.g. ``/team`` for the ``employees`` dir."""
        if self.nav_entry:
            return self.nav_entry.url.rstrip("/")
        return f"/{self.dir}"


@dataclass(frozen=True)
class ComponentFiles:
    """Files making up a component; style and script fragments are optional."""

    template: str
    style: str | None = None
    script: str | None = None


@dataclass(frozen=True)
class ComponentDefinition:
    """An installable UI component.

    Attributes:
        name: Catalog key and template directory name.
        label: Display name, also used to derive marker lines.
        description: One-line summary.
        files: Template, style and script file names.
        tier: Catalog tier (1 = essentials).
        usage: Template snippet showing how to call the component.
    """

    name: str
    label: str
    description: str
    files: ComponentFiles
    tier: int = 1
    usage: str = ""


@dataclass(frozen=True)
class PluginDefinition:
    """An Eleventy plugin registered through ``eleventy.config.js``.

    Attributes:
        name: Catalog key.
        label: Display name.
        description: One-line summary.
        package: npm package providing the plugin.
        import_name: Identifier the plugin is imported as.
        usage: Template snippet showing the plugin in use.
        docs_url: Where to browse what the plugin offers.
    """

    name: str
    label: str
    description: str
    package: str
    import_name: str
    usage: str = ""
    docs_url: str = ""

    @property
    def import_line(self) -> str:
        return f'import {self.import_name} from "{self.package}";'

    def plugin_call(self, config_param: str) -> str:
        return f"{config_param}.addPlugin({self.import_name});"

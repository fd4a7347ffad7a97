"""Project location, layout and shared JSON registries.

A ``Project`` is resolved once per command and passed explicitly to every
engine operation; nothing in the engine rediscovers the project from the
working directory.

The two shared registries live under ``src/_data``:

- ``contentTypes.json`` maps a collection tag to ``{"glob", "sort"}``.
- ``navigation.json`` holds ``{"main": [{"label", "url"}, ...]}`` in insertion order.

Both are read-modify-written without locking. The engine assumes exclusive
access to the project for the duration of one command.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import DEFAULT_CONFIG, load_config
from .errors import ProjectNotFoundError
from .schema import ContentTypeDefinition, NavEntry
from .utils import atomic_write_text

logger = logging.getLogger(__name__)

PROJECT_MARKER = "eleventy.config.js"
CUSTOM_TYPES_FILENAME = "ink-custom-types.json"

# Bundled component and scaffold templates
PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class Project:
    """An Ink project on disk and its fixed paths.

    Attributes:
        root: Project root directory (holds ``eleventy.config.js``).
        config: Settings loaded from ``ink.yaml`` merged over defaults.
    """

    root: Path
    config: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def at(cls, root: Path) -> Project:
        """Build a Project for ``root`` with its configuration loaded."""
        root = Path(root)
        return cls(root=root, config=load_config(root))

    def content_dir(self, dir_name: str) -> Path:
        return self.root / "content" / dir_name

    def defaults_path(self, dir_name: str) -> Path:
        return self.content_dir(dir_name) / f"{dir_name}.json"

    def media_dir(self, dir_name: str) -> Path:
        return self.root / "media" / dir_name

    @property
    def pages_dir(self) -> Path:
        return self.root / "content" / "pages"

    @property
    def layouts_dir(self) -> Path:
        return self.root / "src" / "_layouts"

    @property
    def data_dir(self) -> Path:
        return self.root / "src" / "_data"

    @property
    def content_types_path(self) -> Path:
        return self.data_dir / "contentTypes.json"

    @property
    def navigation_path(self) -> Path:
        return self.data_dir / "navigation.json"

    @property
    def eleventy_config_path(self) -> Path:
        return self.root / PROJECT_MARKER

    @property
    def custom_types_path(self) -> Path:
        return self.root / CUSTOM_TYPES_FILENAME

    @property
    def components_dir(self) -> Path:
        return self.root / "src" / "_includes" / "components"

    @property
    def style_bundle(self) -> Path:
        configured = self.config.get("style_bundle")
        if configured:
            return self.root / configured
        tailwind = self.root / "src" / "css" / "tailwind.css"
        if tailwind.exists():
            return tailwind
        return self.root / "src" / "css" / "main.css"

    @property
    def script_bundle(self) -> Path:
        return self.root / self.config.get("script_bundle", "src/js/main.js")

    @property
    def component_templates_dir(self) -> Path:
        configured = self.config.get("component_templates")
        if configured:
            return self.root / configured
        return PACKAGE_TEMPLATES_DIR / "components"

    @property
    def shared_layouts(self) -> frozenset[str]:
        """Layouts ``remove`` never deletes: the built-in set plus any configured ones."""
        configured = self.config.get("shared_layouts") or ()
        return frozenset(DEFAULT_CONFIG["shared_layouts"]) | frozenset(configured)

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the project root, with forward slashes."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk upward from ``start`` looking for the project marker file.

    Args:
        start: Directory to start from; defaults to the working directory.

    Returns:
        The first directory containing ``eleventy.config.js``, or None.
    """
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).is_file():
            return candidate
    return None


def require_project(start: Path | None = None) -> Project:
    """Resolve the project containing ``start`` or raise ProjectNotFoundError."""
    root = find_project_root(start)
    if root is None:
        raise ProjectNotFoundError(Path(start or Path.cwd()), PROJECT_MARKER)
    return Project.at(root)


def read_json(path: Path, default: Any) -> Any:
    """Read a JSON file, returning ``default`` when absent or unparseable.

    The returned default is never shared: mutable defaults are copied.
    """
    if not path.exists():
        return _fresh(default)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Treating %s as empty: %s", path, exc)
        return _fresh(default)


def _fresh(default: Any) -> Any:
    return json.loads(json.dumps(default))


def write_json(path: Path, payload: Any) -> None:
    """Write pretty-printed JSON (two-space indent)."""
    atomic_write_text(path, json.dumps(payload, indent=2, ensure_ascii=False))
    logger.debug("Wrote %s", path)


# --- Type registry (contentTypes.json) ---


def load_type_registry(project: Project) -> dict[str, Any]:
    registry = read_json(project.content_types_path, {})
    if not isinstance(registry, dict):
        logger.warning("Treating %s as empty: expected an object", project.content_types_path)
        return {}
    return registry


def registry_entry(definition: ContentTypeDefinition) -> dict[str, str]:
    """The type-registry record for a content type."""
    return {"glob": f"content/{definition.dir}/*.md", "sort": definition.sort_key}


def upsert_type_registry(project: Project, definition: ContentTypeDefinition) -> bool:
    """Add the registry entry for the type's tag if missing.

    Returns:
        True when the file was written.
    """
    registry = load_type_registry(project)
    if registry.get(definition.tag):
        return False
    registry[definition.tag] = registry_entry(definition)
    write_json(project.content_types_path, registry)
    return True


def remove_type_registry(project: Project, tag: str) -> bool:
    """Delete the registry entry for ``tag``; True when something was removed."""
    if not project.content_types_path.exists():
        return False
    registry = load_type_registry(project)
    if tag not in registry:
        return False
    del registry[tag]
    write_json(project.content_types_path, registry)
    return True


# --- Navigation (navigation.json) ---


def load_navigation(project: Project) -> dict[str, Any]:
    nav = read_json(project.navigation_path, {"main": []})
    if not isinstance(nav, dict):
        logger.warning("Treating %s as empty: expected an object", project.navigation_path)
        return {"main": []}
    if not isinstance(nav.get("main"), list):
        nav["main"] = []
    return nav


def add_nav_entry(project: Project, entry: NavEntry) -> bool:
    """Append ``entry`` unless an entry with the same URL exists."""
    nav = load_navigation(project)
    if any(isinstance(item, dict) and item.get("url") == entry.url for item in nav["main"]):
        return False
    nav["main"].append(entry.to_dict())
    write_json(project.navigation_path, nav)
    return True


def remove_nav_entry(project: Project, url: str) -> bool:
    """Remove every entry whose URL is ``url``; True when something was removed."""
    if not project.navigation_path.exists():
        return False
    nav = load_navigation(project)
    kept = [item for item in nav["main"] if not (isinstance(item, dict) and item.get("url") == url)]
    if len(kept) == len(nav["main"]):
        return False
    nav["main"] = kept
    write_json(project.navigation_path, nav)
    return True

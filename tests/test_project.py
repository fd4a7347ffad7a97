import json

import pytest

from inkcms import registry
from inkcms.errors import ProjectNotFoundError
from inkcms.project import (
    PROJECT_MARKER,
    Project,
    add_nav_entry,
    find_project_root,
    load_navigation,
    load_type_registry,
    read_json,
    remove_nav_entry,
    remove_type_registry,
    require_project,
    upsert_type_registry,
)
from inkcms.schema import NavEntry


def test_find_project_root_walks_upward(project):
    nested = project.root / "content" / "blog"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == project.root.resolve()


def test_find_project_root_outside_project(tmp_path):
    assert find_project_root(tmp_path) is None


def test_require_project(project, tmp_path, monkeypatch):
    monkeypatch.chdir(project.root)
    assert require_project().root == project.root.resolve()

    outside = tmp_path / "elsewhere"
    outside.mkdir()
    (project.root / PROJECT_MARKER).unlink()
    with pytest.raises(ProjectNotFoundError) as excinfo:
        require_project(outside)
    assert PROJECT_MARKER in str(excinfo.value)


def test_project_paths(project):
    assert project.defaults_path("faq") == project.root / "content" / "faq" / "faq.json"
    assert project.media_dir("faq") == project.root / "media" / "faq"
    assert project.content_types_path == project.root / "src" / "_data" / "contentTypes.json"
    assert project.navigation_path == project.root / "src" / "_data" / "navigation.json"
    assert project.components_dir == project.root / "src" / "_includes" / "components"
    assert project.relative(project.root / "content" / "faq") == "content/faq"


def test_style_bundle_prefers_tailwind(project):
    assert project.style_bundle == project.root / "src" / "css" / "main.css"
    tailwind = project.root / "src" / "css" / "tailwind.css"
    tailwind.parent.mkdir(parents=True)
    tailwind.write_text("", encoding="utf-8")
    assert project.style_bundle == tailwind


def test_read_json_fallbacks(tmp_path):
    default = {"main": []}
    missing = read_json(tmp_path / "missing.json", default)
    assert missing == default
    missing["main"].append("x")
    assert default == {"main": []}

    broken = tmp_path / "broken.json"
    broken.write_text("{oops", encoding="utf-8")
    assert read_json(broken, {}) == {}


def test_type_registry_upsert_and_remove(project):
    faq = registry.get("faq")
    assert upsert_type_registry(project, faq) is True
    assert upsert_type_registry(project, faq) is False
    assert load_type_registry(project) == {"faqs": {"glob": "content/faq/*.md", "sort": "order"}}

    assert remove_type_registry(project, "faqs") is True
    assert remove_type_registry(project, "faqs") is False
    assert load_type_registry(project) == {}


def test_type_registry_keeps_unrelated_entries(project):
    project.data_dir.mkdir(parents=True)
    project.content_types_path.write_text(
        json.dumps({"pages": {"glob": "content/pages/*.md", "sort": "order"}}), encoding="utf-8"
    )
    upsert_type_registry(project, registry.get("blog"))
    remove_type_registry(project, "posts")
    assert load_type_registry(project) == {"pages": {"glob": "content/pages/*.md", "sort": "order"}}


def test_navigation_defaults_and_dedup(project):
    assert load_navigation(project) == {"main": []}

    entry = NavEntry("FAQ", "/faq/")
    assert add_nav_entry(project, entry) is True
    assert add_nav_entry(project, NavEntry("Questions", "/faq/")) is False
    assert load_navigation(project)["main"] == [{"label": "FAQ", "url": "/faq/"}]

    written = project.navigation_path.read_text(encoding="utf-8")
    assert written.startswith('{\n  "main": [')


def test_navigation_preserves_order_and_other_keys(project):
    project.data_dir.mkdir(parents=True)
    project.navigation_path.write_text(
        json.dumps({"main": [{"label": "Home", "url": "/"}], "footer": [{"label": "Legal", "url": "/legal/"}]}),
        encoding="utf-8",
    )
    add_nav_entry(project, NavEntry("Blog", "/blog/"))
    nav = load_navigation(project)
    assert [item["url"] for item in nav["main"]] == ["/", "/blog/"]
    assert nav["footer"] == [{"label": "Legal", "url": "/legal/"}]

    assert remove_nav_entry(project, "/blog/") is True
    assert remove_nav_entry(project, "/blog/") is False
    assert [item["url"] for item in load_navigation(project)["main"]] == ["/"]


def test_corrupt_navigation_is_treated_as_empty(project):
    project.data_dir.mkdir(parents=True)
    project.navigation_path.write_text("[1, 2", encoding="utf-8")
    assert add_nav_entry(project, NavEntry("Blog", "/blog/")) is True
    assert load_navigation(project) == {"main": [{"label": "Blog", "url": "/blog/"}]}


def test_project_equality_ignores_config(tmp_path):
    assert Project(tmp_path, {"a": 1}) == Project(tmp_path, {})

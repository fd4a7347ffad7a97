import pytest

from inkcms import registry
from inkcms.custom_types import CustomTypeConfig, build_custom_type
from inkcms.errors import UnknownComponentError, UnknownTypeError
from inkcms.frontmatter import decode


def test_catalog_contains_builtin_types():
    assert set(registry.CONTENT_TYPES) == {
        "blog",
        "services",
        "team",
        "docs",
        "features",
        "service-areas",
        "portfolio",
        "faq",
    }


@pytest.mark.parametrize("type_id", sorted(registry.CONTENT_TYPES))
def test_builtin_definitions_are_consistent(type_id):
    definition = registry.CONTENT_TYPES[type_id]
    assert definition.directory_defaults["layout"] == definition.layout_name
    assert definition.directory_defaults["tags"] == definition.tag
    assert definition.has_field("title")
    assert definition.has_field("slug")
    assert definition.sort_key in ("date", "order")
    assert not definition.custom

    entry = decode(definition.sample_entry("Hello World", "hello-world"))
    assert entry.data["title"] == "Hello World"
    assert entry.data["slug"] == "hello-world"
    assert entry.data["published"] is True


def test_team_is_stored_under_employees_but_served_under_team():
    team = registry.get("team")
    assert team.dir == "employees"
    assert team.url_base == "/team"
    assert team.archive_page is None
    assert team.layout_template == ""


def test_service_areas_tag():
    areas = registry.get("service-areas")
    assert areas.tag == "serviceAreas"
    assert areas.directory_defaults["tags"] == "serviceAreas"


def test_all_fields_prepends_implicit_fields():
    config = CustomTypeConfig("Quotes", "quotes", "quotes")
    definition = build_custom_type(config)
    assert [f.name for f in definition.all_fields] == ["title", "slug"]


def test_resolve_type_prefers_builtin_then_custom():
    custom = {"quotes": build_custom_type(CustomTypeConfig("Quotes", "quotes", "quotes"))}
    assert registry.resolve_type("blog", custom) is registry.CONTENT_TYPES["blog"]
    assert registry.resolve_type("quotes", custom).label == "Quotes"


def test_resolve_unknown_type_lists_available():
    with pytest.raises(UnknownTypeError) as excinfo:
        registry.resolve_type("recipes")
    assert excinfo.value.type_id == "recipes"
    assert "blog" in excinfo.value.available
    assert "recipes" in str(excinfo.value)


def test_type_for_dir():
    assert registry.type_for_dir("employees")[0] == "team"
    assert registry.type_for_dir("nothing-here") is None


def test_component_catalog():
    assert len(registry.COMPONENTS) == 12
    tabs = registry.require_component("tabs")
    assert tabs.files.template == "tabs.njk"
    assert tabs.files.style == "tabs.css"
    assert tabs.files.script == "tabs.js"
    timeline = registry.require_component("timeline")
    assert timeline.files.script is None


def test_unknown_component():
    assert registry.get_component("carousel") is None
    with pytest.raises(UnknownComponentError):
        registry.require_component("carousel")


def test_every_component_ships_its_templates():
    from inkcms.project import PACKAGE_TEMPLATES_DIR

    for name, component in registry.COMPONENTS.items():
        source = PACKAGE_TEMPLATES_DIR / "components" / name
        for filename in (component.files.template, component.files.style, component.files.script):
            if filename:
                assert (source / filename).is_file(), f"{name}: missing {filename}"


def test_definitions_are_hashable_and_defaults_read_only():
    definition = registry.CONTENT_TYPES["blog"]
    assert {definition: "blog"}[definition] == "blog"
    with pytest.raises(TypeError):
        definition.directory_defaults["layout"] = "other.njk"

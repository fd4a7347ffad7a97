import pytest

from inkcms import registry
from inkcms.components import install_component, is_installed, uninstall_component
from inkcms.errors import InkError
from inkcms.markers import CSS_MARKERS, JS_MARKERS
from inkcms.project import Project
from inkcms.scaffold import Outcome


def _bundles(project):
    css = project.root / "src" / "css" / "main.css"
    js = project.root / "src" / "js" / "main.js"
    css.parent.mkdir(parents=True)
    js.parent.mkdir(parents=True)
    css.write_text(":root { --color-primary: #2563eb; }\n\nbody { margin: 0; }\n", encoding="utf-8")
    js.write_text("document.documentElement.classList.add('js');\n", encoding="utf-8")
    return css, js


def test_install_then_uninstall_restores_bundles(project):
    css, js = _bundles(project)
    css_before, js_before = css.read_bytes(), js.read_bytes()
    tabs = registry.require_component("tabs")

    report = install_component(project, tabs)

    assert is_installed(project, tabs)
    assert [s.outcome for s in report.steps] == [Outcome.CREATED, Outcome.UPDATED, Outcome.UPDATED]
    assert CSS_MARKERS.marker("Tabs") in css.read_text(encoding="utf-8")
    assert JS_MARKERS.marker("Tabs") in js.read_text(encoding="utf-8")

    removal = uninstall_component(project, tabs)

    assert [s.outcome for s in removal.steps] == [Outcome.REMOVED] * 3
    assert not is_installed(project, tabs)
    assert css.read_bytes() == css_before
    assert js.read_bytes() == js_before


def test_uninstall_leaves_other_components(project):
    css, js = _bundles(project)
    tabs = registry.require_component("tabs")
    modal = registry.require_component("modal")
    timeline = registry.require_component("timeline")
    install_component(project, tabs)
    install_component(project, modal)
    install_component(project, timeline)

    uninstall_component(project, modal)

    text = css.read_text(encoding="utf-8")
    assert CSS_MARKERS.marker("Tabs") in text
    assert CSS_MARKERS.marker("Timeline") in text
    assert CSS_MARKERS.marker("Modal / Dialog") not in text
    assert ".modal__dialog" not in text
    assert ".tabs__tab" in text
    assert ".timeline__item" in text
    assert JS_MARKERS.marker("Modal / Dialog") not in js.read_text(encoding="utf-8")


def test_install_twice_skips(project):
    css, _ = _bundles(project)
    tabs = registry.require_component("tabs")
    install_component(project, tabs)
    once = css.read_text(encoding="utf-8")

    report = install_component(project, tabs)

    assert [s.outcome for s in report.steps] == [Outcome.SKIPPED] * 3
    assert css.read_text(encoding="utf-8") == once


def test_install_refuses_to_overwrite_edited_template(project):
    _bundles(project)
    tabs = registry.require_component("tabs")
    target = project.components_dir / "tabs.njk"
    target.parent.mkdir(parents=True)
    target.write_text("my own tabs", encoding="utf-8")

    report = install_component(project, tabs)

    assert report.steps[0].outcome is Outcome.REFUSED
    assert target.read_text(encoding="utf-8") == "my own tabs"


def test_install_uses_tailwind_bundle_when_present(project):
    tailwind = project.root / "src" / "css" / "tailwind.css"
    tailwind.parent.mkdir(parents=True)
    tailwind.write_text("@tailwind base;\n", encoding="utf-8")

    install_component(project, registry.require_component("timeline"))

    assert CSS_MARKERS.marker("Timeline") in tailwind.read_text(encoding="utf-8")
    assert not (project.root / "src" / "css" / "main.css").exists()


def test_install_creates_missing_bundles(project):
    report = install_component(project, registry.require_component("modal"))
    assert [s.outcome for s in report.steps] == [Outcome.CREATED] * 3
    assert project.script_bundle.is_file()


def test_uninstall_not_installed(project):
    report = uninstall_component(project, registry.require_component("tabs"))
    assert all(s.outcome is Outcome.ABSENT for s in report.steps)


def test_missing_source_templates_abort_before_writing(project):
    (project.root / "ink.yaml").write_text("component_templates: my-templates\n", encoding="utf-8")
    configured = Project.at(project.root)

    with pytest.raises(InkError):
        install_component(configured, registry.require_component("tabs"))

    assert not configured.components_dir.exists()


def test_refused_install_leaves_bundles_alone(project):
    css, js = _bundles(project)
    css_before, js_before = css.read_bytes(), js.read_bytes()
    target = project.components_dir / "tabs.njk"
    target.parent.mkdir(parents=True)
    target.write_text("my own tabs", encoding="utf-8")

    report = install_component(project, registry.require_component("tabs"))

    assert report.refused
    assert [s.outcome for s in report.steps] == [Outcome.REFUSED, Outcome.SKIPPED, Outcome.SKIPPED]
    assert css.read_bytes() == css_before
    assert js.read_bytes() == js_before


def test_uninstall_keeps_template_it_did_not_write(project):
    _bundles(project)
    tabs = registry.require_component("tabs")
    target = project.components_dir / "tabs.njk"
    target.parent.mkdir(parents=True)
    target.write_text("my own tabs", encoding="utf-8")
    install_component(project, tabs)

    report = uninstall_component(project, tabs)

    assert target.read_text(encoding="utf-8") == "my own tabs"
    assert report.steps[0].outcome is Outcome.RETAINED
    assert report.partial


def test_uninstall_keeps_edited_template(project):
    _bundles(project)
    tabs = registry.require_component("tabs")
    install_component(project, tabs)
    target = project.components_dir / "tabs.njk"
    target.write_text(target.read_text(encoding="utf-8") + "\n{# tweaked #}\n", encoding="utf-8")

    report = uninstall_component(project, tabs)

    assert target.is_file()
    assert [s.outcome for s in report.steps] == [Outcome.RETAINED, Outcome.REMOVED, Outcome.REMOVED]

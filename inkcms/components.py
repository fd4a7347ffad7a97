"""Install and uninstall catalog components.

A component contributes up to three artifacts to a project: a template
macro copied into ``src/_includes/components/``, a style fragment appended to
the shared stylesheet and a script fragment appended to the shared script
bundle. Appended fragments are wrapped in marker blocks (see ``markers``) so
uninstalling can strip exactly what was added.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InkError
from .markers import CSS_MARKERS, JS_MARKERS, MarkerStyle, append_block, has_block, strip_block
from .project import Project
from .scaffold import Outcome, RemovalReport, ScaffoldReport, Step
from .schema import ComponentDefinition
from .utils import atomic_write_text

logger = logging.getLogger(__name__)


def _source_files(project: Project, component: ComponentDefinition) -> dict[str, Path]:
    source_dir = project.component_templates_dir / component.name
    sources = {"template": source_dir / component.files.template}
    if component.files.style:
        sources["style"] = source_dir / component.files.style
    if component.files.script:
        sources["script"] = source_dir / component.files.script
    missing = [p for p in sources.values() if not p.is_file()]
    if missing:
        raise InkError(f"Component template missing: {missing[0]}")
    return sources


def _append_fragment(project: Project, bundle: Path, style: MarkerStyle, label: str, fragment: str) -> Step:
    marker = style.marker(label)
    target = project.relative(bundle)
    existed = bundle.exists()
    current = bundle.read_text(encoding="utf-8") if existed else ""
    if has_block(current, marker):
        return Step("append block", target, Outcome.SKIPPED, "already installed")
    atomic_write_text(bundle, append_block(current, marker, fragment))
    logger.debug("Appended %s block to %s", label, bundle)
    return Step("append block", target, Outcome.UPDATED if existed else Outcome.CREATED)


def _strip_fragment(project: Project, bundle: Path, style: MarkerStyle, label: str) -> Step:
    marker = style.marker(label)
    target = project.relative(bundle)
    if not bundle.exists():
        return Step("strip block", target, Outcome.ABSENT)
    current = bundle.read_text(encoding="utf-8")
    if not has_block(current, marker):
        return Step("strip block", target, Outcome.ABSENT)
    atomic_write_text(bundle, strip_block(current, marker, style))
    logger.debug("Stripped %s block from %s", label, bundle)
    return Step("strip block", target, Outcome.REMOVED)


def is_installed(project: Project, component: ComponentDefinition) -> bool:
    """Check whether the component's template is present in the project."""
    return (project.components_dir / component.files.template).is_file()


def install_component(project: Project, component: ComponentDefinition) -> ScaffoldReport:
    """Install a component into a project.

    The template file is copied unless a file of that name already exists;
    an identical file is skipped. A different file is left alone, the
    template step is reported as refused and the bundles are not touched.
    Style and script fragments are appended to their bundles unless their
    marker is already present.

    Raises:
        InkError: When one of the component's source templates is missing.
            Nothing is written in that case.
    """
    sources = _source_files(project, component)
    report = ScaffoldReport(component.name, component.label)

    template_source = sources["template"].read_text(encoding="utf-8")
    template_dest = project.components_dir / component.files.template
    target = project.relative(template_dest)
    if not template_dest.exists():
        atomic_write_text(template_dest, template_source)
        logger.debug("Copied %s", template_dest)
        report.steps.append(Step("template", target, Outcome.CREATED))
    elif template_dest.read_text(encoding="utf-8") == template_source:
        report.steps.append(Step("template", target, Outcome.SKIPPED, "already installed"))
    else:
        report.steps.append(Step("template", target, Outcome.REFUSED, "a different file already exists"))
        report.refused = True
        report.reason = f"{target} already exists and differs from the {component.label} template"
        for kind, bundle in (("style", project.style_bundle), ("script", project.script_bundle)):
            if kind in sources:
                report.steps.append(Step("append block", project.relative(bundle), Outcome.SKIPPED, "template refused"))
        return report

    if "style" in sources:
        report.steps.append(
            _append_fragment(
                project, project.style_bundle, CSS_MARKERS, component.label, sources["style"].read_text(encoding="utf-8")
            )
        )
    if "script" in sources:
        report.steps.append(
            _append_fragment(
                project, project.script_bundle, JS_MARKERS, component.label, sources["script"].read_text(encoding="utf-8")
            )
        )
    return report


def uninstall_component(project: Project, component: ComponentDefinition) -> RemovalReport:
    """Remove a component's template and strip its marker blocks.

    The template is deleted only while it matches the bundled one; an edited
    or foreign file is kept and reported as retained. Blocks belonging to
    other components are untouched.
    """
    report = RemovalReport(component.name, component.label)

    template_path = project.components_dir / component.files.template
    target = project.relative(template_path)
    source_path = project.component_templates_dir / component.name / component.files.template
    if not template_path.is_file():
        report.steps.append(Step("template", target, Outcome.ABSENT))
    elif source_path.is_file() and template_path.read_text(encoding="utf-8") == source_path.read_text(encoding="utf-8"):
        template_path.unlink()
        logger.debug("Deleted %s", template_path)
        report.steps.append(Step("template", target, Outcome.REMOVED))
    else:
        report.steps.append(Step("template", target, Outcome.RETAINED, "differs from the bundled template"))

    if component.files.style:
        report.steps.append(_strip_fragment(project, project.style_bundle, CSS_MARKERS, component.label))
    if component.files.script:
        report.steps.append(_strip_fragment(project, project.script_bundle, JS_MARKERS, component.label))
    return report

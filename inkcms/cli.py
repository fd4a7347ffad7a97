"""Command-line interface for Ink.

This module defines the CLI commands using the Click framework. Commands
resolve the project once, call into the engine and render the returned
reports; they hold no scaffolding logic of their own.

Commands:
- add: Scaffold a content type, add one entry to it, or install a plugin.
- add-component: Install a UI component (or list the catalog).
- add-custom: Define and scaffold a custom content type interactively.
- add-plugin: Register an Eleventy plugin (or list the catalog).
- generate: Populate a content type with sample entries.
- list: Show content types or the entries of one type.
- remove: Remove a content type.
- remove-component: Uninstall a UI component.
- remove-plugin: Unregister an Eleventy plugin.
- delete: Delete one entry and its media.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click
import questionary

from . import __version__, registry
from .components import install_component, is_installed, uninstall_component
from .custom_types import (
    CustomTypeConfig,
    build_custom_type,
    check_custom_slug,
    forget_custom_type,
    load_custom_types,
    save_custom_type,
)
from .errors import EntryNotFoundError, InkError
from .listing import list_entries, summarize_types
from .plugins import install_plugin, is_plugin_installed, uninstall_plugin
from .project import Project, find_project_root, require_project
from .samples import DEFAULT_COUNT, generate_entries
from .scaffold import (
    Outcome,
    RemovalReport,
    ScaffoldReport,
    Step,
    add_entry,
    delete_entry,
    entry_path,
    remove,
    scaffold,
)
from .schema import ContentTypeDefinition, FieldKind, FrontmatterField
from .utils import entry_files, slugify

_OUTCOME_STYLES: dict[Outcome, tuple[str, str | None]] = {
    Outcome.CREATED: ("created", "green"),
    Outcome.UPDATED: ("updated", "green"),
    Outcome.SKIPPED: ("skipped", "yellow"),
    Outcome.REFUSED: ("refused", "red"),
    Outcome.REMOVED: ("removed", "green"),
    Outcome.ABSENT: ("absent", None),
    Outcome.RETAINED: ("kept", "yellow"),
}


@contextmanager
def _engine_errors() -> Iterator[None]:
    """Turn engine precondition failures into click errors."""
    try:
        yield
    except InkError as exc:
        raise click.ClickException(exc.message) from None


@click.group()
@click.version_option(version=__version__, prog_name="ink")
@click.option("--verbose", "-v", is_flag=True, help="Log every file operation")
def cli(verbose: bool):
    """Ink content scaffolding."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("type_id", metavar="TYPE")
@click.argument("title", nargs=-1)
def add(type_id: str, title: tuple[str, ...]):
    """Scaffold a content type, or add an entry titled TITLE to it.

    A plugin name (e.g. ``icons``) installs that plugin instead.
    """
    if type_id in registry.PLUGINS and not title:
        _add_plugin(type_id)
        return
    with _engine_errors():
        project = require_project()
        definition = _resolve(project, type_id)
        if title:
            report = add_entry(project, definition, type_id, " ".join(title))
            _echo_steps(report.steps)
            return
        report = scaffold(project, definition, type_id)
    _echo_scaffold(report)


@cli.command("add-component")
@click.argument("name", required=False)
def add_component(name: str | None):
    """Install a UI component; without NAME, list the catalog."""
    if not name:
        root = find_project_root()
        _echo_catalog(Project.at(root) if root else None)
        return
    with _engine_errors():
        project = require_project()
        component = registry.require_component(name)
        report = install_component(project, component)
    click.echo(click.style(f"Installing component: {component.label}", bold=True))
    _echo_steps(report.steps)
    if report.refused:
        click.echo(click.style(report.reason, fg="yellow"))
        return
    click.echo("\nUsage:\n")
    click.echo(component.usage)


@cli.command("add-custom")
def add_custom():
    """Define a custom content type interactively and scaffold it."""
    with _engine_errors():
        project = require_project()
    config = _custom_type_wizard(project)
    with _engine_errors():
        report = scaffold(project, build_custom_type(config), config.slug)
        if not report.refused:
            save_custom_type(project, config)
    _echo_scaffold(report)


@cli.command("add-plugin")
@click.argument("name", required=False)
def add_plugin(name: str | None):
    """Register an Eleventy plugin; without NAME, list the catalog."""
    if not name:
        root = find_project_root()
        project = Project.at(root) if root else None
        click.echo("Installable plugins:\n")
        for plugin_name, plugin in registry.PLUGINS.items():
            installed = project is not None and is_plugin_installed(project, plugin)
            status = click.style(" [installed]", fg="green") if installed else ""
            click.echo(f"  {plugin_name:<20} {plugin.description}{status}")
        return
    _add_plugin(name)


@cli.command()
@click.argument("type_id", metavar="TYPE")
@click.argument("count", type=click.IntRange(min=1), default=DEFAULT_COUNT)
def generate(type_id: str, count: int):
    """Generate COUNT sample entries for a content type."""
    with _engine_errors():
        project = require_project()
        definition = _resolve(project, type_id)
        report = generate_entries(project, definition, type_id, count)
    _echo_steps(report.steps)
    created = sum(1 for s in report.steps if s.action == "entry" and s.outcome is Outcome.CREATED)
    click.echo(f"Created {created} {definition.label} entries.")


@cli.command("list")
@click.argument("type_id", metavar="[TYPE]", required=False)
def list_command(type_id: str | None):
    """List content types, or the entries of one type."""
    with _engine_errors():
        project = require_project()
        if type_id is None:
            summaries = summarize_types(project)
            if not summaries:
                click.echo("No content types found.")
            for summary in summaries:
                label = summary.label + (" (custom)" if summary.custom else "")
                click.echo(f"  {summary.dir:<20} {label:<28} {summary.count} entries")
            return
        definition = _resolve(project, type_id)
        entries = list_entries(project, definition.dir)
    if not entries:
        click.echo(f"No {definition.label} entries.")
    for entry in entries:
        status = "" if entry.published else click.style(" [draft]", fg="yellow")
        click.echo(f"  {entry.slug:<32} {entry.date:<12} {entry.title}{status}")


@cli.command("remove")
@click.argument("type_id", metavar="TYPE")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--forget", is_flag=True, help="Also delete a custom type's stored definition")
def remove_command(type_id: str, yes: bool, forget: bool):
    """Remove a content type and everything it added."""
    with _engine_errors():
        project = require_project()
        definition = _resolve(project, type_id)
    count = len(entry_files(project.content_dir(definition.dir)))
    _confirm(
        f"Remove {definition.label} and its {count} entries from content/{definition.dir}/?",
        yes,
    )
    report = remove(project, definition, type_id)
    _echo_removal(report)
    if forget and definition.custom and forget_custom_type(project, type_id):
        click.echo(f"Forgot custom type {type_id}.")


@cli.command("remove-component")
@click.argument("name")
def remove_component(name: str):
    """Uninstall a UI component."""
    with _engine_errors():
        project = require_project()
        component = registry.require_component(name)
    _echo_removal(uninstall_component(project, component))


@cli.command()
@click.argument("type_id", metavar="TYPE")
@click.argument("slug")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete(type_id: str, slug: str, yes: bool):
    """Delete one entry and its media files."""
    with _engine_errors():
        project = require_project()
        definition = _resolve(project, type_id)
        path = entry_path(project, definition, slug)
        if not path.is_file():
            raise EntryNotFoundError(project.relative(path))
    _confirm(f"Delete content/{definition.dir}/{slug}.md?", yes)
    with _engine_errors():
        report = delete_entry(project, definition, type_id, slug)
    _echo_removal(report)


@cli.command("remove-plugin")
@click.argument("name")
def remove_plugin(name: str):
    """Unregister an Eleventy plugin."""
    with _engine_errors():
        project = require_project()
        plugin = registry.require_plugin(name)
    _echo_removal(uninstall_plugin(project, plugin))


def _add_plugin(name: str) -> None:
    with _engine_errors():
        project = require_project()
        plugin = registry.require_plugin(name)
        report = install_plugin(project, plugin)
    click.echo(click.style(f"Installing plugin: {plugin.label}", bold=True))
    _echo_steps(report.steps)
    if report.changed:
        click.echo("\nNext: install the plugin dependency:")
        click.echo(f"  npm install --save-dev {plugin.package}")
    click.echo(f"\nUsage in templates: {plugin.usage}")
    if plugin.docs_url:
        click.echo(f"Reference: {plugin.docs_url}")


def _resolve(project: Project, type_id: str) -> ContentTypeDefinition:
    return registry.resolve_type(type_id, load_custom_types(project))


def _confirm(message: str, yes: bool) -> None:
    if yes:
        return
    answer = questionary.confirm(message, default=False, style=_questionary_style()).ask()
    if not answer:
        raise click.Abort()


def _custom_type_wizard(project: Project) -> CustomTypeConfig:
    """Ask for a custom type definition."""
    style = _questionary_style()

    label = _ask(
        questionary.text(
            "Type name (e.g. Testimonials):",
            validate=lambda x: len(x.strip()) > 0 or "Name is required",
            style=style,
        )
    ).strip()
    slug = slugify(_ask(questionary.text("Slug:", default=slugify(label), style=style)))
    with _engine_errors():
        check_custom_slug(project, slug)
    tag = _ask(questionary.text("Collection tag:", default=slug, style=style)).strip() or slug

    click.echo("Define frontmatter fields (leave the name empty to finish).")
    fields = []
    while True:
        name = _ask(questionary.text(f"Field {len(fields) + 1} name:", style=style)).strip()
        if not name:
            break
        kind = _ask(
            questionary.select(
                f"Field {len(fields) + 1} type:",
                choices=[k.value for k in FieldKind],
                style=style,
            )
        )
        required = _ask(questionary.confirm("Required?", default=False, style=style))
        fields.append(FrontmatterField(name, FieldKind.parse(kind), required))

    sort_key = _ask(questionary.select("Sort by:", choices=["order", "date"], style=style))
    add_to_nav = _ask(questionary.confirm("Add to navigation?", default=True, style=style))
    return CustomTypeConfig(label, slug, tag, tuple(fields), sort_key, add_to_nav)


def _ask(question):
    answer = question.ask()
    if answer is None:
        raise click.Abort()
    return answer


def _echo_steps(steps: list[Step]) -> None:
    for step in steps:
        word, color = _OUTCOME_STYLES[step.outcome]
        line = f"  {click.style(f'{word:<8}', fg=color)} {step.target}"
        if step.detail:
            line += click.style(f" ({step.detail})", dim=True)
        click.echo(line)


def _echo_scaffold(report: ScaffoldReport) -> None:
    if report.refused:
        click.echo(click.style(report.reason, fg="yellow"))
        click.echo(f'Use "ink add {report.type_id} <title>" to add an entry.')
        return
    click.echo(click.style(f"Creating content type: {report.label}", bold=True))
    _echo_steps(report.steps)


def _echo_removal(report: RemovalReport) -> None:
    click.echo(click.style(f"Removing {report.label}", bold=True))
    _echo_steps(report.steps)
    if report.partial:
        click.echo(click.style("Some files were kept; remove them manually if unneeded.", fg="yellow"))


def _echo_catalog(project: Project | None) -> None:
    click.echo("Installable components:\n")
    for name, component in registry.COMPONENTS.items():
        status = click.style(" [installed]", fg="green") if project and is_installed(project, component) else ""
        click.echo(f"  {name:<20} {component.description}{status}")


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()

"""Register catalog plugins in ``eleventy.config.js``.

Installing a plugin adds two lines to the project's Eleventy config: an
import placed after the last existing import, and an ``addPlugin`` call at
the top of the exported config function. Both lines are recognised by exact
text, so installing twice changes nothing and uninstalling removes only
those two lines.

Key functions:
- is_plugin_installed: Check whether both lines are present.
- install_plugin: Add the import and the plugin call.
- uninstall_plugin: Remove them again.
"""

from __future__ import annotations

import logging
import re

from .errors import ConfigPatchError
from .project import Project
from .scaffold import Outcome, RemovalReport, ScaffoldReport, Step
from .schema import PluginDefinition
from .utils import atomic_write_text

logger = logging.getLogger(__name__)

# export default function (eleventyConfig) {  /  module.exports = (cfg) => {
CONFIG_FUNCTION_RE = re.compile(
    r"(?:export\s+default|module\.exports\s*=)\s*(?:async\s+)?"
    r"(?:function\s*\w*\s*)?\(\s*(\w*)[^)]*\)\s*(?:=>\s*)?\{"
)
# A whole import statement, possibly spread over several lines
IMPORT_RE = re.compile(r"^import\b[^;]*?['\"][^'\"\n]+['\"][ \t]*;?[ \t]*$", re.MULTILINE)
DEFAULT_CONFIG_PARAM = "eleventyConfig"
INDENT = "  "


def _has_line(text: str, line: str) -> bool:
    return any(existing.strip() == line for existing in text.splitlines())


def _remove_line(text: str, line: str) -> str:
    """Drop every line equal to ``line`` (ignoring indentation) with its line break."""
    return "".join(existing for existing in text.splitlines(keepends=True) if existing.strip() != line)


def _config_param(text: str) -> str:
    match = CONFIG_FUNCTION_RE.search(text)
    return (match.group(1) if match else "") or DEFAULT_CONFIG_PARAM


def _insert_import(text: str, line: str) -> str:
    imports = list(IMPORT_RE.finditer(text))
    if not imports:
        return f"{line}\n{text}"
    end = imports[-1].end()
    if end == len(text):
        return f"{text}\n{line}\n"
    return f"{text[: end + 1]}{line}\n{text[end + 1 :]}"


def _insert_call(text: str, line: str) -> str:
    pos = CONFIG_FUNCTION_RE.search(text).end()
    if text[pos : pos + 1] == "\n":
        return f"{text[:pos]}\n{INDENT}{line}{text[pos:]}"
    return f"{text[:pos]}\n{INDENT}{line}\n{text[pos:]}"


def is_plugin_installed(project: Project, plugin: PluginDefinition) -> bool:
    """Check whether the config holds both the import and the plugin call."""
    path = project.eleventy_config_path
    if not path.is_file():
        return False
    text = path.read_text(encoding="utf-8")
    return _has_line(text, plugin.import_line) and _has_line(text, plugin.plugin_call(_config_param(text)))


def install_plugin(project: Project, plugin: PluginDefinition) -> ScaffoldReport:
    """Add a plugin's import and ``addPlugin`` call to the Eleventy config.

    Each line is added only if it is missing, and the file is written once.
    The call uses the config function's own parameter name.

    Raises:
        ConfigPatchError: When the config file is missing, or the plugin call
            is needed but no exported config function can be found. Nothing
            is written in either case.
    """
    path = project.eleventy_config_path
    target = project.relative(path)
    if not path.is_file():
        raise ConfigPatchError(target, "file not found")
    text = path.read_text(encoding="utf-8")
    call = plugin.plugin_call(_config_param(text))
    needs_call = not _has_line(text, call)
    if needs_call and not CONFIG_FUNCTION_RE.search(text):
        raise ConfigPatchError(target, "no exported config function found")

    report = ScaffoldReport(plugin.name, plugin.label)
    updated = text
    if _has_line(updated, plugin.import_line):
        report.steps.append(Step("plugin import", target, Outcome.SKIPPED, "already present"))
    else:
        updated = _insert_import(updated, plugin.import_line)
        report.steps.append(Step("plugin import", target, Outcome.UPDATED))
    if needs_call:
        updated = _insert_call(updated, call)
        report.steps.append(Step("plugin call", target, Outcome.UPDATED))
    else:
        report.steps.append(Step("plugin call", target, Outcome.SKIPPED, "already present"))

    if updated != text:
        atomic_write_text(path, updated)
        logger.debug("Registered plugin %s in %s", plugin.name, path)
    return report


def uninstall_plugin(project: Project, plugin: PluginDefinition) -> RemovalReport:
    """Remove a plugin's import and ``addPlugin`` call from the Eleventy config."""
    path = project.eleventy_config_path
    target = project.relative(path)
    report = RemovalReport(plugin.name, plugin.label)
    text = path.read_text(encoding="utf-8") if path.is_file() else ""

    updated = text
    for action, line in (
        ("plugin import", plugin.import_line),
        ("plugin call", plugin.plugin_call(_config_param(text))),
    ):
        stripped = _remove_line(updated, line)
        report.steps.append(Step(action, target, Outcome.REMOVED if stripped != updated else Outcome.ABSENT))
        updated = stripped

    if updated != text:
        atomic_write_text(path, updated)
        logger.debug("Unregistered plugin %s from %s", plugin.name, path)
    return report

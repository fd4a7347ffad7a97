"""Exceptions raised by Ink.

Every exception here signals a failed precondition: it is raised before any
file is touched, and the CLI turns it into a user-facing error message.
Soft skips and partial successes are never exceptions; they are recorded as
steps in a report (see ``inkcms.scaffold``).
"""

from __future__ import annotations

from pathlib import Path


class InkError(Exception):
    """Base class for precondition failures.

    Attributes:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProjectNotFoundError(InkError):
    """No project root (directory holding the marker config file) was found."""

    def __init__(self, start: Path, marker: str):
        self.start = start
        self.marker = marker
        super().__init__(
            f"Not in an Ink project. Run this from a directory with {marker} "
            f"(searched upward from {start})"
        )


class UnknownTypeError(InkError):
    """A content type identifier matches neither a built-in nor a custom type."""

    def __init__(self, type_id: str, available: list[str] | None = None):
        self.type_id = type_id
        self.available = list(available or [])
        message = f'Unknown content type: "{type_id}"'
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class UnknownComponentError(InkError):
    """A component name is not in the component catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Unknown component: "{name}"')


class DuplicateCustomTypeError(InkError):
    """A custom type with the same slug is already stored."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(
            f'Custom type "{slug}" already exists. '
            "Delete it from ink-custom-types.json to recreate."
        )


class EntryExistsError(InkError):
    """An entry file with the requested slug already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File already exists: {path}")


class EntryNotFoundError(InkError):
    """The entry (or content directory) to delete does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class InvalidSlugError(InkError):
    """A slug is malformed or names a directory Ink cannot use."""

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        self.reason = reason
        super().__init__(f'Invalid slug "{slug}": {reason}')


class UnknownPluginError(InkError):
    """A plugin name is not in the plugin catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Unknown plugin: "{name}"')


class ConfigPatchError(InkError):
    """The project's Eleventy config cannot be patched."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot patch {path}: {reason}")

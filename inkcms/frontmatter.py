"""Frontmatter codec for Ink entries.

Entries are Markdown files whose first lines hold a flat ``key: value``
metadata block between two ``---`` separator lines. This module writes that
block and reads it back. It deliberately understands only flat scalar
records: values are typed opportunistically rather than parsed as YAML, so
a date stays a string and a quoted "true" stays text.

Key functions:
- encode: Record to frontmatter block text.
- decode: Entry text to (data, body).
- read_entry: Decode an entry file from disk.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

SEPARATOR = "---"

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)(.*)\Z", re.DOTALL)
INT_RE = re.compile(r"-?\d+")
FLOAT_RE = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")


@dataclass
class Frontmatter:
    """A decoded entry.

    Attributes:
        data: Frontmatter values in file order.
        body: Everything after the closing separator.
    """

    data: dict[str, Any] = field(default_factory=dict)
    body: str = ""


def encode(record: dict[str, Any]) -> str:
    """Serialize a flat record into a frontmatter block.

    Booleans and numbers are written bare, dates as bare ``YYYY-MM-DD``, and
    everything else as a double-quoted string with quotes, backslashes and
    newlines escaped.

    Args:
        record: Flat mapping of scalar values, in the order to write them.

    Returns:
        The block, including both separator lines and a trailing newline.
    """
    lines = [SEPARATOR]
    for key, value in record.items():
        lines.append(f"{key}: {_encode_value(value)}")
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return '""'
    return json.dumps(str(value), ensure_ascii=False)


def decode(text: str) -> Frontmatter:
    """Parse the leading frontmatter block of an entry.

    Text without a leading block is not an error: the record is empty and
    the whole text is returned as the body.

    Args:
        text: Raw entry content.

    Returns:
        Frontmatter with typed values and the remaining body.
    """
    normalized = text.replace("\r\n", "\n")
    match = FRONTMATTER_RE.match(normalized)
    if not match:
        return Frontmatter({}, normalized)
    data: dict[str, Any] = {}
    for line in (match.group(1) or "").split("\n"):
        key, sep, raw = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        data[key] = _decode_value(raw.strip())
    return Frontmatter(data, match.group(2))


def _decode_value(raw: str) -> Any:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
        if raw[0] == '"':
            try:
                return json.loads(raw)
            except ValueError:
                pass
        return raw[1:-1]
    if raw == "true":
        return True
    if raw == "false":
        return False
    if INT_RE.fullmatch(raw):
        return int(raw)
    if FLOAT_RE.fullmatch(raw):
        return float(raw)
    return raw


def read_entry(path: Path) -> Frontmatter:
    """Read and decode an entry file."""
    return decode(path.read_text(encoding="utf-8"))


def compose(record: dict[str, Any], body: str) -> str:
    """Join a frontmatter block and a body into entry text."""
    return encode(record) + body

"""Marker block editing for shared bundle files.

Components append their style and script fragments to the project's shared
stylesheet and script bundle. Each fragment is preceded by a marker line
derived from the component label, which makes the addition detectable and
removable later without a CSS or JavaScript parser.

A block runs from its marker line up to the line before the next marker of the
same style, or to end of file. Text between blocks is never inspected.

Key pieces:
- MarkerStyle: How marker lines of one family look and how to find them.
- CSS_MARKERS / JS_MARKERS: The two families used by component installs.
- has_block / append_block / strip_block: The editing primitives.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ORIGIN = "added by Ink CLI"


@dataclass(frozen=True)
class MarkerStyle:
    """A family of marker comments.

    Attributes:
        open: Text before the label.
        close: Text after the label.
    """

    open: str
    close: str

    def marker(self, label: str) -> str:
        """Return the marker line for a component label."""
        return f"{self.open} {label} ({ORIGIN}) {self.close}"

    @property
    def pattern(self) -> re.Pattern[str]:
        """Regex matching a newline followed by any marker line of this family."""
        return re.compile(
            r"\n" + re.escape(self.open) + r" .+ \(" + re.escape(ORIGIN) + r"\) " + re.escape(self.close)
        )


CSS_MARKERS = MarkerStyle("/* ===", "=== */")
JS_MARKERS = MarkerStyle("// ---", "---")


def has_block(text: str, marker: str) -> bool:
    """Check whether a marker is present in the text."""
    return marker in text


def append_block(text: str, marker: str, body: str) -> str:
    """Append a marked block to the end of the text.

    Adds a blank line, the marker line, the body and a trailing newline.
    Text already holding the marker is returned unchanged.

    Args:
        text: Current file content.
        marker: Full marker line.
        body: Fragment to add.

    Returns:
        Updated content.
    """
    if has_block(text, marker):
        return text
    return f"{text}\n{marker}\n{body}\n"


def strip_block(text: str, marker: str, style: MarkerStyle) -> str:
    """Remove the block introduced by ``marker``.

    Removes from the start of the marker line, including the newline before
    it, up to the newline preceding the next marker of ``style``. When no
    marker follows, everything to end of file goes and the remaining text is
    right-trimmed and given a single trailing newline.

    ``strip_block(append_block(t, m, b), m, style)`` gives back ``t`` up to
    trailing whitespace.

    Args:
        text: Current file content.
        marker: Full marker line of the block to remove.
        style: Marker family used to find where the block ends.

    Returns:
        Updated content, or the input unchanged if the marker is absent.
    """
    index = text.find(marker)
    if index == -1:
        return text

    start = index
    if start > 0 and text[start - 1] == "\n":
        start -= 1

    after = text[index + len(marker) :]
    following = style.pattern.search(after)
    if following is None:
        head = text[:start].rstrip()
        return f"{head}\n" if head else ""
    return text[:start] + after[following.start() :]

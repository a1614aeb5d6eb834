"""Convert the light markup used in result summaries to HTML.

Only a small subset is recognized: ``#`` headings, ``-``/``*``/``+`` bullets,
``1.`` numbered items, ``---``/``===`` rules, ``**bold**``, ``*italic*`` and
```code``` spans. Text is escaped before any tag is inserted.
"""

from __future__ import annotations

import html
import re
from typing import List

_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET = re.compile(r"^[-*+]\s+(.*)$")
_ORDERED = re.compile(r"^\d+\.\s+(.*)$")
_RULE = re.compile(r"^(-{3,}|\*{3,}|={3,})$")
_CODE = re.compile(r"`([^`]+)`")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"(?<!\*)\*(?!\s)(.+?)(?<!\s)\*(?!\*)")


def render_inline(text: str) -> str:
    escaped = html.escape(text, quote=False)
    escaped = _CODE.sub(r"<code>\1</code>", escaped)
    escaped = _BOLD.sub(r"<strong>\1</strong>", escaped)
    return _ITALIC.sub(r"<em>\1</em>", escaped)


def markup_to_html(text: str) -> str:
    """Render ``text`` as an HTML fragment."""

    parts: List[str] = []
    paragraph: List[str] = []
    open_list: str | None = None

    def flush_paragraph() -> None:
        if paragraph:
            parts.append("<p>" + "<br>\n".join(paragraph) + "</p>")
            paragraph.clear()

    def close_list() -> None:
        nonlocal open_list
        if open_list is not None:
            parts.append(f"</{open_list}>")
            open_list = None

    def add_item(tag: str, content: str) -> None:
        nonlocal open_list
        flush_paragraph()
        if open_list != tag:
            close_list()
            parts.append(f"<{tag}>")
            open_list = tag
        parts.append(f"<li>{render_inline(content)}</li>")

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            flush_paragraph()
            close_list()
            continue

        if _RULE.match(line):
            flush_paragraph()
            close_list()
            parts.append("<hr>")
            continue

        heading = _HEADING.match(line)
        if heading:
            flush_paragraph()
            close_list()
            level = len(heading.group(1))
            parts.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
            continue

        bullet = _BULLET.match(line)
        if bullet:
            add_item("ul", bullet.group(1))
            continue

        ordered = _ORDERED.match(line)
        if ordered:
            add_item("ol", ordered.group(1))
            continue

        close_list()
        paragraph.append(render_inline(line))

    flush_paragraph()
    close_list()
    return "\n".join(parts)


__all__ = ["markup_to_html", "render_inline"]

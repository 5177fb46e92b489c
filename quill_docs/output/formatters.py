"""Render a :class:`~quill_docs.output.document.Document` into a single file.

Two formatters are available: :class:`MarkdownFormatter` builds Markdown text
directly, and :class:`HtmlFormatter` renders a standalone page through the
``document.jinja`` template with autoescaping, converting section descriptions
with the ``markdown`` library.

Example
-------
>>> from quill_docs.output import DocumentBuilder, get_formatter
>>> document = DocumentBuilder().build(pages)  # doctest: +SKIP
>>> html = get_formatter("html").format(document)  # doctest: +SKIP
"""

from __future__ import annotations

import abc
import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markdown import markdown
from markupsafe import Markup, escape

from quill_docs.templates.engine import format_date

if typ.TYPE_CHECKING:
    from .document import Document, Section, TOCItem

_MARKDOWN_SPECIALS = re.compile(r"([\\*_\[\]`])")


@dc.dataclass(slots=True)
class FormatterOptions:
    """Toggles shared by every formatter."""

    include_toc: bool = True
    include_screenshots: bool = True
    include_elements: bool = True


class BaseFormatter(abc.ABC):
    """Common helpers for single-file formatters."""

    extension = ""
    mime_type = ""

    @abc.abstractmethod
    def format(self, document: Document, options: FormatterOptions | None = None) -> str:
        """Return ``document`` rendered in this formatter's output format."""

    @staticmethod
    def generate_anchor(text: str) -> str:
        """Return a lowercase hyphenated anchor for ``text``."""
        return re.sub(r"[^\w]+", "-", text.lower()).strip("-")


class MarkdownFormatter(BaseFormatter):
    """Render documents as a single Markdown file."""

    extension = "md"
    mime_type = "text/markdown"

    def format(self, document: Document, options: FormatterOptions | None = None) -> str:
        """Return Markdown with metadata, an optional TOC, and every section."""
        opts = options or FormatterOptions()
        parts = [f"# {self.escape(document.title)}\n", self._metadata(document)]
        if opts.include_toc:
            parts.append(self._toc(document.toc))
        parts.extend(self._section(section, opts) for section in document.sections)
        return "\n".join(parts)

    @staticmethod
    def escape(text: str) -> str:
        """Escape characters that would otherwise change Markdown rendering."""
        return _MARKDOWN_SPECIALS.sub(r"\\\1", text)

    @staticmethod
    def _metadata(document: Document) -> str:
        meta = document.metadata
        lines = [
            "## Metadata\n",
            f"**Generated**: {format_date(meta.generated_at)}\n",
            f"**Base URL**: {meta.base_url}\n",
            f"**Total Pages**: {meta.page_count}\n",
        ]
        if meta.format:
            lines.append(f"**Format**: {meta.format}\n")
        if meta.version:
            lines.append(f"**Version**: {meta.version}\n")
        return "".join(lines) + "\n"

    def _toc(self, items: list[TOCItem]) -> str:
        lines = ["## Table of Contents\n"]

        def walk(entries: list[TOCItem], level: int) -> None:
            for item in entries:
                indent = "  " * level
                lines.append(f"{indent}- [{self.escape(item.title)}](#{item.anchor})\n")
                walk(item.children, level + 1)

        walk(items, 0)
        return "".join(lines) + "\n"

    def _section(self, section: Section, opts: FormatterOptions) -> str:
        parts = [
            "---\n",
            f"## {self.escape(section.title)} {{#{section.id}}}\n",
            f"**URL**: {section.url}\n",
        ]
        if section.description:
            parts.append(f"\n{self.escape(section.description)}\n")
        if opts.include_screenshots and section.screenshot:
            parts.append(
                f"\n### Screenshot\n![{self.escape(section.title)}]({section.screenshot})\n"
            )
        if opts.include_elements and section.elements:
            lines = ["\n### UI Elements\n"]
            for element in section.elements:
                lines.append(f"- **{element.type}**: {self.escape(element.text)}\n")
                if element.description:
                    lines.append(f"  - {self.escape(element.description)}\n")
                if element.selector:
                    lines.append(f"  - Selector: `{element.selector}`\n")
            parts.append("".join(lines))
        if section.content:
            parts.append(f"\n{section.content}\n")
        return "\n".join(parts)


class HtmlFormatter(BaseFormatter):
    """Render documents as a standalone HTML page."""

    extension = "html"
    mime_type = "text/html"

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``document.jinja``. Defaults to
            ``quill_docs/output/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("document.jinja")
        self._markdown_extensions = ["sane_lists", "tables", "fenced_code"]

    def format(self, document: Document, options: FormatterOptions | None = None) -> str:
        """Return the rendered HTML page, ending with a newline."""
        opts = options or FormatterOptions()
        sections = [
            {
                "section": section,
                "anchor": section.id,
                "description_html": self._render_description(section.description),
            }
            for section in document.sections
        ]
        html = self.template.render(
            document=document,
            sections=sections,
            generated_at=format_date(document.metadata.generated_at),
            options=opts,
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _render_description(self, text: str | None) -> Markup:
        """Convert a description to HTML, escaping any raw HTML it contains."""
        normalized = (text or "").strip()
        if not normalized:
            return Markup("")
        escaped = str(escape(normalized))
        return Markup(markdown(escaped, extensions=self._markdown_extensions))


_FORMATTERS: dict[str, type[BaseFormatter]] = {
    "markdown": MarkdownFormatter,
    "md": MarkdownFormatter,
    "html": HtmlFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Return a formatter instance for ``name``.

    Raises
    ------
    ValueError
        If ``name`` is not a supported output format.
    """
    try:
        formatter_cls = _FORMATTERS[name.lower()]
    except KeyError as exc:
        available = ", ".join(sorted(_FORMATTERS))
        msg = f"Unsupported output format '{name}'. Supported formats: {available}"
        raise ValueError(msg) from exc
    return formatter_cls()


__all__ = [
    "BaseFormatter",
    "FormatterOptions",
    "HtmlFormatter",
    "MarkdownFormatter",
    "get_formatter",
]

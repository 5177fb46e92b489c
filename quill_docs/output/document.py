"""Assemble crawled pages into a single structured document.

A :class:`Document` carries a title, generation metadata, a table of contents,
and one :class:`Section` per page. It is the input to the single-file
formatters in :mod:`quill_docs.output.formatters`.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ

from quill_docs._constants import VERSION
from quill_docs.urls import site_origin

if typ.TYPE_CHECKING:
    from quill_docs.models import PageInfo, UIElement

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_TITLE = "Web Application Documentation"


class DocumentError(ValueError):
    """Raised when a document cannot be built from the supplied pages."""


@dc.dataclass(slots=True)
class DocumentMetadata:
    """Generation details shown at the top of a document."""

    generated_at: str
    base_url: str
    page_count: int
    version: str | None = None
    format: str | None = None


@dc.dataclass(slots=True)
class TOCItem:
    """Table-of-contents entry pointing at a section anchor."""

    title: str
    anchor: str
    depth: int
    children: list[TOCItem] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Section:
    """One page rendered as a document section."""

    id: str
    title: str
    url: str
    description: str | None = None
    screenshot: str | None = None
    elements: list[UIElement] = dc.field(default_factory=list)
    content: str | None = None


@dc.dataclass(slots=True)
class Document:
    """A complete single-file document."""

    title: str
    metadata: DocumentMetadata
    toc: list[TOCItem]
    sections: list[Section]


class DocumentBuilder:
    """Convert crawled pages into a :class:`Document`."""

    def __init__(
        self,
        *,
        title: str = DEFAULT_DOCUMENT_TITLE,
        include_descriptions: bool = True,
        include_elements: bool = True,
    ) -> None:
        self.title = title
        self.include_descriptions = include_descriptions
        self.include_elements = include_elements

    def build(self, pages: list[PageInfo]) -> Document:
        """Return a document with one section per page.

        Raises
        ------
        DocumentError
            If ``pages`` is empty.
        """
        if not pages:
            msg = "No pages to generate document from"
            raise DocumentError(msg)
        logger.info("Generating document from %d pages", len(pages))
        sections = [self._build_section(page, n) for n, page in enumerate(pages, 1)]
        return Document(
            title=self.title,
            metadata=DocumentMetadata(
                generated_at=dt.datetime.now(dt.UTC).isoformat(),
                base_url=site_origin(pages[0].url),
                page_count=len(pages),
                version=VERSION,
            ),
            toc=[
                TOCItem(title=section.title, anchor=section.id, depth=1)
                for section in sections
            ],
            sections=sections,
        )

    def _build_section(self, page: PageInfo, number: int) -> Section:
        section = Section(
            id=f"section-{number}",
            title=page.title or f"Page {number}",
            url=page.url,
            screenshot=page.screenshot,
        )
        if self.include_descriptions and page.description:
            section.description = page.description
        if self.include_elements and page.elements:
            section.elements = list(page.elements)
        return section


__all__ = [
    "Document",
    "DocumentBuilder",
    "DocumentError",
    "DocumentMetadata",
    "Section",
    "TOCItem",
]

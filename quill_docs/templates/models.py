"""Typed dataclasses describing documentation templates and render payloads."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from quill_docs.generators.models import (
        Feature,
        NavigationStructure,
        SitemapStructure,
    )


class TemplateError(ValueError):
    """Raised when a template cannot be loaded."""


class TemplateNotFoundError(TemplateError):
    """Raised when no built-in or custom template matches a name."""


class TemplateValidationError(TemplateError):
    """Raised when a template file is malformed or misses required fields."""


class TemplateRenderError(RuntimeError):
    """Raised when building any file of a template fails."""


@dc.dataclass(slots=True)
class TemplateSection:
    """A documentation section a template declares."""

    name: str
    title: str
    description: str | None = None
    enabled: bool = True
    subsections: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TemplateDirectories:
    """Directory layout of the generated documentation set."""

    root: str = ""
    navigation: str | None = None
    pages: str | None = None
    features: str | None = None
    assets: str | None = None


@dc.dataclass(slots=True)
class TemplateFiles:
    """File name patterns, relative to the root directory.

    ``page_overview`` and ``page_instructions`` contain a ``{page-id}``
    placeholder; ``feature`` contains a ``{feature-id}`` placeholder. A ``None``
    pattern disables that file kind.
    """

    index: str | None = None
    sitemap: str | None = None
    gnb: str | None = None
    lnb: str | None = None
    page_overview: str | None = None
    page_instructions: str | None = None
    feature: str | None = None


@dc.dataclass(slots=True)
class TemplateStructure:
    """Directory and file layout of a template."""

    directories: TemplateDirectories
    files: TemplateFiles


@dc.dataclass(slots=True)
class ContentFormat:
    """Presentation options applied while rendering."""

    ui_elements_style: str
    include_screenshots: bool = True
    include_breadcrumbs: bool = True
    include_page_toc: bool = False


@dc.dataclass(slots=True)
class TemplateDefinition:
    """A fully parsed template loaded from YAML."""

    name: str
    version: str
    description: str
    structure: TemplateStructure
    sections: list[TemplateSection]
    format: ContentFormat
    author: str | None = None
    helpers: dict[str, str] = dc.field(default_factory=dict)
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class ContextMetadata:
    """Document-level metadata shown in the index and sitemap."""

    title: str
    description: str
    base_url: str
    generated_at: str
    version: str


@dc.dataclass(slots=True)
class TemplatePage:
    """A crawled page shaped for rendering, with its applicable features."""

    id: str
    url: str
    title: str
    description: str
    screenshot: str | None
    features: list[Feature]
    links: list[str]
    level: int


@dc.dataclass(slots=True)
class TemplateContext:
    """Complete render input for one generation run."""

    metadata: ContextMetadata
    sitemap: SitemapStructure
    navigation: NavigationStructure
    pages: list[TemplatePage]
    features: list[Feature]


@dc.dataclass(slots=True)
class RenderedFile:
    """A generated file held in memory."""

    path: str
    content: str


@dc.dataclass(slots=True)
class RenderMetadata:
    """Summary of a render call."""

    template_name: str
    template_version: str
    files_generated: int
    generated_at: str


@dc.dataclass(slots=True)
class RenderResult:
    """In-memory output of the template engine."""

    files: list[RenderedFile]
    metadata: RenderMetadata


__all__ = [
    "ContentFormat",
    "ContextMetadata",
    "RenderMetadata",
    "RenderResult",
    "RenderedFile",
    "TemplateContext",
    "TemplateDefinition",
    "TemplateDirectories",
    "TemplateError",
    "TemplateFiles",
    "TemplateNotFoundError",
    "TemplatePage",
    "TemplateRenderError",
    "TemplateSection",
    "TemplateStructure",
    "TemplateValidationError",
]

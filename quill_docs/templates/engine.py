"""Render a template definition and context into an in-memory Markdown file set.

Every file kind a template can declare (index, sitemap, global and local
navigation, page overview, page instructions, feature) has its own builder
function taking typed inputs and returning Markdown. :class:`TemplateEngine`
decides which builders run from the template's ``structure`` and joins the
resulting paths under the template's root directory.

Files are emitted in a fixed order: index, sitemap, global navigation, local
navigation, then overview and instructions per page, then one file per
feature.

Example
-------
>>> from quill_docs.templates import TemplateEngine, TemplateLoader
>>> template = TemplateLoader().load_template("user-guide")
>>> result = TemplateEngine().render(template, context)  # doctest: +SKIP
>>> [f.path for f in result.files][:2]  # doctest: +SKIP
['docs/index.md', 'docs/sitemap.md']
"""

from __future__ import annotations

import datetime as dt
import logging
import posixpath
import typing as typ

from quill_docs._constants import (
    FEATURE_ID_PLACEHOLDER,
    PAGE_ID_PLACEHOLDER,
    PRODUCT_NAME,
)

from .models import (
    RenderedFile,
    RenderMetadata,
    RenderResult,
    TemplateRenderError,
)

if typ.TYPE_CHECKING:
    from quill_docs.generators.models import (
        Feature,
        NavigationItem,
        NavigationStructure,
    )

    from .models import (
        ContentFormat,
        TemplateContext,
        TemplateDefinition,
        TemplatePage,
    )

logger = logging.getLogger(__name__)

SITEMAP_HEADINGS = {1: "###", 2: "####"}
DEEP_SITEMAP_HEADING = "#####"


def format_date(value: str) -> str:
    """Render an ISO-8601 timestamp as a long English date.

    Values that are not ISO timestamps are returned unchanged.

    >>> format_date("2025-01-05T10:00:00+00:00")
    'January 5, 2025'
    """
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _link(title: str, url: str) -> str:
    return f"[{title}]({url})"


def _finish(lines: list[str]) -> str:
    """Join lines, collapsing runs of blank lines and ending with a newline."""
    collapsed: list[str] = []
    for line in lines:
        if not line and collapsed and not collapsed[-1]:
            continue
        collapsed.append(line)
    while collapsed and not collapsed[-1]:
        collapsed.pop()
    return "\n".join(collapsed) + "\n"


def build_index(context: TemplateContext, sitemap_link: str) -> str:
    """Return the landing page with metadata, navigation, and the page list."""
    meta = context.metadata
    lines = [
        f"# {meta.title}",
        "",
        meta.description,
        "",
        f"**Generated**: {format_date(meta.generated_at)}",
        f"**Version**: {meta.version}",
        f"**Base URL**: {meta.base_url}",
        "",
        "## Overview",
        "",
        "This documentation provides comprehensive information about the application.",
        "",
        "## Navigation",
        "",
        f"- {_link('Site Map', sitemap_link)}",
    ]
    lines.extend(f"- {_link(item.title, item.url)}" for item in context.navigation.gnb)
    lines += ["", "## Pages", ""]
    for page in context.sitemap.pages:
        entry = f"- {_link(page.title, page.url)}"
        if page.description:
            entry = f"{entry} - {page.description}"
        lines.append(entry)
    lines += ["", "---", "", f"*Generated with {PRODUCT_NAME} v{meta.version}*"]
    return _finish(lines)


def build_sitemap(context: TemplateContext) -> str:
    """Return pages headed by level followed by feature membership."""
    meta = context.metadata
    lines = [
        "# Site Map",
        "",
        f"**Base URL**: {meta.base_url}",
        f"**Generated**: {format_date(meta.generated_at)}",
        "",
        "## Page Structure",
        "",
    ]
    for page in context.sitemap.pages:
        marker = SITEMAP_HEADINGS.get(page.level, DEEP_SITEMAP_HEADING)
        lines += [f"{marker} {_link(page.title, page.url)}", ""]
    lines += ["## Features", ""]
    for feature in context.features:
        lines += [
            f"- **{feature.name}**: {feature.description}",
            f"  - Used in: {', '.join(feature.pages)}",
        ]
    return _finish(lines)


def build_global_navigation(navigation: NavigationStructure) -> str:
    """Return one section per top-level entry with its sub-navigation."""
    lines = ["# Global Navigation", ""]
    for item in navigation.gnb:
        lines += [f"## {item.title}", "", f"**URL**: {item.url}", ""]
        if item.children:
            lines += ["### Sub-navigation", ""]
            lines.extend(f"- {_link(child.title, child.url)}" for child in item.children)
            lines.append("")
    return _finish(lines)


def breadcrumb_trail(breadcrumbs: list[NavigationItem]) -> str:
    """Join breadcrumbs with ``" > "``; the last entry is plain text."""
    if not breadcrumbs:
        return ""
    *parents, current = breadcrumbs
    return " > ".join([*(_link(c.title, c.url) for c in parents), current.title])


def build_local_navigation(
    navigation: NavigationStructure, *, include_breadcrumbs: bool = True
) -> str:
    """Return the flat page list and, optionally, the breadcrumb trail."""
    lines = ["# Local Navigation", ""]
    lines.extend(f"- {_link(item.title, item.url)}" for item in navigation.lnb)
    if include_breadcrumbs:
        lines += ["", "## Breadcrumbs", "", breadcrumb_trail(navigation.breadcrumbs)]
    return _finish(lines)


def _feature_lines(feature: Feature) -> list[str]:
    lines = [f"### {feature.name}", "", feature.description, ""]
    if feature.scenario:
        lines += [f"**Usage Scenario**: {feature.scenario}", ""]
    if feature.elements:
        lines.append("**UI Elements**:")
        lines.extend(
            f"- **{el.type}**: {el.text} - {el.description}" for el in feature.elements
        )
        lines.append("")
    return lines


def build_page_overview(page: TemplatePage, content_format: ContentFormat) -> str:
    """Return a page's overview: URL, screenshot, description, and features."""
    lines = [f"# {page.title}", "", f"**URL**: {page.url}", ""]
    if page.screenshot and content_format.include_screenshots:
        lines += [f"![Screenshot]({page.screenshot})", ""]
    if content_format.include_page_toc and page.features:
        lines += ["## Contents", ""]
        lines.extend(f"- [{f.name}](#{f.id})" for f in page.features)
        lines.append("")
    lines += ["## Description", "", page.description, "", "## Features", ""]
    if not page.features:
        lines += ["No features were detected on this page.", ""]
    for feature in page.features:
        lines += _feature_lines(feature)
    if page.links:
        lines += ["## Related Links", ""]
        lines.extend(f"- {_link(link, link)}" for link in page.links)
    return _finish(lines)


def build_page_instructions(page: TemplatePage, overview_link: str | None) -> str:
    """Return numbered steps for every feature on a page."""
    lines = [f"# {page.title} - Instructions", "", "## How to Use", ""]
    for feature in page.features:
        lines += [f"### {feature.name}", ""]
        if feature.scenario:
            lines += [f"**Scenario**: {feature.scenario}", ""]
        lines += ["**Steps**:", ""]
        lines.extend(
            f"{number}. {element.description}"
            for number, element in enumerate(feature.elements, start=1)
        )
        lines.append("")
    lines += ["## Tips", ""]
    if overview_link:
        lines.append(f"- Review the {_link('overview', overview_link)} for more context")
    lines.append("- Check related pages in the navigation")
    return _finish(lines)


def build_feature(feature: Feature, page_links: dict[str, str | None]) -> str:
    """Return a feature's description, the pages using it, and its elements.

    ``page_links`` maps each page ID to a link relative to the feature file,
    or ``None`` when page overviews are not generated.
    """
    lines = [f"# {feature.name}", "", feature.description, "", "## Used In", ""]
    for pid in feature.pages:
        target = page_links.get(pid)
        lines.append(f"- {_link(pid, target)}" if target else f"- {pid}")
    lines += ["", "## UI Elements", ""]
    for element in feature.elements:
        lines += [f"- **{element.type}**: {element.text}", f"  - {element.description}"]
    return _finish(lines)


def _relative_link(target: str, source: str) -> str:
    """Return ``target`` relative to the directory containing ``source``."""
    return posixpath.relpath(target, posixpath.dirname(source) or ".")


class TemplateEngine:
    """Bind a template's file layout to a context and build every file."""

    def render(
        self, template: TemplateDefinition, context: TemplateContext
    ) -> RenderResult:
        """Return every file the template declares, in the canonical order.

        Raises
        ------
        TemplateRenderError
            Wrapping any exception raised while building a file.
        """
        logger.info("Rendering template: %s", template.name)
        try:
            files = self._render_files(template, context)
        except Exception as exc:
            logger.exception("Failed to render template %s", template.name)
            msg = f"Template rendering failed: {exc}"
            raise TemplateRenderError(msg) from exc
        logger.info("Template rendered: %d files", len(files))
        return RenderResult(
            files=files,
            metadata=RenderMetadata(
                template_name=template.name,
                template_version=template.version,
                files_generated=len(files),
                generated_at=dt.datetime.now(dt.UTC).isoformat(),
            ),
        )

    def _render_files(
        self, template: TemplateDefinition, context: TemplateContext
    ) -> list[RenderedFile]:
        root = template.structure.directories.root
        directories = template.structure.directories
        patterns = template.structure.files
        files: list[RenderedFile] = []

        def emit(relative: str, content: str) -> None:
            path = posixpath.normpath(posixpath.join(root, relative))
            if posixpath.isabs(path) or path.split("/", 1)[0] == "..":
                msg = f"Output path '{path}' escapes the output directory"
                raise ValueError(msg)
            files.append(RenderedFile(path=path, content=content))

        if patterns.index:
            emit(patterns.index, build_index(context, patterns.sitemap or "#"))
        if patterns.sitemap:
            emit(patterns.sitemap, build_sitemap(context))
        if directories.navigation:
            if patterns.gnb:
                emit(patterns.gnb, build_global_navigation(context.navigation))
            if patterns.lnb:
                emit(
                    patterns.lnb,
                    build_local_navigation(
                        context.navigation,
                        include_breadcrumbs=template.format.include_breadcrumbs,
                    ),
                )
        if directories.pages and patterns.page_overview:
            for page in context.pages:
                overview = patterns.page_overview.replace(PAGE_ID_PLACEHOLDER, page.id)
                emit(overview, build_page_overview(page, template.format))
                if patterns.page_instructions:
                    instructions = patterns.page_instructions.replace(
                        PAGE_ID_PLACEHOLDER, page.id
                    )
                    emit(
                        instructions,
                        build_page_instructions(
                            page, _relative_link(overview, instructions)
                        ),
                    )
        if directories.features and patterns.feature:
            for feature in context.features:
                relative = patterns.feature.replace(FEATURE_ID_PLACEHOLDER, feature.id)
                page_links = self._page_links(feature, relative, template)
                emit(relative, build_feature(feature, page_links))
        return files

    @staticmethod
    def _page_links(
        feature: Feature, feature_path: str, template: TemplateDefinition
    ) -> dict[str, str | None]:
        pattern = template.structure.files.page_overview
        if not (pattern and template.structure.directories.pages):
            return dict.fromkeys(feature.pages)
        return {
            pid: _relative_link(pattern.replace(PAGE_ID_PLACEHOLDER, pid), feature_path)
            for pid in feature.pages
        }


__all__ = [
    "TemplateEngine",
    "breadcrumb_trail",
    "build_feature",
    "build_global_navigation",
    "build_index",
    "build_local_navigation",
    "build_page_instructions",
    "build_page_overview",
    "build_sitemap",
    "format_date",
]

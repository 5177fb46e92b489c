"""Derive a level-ordered sitemap from crawled pages."""

from __future__ import annotations

import logging
import typing as typ

from quill_docs.urls import page_id, page_level

from .models import SitemapPage, SitemapStructure

if typ.TYPE_CHECKING:
    from quill_docs.models import PageInfo

logger = logging.getLogger(__name__)


class SitemapGenerator:
    """Place every page in a hierarchy based on its URL path depth."""

    def generate(self, pages: list[PageInfo], base_url: str) -> SitemapStructure:
        """Return pages sorted by level then URL, grouped under ``level{N}`` keys.

        Parameters
        ----------
        pages : list[PageInfo]
            Crawled pages in any order.
        base_url : str
            Site root; its path prefix is ignored when computing levels.
        """
        logger.info("Generating sitemap structure")
        sitemap_pages = sorted(
            (
                SitemapPage(
                    id=page_id(page.url),
                    url=page.url,
                    title=page.title,
                    description=page.description or "",
                    level=page_level(page.url, base_url),
                )
                for page in pages
            ),
            key=lambda entry: (entry.level, entry.url),
        )
        hierarchy: dict[str, list[SitemapPage]] = {}
        for entry in sitemap_pages:
            hierarchy.setdefault(f"level{entry.level}", []).append(entry)
        logger.info("Sitemap generated: %d pages", len(sitemap_pages))
        return SitemapStructure(pages=sitemap_pages, hierarchy=hierarchy)


__all__ = ["SitemapGenerator"]

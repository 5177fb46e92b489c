"""Build global, local, and breadcrumb navigation from crawled pages.

The global navigation (GNB) holds one entry per top-level path segment; the
page with the shortest URL in each group becomes the entry and the rest of the
group become its children. The local navigation (LNB) is a flat, URL-sorted
list of every page.
"""

from __future__ import annotations

import logging
import typing as typ

from quill_docs.urls import top_level_path

from .models import NavigationItem, NavigationStructure

if typ.TYPE_CHECKING:
    from quill_docs.models import PageInfo

logger = logging.getLogger(__name__)


class NavigationGenerator:
    """Generate navigation lists for the documentation set."""

    def generate(self, pages: list[PageInfo], base_url: str) -> NavigationStructure:
        """Return the GNB, LNB, and breadcrumb lists for ``pages``."""
        logger.info("Generating navigation structure")
        gnb = self._build_gnb(pages, base_url)
        lnb = self._build_lnb(pages)
        # Breadcrumbs are a fixed home entry; they do not track page depth.
        breadcrumbs = [NavigationItem(title="Home", url=base_url)]
        logger.info(
            "Navigation generated: %d GNB items, %d LNB items", len(gnb), len(lnb)
        )
        return NavigationStructure(gnb=gnb, lnb=lnb, breadcrumbs=breadcrumbs)

    @staticmethod
    def _build_gnb(pages: list[PageInfo], base_url: str) -> list[NavigationItem]:
        groups: dict[str, list[PageInfo]] = {}
        for page in pages:
            groups.setdefault(top_level_path(page.url, base_url), []).append(page)

        items: list[NavigationItem] = []
        for members in groups.values():
            main = members[0]
            for candidate in members[1:]:
                if len(candidate.url) < len(main.url):
                    main = candidate
            children = None
            if len(members) > 1:
                children = [
                    NavigationItem(title=page.title, url=page.url)
                    for page in members
                    if page.url != main.url
                ]
            items.append(NavigationItem(title=main.title, url=main.url, children=children))
        return sorted(items, key=lambda item: item.url)

    @staticmethod
    def _build_lnb(pages: list[PageInfo]) -> list[NavigationItem]:
        return sorted(
            (NavigationItem(title=page.title, url=page.url) for page in pages),
            key=lambda item: item.url,
        )


__all__ = ["NavigationGenerator"]

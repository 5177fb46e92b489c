"""Shared dataclasses produced by the feature, sitemap, and navigation generators."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class UIElementInfo:
    """A UI element re-described in the documentation style of a template."""

    type: str
    text: str
    description: str


@dc.dataclass(slots=True)
class Feature:
    """A named cluster of UI elements serving one user-facing purpose.

    Attributes
    ----------
    id : str
        Kebab-cased feature name, used for file names.
    name : str
        Display name such as ``"Authentication"``.
    description : str
        Style-dependent summary sentence.
    pages : list[str]
        Page identifiers that contributed at least one element, in first-seen
        order.
    elements : list[UIElementInfo]
        Re-described elements, page by page in input order.
    scenario : str or None
        Usage scenario, only set for the ``scenario-based`` style.
    """

    id: str
    name: str
    description: str
    pages: list[str]
    elements: list[UIElementInfo]
    scenario: str | None = None


@dc.dataclass(slots=True)
class SitemapPage:
    """A page positioned in the site hierarchy."""

    id: str
    url: str
    title: str
    description: str
    level: int


@dc.dataclass(slots=True)
class SitemapStructure:
    """Pages ordered by level together with their per-level grouping."""

    pages: list[SitemapPage]
    hierarchy: dict[str, list[SitemapPage]]


@dc.dataclass(slots=True)
class NavigationItem:
    """A navigation entry with optional children."""

    title: str
    url: str
    children: list[NavigationItem] | None = None


@dc.dataclass(slots=True)
class NavigationStructure:
    """Global, local, and breadcrumb navigation lists."""

    gnb: list[NavigationItem]
    lnb: list[NavigationItem]
    breadcrumbs: list[NavigationItem]


__all__ = [
    "Feature",
    "NavigationItem",
    "NavigationStructure",
    "SitemapPage",
    "SitemapStructure",
    "UIElementInfo",
]

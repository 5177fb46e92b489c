"""Group UI elements from crawled pages into user-facing features.

Feature names are inferred from each element's visible text with an ordered
list of keyword rules; the first matching rule wins, so the order of
:data:`FEATURE_RULES` is part of the observable behaviour. Elements whose text
matches no rule fall back to a name derived from their type.

Example
-------
>>> from quill_docs.generators import FeatureExtractor
>>> from quill_docs.models import PageInfo, UIElement
>>> pages = [PageInfo("https://example.com/login", "Login",
...                   elements=[UIElement("button", "Sign in")])]
>>> [f.name for f in FeatureExtractor().extract(pages, "technical")]
['Authentication']
"""

from __future__ import annotations

import logging
import re
import typing as typ

from quill_docs.urls import page_id

from .models import Feature, UIElementInfo

if typ.TYPE_CHECKING:
    from quill_docs.models import PageInfo, UIElement

logger = logging.getLogger(__name__)

UIElementsStyle = typ.Literal["technical", "functional", "scenario-based"]

FEATURE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("login", "sign in"), "Authentication"),
    (("search",), "Search"),
    (("filter",), "Filtering"),
    (("submit", "save"), "Data Submission"),
    (("edit", "update"), "Data Modification"),
    (("delete", "remove"), "Data Deletion"),
    (("navigation", "menu"), "Navigation"),
)

TYPE_FEATURE_NAMES: dict[str, str] = {
    "button": "Interactive Actions",
    "input": "Data Input",
    "form": "Form Submission",
    "link": "Navigation",
    "section": "Content Display",
    "heading": "Content Organization",
}
DEFAULT_FEATURE_NAME = "General Features"

FEATURE_SCENARIOS: dict[str, str] = {
    "Authentication": (
        "When you need to access protected areas, use this feature to log in"
    ),
    "Search": (
        "When looking for specific content, use the search feature to find it quickly"
    ),
    "Filtering": (
        "When you need to narrow down results, apply filters to find what you need"
    ),
    "Data Submission": "When you want to save your information, submit the form",
    "Navigation": (
        "When you need to move between different sections, use the navigation menu"
    ),
}

FUNCTIONAL_TEMPLATES: dict[str, str] = {
    "button": 'Click "{text}" to perform the action',
    "input": 'Enter information in the "{text}" field',
    "form": 'Complete and submit the "{text}" form',
    "link": 'Navigate to "{text}"',
    "section": 'View information in the "{text}" section',
    "heading": 'Section titled "{text}"',
}
FUNCTIONAL_DEFAULT = 'Interact with "{text}"'

SCENARIO_TEMPLATES: dict[str, str] = {
    "button": 'When you want to proceed, click the "{text}" button',
    "input": 'You can provide your information by typing in the "{text}" field',
    "form": 'To complete this task, fill out the "{text}" form and submit',
    "link": 'If you need to access "{text}", click this link',
}
SCENARIO_DEFAULT = 'Use "{text}" to interact with this feature'


def infer_feature_name(element: UIElement) -> str:
    """Return the feature name for ``element`` using the first matching rule."""
    text = (element.text or "").lower()
    for keywords, name in FEATURE_RULES:
        if any(keyword in text for keyword in keywords):
            return name
    return TYPE_FEATURE_NAMES.get(element.type, DEFAULT_FEATURE_NAME)


def feature_id(name: str) -> str:
    """Convert a feature name into a lowercase hyphen-separated identifier."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class _FeatureGroup(typ.NamedTuple):
    pages: list[str]
    elements: list[UIElement]


class FeatureExtractor:
    """Extract features from pages and describe them in a given style."""

    def extract(self, pages: list[PageInfo], style: UIElementsStyle) -> list[Feature]:
        """Group every page's UI elements into features.

        Parameters
        ----------
        pages : list[PageInfo]
            Crawled pages in crawl order.
        style : {"technical", "functional", "scenario-based"}
            Presentation style for feature and element descriptions.

        Returns
        -------
        list[Feature]
            One feature per inferred name, ordered by first appearance.
        """
        logger.info("Extracting features with %s style", style)
        features = [
            Feature(
                id=feature_id(name),
                name=name,
                description=self._describe_feature(name, len(group.elements), style),
                pages=list(group.pages),
                elements=[self._describe_element(el, style) for el in group.elements],
                scenario=self._scenario(name) if style == "scenario-based" else None,
            )
            for name, group in self._group_by_feature(pages).items()
        ]
        logger.info("Extracted %d features", len(features))
        return features

    @staticmethod
    def _group_by_feature(pages: list[PageInfo]) -> dict[str, _FeatureGroup]:
        """Return elements and contributing page IDs keyed by feature name."""
        groups: dict[str, _FeatureGroup] = {}
        for page in pages:
            if not page.elements:
                logger.debug("Page %s has no UI elements", page.url)
                continue
            current_id = page_id(page.url)
            for element in page.elements:
                name = infer_feature_name(element)
                group = groups.setdefault(name, _FeatureGroup([], []))
                if current_id not in group.pages:
                    group.pages.append(current_id)
                group.elements.append(element)
        return groups

    def _describe_element(
        self, element: UIElement, style: UIElementsStyle
    ) -> UIElementInfo:
        match style:
            case "technical":
                description = f"{element.type} element"
                if element.aria_label:
                    description = f"{description} ({element.aria_label})"
            case "functional":
                description = self._templated(
                    element, FUNCTIONAL_TEMPLATES, FUNCTIONAL_DEFAULT
                )
            case "scenario-based":
                description = self._templated(
                    element, SCENARIO_TEMPLATES, SCENARIO_DEFAULT
                )
            case _:
                description = ""
        return UIElementInfo(
            type=element.type, text=element.text or "", description=description
        )

    @staticmethod
    def _templated(
        element: UIElement, templates: typ.Mapping[str, str], default: str
    ) -> str:
        text = element.text or "this element"
        return templates.get(element.type, default).format(text=text)

    @staticmethod
    def _describe_feature(name: str, count: int, style: UIElementsStyle) -> str:
        plural = "s" if count > 1 else ""
        match style:
            case "technical":
                return f"{name} consists of {count} UI element{plural}"
            case "functional":
                return (
                    f"{name} provides functionality through {count} "
                    f"interactive element{plural}"
                )
            case "scenario-based":
                return (
                    f"Users can accomplish {name.lower()} tasks using the "
                    f"available {count} element{plural}"
                )
            case _:
                return name

    @staticmethod
    def _scenario(name: str) -> str:
        return FEATURE_SCENARIOS.get(
            name, f"Use this feature when you need {name.lower()}"
        )


__all__ = [
    "FEATURE_RULES",
    "FeatureExtractor",
    "UIElementsStyle",
    "feature_id",
    "infer_feature_name",
]

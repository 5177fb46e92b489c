"""Crawled page records consumed by the documentation pipeline.

The crawler and description agent hand the pipeline an ordered list of
:class:`PageInfo` records, each carrying the :class:`UIElement` entries found
on the page. Records are decoded from JSON with ``msgspec`` and accept both the
crawler's camelCase keys (``ariaLabel``) and snake_case keys.

Examples
--------
>>> from quill_docs.models import PageInfo
>>> page = PageInfo.from_mapping(
...     {"url": "https://example.com/", "title": "Home",
...      "elements": [{"type": "button", "text": "Login"}]}
... )
>>> page.elements[0].type
'button'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec.json as msgspec_json

from ._constants import ELEMENT_TYPES

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(slots=True)
class UIElement:
    """A UI element scraped from a page.

    Attributes
    ----------
    type : str
        One of ``button``, ``input``, ``form``, ``link``, ``section``,
        ``heading`` or ``other``.
    text : str
        Visible text of the element.
    description : str or None
        Free-form description supplied by the crawler.
    aria_label : str or None
        Accessibility label, when present.
    selector : str or None
        CSS selector used to locate the element.
    """

    type: str
    text: str
    description: str | None = None
    aria_label: str | None = None
    selector: str | None = None

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> UIElement:
        """Build an element from a decoded JSON object."""
        element_type = str(payload.get("type") or "other").lower()
        if element_type not in ELEMENT_TYPES:
            element_type = "other"
        aria_label = payload.get("ariaLabel", payload.get("aria_label"))
        return cls(
            type=element_type,
            text=str(payload.get("text") or ""),
            description=payload.get("description"),
            aria_label=aria_label,
            selector=payload.get("selector"),
        )


@dc.dataclass(slots=True)
class PageInfo:
    """Page data captured during crawling."""

    url: str
    title: str
    description: str | None = None
    screenshot: str | None = None
    elements: list[UIElement] = dc.field(default_factory=list)
    links: list[str] = dc.field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> PageInfo:
        """Build a page from a decoded JSON object.

        Raises
        ------
        ValueError
            If the payload has no ``url``.
        """
        url = payload.get("url")
        if not url:
            msg = "Page entry is missing required field 'url'."
            raise ValueError(msg)
        elements = [
            UIElement.from_mapping(item)
            for item in payload.get("elements") or []
            if isinstance(item, dict)
        ]
        return cls(
            url=str(url),
            title=str(payload.get("title") or ""),
            description=payload.get("description"),
            screenshot=payload.get("screenshot"),
            elements=elements,
            links=[str(link) for link in payload.get("links") or []],
        )


def parse_pages(raw: bytes | str) -> list[PageInfo]:
    """Decode crawler JSON into :class:`PageInfo` records.

    The payload may be a list of page objects or an object with a ``pages``
    list.

    Raises
    ------
    TypeError
        If the decoded JSON has neither shape.
    """
    loaded = msgspec_json.decode(raw)
    match loaded:
        case list():
            entries = loaded
        case {"pages": list() as nested}:
            entries = nested
        case _:
            msg = "Pages JSON must be a list or an object with a 'pages' list."
            raise TypeError(msg)
    return [PageInfo.from_mapping(entry) for entry in entries if isinstance(entry, dict)]


def load_pages(path: Path) -> list[PageInfo]:
    """Load crawler output from ``path``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    if not path.exists():
        msg = f"Pages file '{path}' not found."
        raise FileNotFoundError(msg)
    return parse_pages(path.read_bytes())


__all__ = ["PageInfo", "UIElement", "load_pages", "parse_pages"]

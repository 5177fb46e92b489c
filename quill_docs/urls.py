"""URL helpers shared by every stage of the documentation pipeline.

Page identifiers and hierarchy levels must agree between the feature
extractor, the sitemap and navigation generators, and the multi-file
generator; they all derive them through the functions in this module.

Examples
--------
>>> from quill_docs.urls import page_id, page_level
>>> page_id("https://example.com/docs/Getting Started/")
'docs-getting_20started'
>>> page_level("https://example.com/docs/intro", "https://example.com")
3
"""

from __future__ import annotations

import re
from urllib.parse import quote, urlsplit

from ._constants import MAX_PAGE_LEVEL

_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")
_FALLBACK_ID_LENGTH = 50
_PATH_SAFE_CHARS = "/%!$&'()*+,;=:@~"


def _path_of(url: str) -> str | None:
    """Return the percent-encoded path of ``url``, or ``None`` when not absolute."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return quote(parsed.path or "/", safe=_PATH_SAFE_CHARS)


def page_id(url: str) -> str:
    """Return a filesystem and anchor safe identifier derived from ``url``.

    The path is stripped of surrounding slashes, inner slashes become hyphens,
    and any other unsafe character becomes an underscore. The path is
    percent-encoded first, so ``/café`` yields ``caf_c3_a9`` and distinct
    non-ASCII paths keep distinct identifiers. The site root maps to
    ``"index"``. Strings that are not absolute URLs are sanitized directly and
    truncated to 50 characters.
    """
    path = _path_of(url)
    if path is None:
        return _UNSAFE_ID_CHARS.sub("_", url).lower()[:_FALLBACK_ID_LENGTH]
    slug = path.strip("/").replace("/", "-")
    slug = _UNSAFE_ID_CHARS.sub("_", slug).lower()
    return slug or "index"


def relative_segments(url: str, base_url: str) -> list[str] | None:
    """Return the path segments of ``url`` below the path of ``base_url``.

    Returns ``None`` when either value is not an absolute URL.
    """
    url_path = _path_of(url)
    base_path = _path_of(base_url)
    if url_path is None or base_path is None:
        return None
    url_path = url_path.strip("/")
    base_path = base_path.strip("/")
    relative = url_path
    if url_path.startswith(base_path):
        relative = url_path[len(base_path) :].lstrip("/")
    return [segment for segment in relative.split("/") if segment]


def page_level(url: str, base_url: str) -> int:
    """Return the 1-based hierarchy level of ``url``, capped at six."""
    segments = relative_segments(url, base_url)
    if not segments:
        return 1
    return min(len(segments) + 1, MAX_PAGE_LEVEL)


def top_level_path(url: str, base_url: str) -> str:
    """Return ``"/<first segment>"`` for ``url`` or ``"/"`` for root pages."""
    segments = relative_segments(url, base_url)
    if not segments:
        return "/"
    return f"/{segments[0]}"


def site_origin(url: str) -> str:
    """Return ``scheme://host`` for ``url``, or ``url`` itself when malformed."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.netloc:
        return url
    return f"{parsed.scheme}://{parsed.netloc}"


__all__ = [
    "page_id",
    "page_level",
    "relative_segments",
    "site_origin",
    "top_level_path",
]

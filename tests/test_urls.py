"""Unit tests for the shared URL helpers in ``quill_docs.urls``."""

from __future__ import annotations

import pytest

from quill_docs.urls import (
    page_id,
    page_level,
    relative_segments,
    site_origin,
    top_level_path,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.com/", "index"),
        ("https://example.com", "index"),
        ("https://example.com/about", "about"),
        ("https://example.com/docs/intro/", "docs-intro"),
        ("https://example.com/Docs/My Page", "docs-my_20page"),
        ("https://example.com/a.b/c?x=1", "a_b-c"),
        ("https://example.com/café", "caf_c3_a9"),
        ("https://example.com/caf%C3%A9", "caf_c3_a9"),
    ],
)
def test_page_id_from_path(url: str, expected: str) -> None:
    """Derive identifiers from the URL path only."""
    assert page_id(url) == expected, f"expected {expected!r} for {url!r}"


def test_page_id_keeps_non_ascii_paths_distinct() -> None:
    """Pages differing only in non-ASCII characters get different identifiers."""
    urls = [
        "https://example.com/café",
        "https://example.com/cafê",
        "https://example.com/caf_",
    ]
    ids = [page_id(url) for url in urls]
    assert len(set(ids)) == len(urls), f"expected distinct page ids, got {ids!r}"


def test_page_id_falls_back_for_invalid_url() -> None:
    """Sanitize and truncate strings that are not absolute URLs."""
    raw = "not a url " + "x" * 60
    result = page_id(raw)
    assert result.startswith("not_a_url_"), f"unexpected fallback id {result!r}"
    assert len(result) == 50, f"expected fallback truncated to 50 chars, got {len(result)}"


def test_relative_segments_strip_base_path() -> None:
    """Remove the base URL's path prefix before splitting."""
    segments = relative_segments(
        "https://example.com/app/users/list", "https://example.com/app"
    )
    assert segments == ["users", "list"], f"unexpected segments {segments!r}"


def test_relative_segments_invalid_url() -> None:
    """Return ``None`` when either URL is not absolute."""
    assert relative_segments("garbage", "https://example.com") is None
    assert relative_segments("https://example.com/a", "garbage") is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.com/", 1),
        ("https://example.com/about", 2),
        ("https://example.com/a/b", 3),
        ("https://example.com/a/b/c/d/e/f/g", 6),
        ("not a url", 1),
    ],
)
def test_page_level(url: str, expected: int) -> None:
    """Compute levels from segment count, clamped to the range one to six."""
    assert page_level(url, "https://example.com") == expected


def test_top_level_path() -> None:
    """Group by the first path segment, mapping root pages to ``/``."""
    assert top_level_path("https://example.com/", "https://example.com") == "/"
    assert (
        top_level_path("https://example.com/products/widgets", "https://example.com")
        == "/products"
    )


def test_site_origin() -> None:
    """Return scheme and host, or the input unchanged when malformed."""
    assert site_origin("https://example.com/a/b?c=d") == "https://example.com"
    assert site_origin("relative/path") == "relative/path"

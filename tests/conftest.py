"""Shared fixtures for the quill_docs test suite."""

from __future__ import annotations

import pytest

from quill_docs.models import PageInfo, UIElement

BASE_URL = "https://example.com"


@pytest.fixture
def base_url() -> str:
    """Return the site root used by the sample pages."""
    return BASE_URL


@pytest.fixture
def home_and_about() -> list[PageInfo]:
    """Return the minimal two-page site: a home page and an about page."""
    return [
        PageInfo(
            url=f"{BASE_URL}/",
            title="Home",
            elements=[UIElement(type="button", text="Get Started")],
        ),
        PageInfo(
            url=f"{BASE_URL}/about",
            title="About",
            elements=[UIElement(type="section", text="Our Mission")],
        ),
    ]


@pytest.fixture
def sample_pages() -> list[PageInfo]:
    """Return a small crawled site covering several feature rules and depths."""
    return [
        PageInfo(
            url=f"{BASE_URL}/",
            title="Home",
            description="Landing page",
            screenshot="screenshots/home.png",
            elements=[
                UIElement(type="button", text="Login", aria_label="Log in"),
                UIElement(type="input", text="Search products"),
                UIElement(type="link", text="Main menu"),
            ],
            links=[f"{BASE_URL}/products"],
        ),
        PageInfo(
            url=f"{BASE_URL}/products",
            title="Products",
            description="Product catalogue",
            elements=[
                UIElement(type="button", text="Filter results"),
                UIElement(type="input", text="Search"),
            ],
        ),
        PageInfo(
            url=f"{BASE_URL}/products/widgets",
            title="Widgets",
            elements=[UIElement(type="form", text="Save widget")],
        ),
        PageInfo(
            url=f"{BASE_URL}/account/settings/profile",
            title="Profile",
            elements=[],
        ),
    ]

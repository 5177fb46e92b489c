"""Behaviour tests for multi-file documentation generation.

This module drives ``generate_multi_file`` end to end through the scenarios in
``features/multi_file_generation.feature``. Each scenario writes into a fresh
``tmp_path`` and then inspects the files on disk and the returned result, so
the checks cover template resolution, rendering, and the write step together.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_multi_file_generation.py -v

Prerequisites:
    - The test extras (pytest-bdd in particular) installed via
      ``pip install -e .[test]``.
    - Access to the feature file at
      ``features/multi_file_generation.feature`` within this repository.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from quill_docs.generators import (
    GenerationError,
    MultiFileGenerationResult,
    MultiFileGeneratorOptions,
    generate_multi_file,
)
from quill_docs.models import PageInfo, UIElement
from quill_docs.templates import TemplateNotFoundError

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "multi_file_generation.feature"
)
scenarios(FEATURE_FILE)

BASE_URL = "https://example.com"


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a crawled site with a home page and an about page")
def given_two_pages(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Store the crawled pages and the output folder in the scenario state."""
    scenario_state["pages"] = [
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
    scenario_state["output_dir"] = tmp_path / "out"


@when(parsers.parse('I generate documentation with the "{template}" template'))
def when_generate(template: str, scenario_state: dict[str, object]) -> None:
    """Run generation, recording either the result or the raised error."""
    options = MultiFileGeneratorOptions(
        output_dir=scenario_state["output_dir"],  # type: ignore[arg-type]
        base_url=BASE_URL,
        template=template,
    )
    try:
        scenario_state["result"] = generate_multi_file(
            scenario_state["pages"],  # type: ignore[arg-type]
            options,
        )
    except GenerationError as exc:
        scenario_state["error"] = exc


def _docs_root(scenario_state: dict[str, object]) -> Path:
    return scenario_state["output_dir"] / "docs"  # type: ignore[operator]


@then("the documentation index and sitemap are written")
def then_index_and_sitemap(scenario_state: dict[str, object]) -> None:
    """Verify the site-level files exist."""
    docs = _docs_root(scenario_state)
    assert (docs / "index.md").is_file(), "expected docs/index.md to be written"
    assert (docs / "sitemap.md").is_file(), "expected docs/sitemap.md to be written"


@then("both navigation files are written")
def then_navigation(scenario_state: dict[str, object]) -> None:
    """Verify the global and local navigation files exist."""
    nav = _docs_root(scenario_state) / "navigation"
    for name in ("global-navigation.md", "local-navigation.md"):
        assert (nav / name).is_file(), f"expected navigation/{name} to be written"


@then("each page has its own folder under the pages directory")
def then_page_folders(scenario_state: dict[str, object]) -> None:
    """Verify one folder per page, named by page ID."""
    pages_dir = _docs_root(scenario_state) / "pages"
    folders = sorted(path.name for path in pages_dir.iterdir() if path.is_dir())
    assert folders == ["about", "index"], f"unexpected page folders {folders!r}"


@then(parsers.parse("the result reports {count:d} pages"))
def then_page_count(count: int, scenario_state: dict[str, object]) -> None:
    """Verify the page count and a positive file count."""
    result: MultiFileGenerationResult = scenario_state["result"]  # type: ignore[assignment]
    assert result.metadata.page_count == count, (
        f"expected {count} pages, got {result.metadata.page_count}"
    )
    assert result.files_generated > 0, "expected at least one generated file"


@then("no feature files are written")
def then_no_features(scenario_state: dict[str, object]) -> None:
    """Verify that templates without a feature pattern skip feature files."""
    assert not (_docs_root(scenario_state) / "features").exists(), (
        "quick-start must not write feature files"
    )


@then("page instructions describe usage scenarios")
def then_scenario_instructions(scenario_state: dict[str, object]) -> None:
    """Verify scenario-based wording in the home page instructions."""
    path = _docs_root(scenario_state) / "pages" / "index" / "instructions.md"
    text = path.read_text(encoding="utf-8")
    assert "**Scenario**:" in text, "expected a usage scenario in the instructions"
    assert 'click the "Get Started" button' in text, text


@then("generation fails with a wrapped template error")
def then_wrapped_error(scenario_state: dict[str, object]) -> None:
    """Verify the failure is a ``GenerationError`` chained to the lookup error."""
    error = scenario_state.get("error")
    assert isinstance(error, GenerationError), f"expected GenerationError, got {error!r}"
    assert isinstance(error.__cause__, TemplateNotFoundError), (
        f"expected a TemplateNotFoundError cause, got {error.__cause__!r}"
    )
    assert "result" not in scenario_state, "no result should be recorded on failure"

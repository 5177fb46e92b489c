"""End-to-end tests for ``MultiFileGenerator``.

These tests write real files under ``tmp_path`` and inspect both the returned
result and the tree on disk. Collaborators are replaced with ``pytest-mock``
doubles only where a failure needs to be forced.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from quill_docs.generators import (
    GenerationError,
    MultiFileGenerator,
    MultiFileGeneratorOptions,
    generate_multi_file,
)
from quill_docs.models import PageInfo
from quill_docs.templates import (
    RenderedFile,
    RenderMetadata,
    RenderResult,
    TemplateEngine,
    TemplateLoader,
)


@pytest.fixture
def options(tmp_path: Path, base_url: str) -> MultiFileGeneratorOptions:
    """Return user-guide options writing below ``tmp_path``."""
    return MultiFileGeneratorOptions(output_dir=tmp_path, base_url=base_url)


def test_generates_user_guide_tree(
    tmp_path: Path, home_and_about: list[PageInfo], options: MultiFileGeneratorOptions
) -> None:
    """Write index, sitemap, navigation, and one folder per page."""
    result = generate_multi_file(home_and_about, options)

    for relative in (
        "docs/index.md",
        "docs/sitemap.md",
        "docs/navigation/global-navigation.md",
        "docs/navigation/local-navigation.md",
    ):
        assert (tmp_path / relative).is_file(), f"expected {relative} to be written"
    page_dirs = sorted(p.name for p in (tmp_path / "docs" / "pages").iterdir())
    assert page_dirs == ["about", "index"], f"unexpected page folders {page_dirs!r}"
    assert result.metadata.page_count == 2
    assert result.metadata.feature_count == 2
    assert result.files_generated == len(result.files) > 0
    assert result.template_name == "user-guide"
    assert all(Path(path).is_absolute() for path in result.files)


def test_result_payload_is_camel_case(
    home_and_about: list[PageInfo], options: MultiFileGeneratorOptions, base_url: str
) -> None:
    """Expose the result payload with camelCase keys."""
    payload = generate_multi_file(home_and_about, options).as_dict()
    assert set(payload) == {
        "filesGenerated",
        "outputDir",
        "files",
        "templateName",
        "metadata",
    }
    assert payload["metadata"]["baseUrl"] == base_url
    assert payload["metadata"]["pageCount"] == 2


def test_context_attaches_page_features(
    sample_pages: list[PageInfo], options: MultiFileGeneratorOptions
) -> None:
    """Attach only the features whose page list includes the page."""
    template = TemplateLoader().load_template("user-guide")
    context = MultiFileGenerator(options).build_context(sample_pages, template)
    by_id = {page.id: page for page in context.pages}
    assert [f.name for f in by_id["products"].features] == ["Search", "Filtering"]
    assert by_id["account-settings-profile"].features == []
    assert by_id["account-settings-profile"].level == 4
    assert context.metadata.title == "Documentation"
    assert context.metadata.description == "Documentation for https://example.com"


def test_existing_directories_are_reused(
    home_and_about: list[PageInfo], options: MultiFileGeneratorOptions
) -> None:
    """Running twice into the same folder overwrites without error."""
    first = generate_multi_file(home_and_about, options)
    second = generate_multi_file(home_and_about, options)
    assert first.files == second.files


def test_empty_page_list(options: MultiFileGeneratorOptions) -> None:
    """Generate the site-level files even with no pages."""
    result = generate_multi_file([], options)
    assert result.metadata.page_count == 0
    assert result.metadata.feature_count == 0
    assert any(path.endswith("index.md") for path in result.files)


def test_unknown_template_is_wrapped(
    home_and_about: list[PageInfo], tmp_path: Path, base_url: str
) -> None:
    """Template lookup failures surface as ``GenerationError``."""
    options = MultiFileGeneratorOptions(
        output_dir=tmp_path, base_url=base_url, template="does-not-exist"
    )
    with pytest.raises(GenerationError, match="Multi-file generation failed"):
        generate_multi_file(home_and_about, options)
    assert not (tmp_path / "docs").exists(), "nothing should be written"


def test_write_failure_keeps_earlier_files(
    home_and_about: list[PageInfo],
    options: MultiFileGeneratorOptions,
    tmp_path: Path,
    mocker: MockerFixture,
) -> None:
    """A failing write aborts the run without removing files already written."""
    real_write = Path.write_text
    calls = {"count": 0}

    def flaky_write(self: Path, *args: object, **kwargs: object) -> int:
        calls["count"] += 1
        if calls["count"] == 3:
            msg = "disk full"
            raise OSError(msg)
        return real_write(self, *args, **kwargs)  # type: ignore[arg-type]

    mocker.patch.object(Path, "write_text", flaky_write)
    with pytest.raises(GenerationError, match="disk full") as info:
        generate_multi_file(home_and_about, options)
    assert isinstance(info.value.__cause__, OSError)
    assert (tmp_path / "docs" / "index.md").is_file()
    assert (tmp_path / "docs" / "sitemap.md").is_file()


def test_injected_collaborators_are_used(
    home_and_about: list[PageInfo],
    options: MultiFileGeneratorOptions,
    mocker: MockerFixture,
) -> None:
    """Use injected loader and engine instances instead of building new ones."""
    loader = TemplateLoader()
    engine = TemplateEngine()
    render = mocker.spy(engine, "render")
    generator = MultiFileGenerator(options, template_loader=loader, template_engine=engine)
    generator.generate(home_and_about)
    assert render.call_count == 1
    assert loader.cache_size == 1, "expected the injected loader to cache the template"


def test_non_ascii_urls_get_separate_page_folders(
    tmp_path: Path, options: MultiFileGeneratorOptions
) -> None:
    """Pages differing only in accented characters do not overwrite each other."""
    pages = [
        PageInfo(url="https://example.com/café", title="Cafe"),
        PageInfo(url="https://example.com/cafê", title="Cafe Two"),
    ]
    result = generate_multi_file(pages, options)
    page_dirs = sorted(p.name for p in (tmp_path / "docs" / "pages").iterdir())
    assert page_dirs == ["caf_c3_a9", "caf_c3_aa"], f"unexpected folders {page_dirs!r}"
    assert len(set(result.files)) == result.files_generated, (
        "expected every reported file to be written exactly once"
    )


def test_writer_refuses_paths_outside_output_dir(
    tmp_path: Path,
    home_and_about: list[PageInfo],
    base_url: str,
    mocker: MockerFixture,
) -> None:
    """Abort before writing a rendered path that leaves the output folder."""
    out_dir = tmp_path / "a" / "b" / "out"
    engine = TemplateEngine()
    mocker.patch.object(
        engine,
        "render",
        return_value=RenderResult(
            files=[RenderedFile(path="../../escaped/index.md", content="# x\n")],
            metadata=RenderMetadata(
                template_name="user-guide",
                template_version="1.0.0",
                files_generated=1,
                generated_at="2025-01-05T10:00:00+00:00",
            ),
        ),
    )
    generator = MultiFileGenerator(
        MultiFileGeneratorOptions(output_dir=out_dir, base_url=base_url),
        template_engine=engine,
    )
    with pytest.raises(GenerationError, match="outside") as info:
        generator.generate(home_and_about)
    assert isinstance(info.value.__cause__, ValueError)
    assert not (tmp_path / "a" / "escaped").exists(), "nothing may escape the output dir"

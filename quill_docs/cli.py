"""Cyclopts CLI entrypoint for generating Quill documentation.

The ``quill`` console script defined here turns a crawler's ``pages.json``
into documentation. ``quill generate`` writes a multi-file Markdown manual
from a template preset, ``quill render`` writes a single Markdown or HTML
document, and ``quill templates`` lists the built-in presets. Every option
can also be supplied through a ``QUILL_``-prefixed environment variable.

Examples
--------
Generate a user guide into ``manual/``:

>>> from quill_docs.cli import app
>>> app.run(
...     [
...         "generate",
...         "--pages",
...         "crawl/pages.json",
...         "--base-url",
...         "https://example.com",
...         "--output-dir",
...         "manual",
...     ]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .generators import MultiFileGeneratorOptions, generate_multi_file
from .generators.multi_file import DEFAULT_TEMPLATE
from .models import load_pages
from .output import DocumentBuilder, FormatterOptions, get_formatter
from .output.document import DEFAULT_DOCUMENT_TITLE
from .templates import TemplateLoader

DEFAULT_PAGES = Path("pages.json")
DEFAULT_OUTPUT_DIR = Path("docs-output")

app = App(name="quill", config=cyclopts.config.Env("QUILL_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Generate a multi-file Markdown manual from crawled pages.")
def generate(
    *,
    pages: typ.Annotated[
        Path, Parameter(help="Crawler output JSON", env_var="QUILL_PAGES")
    ] = DEFAULT_PAGES,
    base_url: typ.Annotated[
        str, Parameter(help="Root URL of the documented site", env_var="QUILL_BASE_URL")
    ],
    template: typ.Annotated[
        str,
        Parameter(
            help="Built-in preset name or custom template path",
            env_var="QUILL_TEMPLATE",
        ),
    ] = DEFAULT_TEMPLATE,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output folder", env_var="QUILL_OUTPUT_DIR")
    ] = DEFAULT_OUTPUT_DIR,
    title: typ.Annotated[
        str | None, Parameter(help="Documentation title", env_var="QUILL_TITLE")
    ] = None,
    custom_template_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Folder searched for custom template YAML files",
            env_var="QUILL_CUSTOM_TEMPLATE_DIR",
        ),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="QUILL_VERBOSE")
    ] = False,
) -> None:
    """Generate multi-file documentation for the crawled pages.

    Parameters
    ----------
    pages : Path, optional
        JSON file produced by the crawler (overridable via ``QUILL_PAGES``).
    base_url : str
        Root URL of the documented site; drives page levels and navigation.
    template : str, optional
        Template preset (``user-guide``, ``technical``, ``quick-start``) or
        the name or path of a custom template.
    output_dir : Path, optional
        Folder the rendered files are written below.
    title : str or None, optional
        Title shown on the index page; defaults to ``"Documentation"``.
    custom_template_dir : Path or None, optional
        Folder searched for ``{template}.yaml`` when ``template`` is not a
        built-in preset.
    verbose : bool, optional
        Log progress at DEBUG level.

    Raises
    ------
    GenerationError
        If loading the template, rendering, or writing fails.
    """
    _configure_logging(verbose=verbose)
    options = MultiFileGeneratorOptions(
        output_dir=output_dir,
        base_url=base_url,
        template=template,
        title=title,
        custom_template_dir=custom_template_dir,
    )
    result = generate_multi_file(load_pages(pages), options)
    for path in result.files:
        print(f"wrote {_format_path(Path(path))}")


@app.command(help="Render all crawled pages into a single Markdown or HTML file.")
def render(
    *,
    pages: typ.Annotated[
        Path, Parameter(help="Crawler output JSON", env_var="QUILL_PAGES")
    ] = DEFAULT_PAGES,
    output: typ.Annotated[
        Path, Parameter(help="Output file", env_var="QUILL_OUTPUT")
    ],
    format: typ.Annotated[  # noqa: A002 - mirrors the CLI flag name
        str, Parameter(help="Output format (markdown or html)", env_var="QUILL_FORMAT")
    ] = "markdown",
    title: typ.Annotated[
        str, Parameter(help="Document title", env_var="QUILL_TITLE")
    ] = DEFAULT_DOCUMENT_TITLE,
    toc: typ.Annotated[
        bool, Parameter(help="Include a table of contents", env_var="QUILL_TOC")
    ] = True,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="QUILL_VERBOSE")
    ] = False,
) -> None:
    """Render a single-file document for the crawled pages.

    Parameters
    ----------
    pages : Path, optional
        JSON file produced by the crawler.
    output : Path
        Destination file; parent folders are created as needed.
    format : str, optional
        ``markdown`` (or ``md``) or ``html``.
    title : str, optional
        Document title.
    toc : bool, optional
        Include a table of contents; pass ``--no-toc`` to omit it.
    verbose : bool, optional
        Log progress at DEBUG level.

    Raises
    ------
    ValueError
        If ``format`` is not supported or no pages were crawled.
    """
    _configure_logging(verbose=verbose)
    formatter = get_formatter(format)
    document = DocumentBuilder(title=title).build(load_pages(pages))
    content = formatter.format(document, FormatterOptions(include_toc=toc))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="List the built-in template presets.")
def templates() -> None:
    """Print each built-in template with its version and description."""
    loader = TemplateLoader()
    for name in loader.list_builtin_templates():
        meta = loader.get_template_metadata(name)
        print(f"{meta['name']} (v{meta['version']}): {meta['description']}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``quill`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

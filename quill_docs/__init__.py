"""Turn crawled web-application pages into end-user documentation.

This package exposes the ``quill`` CLI and the pipeline behind it: feature
extraction, sitemap and navigation generation, template loading and
rendering, and single-file Markdown or HTML output.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``__version__``: Package version recorded in generated documents.

Examples
--------
>>> from quill_docs import main
>>> main()  # doctest: +SKIP
>>> from quill_docs import __version__
>>> isinstance(__version__, str)
True
"""

from __future__ import annotations

from ._constants import VERSION as __version__
from .cli import app, main

__all__ = ["__version__", "app", "main"]

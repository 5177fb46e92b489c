"""Single-file documentation output (Markdown and HTML)."""

from .document import (
    Document,
    DocumentBuilder,
    DocumentError,
    DocumentMetadata,
    Section,
    TOCItem,
)
from .formatters import (
    BaseFormatter,
    FormatterOptions,
    HtmlFormatter,
    MarkdownFormatter,
    get_formatter,
)

__all__ = [
    "BaseFormatter",
    "Document",
    "DocumentBuilder",
    "DocumentError",
    "DocumentMetadata",
    "FormatterOptions",
    "HtmlFormatter",
    "MarkdownFormatter",
    "Section",
    "TOCItem",
    "get_formatter",
]

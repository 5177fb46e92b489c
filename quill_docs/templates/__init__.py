"""Template definitions, loading, and rendering for multi-file documentation.

A template is a YAML document describing the output directory layout, which
file kinds to generate, and how UI elements are described. The subpackage
parses templates into :class:`TemplateDefinition` dataclasses via
:class:`TemplateLoader` and renders them with :class:`TemplateEngine`.

Examples
--------
>>> from quill_docs.templates import TemplateLoader
>>> loader = TemplateLoader()
>>> loader.load_template("user-guide").structure.directories.root
'docs'
"""

from .engine import TemplateEngine
from .loader import BuiltinTemplate, TemplateLoader, TemplateLoaderOptions
from .models import (
    ContentFormat,
    ContextMetadata,
    RenderedFile,
    RenderMetadata,
    RenderResult,
    TemplateContext,
    TemplateDefinition,
    TemplateDirectories,
    TemplateError,
    TemplateFiles,
    TemplateNotFoundError,
    TemplatePage,
    TemplateRenderError,
    TemplateSection,
    TemplateStructure,
    TemplateValidationError,
)

__all__ = [
    "BuiltinTemplate",
    "ContentFormat",
    "ContextMetadata",
    "RenderMetadata",
    "RenderResult",
    "RenderedFile",
    "TemplateContext",
    "TemplateDefinition",
    "TemplateDirectories",
    "TemplateEngine",
    "TemplateError",
    "TemplateFiles",
    "TemplateLoader",
    "TemplateLoaderOptions",
    "TemplateNotFoundError",
    "TemplatePage",
    "TemplateRenderError",
    "TemplateSection",
    "TemplateStructure",
    "TemplateValidationError",
]

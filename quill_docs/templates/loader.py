"""Load documentation templates from YAML into typed dataclasses.

Templates are either built-in presets shipped under ``templates/builtin``
(``user-guide``, ``technical``, ``quick-start``) or custom YAML files. A custom
template is addressed by a path (any name containing a path separator) or by a
bare name resolved as ``<custom_templates_dir>/<name>.yaml``.

Examples
--------
>>> from quill_docs.templates import TemplateLoader
>>> loader = TemplateLoader()
>>> loader.load_template("technical").format.ui_elements_style
'technical'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from quill_docs._constants import UI_ELEMENT_STYLES

from .models import (
    ContentFormat,
    TemplateDefinition,
    TemplateDirectories,
    TemplateFiles,
    TemplateNotFoundError,
    TemplateSection,
    TemplateStructure,
    TemplateValidationError,
)

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "builtin"


class BuiltinTemplate(enum.StrEnum):
    """Names of the template presets shipped with the package."""

    USER_GUIDE = "user-guide"
    TECHNICAL = "technical"
    QUICK_START = "quick-start"


@dc.dataclass(slots=True)
class TemplateLoaderOptions:
    """Loader configuration.

    Attributes
    ----------
    custom_templates_dir : Path or None
        Directory searched for ``<name>.yaml`` custom templates.
    validate : bool
        Check required fields after parsing.
    cache : bool
        Memoize parsed templates by the name they were requested with.
    """

    custom_templates_dir: Path | None = None
    validate: bool = True
    cache: bool = True


class TemplateLoader:
    """Resolve, parse, validate, and cache template definitions.

    The cache is a plain per-instance dictionary; share a loader between
    threads only with external locking.
    """

    def __init__(self, options: TemplateLoaderOptions | None = None) -> None:
        self.options = options or TemplateLoaderOptions()
        self._cache: dict[str, TemplateDefinition] = {}

    def load_template(self, name: str) -> TemplateDefinition:
        """Return the template registered under ``name``.

        Raises
        ------
        TemplateNotFoundError
            If ``name`` is neither a built-in preset nor a resolvable custom
            template.
        TemplateValidationError
            If the YAML cannot be parsed or misses required fields.
        """
        if self.options.cache and name in self._cache:
            logger.debug("Loading template '%s' from cache", name)
            return self._cache[name]
        if name in {member.value for member in BuiltinTemplate}:
            return self.load_builtin_template(BuiltinTemplate(name))
        return self.load_custom_template(name)

    def load_builtin_template(self, name: BuiltinTemplate) -> TemplateDefinition:
        """Parse one of the presets shipped with the package."""
        path = BUILTIN_TEMPLATES_DIR / f"{name.value}.yaml"
        if not path.exists():
            msg = f"Builtin template '{name.value}' not found at {path}"
            raise TemplateNotFoundError(msg)
        logger.info("Loading builtin template: %s", name.value)
        return self._parse_template_file(path, name.value)

    def load_custom_template(self, name_or_path: str) -> TemplateDefinition:
        """Parse a custom template addressed by path or by name."""
        if "/" in name_or_path or "\\" in name_or_path:
            path = Path(name_or_path).resolve()
        elif self.options.custom_templates_dir is not None:
            path = self.options.custom_templates_dir / f"{name_or_path}.yaml"
        else:
            msg = f"Template '{name_or_path}' not found"
            raise TemplateNotFoundError(msg)
        if not path.exists():
            msg = f"Custom template '{name_or_path}' not found at {path}"
            raise TemplateNotFoundError(msg)
        logger.info("Loading custom template from: %s", path)
        return self._parse_template_file(path, name_or_path)

    def list_builtin_templates(self) -> list[str]:
        """Return the names of every built-in preset."""
        return [member.value for member in BuiltinTemplate]

    def get_template_metadata(self, name: str) -> dict[str, str | None]:
        """Return name, version, description, and author of a template."""
        template = self.load_template(name)
        return {
            "name": template.name,
            "version": template.version,
            "description": template.description,
            "author": template.author,
        }

    def clear_cache(self) -> None:
        """Forget every cached template."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        """Number of cached templates."""
        return len(self._cache)

    def _parse_template_file(self, path: Path, name: str) -> TemplateDefinition:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            with path.open("r", encoding="utf-8") as handle:
                loaded = loader.load(handle) or {}
        except YAMLError as exc:
            msg = f"Failed to parse template '{name}' at {path}: {exc}"
            raise TemplateValidationError(msg) from exc
        if not isinstance(loaded, dict):
            msg = f"Failed to parse template '{name}': top-level YAML must be a mapping."
            raise TemplateValidationError(msg)
        if self.options.validate:
            validate_template_payload(loaded)
        template = build_template(loaded)
        if self.options.cache:
            self._cache[name] = template
        logger.info("Template '%s' loaded (v%s)", template.name, template.version)
        return template


def _get(payload: typ.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    """Return the first present value among alternative key spellings."""
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _flag(
    payload: typ.Mapping[str, typ.Any], *keys: str, default: bool
) -> bool:
    """Return a boolean option, falling back to ``default`` when unset."""
    value = _get(payload, *keys)
    return default if value is None else bool(value)


def validate_template_payload(payload: typ.Mapping[str, typ.Any]) -> None:
    """Check that a raw template mapping carries every required field.

    Raises
    ------
    TemplateValidationError
        Naming the first missing or invalid field.
    """
    for field in ("name", "version", "description"):
        if not payload.get(field):
            msg = f"Template must have a {field}"
            raise TemplateValidationError(msg)

    structure = payload.get("structure")
    if not isinstance(structure, dict):
        msg = "Template must define structure"
        raise TemplateValidationError(msg)
    if not isinstance(structure.get("directories"), dict):
        msg = "Template must define structure.directories"
        raise TemplateValidationError(msg)
    if not isinstance(structure.get("files"), dict):
        msg = "Template must define structure.files"
        raise TemplateValidationError(msg)

    sections = payload.get("sections")
    if not isinstance(sections, list) or not sections:
        msg = "Template must define a non-empty sections array"
        raise TemplateValidationError(msg)
    for index, section in enumerate(sections):
        if not isinstance(section, dict) or not (
            section.get("name") and section.get("title")
        ):
            msg = f"Section {index} must have name and title"
            raise TemplateValidationError(msg)

    format_raw = payload.get("format")
    if not isinstance(format_raw, dict):
        msg = "Template must define format"
        raise TemplateValidationError(msg)
    style = _get(format_raw, "uiElementsStyle", "ui_elements_style")
    if style not in UI_ELEMENT_STYLES:
        msg = f"Invalid format.uiElementsStyle: {style!r}"
        raise TemplateValidationError(msg)


def build_template(payload: typ.Mapping[str, typ.Any]) -> TemplateDefinition:
    """Convert a raw template mapping into a :class:`TemplateDefinition`."""
    structure = payload.get("structure") or {}
    directories = structure.get("directories") or {}
    files = structure.get("files") or {}
    format_raw = payload.get("format") or {}
    return TemplateDefinition(
        name=str(payload.get("name") or ""),
        version=str(payload.get("version") or ""),
        description=str(payload.get("description") or ""),
        author=payload.get("author"),
        structure=TemplateStructure(
            directories=TemplateDirectories(
                root=directories.get("root") or "",
                navigation=directories.get("navigation"),
                pages=directories.get("pages"),
                features=directories.get("features"),
                assets=directories.get("assets"),
            ),
            files=TemplateFiles(
                index=files.get("index"),
                sitemap=files.get("sitemap"),
                gnb=files.get("gnb"),
                lnb=files.get("lnb"),
                page_overview=_get(files, "pageOverview", "page_overview"),
                page_instructions=_get(files, "pageInstructions", "page_instructions"),
                feature=files.get("feature"),
            ),
        ),
        sections=[
            TemplateSection(
                name=str(section.get("name") or ""),
                title=str(section.get("title") or ""),
                description=section.get("description"),
                enabled=bool(section.get("enabled", True)),
                subsections=list(section.get("subsections") or []),
            )
            for section in payload.get("sections") or []
            if isinstance(section, dict)
        ],
        format=ContentFormat(
            ui_elements_style=_get(format_raw, "uiElementsStyle", "ui_elements_style")
            or "functional",
            include_screenshots=_flag(
                format_raw, "includeScreenshots", "include_screenshots", default=True
            ),
            include_breadcrumbs=_flag(
                format_raw, "includeBreadcrumbs", "include_breadcrumbs", default=True
            ),
            include_page_toc=_flag(
                format_raw, "includePageToc", "include_page_toc", default=False
            ),
        ),
        helpers=dict(payload.get("helpers") or {}),
        metadata=dict(payload.get("metadata") or {}),
    )


__all__ = [
    "BUILTIN_TEMPLATES_DIR",
    "BuiltinTemplate",
    "TemplateLoader",
    "TemplateLoaderOptions",
    "build_template",
    "validate_template_payload",
]

"""High-level orchestration for multi-file documentation generation.

This module wires the feature extractor, sitemap and navigation generators,
template loader, and template engine together. :class:`MultiFileGenerator`
turns crawled :class:`~quill_docs.models.PageInfo` records into a rendered
file set and writes it below the configured output directory, one file at a
time.

Example
-------
>>> from pathlib import Path
>>> from quill_docs.generators import MultiFileGenerator, MultiFileGeneratorOptions
>>> from quill_docs.models import load_pages
>>> pages = load_pages(Path("crawl/pages.json"))  # doctest: +SKIP
>>> options = MultiFileGeneratorOptions(
...     output_dir=Path("manual"), base_url="https://example.com"
... )
>>> result = MultiFileGenerator(options).generate(pages)  # doctest: +SKIP
>>> result.files_generated  # doctest: +SKIP
12
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
from pathlib import Path

from quill_docs._constants import VERSION
from quill_docs.templates import (
    ContextMetadata,
    TemplateContext,
    TemplateEngine,
    TemplateLoader,
    TemplateLoaderOptions,
    TemplatePage,
)
from quill_docs.urls import page_id, page_level

from .feature_extractor import FeatureExtractor
from .navigation import NavigationGenerator
from .sitemap import SitemapGenerator

if typ.TYPE_CHECKING:
    from quill_docs.models import PageInfo
    from quill_docs.templates import RenderResult, TemplateDefinition

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "user-guide"
DEFAULT_TITLE = "Documentation"


class GenerationError(RuntimeError):
    """Raised when multi-file generation fails at any stage."""


@dc.dataclass(slots=True)
class MultiFileGeneratorOptions:
    """Settings for one multi-file generation run."""

    output_dir: Path
    base_url: str
    template: str = DEFAULT_TEMPLATE
    title: str | None = None
    custom_template_dir: Path | None = None


@dc.dataclass(slots=True)
class GenerationMetadata:
    """Summary counts recorded for a generation run."""

    generated_at: str
    base_url: str
    page_count: int
    feature_count: int


@dc.dataclass(slots=True)
class MultiFileGenerationResult:
    """Outcome of a generation run.

    Attributes
    ----------
    files_generated : int
        Number of files written.
    output_dir : Path
        Directory the files were written under.
    files : list[str]
        Absolute paths of the written files, in write order.
    template_name : str
        Name of the template used.
    metadata : GenerationMetadata
        Timestamp, base URL, and page/feature counts.
    """

    files_generated: int
    output_dir: Path
    files: list[str]
    template_name: str
    metadata: GenerationMetadata

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the camelCase payload reported to CLI and API callers."""
        return {
            "filesGenerated": self.files_generated,
            "outputDir": str(self.output_dir),
            "files": list(self.files),
            "templateName": self.template_name,
            "metadata": {
                "generatedAt": self.metadata.generated_at,
                "baseUrl": self.metadata.base_url,
                "pageCount": self.metadata.page_count,
                "featureCount": self.metadata.feature_count,
            },
        }


class MultiFileGenerator:
    """Build a template context from crawled pages, render it, and write it."""

    def __init__(
        self,
        options: MultiFileGeneratorOptions,
        *,
        template_loader: TemplateLoader | None = None,
        template_engine: TemplateEngine | None = None,
        feature_extractor: FeatureExtractor | None = None,
        sitemap_generator: SitemapGenerator | None = None,
        navigation_generator: NavigationGenerator | None = None,
    ) -> None:
        """Initialize the generator and its collaborators.

        Parameters
        ----------
        options : MultiFileGeneratorOptions
            Output directory, base URL, template name, and optional title.
        template_loader : TemplateLoader, optional
            Loader to resolve the template; defaults to a new loader searching
            ``options.custom_template_dir``.
        template_engine : TemplateEngine, optional
            Engine used to render the file set.
        feature_extractor, sitemap_generator, navigation_generator : optional
            Pipeline stages; new instances are created when omitted.
        """
        self.options = options
        self.template_loader = template_loader or TemplateLoader(
            TemplateLoaderOptions(custom_templates_dir=options.custom_template_dir)
        )
        self.template_engine = template_engine or TemplateEngine()
        self.feature_extractor = feature_extractor or FeatureExtractor()
        self.sitemap_generator = sitemap_generator or SitemapGenerator()
        self.navigation_generator = navigation_generator or NavigationGenerator()

    def generate(self, pages: list[PageInfo]) -> MultiFileGenerationResult:
        """Render documentation for ``pages`` and write it to disk.

        Returns
        -------
        MultiFileGenerationResult
            Counts and absolute paths of the written files.

        Raises
        ------
        GenerationError
            Wrapping any failure while loading, rendering, or writing. Files
            written before the failure are left in place.
        """
        try:
            logger.info("Starting multi-file documentation generation")
            template = self.template_loader.load_template(self.options.template)
            logger.info("Using template: %s (v%s)", template.name, template.version)
            context = self.build_context(pages, template)
            rendered = self.template_engine.render(template, context)
            written = self._write_files(rendered)
        except Exception as exc:
            logger.exception("Multi-file generation failed")
            msg = f"Multi-file generation failed: {exc}"
            raise GenerationError(msg) from exc

        result = MultiFileGenerationResult(
            files_generated=len(written),
            output_dir=self.options.output_dir,
            files=written,
            template_name=template.name,
            metadata=GenerationMetadata(
                generated_at=context.metadata.generated_at,
                base_url=self.options.base_url,
                page_count=len(pages),
                feature_count=len(context.features),
            ),
        )
        logger.info(
            "Multi-file generation complete: %d files in %s",
            result.files_generated,
            result.output_dir,
        )
        return result

    def build_context(
        self, pages: list[PageInfo], template: TemplateDefinition
    ) -> TemplateContext:
        """Compose the render context for ``pages`` under ``template``."""
        base_url = self.options.base_url
        sitemap = self.sitemap_generator.generate(pages, base_url)
        navigation = self.navigation_generator.generate(pages, base_url)
        features = self.feature_extractor.extract(
            pages, template.format.ui_elements_style
        )
        metadata = ContextMetadata(
            title=self.options.title or DEFAULT_TITLE,
            description=f"Documentation for {base_url}",
            base_url=base_url,
            generated_at=dt.datetime.now(dt.UTC).isoformat(),
            version=VERSION,
        )
        template_pages: list[TemplatePage] = []
        for page in pages:
            current_id = page_id(page.url)
            template_pages.append(
                TemplatePage(
                    id=current_id,
                    url=page.url,
                    title=page.title,
                    description=page.description or "",
                    screenshot=page.screenshot,
                    features=[f for f in features if current_id in f.pages],
                    links=list(page.links),
                    level=page_level(page.url, base_url),
                )
            )
        logger.info(
            "Context built: %d pages, %d features", len(pages), len(features)
        )
        return TemplateContext(
            metadata=metadata,
            sitemap=sitemap,
            navigation=navigation,
            pages=template_pages,
            features=features,
        )

    def _write_files(self, rendered: RenderResult) -> list[str]:
        """Write rendered files sequentially, creating parent directories."""
        out_dir = self.options.output_dir.resolve()
        logger.info("Writing %d files to %s", len(rendered.files), out_dir)
        written: list[str] = []
        for rendered_file in rendered.files:
            output_path = (out_dir / rendered_file.path).resolve()
            if not output_path.is_relative_to(out_dir):
                msg = f"Refusing to write '{rendered_file.path}' outside {out_dir}"
                raise ValueError(msg)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered_file.content, encoding="utf-8")
            logger.debug("Written: %s", output_path)
            written.append(str(output_path))
        return written


def generate_multi_file(
    pages: list[PageInfo], options: MultiFileGeneratorOptions
) -> MultiFileGenerationResult:
    """Run a :class:`MultiFileGenerator` once with fresh collaborators."""
    return MultiFileGenerator(options).generate(pages)


__all__ = [
    "DEFAULT_TEMPLATE",
    "GenerationError",
    "GenerationMetadata",
    "MultiFileGenerationResult",
    "MultiFileGenerator",
    "MultiFileGeneratorOptions",
    "generate_multi_file",
]

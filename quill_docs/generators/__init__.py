"""Pipeline stages that turn crawled pages into a multi-file documentation set."""

from .feature_extractor import FeatureExtractor
from .models import (
    Feature,
    NavigationItem,
    NavigationStructure,
    SitemapPage,
    SitemapStructure,
    UIElementInfo,
)
from .multi_file import (
    GenerationError,
    GenerationMetadata,
    MultiFileGenerationResult,
    MultiFileGenerator,
    MultiFileGeneratorOptions,
    generate_multi_file,
)
from .navigation import NavigationGenerator
from .sitemap import SitemapGenerator

__all__ = [
    "Feature",
    "FeatureExtractor",
    "GenerationError",
    "GenerationMetadata",
    "MultiFileGenerationResult",
    "MultiFileGenerator",
    "MultiFileGeneratorOptions",
    "NavigationGenerator",
    "NavigationItem",
    "NavigationStructure",
    "SitemapGenerator",
    "SitemapPage",
    "SitemapStructure",
    "UIElementInfo",
    "generate_multi_file",
]

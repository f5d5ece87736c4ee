"""Content extraction with trafilatura."""

import trafilatura

from ..logger import get_logger
from ..models import ArticleResult, ExtractionOptions
from .base import BaseExtractor

logger = get_logger("providers.trafilatura")


class TrafilaturaExtractor(BaseExtractor):
    """Main-content extraction backed by trafilatura."""

    name = "trafilatura"

    def __init__(self, include_tables: bool = True, include_images: bool = True, include_links: bool = True):
        self.include_tables = include_tables
        self.include_images = include_images
        self.include_links = include_links

    def extract(self, html: str, options: ExtractionOptions) -> ArticleResult | None:
        content = trafilatura.extract(
            html,
            output_format="html",
            include_comments=False,
            include_formatting=True,
            include_tables=self.include_tables,
            include_images=self.include_images,
            include_links=self.include_links,
        )
        if not content:
            logger.debug("No main content found", extra={"method": self.name})
            return None

        metadata = trafilatura.extract_metadata(html)
        if metadata is None:
            return ArticleResult(content=content)

        return ArticleResult(
            title=metadata.title,
            content=content,
            excerpt=metadata.description,
            lang=metadata.language,
            byline=metadata.author,
            site_name=metadata.sitename,
            published_time=metadata.date,
        )

"""Try several extractors in turn."""

from collections.abc import Sequence

from ..exceptions import ExtractionError
from ..logger import get_logger
from ..models import ArticleResult, ExtractionOptions
from .base import BaseExtractor

logger = get_logger("providers.fallback")


class FallbackExtractor(BaseExtractor):
    """
    Run extractors in order and return the first article found.

    An extractor that raises is logged and skipped. If none finds an article
    and at least one raised, the last failure is re-raised; if all of them
    simply found nothing, the result is None.
    """

    name = "auto"

    def __init__(self, extractors: Sequence[BaseExtractor]):
        if not extractors:
            raise ValueError("FallbackExtractor needs at least one extractor")
        self.extractors = list(extractors)

    def extract(self, html: str, options: ExtractionOptions) -> ArticleResult | None:
        last_error: Exception | None = None
        for extractor in self.extractors:
            try:
                article = extractor.extract(html, options)
            except Exception as e:
                logger.debug("Extractor failed", extra={"method": extractor.name, "error": str(e)})
                last_error = e
                continue

            if article is not None:
                logger.debug("Extraction successful", extra={"method": extractor.name})
                return article

        if last_error is not None:
            raise ExtractionError(f"All extraction methods failed: {last_error}") from last_error
        return None

"""Base class for content extraction providers."""

from abc import ABC, abstractmethod

from ..models import ArticleResult, ExtractionOptions


class BaseExtractor(ABC):
    """Find the main article of a sanitized HTML document."""

    name: str = "base"

    @abstractmethod
    def extract(self, html: str, options: ExtractionOptions) -> ArticleResult | None:
        """
        Extract the main article.

        Args:
            html: Sanitized document markup
            options: Extraction options, passed through as given

        Returns:
            The article, or None when the document has no main content
        """

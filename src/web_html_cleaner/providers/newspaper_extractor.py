"""Content extraction with newspaper."""

from newspaper import Article

from ..logger import get_logger
from ..models import ArticleResult, ExtractionOptions
from .base import BaseExtractor

logger = get_logger("providers.newspaper")


class NewspaperExtractor(BaseExtractor):
    """Main-content extraction backed by newspaper's article parser."""

    name = "newspaper"

    def __init__(self, base_url: str = ""):
        """
        Initialize the extractor.

        Args:
            base_url: URL the documents are attributed to, used to resolve relative links
        """
        self.base_url = base_url

    def extract(self, html: str, options: ExtractionOptions) -> ArticleResult | None:
        article = Article(self.base_url, keep_article_html=True)
        article.download(input_html=html)
        article.parse()

        text = article.text.strip() if article.text else None
        if not text:
            logger.debug("No main content found", extra={"method": self.name})
            return None

        site_name = None
        if isinstance(article.meta_data, dict):
            og = article.meta_data.get("og")
            if isinstance(og, dict):
                site_name = og.get("site_name")

        return ArticleResult(
            title=article.title or None,
            content=article.article_html or None,
            text_content=text,
            length=len(text),
            excerpt=article.meta_description or None,
            lang=article.meta_lang or None,
            byline=", ".join(article.authors) if article.authors else None,
            site_name=site_name,
            published_time=article.publish_date.isoformat() if article.publish_date else None,
        )

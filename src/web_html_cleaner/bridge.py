"""Hand sanitized documents to the extraction and Markdown collaborators."""

from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser

from .exceptions import ExtractionError, MarkdownConversionError
from .loader import load_document
from .logger import get_logger
from .models import ArticleResult, ExtractionOptions
from .providers.base import BaseExtractor
from .providers.markdown import MarkdownConverter
from .serializer import serialize

logger = get_logger("bridge")

# Always kept on extracted content, whatever the options say
DEFAULT_CLASSES_TO_PRESERVE = ("page",)


def normalize_date(date_str: str | None) -> str | None:
    """
    Normalize a date to ISO 8601.

    Args:
        date_str: Date string in any format

    Returns:
        ISO 8601 formatted string, or None if it cannot be parsed
    """
    if not date_str:
        return None

    try:
        return date_parser.parse(date_str).isoformat()
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug("Date normalization failed", extra={"date_str": date_str, "error": str(e)})
        return None


def clean_classes(content: str, preserve: tuple[str, ...]) -> str:
    """Drop class names not listed in ``preserve``; drop empty class attributes."""
    fragment = BeautifulSoup(content, "html.parser")
    keep = set(preserve) | set(DEFAULT_CLASSES_TO_PRESERVE)
    for element in fragment.find_all(class_=True):
        classes = [name for name in element.get("class", []) if name in keep]
        if classes:
            element["class"] = classes
        else:
            del element["class"]
    return serialize(fragment)


def _first_paragraph(fragment: BeautifulSoup) -> str | None:
    paragraph = fragment.find("p")
    if paragraph is None:
        return None
    text = paragraph.get_text().strip()
    return text or None


def _root_attribute(tree: BeautifulSoup, name: str) -> str | None:
    root = tree.find("html")
    if not isinstance(root, Tag):
        return None
    value = root.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if not value:
        return None
    return value.strip() or None


class ExtractionBridge:
    """Runs the content extractor over a cleaned tree and shapes its result."""

    def __init__(
        self,
        extractor: BaseExtractor,
        markdown_converter: MarkdownConverter | None = None,
        parser: str = "html.parser",
    ):
        self.extractor = extractor
        self.markdown_converter = markdown_converter or MarkdownConverter()
        self.parser = parser

    def _extractor_input(self, tree: BeautifulSoup, options: ExtractionOptions) -> str:
        html = serialize(tree)
        if not options.disable_json_ld:
            return html
        # Work on a copy; the cleaned tree is the item's output
        copy = load_document(html, self.parser)
        for script in copy.find_all("script", attrs={"type": "application/ld+json"}):
            script.extract()
        return serialize(copy)

    def extract(self, tree: BeautifulSoup, options: ExtractionOptions) -> ArticleResult | None:
        """
        Extract the main article of a cleaned document.

        Args:
            tree: Sanitized document tree; left untouched
            options: Extraction options

        Returns:
            The article, or None when no main content was found or it is
            shorter than ``options.char_threshold``
        """
        html = self._extractor_input(tree, options)
        try:
            article = self.extractor.extract(html, options)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Content extraction failed: {e}", {"method": self.extractor.name}
            ) from e

        if article is None:
            return None

        fragment = BeautifulSoup(article.content or "", "html.parser")
        if not article.text_content:
            article.text_content = fragment.get_text()
        article.length = len(article.text_content)

        if article.length < options.char_threshold:
            logger.debug(
                "Article below character threshold",
                extra={"length": article.length, "char_threshold": options.char_threshold},
            )
            return None

        if article.content and not options.keep_classes:
            article.content = clean_classes(article.content, options.classes_to_preserve)
        if not article.excerpt:
            article.excerpt = _first_paragraph(fragment)
        article.lang = article.lang or _root_attribute(tree, "lang")
        article.dir = article.dir or _root_attribute(tree, "dir")
        article.published_time = normalize_date(article.published_time)
        return article

    def to_markdown(self, article: ArticleResult | None) -> str:
        """Convert the article content (empty when there is none) to Markdown."""
        content = article.content if article is not None and article.content else ""
        try:
            return self.markdown_converter.convert(content)
        except Exception as e:
            raise MarkdownConversionError(f"Markdown conversion failed: {e}") from e

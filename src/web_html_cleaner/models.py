"""Data models for the HTML cleaner."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Ruleset:
    """Normalized cleaning rules. The defaults leave a document untouched."""

    remove_comments: bool = False
    remove_empty_tags: bool = False
    remove_scripts: bool = False
    remove_styles: bool = False
    remove_attributes: bool = False
    excluded_attributes: tuple[str, ...] = ()
    excluded_selectors: tuple[str, ...] = ()
    excluded_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractionOptions:
    """Options handed to the content extractor."""

    char_threshold: int = 500
    classes_to_preserve: tuple[str, ...] = ()
    disable_json_ld: bool = False
    keep_classes: bool = False
    nb_top_candidates: int = 5


@dataclass
class ArticleResult:
    """Main article found by an extractor. Every field may be missing."""

    title: str | None = None
    content: str | None = None
    text_content: str | None = None
    length: int | None = None
    excerpt: str | None = None
    lang: str | None = None
    byline: str | None = None
    dir: str | None = None
    site_name: str | None = None
    published_time: str | None = None


@dataclass
class CleanRequest:
    """One batch item.

    Options may be mappings or JSON text (as read from a CSV cell);
    ``markdown_output`` may be a bool or a boolean-like string.
    """

    html_content: str | None
    clean_options: Mapping[str, Any] | str | None = None
    readability_options: Mapping[str, Any] | str | None = None
    markdown_output: bool | str = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CleanRequest":
        """Build a request from its wire form (camelCase keys)."""
        return cls(
            html_content=data.get("htmlContent"),
            clean_options=data.get("cleanOptions"),
            readability_options=data.get("readabilityOptions"),
            markdown_output=data.get("markdownOutput", False),
        )


@dataclass
class CleanerOutput:
    """Successful result for one item."""

    html: str
    title: str | None = None
    lang: str | None = None
    content: str | None = None
    text_content: str | None = None
    length: int | None = None
    excerpt: str | None = None
    markdown: str | None = None
    metadata: dict[str, str | None] = field(default_factory=dict)

    @classmethod
    def from_article(cls, html: str, article: ArticleResult | None) -> "CleanerOutput":
        """Map an extraction result (or its absence) onto an output record."""
        if article is None:
            return cls(html=html)
        return cls(
            html=html,
            title=article.title or None,
            lang=article.lang or None,
            content=article.content or None,
            text_content=article.text_content or None,
            length=article.length or None,
            excerpt=article.excerpt or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire form. ``markdown`` is present only when it was produced."""
        data: dict[str, Any] = {
            "html": self.html,
            "title": self.title,
            "lang": self.lang,
            "content": self.content,
            "textContent": self.text_content,
            "length": self.length,
            "excerpt": self.excerpt,
        }
        if self.markdown is not None:
            data["markdown"] = self.markdown
        data.update(self.metadata)
        return data


@dataclass
class ErrorRecord:
    """Isolated failure for one item."""

    error: str
    message: str

    @classmethod
    def create_error(cls, exc: BaseException) -> "ErrorRecord":
        """Build the record for a caught exception."""
        return cls(error=type(exc).__name__, message=str(exc))

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}

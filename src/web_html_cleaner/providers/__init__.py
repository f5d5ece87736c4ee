"""Collaborator implementations for content extraction and Markdown output."""

from .base import BaseExtractor
from .fallback import FallbackExtractor
from .markdown import MarkdownConverter
from .newspaper_extractor import NewspaperExtractor
from .trafilatura_extractor import TrafilaturaExtractor

__all__ = [
    "BaseExtractor",
    "FallbackExtractor",
    "MarkdownConverter",
    "NewspaperExtractor",
    "TrafilaturaExtractor",
    "build_extractor",
]


def build_extractor(method: str) -> BaseExtractor:
    """Return the extractor registered under ``method``."""
    if method == "trafilatura":
        return TrafilaturaExtractor()
    if method == "newspaper":
        return NewspaperExtractor()
    if method == "auto":
        return FallbackExtractor([TrafilaturaExtractor(), NewspaperExtractor()])
    raise ValueError(f"Unknown extraction method '{method}'")

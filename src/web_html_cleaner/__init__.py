"""Web HTML Cleaner - rule-driven HTML sanitization with main-content extraction."""

__version__ = "0.1.0"
__author__ = "Biagio Frusteri"
__license__ = "MIT"

from .cleaner import HtmlCleaner
from .config import Config
from .models import ArticleResult, CleanerOutput, CleanRequest, ErrorRecord, ExtractionOptions, Ruleset

__all__ = [
    "ArticleResult",
    "CleanRequest",
    "CleanerOutput",
    "Config",
    "ErrorRecord",
    "ExtractionOptions",
    "HtmlCleaner",
    "Ruleset",
]

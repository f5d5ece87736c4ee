"""Exceptions raised by the HTML cleaning pipeline."""

from typing import Any


class HtmlCleanerError(Exception):
    """Base exception for all cleaner errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(HtmlCleanerError):
    """Invalid cleaner configuration."""


class ValidationError(HtmlCleanerError):
    """Required item input is missing."""


class DocumentLoadError(HtmlCleanerError):
    """The document could not be handed to the parser."""


class StageExecutionError(HtmlCleanerError):
    """A sanitization stage failed unexpectedly."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"Stage '{stage}' failed: {message}", {"stage": stage})
        self.stage = stage


class CollaboratorError(HtmlCleanerError):
    """An external collaborator failed."""


class ExtractionError(CollaboratorError):
    """The content extractor raised instead of returning a result."""


class MarkdownConversionError(CollaboratorError):
    """The markdown converter failed."""


class ItemTimeoutError(CollaboratorError):
    """An item did not finish within the configured deadline."""


class BatchItemError(HtmlCleanerError):
    """A batch was aborted because one of its items failed."""

    def __init__(self, item_index: int, message: str):
        super().__init__(
            f"Item {item_index + 1} failed: {message}",
            {"item_index": item_index},
        )
        self.item_index = item_index
        self.cause_message = message

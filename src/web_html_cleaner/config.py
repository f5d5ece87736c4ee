"""Configuration for the HTML cleaner."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigurationError

ENV_PREFIX = "HTML_CLEANER_"

EXTRACTORS = ("trafilatura", "newspaper", "auto")
PARSERS = ("html.parser", "lxml", "html5lib")
FORMATTERS = ("minimal", "html", "html5")
HEADING_STYLES = ("underlined", "atx", "atx_closed")


@dataclass
class Config:
    """Runtime settings shared by every item of a batch."""

    html_column: str = "htmlContent"
    continue_on_fail: bool = False
    parser: str = "html.parser"
    formatter: str = "minimal"
    extractor: str = "trafilatura"
    markdown_heading_style: str = "underlined"
    max_workers: int = 1
    item_timeout: float | None = None
    include_metadata: bool = False
    log_level: str = "INFO"
    structured_logging: bool = False

    def __post_init__(self):
        if not self.html_column:
            raise ConfigurationError("html_column must not be empty")
        if self.extractor not in EXTRACTORS:
            raise ConfigurationError(
                f"Unknown extractor '{self.extractor}'", {"allowed": list(EXTRACTORS)}
            )
        if self.parser not in PARSERS:
            raise ConfigurationError(f"Unknown parser '{self.parser}'", {"allowed": list(PARSERS)})
        if self.formatter not in FORMATTERS:
            raise ConfigurationError(
                f"Unknown formatter '{self.formatter}'", {"allowed": list(FORMATTERS)}
            )
        if self.markdown_heading_style not in HEADING_STYLES:
            raise ConfigurationError(
                f"Unknown markdown heading style '{self.markdown_heading_style}'",
                {"allowed": list(HEADING_STYLES)},
            )
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigurationError(f"Unknown log level '{self.log_level}'")
        if self.item_timeout is not None and self.item_timeout <= 0:
            raise ConfigurationError("item_timeout must be positive")

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Build a configuration from ``HTML_CLEANER_*`` environment variables.

        Args:
            env_file: Optional .env file loaded before reading the environment

        Returns:
            Config populated from the environment, defaults elsewhere
        """
        load_dotenv(env_file)

        def _get(name: str) -> str | None:
            value = os.getenv(ENV_PREFIX + name)
            return value if value not in (None, "") else None

        kwargs = {}
        for name in ("html_column", "parser", "formatter", "extractor", "markdown_heading_style", "log_level"):
            value = _get(name.upper())
            if value is not None:
                kwargs[name] = value
        for name in ("continue_on_fail", "include_metadata", "structured_logging"):
            value = _get(name.upper())
            if value is not None:
                kwargs[name] = value.strip().lower() in ("1", "true", "yes", "on")

        workers = _get("MAX_WORKERS")
        timeout = _get("ITEM_TIMEOUT")
        try:
            if workers is not None:
                kwargs["max_workers"] = int(workers)
            if timeout is not None:
                kwargs["item_timeout"] = float(timeout)
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        return cls(**kwargs)

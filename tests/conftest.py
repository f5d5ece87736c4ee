"""Shared fixtures for the cleaner tests."""

import time
from dataclasses import replace

import pytest

from web_html_cleaner.models import ArticleResult, ExtractionOptions
from web_html_cleaner.providers.base import BaseExtractor

LONG_TEXT = "Lorem ipsum dolor sit amet. " * 40


class FakeExtractor(BaseExtractor):
    """Extractor returning a canned article and recording its inputs."""

    name = "fake"

    def __init__(self, article: ArticleResult | None = None, error: Exception | None = None, delay: float = 0.0):
        self.article = article
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, ExtractionOptions]] = []

    def extract(self, html, options):
        self.calls.append((html, options))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.article is None:
            return None
        return replace(self.article)


@pytest.fixture
def article() -> ArticleResult:
    return ArticleResult(
        title="A Title",
        content=f"<div><h1>Heading</h1><p>{LONG_TEXT}</p></div>",
        excerpt="Short summary",
        lang="en",
        byline="Jane Doe",
        site_name="Example",
        published_time="2024-03-05",
    )


@pytest.fixture
def fake_extractor(article) -> FakeExtractor:
    return FakeExtractor(article)


@pytest.fixture
def empty_extractor() -> FakeExtractor:
    return FakeExtractor(None)

"""Parse markup into a mutable document tree."""

from bs4 import BeautifulSoup, FeatureNotFound

from .exceptions import DocumentLoadError


def load_document(html: str, parser: str = "html.parser") -> BeautifulSoup:
    """
    Parse markup into a BeautifulSoup tree.

    Broken or unterminated markup is repaired by the parser rather than
    rejected. With the default ``html.parser`` backend fragments stay
    fragments, so an untouched tree serializes back to its input.

    Args:
        html: Markup to parse
        parser: BeautifulSoup tree builder name

    Returns:
        A fresh tree owned by the caller
    """
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise DocumentLoadError(
            f"HTML parser '{parser}' is not available", {"parser": parser}
        ) from e

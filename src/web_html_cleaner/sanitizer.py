"""Rule-driven sanitization of a parsed document.

The stages below always run in the order listed in ``STAGES``. Each one is a
plain function taking the tree and the ruleset, mutating the tree in place and
returning how many nodes (or attributes) it removed. A stage whose rule is off
returns 0 without touching the tree.
"""

from collections.abc import Callable

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from soupsieve import SelectorSyntaxError

from .exceptions import HtmlCleanerError, StageExecutionError
from .logger import get_logger
from .models import Ruleset

logger = get_logger("sanitizer")

Stage = Callable[[BeautifulSoup, Ruleset], int]


def strip_comments(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    """Remove every comment node, at any depth."""
    if not ruleset.remove_comments:
        return 0
    comments = tree.find_all(string=lambda text: isinstance(text, Comment))
    for comment in comments:
        comment.extract()
    return len(comments)


def _is_empty(element: Tag) -> bool:
    for child in element.children:
        if isinstance(child, Tag):
            return False
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString) and child.strip():
            return False
    return True


def prune_empty_tags(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    """
    Remove elements with no child elements and no visible text.

    The element list is captured once, in document order, before anything is
    removed, and each element is tested exactly once. A parent that only
    becomes empty because its child was pruned is therefore kept:
    ``<div><p></p></div>`` becomes ``<div></div>``.
    """
    if not ruleset.remove_empty_tags:
        return 0
    removed = 0
    for element in tree.find_all(True):
        if _is_empty(element):
            element.extract()
            removed += 1
    return removed


def _remove_named(tree: BeautifulSoup, name: str) -> int:
    elements = tree.find_all(name)
    for element in elements:
        element.extract()
    return len(elements)


def strip_scripts(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    if not ruleset.remove_scripts:
        return 0
    return _remove_named(tree, "script")


def strip_styles(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    if not ruleset.remove_styles:
        return 0
    return _remove_named(tree, "style")


def strip_attributes(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    """
    Remove all attributes, or only the excluded ones.

    ``remove_attributes`` takes precedence: when set, ``excluded_attributes``
    is ignored.
    """
    removed = 0
    if ruleset.remove_attributes:
        for element in tree.find_all(True):
            removed += len(element.attrs)
            element.attrs = {}
        return removed

    if not ruleset.excluded_attributes:
        return 0

    targets = {name.lower() for name in ruleset.excluded_attributes}
    for element in tree.find_all(True):
        for name in [attr for attr in element.attrs if attr.lower() in targets]:
            del element.attrs[name]
            removed += 1
    return removed


def remove_selectors(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    """Remove everything matched by each excluded selector, in declared order."""
    removed = 0
    for selector in ruleset.excluded_selectors:
        try:
            matches = tree.select(selector)
        except SelectorSyntaxError as e:
            raise StageExecutionError("remove_selectors", f"invalid selector '{selector}': {e}") from e
        for element in matches:
            element.extract()
        removed += len(matches)
    return removed


def remove_tags(tree: BeautifulSoup, ruleset: Ruleset) -> int:
    removed = 0
    for name in ruleset.excluded_tags:
        removed += _remove_named(tree, name.lower())
    return removed


STAGES: tuple[Stage, ...] = (
    strip_comments,
    prune_empty_tags,
    strip_scripts,
    strip_styles,
    strip_attributes,
    remove_selectors,
    remove_tags,
)


def sanitize(tree: BeautifulSoup, ruleset: Ruleset) -> dict[str, int]:
    """
    Apply every stage to the tree, in order.

    Args:
        tree: Document tree, mutated in place
        ruleset: Normalized cleaning rules

    Returns:
        Number of removals per stage name
    """
    counts = {}
    for stage in STAGES:
        try:
            counts[stage.__name__] = stage(tree, ruleset)
        except HtmlCleanerError:
            raise
        except Exception as e:
            raise StageExecutionError(stage.__name__, str(e)) from e

    logger.debug("Sanitization complete", extra={"removed": counts})
    return counts

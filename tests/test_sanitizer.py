"""Tests for web_html_cleaner.sanitizer."""

import pytest

from web_html_cleaner.exceptions import StageExecutionError
from web_html_cleaner.loader import load_document
from web_html_cleaner.models import Ruleset
from web_html_cleaner.sanitizer import (
    STAGES,
    prune_empty_tags,
    remove_selectors,
    remove_tags,
    sanitize,
    strip_attributes,
    strip_comments,
    strip_scripts,
    strip_styles,
)
from web_html_cleaner.serializer import serialize

ALL_FLAGS = Ruleset(
    remove_comments=True,
    remove_empty_tags=True,
    remove_scripts=True,
    remove_styles=True,
    remove_attributes=True,
)


def run(html: str, ruleset: Ruleset) -> str:
    tree = load_document(html)
    sanitize(tree, ruleset)
    return serialize(tree)


class TestStageOrder:
    def test_stage_sequence(self) -> None:
        assert [stage.__name__ for stage in STAGES] == [
            "strip_comments",
            "prune_empty_tags",
            "strip_scripts",
            "strip_styles",
            "strip_attributes",
            "remove_selectors",
            "remove_tags",
        ]

    def test_all_flags(self) -> None:
        html = '<div><!-- note --></div><script>/* x */ run()</script><p class="lead">Kept</p>'
        assert run(html, ALL_FLAGS) == "<p>Kept</p>"

    def test_comment_stripping_runs_before_pruning(self) -> None:
        # The div only holds a comment, so it is empty by the time pruning runs
        html = "<div><!--c--></div><p>x</p>"
        assert run(html, Ruleset(remove_comments=True, remove_empty_tags=True)) == "<p>x</p>"

    def test_pruning_runs_before_script_removal(self) -> None:
        # The div still holds the script while pruning runs, so it survives
        html = "<div><script>run()</script></div><p>x</p>"
        assert run(html, ALL_FLAGS) == "<div></div><p>x</p>"

    def test_script_selector_same_with_or_without_remove_scripts(self) -> None:
        html = '<p>a</p><script src="x.js"></script><script>run()</script>'
        with_flag = run(html, Ruleset(remove_scripts=True, excluded_selectors=("script",)))
        without_flag = run(html, Ruleset(excluded_selectors=("script",)))
        assert with_flag == without_flag == "<p>a</p>"


class TestDefaults:
    def test_default_ruleset_is_noop(self) -> None:
        html = "<p>Hello <!--c--><b></b></p>"
        assert run(html, Ruleset()) == html

    def test_default_counts_are_zero(self) -> None:
        tree = load_document("<p>Hello <!--c--><b></b><script>x</script></p>")
        assert set(sanitize(tree, Ruleset()).values()) == {0}


class TestStripComments:
    def test_removes_nested_and_top_level_comments(self) -> None:
        html = "<!--top--><div>a<!-- x --><p>b<!--y--></p></div>"
        assert run(html, Ruleset(remove_comments=True)) == "<div>a<p>b</p></div>"

    def test_idempotent(self) -> None:
        tree = load_document("<p>a<!--c--></p>")
        ruleset = Ruleset(remove_comments=True)
        assert strip_comments(tree, ruleset) == 1
        assert strip_comments(tree, ruleset) == 0
        assert serialize(tree) == "<p>a</p>"


class TestPruneEmptyTags:
    def test_single_pass_keeps_parent_that_became_empty(self) -> None:
        tree = load_document("<div><p></p></div>")
        removed = prune_empty_tags(tree, Ruleset(remove_empty_tags=True))
        assert removed == 1
        assert serialize(tree) == "<div></div>"

    def test_second_run_removes_residual_parent(self) -> None:
        tree = load_document("<div><p></p></div>")
        ruleset = Ruleset(remove_empty_tags=True)
        prune_empty_tags(tree, ruleset)
        prune_empty_tags(tree, ruleset)
        assert serialize(tree) == ""

    def test_whitespace_and_comment_only_elements_are_empty(self) -> None:
        html = "<p>Hi</p><span>  </span><b><!--c--></b>"
        assert run(html, Ruleset(remove_empty_tags=True)) == "<p>Hi</p>"

    def test_void_elements_are_pruned(self) -> None:
        assert run("<p>text<br/></p>", Ruleset(remove_empty_tags=True)) == "<p>text</p>"

    def test_elements_with_text_are_kept(self) -> None:
        html = "<p><b>bold</b> text</p>"
        assert run(html, Ruleset(remove_empty_tags=True)) == html


class TestScriptsAndStyles:
    def test_removes_scripts_with_content(self) -> None:
        html = "<div><script>var a = 1;</script><p>x</p></div>"
        assert run(html, Ruleset(remove_scripts=True)) == "<div><p>x</p></div>"

    def test_removes_styles_with_content(self) -> None:
        html = "<style>p { color: red; }</style><p>x</p>"
        assert run(html, Ruleset(remove_styles=True)) == "<p>x</p>"

    def test_scripts_kept_when_only_styles_removed(self) -> None:
        html = "<script>x()</script><style>p{}</style>"
        assert run(html, Ruleset(remove_styles=True)) == "<script>x()</script>"

    def test_idempotent(self) -> None:
        tree = load_document("<script>a</script><style>b</style><p>c</p>")
        ruleset = Ruleset(remove_scripts=True, remove_styles=True)
        assert strip_scripts(tree, ruleset) == 1
        assert strip_styles(tree, ruleset) == 1
        assert strip_scripts(tree, ruleset) == 0
        assert strip_styles(tree, ruleset) == 0


class TestStripAttributes:
    HTML = '<p class="a" id="b" onclick="x()">t</p><img src="i.png" onerror="y()"/>'

    def test_full_removal(self) -> None:
        assert run(self.HTML, Ruleset(remove_attributes=True)) == "<p>t</p><img/>"

    def test_partial_removal(self) -> None:
        result = run(self.HTML, Ruleset(excluded_attributes=("onclick", "onerror")))
        assert result == '<p class="a" id="b">t</p><img src="i.png"/>'

    def test_full_removal_wins_over_partial(self) -> None:
        ruleset = Ruleset(remove_attributes=True, excluded_attributes=("onclick",))
        assert run(self.HTML, ruleset) == "<p>t</p><img/>"

    def test_missing_attribute_is_noop(self) -> None:
        assert run(self.HTML, Ruleset(excluded_attributes=("data-missing",))) == self.HTML

    def test_attribute_names_match_case_insensitively(self) -> None:
        result = run('<p onclick="x()">t</p>', Ruleset(excluded_attributes=("onClick",)))
        assert result == "<p>t</p>"

    def test_idempotent(self) -> None:
        tree = load_document(self.HTML)
        ruleset = Ruleset(excluded_attributes=("id",))
        assert strip_attributes(tree, ruleset) == 1
        assert strip_attributes(tree, ruleset) == 0


class TestRemoveSelectors:
    def test_removes_matches(self) -> None:
        html = '<div class="ad">x</div><p id="keep">y</p>'
        assert run(html, Ruleset(excluded_selectors=(".ad",))) == '<p id="keep">y</p>'

    def test_no_match_is_noop(self) -> None:
        html = '<p id="keep">y</p>'
        assert run(html, Ruleset(excluded_selectors=(".missing",))) == html

    def test_later_selectors_see_earlier_removals(self) -> None:
        tree = load_document('<div class="outer"><p class="inner">x</p></div><p class="inner">y</p>')
        removed = remove_selectors(tree, Ruleset(excluded_selectors=("div.outer", "p.inner")))
        # The first p left with its parent, so only the second one matches
        assert removed == 2
        assert serialize(tree) == ""

    def test_invalid_selector_raises(self) -> None:
        tree = load_document("<p>x</p>")
        with pytest.raises(StageExecutionError) as exc_info:
            sanitize(tree, Ruleset(excluded_selectors=("[[",)))
        assert exc_info.value.stage == "remove_selectors"


class TestRemoveTags:
    def test_removes_named_tags(self) -> None:
        html = "<nav><a>home</a></nav><p>body</p><footer>f</footer>"
        assert run(html, Ruleset(excluded_tags=("nav", "footer"))) == "<p>body</p>"

    def test_tag_names_are_case_insensitive(self) -> None:
        assert run("<nav>n</nav><p>b</p>", Ruleset(excluded_tags=("NAV",))) == "<p>b</p>"

    def test_unknown_tag_is_noop(self) -> None:
        html = "<p>b</p>"
        assert run(html, Ruleset(excluded_tags=("marquee",))) == html

    def test_idempotent(self) -> None:
        tree = load_document("<aside>a</aside><p>b</p>")
        ruleset = Ruleset(excluded_tags=("aside",))
        assert remove_tags(tree, ruleset) == 1
        assert remove_tags(tree, ruleset) == 0

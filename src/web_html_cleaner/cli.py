"""Command line interface for the HTML cleaner."""

import argparse
import sys
from dataclasses import replace

from .cleaner import HtmlCleaner
from .config import EXTRACTORS, PARSERS, Config
from .exceptions import HtmlCleanerError
from .logger import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="web-html-cleaner",
        description="Clean HTML documents from a CSV/JSON/JSONL file and extract their main article.",
    )
    parser.add_argument("input", help="Input file (.csv, .json or .jsonl)")
    parser.add_argument("output", help="Output file (.csv, .json or .jsonl)")

    clean = parser.add_argument_group("clean options")
    clean.add_argument("--remove-comments", action="store_true", help="Remove HTML comments")
    clean.add_argument("--remove-empty-tags", action="store_true", help="Remove empty elements (single pass)")
    clean.add_argument("--remove-scripts", action="store_true", help="Remove script elements")
    clean.add_argument("--remove-styles", action="store_true", help="Remove style elements")
    clean.add_argument("--remove-attributes", action="store_true", help="Remove every attribute")
    clean.add_argument("--excluded-attributes", default="", help="Comma-separated attributes to remove")
    clean.add_argument("--excluded-selectors", default="", help="Comma-separated CSS selectors to remove")
    clean.add_argument("--excluded-tags", default="", help="Comma-separated tag names to remove")

    extraction = parser.add_argument_group("extraction options")
    extraction.add_argument("--char-threshold", type=int, default=500, help="Minimum article length")
    extraction.add_argument("--classes-to-preserve", default="", help="Comma-separated classes to keep")
    extraction.add_argument("--keep-classes", action="store_true", help="Keep all classes on article content")
    extraction.add_argument("--disable-json-ld", action="store_true", help="Ignore JSON-LD metadata")
    extraction.add_argument("--nb-top-candidates", type=int, default=5, help="Passed through to the extractor")
    extraction.add_argument("--extractor", choices=EXTRACTORS, default=None, help="Extraction method")
    extraction.add_argument("--markdown", action="store_true", help="Add Markdown of the article content")

    runtime = parser.add_argument_group("runtime")
    runtime.add_argument("--continue-on-fail", action="store_true", help="Record item errors instead of aborting")
    runtime.add_argument("--workers", type=int, default=None, help="Worker threads")
    runtime.add_argument("--parser", choices=PARSERS, default=None, help="HTML parser backend")
    runtime.add_argument("--env-file", default=None, help="Path to a .env file")
    runtime.add_argument("--log-level", default=None, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env(args.env_file)
        overrides = {}
        if args.continue_on_fail:
            overrides["continue_on_fail"] = True
        if args.workers is not None:
            overrides["max_workers"] = args.workers
        if args.parser:
            overrides["parser"] = args.parser
        if args.extractor:
            overrides["extractor"] = args.extractor
        if args.log_level:
            overrides["log_level"] = args.log_level
        config = replace(config, **overrides)
    except HtmlCleanerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.structured_logging)
    logger = get_logger()

    clean_options = {
        "removeComments": args.remove_comments,
        "removeEmptyTags": args.remove_empty_tags,
        "removeScripts": args.remove_scripts,
        "removeStyles": args.remove_styles,
        "removeAttributes": args.remove_attributes,
        "excludedAttributes": args.excluded_attributes,
        "excludedSelectors": args.excluded_selectors,
        "excludedTags": args.excluded_tags,
    }
    readability_options = {
        "charThreshold": args.char_threshold,
        "classesToPreserve": args.classes_to_preserve,
        "keepClasses": args.keep_classes,
        "disableJSONLD": args.disable_json_ld,
        "nbTopCandidates": args.nb_top_candidates,
    }

    try:
        HtmlCleaner(config).process_file(
            args.input,
            args.output,
            clean_options=clean_options,
            readability_options=readability_options,
            markdown_output=args.markdown,
        )
    except HtmlCleanerError as e:
        logger.error("Processing failed", extra={"error": type(e).__name__, "error_message": str(e)})
        return 1
    except (OSError, ValueError) as e:
        logger.error("Could not read or write file", extra={"error": str(e)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

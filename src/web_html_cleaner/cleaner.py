"""HTML cleaning pipeline and batch processing."""

import json
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from pathlib import Path
from typing import Any

import pandas as pd

from .bridge import ExtractionBridge
from .config import Config
from .exceptions import BatchItemError, ItemTimeoutError, ValidationError
from .loader import load_document
from .logger import get_logger
from .models import CleanerOutput, CleanRequest, ErrorRecord
from .providers import build_extractor
from .providers.base import BaseExtractor
from .providers.markdown import MarkdownConverter
from .rules import coerce_bool, normalize_extraction_options, normalize_ruleset
from .sanitizer import sanitize
from .serializer import serialize

logger = get_logger()

OPTION_COLUMNS = ("cleanOptions", "readabilityOptions", "markdownOutput")


def _decode_options(value: Any, field_name: str, item_index: int) -> Mapping[str, Any] | None:
    if value is None or isinstance(value, Mapping):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"{field_name} is not valid JSON for item {item_index + 1}",
                {"field": field_name, "error": str(e)},
            ) from e
        if isinstance(decoded, Mapping):
            return decoded
    raise ValidationError(
        f"{field_name} must be an object for item {item_index + 1}", {"field": field_name}
    )


class HtmlCleaner:
    """Clean HTML documents under per-item rules and extract their main article."""

    def __init__(
        self,
        config: Config | None = None,
        extractor: BaseExtractor | None = None,
        markdown_converter: MarkdownConverter | None = None,
    ):
        """
        Initialize the cleaner.

        Args:
            config: Runtime settings. If None, defaults are used.
            extractor: Content extractor. If None, built from ``config.extractor``.
            markdown_converter: Markdown converter. If None, built from config.
        """
        self.config = config or Config()
        self.bridge = ExtractionBridge(
            extractor or build_extractor(self.config.extractor),
            markdown_converter or MarkdownConverter(self.config.markdown_heading_style),
            parser=self.config.parser,
        )

    def clean(self, request: CleanRequest, item_index: int = 0) -> CleanerOutput:
        """
        Run the full pipeline for one item.

        Args:
            request: The item to clean
            item_index: Position of the item in its batch, used in messages

        Returns:
            CleanerOutput for the item

        Raises:
            ValidationError: If the HTML content is missing
            StageExecutionError: If a sanitization stage fails
            CollaboratorError: If extraction or Markdown conversion fails
        """
        html_content = request.html_content
        if not html_content or not isinstance(html_content, str):
            raise ValidationError(
                f"HTML content is required for item {item_index + 1}", {"item_index": item_index}
            )

        ruleset = normalize_ruleset(_decode_options(request.clean_options, "cleanOptions", item_index))
        options = normalize_extraction_options(
            _decode_options(request.readability_options, "readabilityOptions", item_index)
        )

        tree = load_document(html_content, self.config.parser)
        sanitize(tree, ruleset)
        html = serialize(tree, self.config.formatter)

        article = self.bridge.extract(tree, options)
        output = CleanerOutput.from_article(html, article)

        if coerce_bool(request.markdown_output):
            output.markdown = self.bridge.to_markdown(article)

        if self.config.include_metadata:
            output.metadata = {
                "byline": article.byline if article else None,
                "dir": article.dir if article else None,
                "siteName": article.site_name if article else None,
                "publishedTime": article.published_time if article else None,
            }

        logger.debug(
            "Item cleaned",
            extra={"item": item_index + 1, "html_length": len(html), "article": article is not None},
        )
        return output

    def _handle_failure(self, index: int, error: Exception, isolate: bool) -> dict[str, str]:
        if isolate:
            logger.warning(
                "Item failed, continuing",
                extra={"item": index + 1, "error": type(error).__name__, "error_message": str(error)},
            )
            return ErrorRecord.create_error(error).to_dict()

        logger.error(
            "Item failed, aborting batch",
            extra={"item": index + 1, "error": type(error).__name__, "error_message": str(error)},
        )
        raise BatchItemError(index, str(error)) from error

    def _clean_item(self, request: CleanRequest, index: int) -> CleanerOutput:
        """Clean one item, bounded by ``config.item_timeout`` counted from the item's start."""
        timeout = self.config.item_timeout
        if timeout is None:
            return self.clean(request, index)

        runner = ThreadPoolExecutor(max_workers=1, thread_name_prefix="html-cleaner-item")
        future = runner.submit(self.clean, request, index)
        try:
            return future.result(timeout=timeout)
        except FuturesTimeoutError:
            raise ItemTimeoutError(
                f"Item {index + 1} did not finish within {timeout} seconds",
                {"item_index": index, "timeout": timeout},
            ) from None
        finally:
            # A timed-out item keeps running on its own thread; the caller's slot is freed
            runner.shutdown(wait=False)

    def _run_sequential(self, requests: list[CleanRequest], isolate: bool) -> list[dict[str, Any]]:
        results = []
        for index, request in enumerate(requests):
            logger.info("Processing item", extra={"progress": f"{index + 1}/{len(requests)}"})
            try:
                output = self._clean_item(request, index)
            except Exception as e:
                results.append(self._handle_failure(index, e, isolate))
            else:
                results.append(output.to_dict())
        return results

    def _run_pooled(self, requests: list[CleanRequest], isolate: bool, workers: int) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = [{} for _ in requests]
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="html-cleaner")
        try:
            futures = [executor.submit(self._clean_item, request, index) for index, request in enumerate(requests)]
            for index, future in enumerate(futures):
                try:
                    output = future.result()
                except Exception as e:
                    results[index] = self._handle_failure(index, e, isolate)
                else:
                    results[index] = output.to_dict()
                logger.info("Processed item", extra={"progress": f"{index + 1}/{len(requests)}"})
        finally:
            # Drop queued items after an abort
            executor.shutdown(wait=False, cancel_futures=True)
        return results

    def process_batch(
        self,
        items: Iterable[CleanRequest | Mapping[str, Any]],
        continue_on_fail: bool | None = None,
        max_workers: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Clean a batch of items.

        The result holds one record per item, in input order. A failing item
        becomes an ``{error, message}`` record when ``continue_on_fail`` is on;
        otherwise the batch stops with BatchItemError and nothing is returned.

        Args:
            items: CleanRequest objects or wire-form mappings
            continue_on_fail: Isolate item failures. Defaults to the config setting.
            max_workers: Worker threads. Defaults to the config setting.

        Returns:
            List of output records
        """
        isolate = self.config.continue_on_fail if continue_on_fail is None else continue_on_fail
        workers = max_workers or self.config.max_workers
        requests = [item if isinstance(item, CleanRequest) else CleanRequest.from_dict(item) for item in items]

        logger.info(
            "Starting batch",
            extra={"items": len(requests), "workers": workers, "continue_on_fail": isolate},
        )

        if workers > 1:
            results = self._run_pooled(requests, isolate, workers)
        else:
            results = self._run_sequential(requests, isolate)

        logger.info(
            "Batch complete",
            extra={
                "total": len(results),
                "success": sum(1 for r in results if "error" not in r),
                "errors": sum(1 for r in results if "error" in r),
            },
        )
        return results

    def process_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        clean_options: Mapping[str, Any] | None = None,
        readability_options: Mapping[str, Any] | None = None,
        markdown_output: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Clean every row of a CSV, JSON or JSONL file and write the records out.

        Per-row ``cleanOptions``, ``readabilityOptions`` and ``markdownOutput``
        columns, when present and filled, override the given defaults.

        Args:
            input_path: Path to the input file
            output_path: Path to the output file (.csv, .json or .jsonl)
            clean_options: Default clean options
            readability_options: Default readability options
            markdown_output: Default for Markdown output

        Returns:
            The written records
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        logger.info("Starting file processing", extra={"input": str(input_path), "output": str(output_path)})

        df = read_items(input_path)
        logger.info("Input loaded", extra={"rows": len(df), "columns": list(df.columns)})

        if self.config.html_column not in df.columns:
            raise ValidationError(f"HTML column '{self.config.html_column}' not found in input")

        defaults = {
            "cleanOptions": clean_options,
            "readabilityOptions": readability_options,
            "markdownOutput": markdown_output,
        }
        items = []
        for row in df.to_dict(orient="records"):
            item = {"htmlContent": _cell(row.get(self.config.html_column))}
            for column in OPTION_COLUMNS:
                value = _cell(row.get(column))
                item[column] = defaults[column] if value is None or value == "" else value
            items.append(item)

        records = self.process_batch(items)
        write_records(records, output_path)

        logger.info(
            "File processing complete",
            extra={
                "output": str(output_path),
                "total": len(records),
                "success": sum(1 for r in records if "error" not in r),
                "errors": sum(1 for r in records if "error" in r),
            },
        )
        return records


def _cell(value: Any) -> Any:
    """Map pandas missing values to None."""
    if isinstance(value, (str, bool, Mapping, list)):
        return value
    if value is None or pd.isna(value):
        return None
    return value


def read_items(path: Path) -> pd.DataFrame:
    """Load input rows from a CSV, JSON or JSONL file."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix == ".jsonl":
        return pd.read_json(path, lines=True, dtype=False)
    if suffix == ".json":
        return pd.read_json(path, orient="records", dtype=False)
    raise ValidationError(f"Unsupported input format '{suffix}'. Use .csv, .json or .jsonl")


def write_records(records: list[dict[str, Any]], path: Path) -> None:
    """Write output records. JSON formats keep absent keys absent."""
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        pd.DataFrame(records).to_csv(path, index=False)
    elif suffix == ".jsonl":
        with path.open("w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
    elif suffix == ".json":
        path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        raise ValidationError(f"Unsupported output format '{suffix}'. Use .csv, .json or .jsonl")

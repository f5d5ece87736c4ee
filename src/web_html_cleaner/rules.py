"""Normalization of raw cleaning and extraction options."""

from collections.abc import Iterable, Mapping
from typing import Any

from .models import ExtractionOptions, Ruleset

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


def split_tokens(value: Any) -> tuple[str, ...]:
    """
    Turn comma-separated text (or a list of strings) into ordered unique tokens.

    Tokens are trimmed and empty ones dropped. The first occurrence of a
    duplicate wins, so the caller's order is kept.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, Iterable):
        parts = value
    else:
        return ()

    tokens = (str(part).strip() for part in parts if part is not None)
    return tuple(dict.fromkeys(token for token in tokens if token))


def coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def coerce_int(value: Any, default: int, minimum: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def normalize_ruleset(raw: Mapping[str, Any] | None) -> Ruleset:
    """
    Build a Ruleset from the caller's clean options.

    Missing options default to "do nothing". Unknown keys are ignored and
    malformed values fall back to their defaults; this never raises.
    """
    if not isinstance(raw, Mapping) or not raw:
        return Ruleset()

    return Ruleset(
        remove_comments=coerce_bool(raw.get("removeComments")),
        remove_empty_tags=coerce_bool(raw.get("removeEmptyTags")),
        remove_scripts=coerce_bool(raw.get("removeScripts")),
        remove_styles=coerce_bool(raw.get("removeStyles")),
        remove_attributes=coerce_bool(raw.get("removeAttributes")),
        excluded_attributes=split_tokens(raw.get("excludedAttributes")),
        excluded_selectors=split_tokens(raw.get("excludedSelectors")),
        excluded_tags=split_tokens(raw.get("excludedTags")),
    )


def normalize_extraction_options(raw: Mapping[str, Any] | None) -> ExtractionOptions:
    """Build ExtractionOptions from the caller's readability options."""
    defaults = ExtractionOptions()
    if not isinstance(raw, Mapping) or not raw:
        return defaults

    return ExtractionOptions(
        char_threshold=coerce_int(raw.get("charThreshold"), defaults.char_threshold, 0),
        classes_to_preserve=split_tokens(raw.get("classesToPreserve")),
        disable_json_ld=coerce_bool(raw.get("disableJSONLD")),
        keep_classes=coerce_bool(raw.get("keepClasses")),
        nb_top_candidates=coerce_int(raw.get("nbTopCandidates"), defaults.nb_top_candidates, 1),
    )

"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from .models import ScoringRules


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict):
        # Large chunks delay progress updates
        chunk_size = matching.get("chunk_size", 5)
        if isinstance(chunk_size, int) and chunk_size > 500:
            warning_messages.append(
                f"Large chunk_size ({chunk_size}) will make cancellation and progress coarse"
            )

        scoring = matching.get("scoring")
        if isinstance(scoring, dict) and scoring:
            defaults = ScoringRules().model_dump()
            changed = sorted(
                key for key, value in scoring.items()
                if key in defaults and value != defaults[key]
            )
            if changed:
                warning_messages.append(
                    f"Scoring table differs from the defaults ({', '.join(changed)}); "
                    "found/partial_match counts are not comparable with default runs"
                )

    export = config_dict.get("export", {})
    if isinstance(export, dict):
        fields = export.get("fields", [])
        if isinstance(fields, list):
            normalized = [f.strip().lower() for f in fields if isinstance(f, str)]
            duplicates = sorted({f for f in normalized if normalized.count(f) > 1})
            if duplicates:
                warning_messages.append(
                    f"Duplicate export fields will be deduplicated: {', '.join(duplicates)}"
                )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)

"""Parse pasted SKU lists into clean, unique, upper-cased query strings.

Accepted layouts:
- one SKU per line
- comma-separated, on one line or many
- space-separated on a single line (only when the line has no hyphen, since
  a hyphenated line is more likely one SKU)
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

SKU_PATTERN = re.compile(r"^[A-Z0-9_-]+$")

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedSkuInput:
    """SKUs extracted from free text plus human-readable warnings."""

    skus: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def parse_sku_input(text: str) -> ParsedSkuInput:
    """
    Split free text into SKUs.

    Every token is trimmed and upper-cased. Tokens that are not made of
    letters, digits, hyphens and underscores are dropped with a warning, and
    duplicates are removed keeping the first occurrence.

    Args:
        text: Raw input (may be empty)

    Returns:
        ParsedSkuInput with skus in input order

    Example:
        >>> parse_sku_input("demo-001, demo-002").skus
        ('DEMO-001', 'DEMO-002')
    """
    if not text or not text.strip():
        return ParsedSkuInput()

    warnings: List[str] = []
    lines = [line for line in text.splitlines() if line.strip()]

    if len(lines) == 1:
        tokens = _split_single_line(lines[0], warnings)
    else:
        tokens = []
        for line in lines:
            tokens.extend(_split_line(line.strip()))

    cleaned = []
    for token in tokens:
        sku = token.strip().upper()
        if not sku:
            continue
        if not SKU_PATTERN.match(sku):
            warnings.append(f'Invalid SKU format: "{sku}"')
            continue
        cleaned.append(sku)

    unique = list(dict.fromkeys(cleaned))
    duplicate_count = len(cleaned) - len(unique)
    if duplicate_count:
        plural = "s" if duplicate_count > 1 else ""
        warnings.append(f"Removed {duplicate_count} duplicate SKU{plural}")

    if not unique:
        warnings.append("No valid SKUs found in input")

    return ParsedSkuInput(skus=tuple(unique), warnings=tuple(warnings))


def _split_single_line(line: str, warnings: List[str]) -> List[str]:
    if "," in line:
        warnings.append("Auto-detected comma-separated format")
        return _split_commas(line)
    if " " in line and "-" not in line:
        warnings.append("Auto-detected space-separated format")
        return _WHITESPACE.split(line.strip())
    return [line.strip()]


def _split_line(line: str) -> List[str]:
    if "," in line:
        return _split_commas(line)
    parts = _WHITESPACE.split(line)
    if len(parts) > 2:
        return parts
    return [line]


def _split_commas(line: str) -> List[str]:
    return [part.strip() for part in line.split(",") if part.strip()]

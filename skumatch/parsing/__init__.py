"""Free-text SKU list parsing."""

from .sku_input import ParsedSkuInput, parse_sku_input

__all__ = ["ParsedSkuInput", "parse_sku_input"]

"""SKU matching against a product catalog snapshot.

Maps imported or typed SKUs to catalog products with a ranked
found / partial_match / not_found classification, processed in chunks
with incremental progress reporting.
"""

__version__ = "0.1.0"

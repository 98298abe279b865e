"""Catalog layer exceptions.

All catalog exceptions inherit from CatalogError so callers can catch every
catalog failure with a single except clause.
"""


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


class CatalogUnavailableError(CatalogError):
    """Raised when a catalog snapshot cannot be obtained.

    The batch that needed the snapshot fails before any matching begins.
    Retrying with a fresh snapshot is always safe.

    Examples:
    - Catalog file missing or unreadable
    - Malformed YAML or invalid product entries
    - Database unreachable or query failure
    """

    def __init__(self, message: str, source: str = "unknown") -> None:
        """Initialize with the catalog source that failed.

        Args:
            message: Human-readable error message
            source: Short description of the catalog source (path, redacted URL)
        """
        super().__init__(message)
        self.source = source

"""Exceptions raised by the SKU matcher.

Every batch failure is terminal for the whole batch: no partial results are
returned alongside any of these. Catalog failures are raised as
skumatch.catalog.CatalogUnavailableError.
"""


class MatcherError(Exception):
    """Base exception for matcher errors."""

    pass


class InvalidInputError(MatcherError):
    """Malformed batch arguments, rejected before any work starts.

    Examples:
    - chunk_size below 1 or not an integer
    - queries that are not a sequence of strings
    """

    pass


class BatchCancelledError(MatcherError):
    """The batch was cancelled at a chunk boundary.

    Attributes:
        batch_id: Identifier of the abandoned batch
        processed: Number of queries matched before cancellation
    """

    def __init__(self, message: str, batch_id: str, processed: int) -> None:
        super().__init__(message)
        self.batch_id = batch_id
        self.processed = processed


class BatchInProgressError(MatcherError):
    """A session was asked to start a batch while another is still running."""

    pass

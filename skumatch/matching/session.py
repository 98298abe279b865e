"""Batch run tracking for a single caller session."""

import asyncio
from typing import Iterable, Optional

from skumatch.logging import get_logger

from .engine import DEFAULT_CHUNK_SIZE, CatalogSource, ProgressCallback, SkuMatcher
from .exceptions import BatchCancelledError, BatchInProgressError
from .models import BatchState, BatchSummary

logger = get_logger(__name__, component="session")


class MatchSession:
    """
    Runs batches one at a time and remembers how the last one ended.

    State machine:
        not_started -> running -> completed | failed | cancelled

    Any terminal state may start a new run; each run is independent and a
    failed or cancelled run can simply be retried.
    """

    def __init__(
        self,
        matcher: SkuMatcher,
        catalog: CatalogSource,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize the session.

        Args:
            matcher: Matcher used for every run
            catalog: Provider or product sequence, loaded fresh on each run
            chunk_size: Queries per chunk for every run
        """
        self.matcher = matcher
        self.catalog = catalog
        self.chunk_size = chunk_size
        self.state = BatchState.NOT_STARTED
        self.last_summary: Optional[BatchSummary] = None
        self.last_error: Optional[Exception] = None
        self._lock = asyncio.Lock()
        self._cancel_event: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return self.state == BatchState.RUNNING

    async def run(
        self, queries: Iterable[str], on_progress: Optional[ProgressCallback] = None
    ) -> BatchSummary:
        """
        Run one batch through the matcher.

        Args:
            queries: Query strings in order
            on_progress: Progress callback forwarded to the matcher

        Returns:
            BatchSummary of the run (also kept as last_summary)

        Raises:
            BatchInProgressError: Another run of this session is outstanding
            MatcherError, CatalogUnavailableError: Propagated from the matcher
        """
        if self._lock.locked():
            logger.warning(
                "Batch rejected: previous batch still in progress",
                extra={"event": "session.run.rejected", "reason": "batch_in_progress"},
            )
            raise BatchInProgressError("A batch is already running in this session")

        async with self._lock:
            self.state = BatchState.RUNNING
            self.last_error = None
            self._cancel_event = asyncio.Event()

            try:
                summary = await self.matcher.match_batch(
                    queries,
                    self.catalog,
                    chunk_size=self.chunk_size,
                    on_progress=on_progress,
                    cancel_event=self._cancel_event,
                )
            except (BatchCancelledError, asyncio.CancelledError) as e:
                self.state = BatchState.CANCELLED
                self.last_error = e
                raise
            except Exception as e:
                self.state = BatchState.FAILED
                self.last_error = e
                raise
            finally:
                self._cancel_event = None

            self.state = BatchState.COMPLETED
            self.last_summary = summary
            return summary

    def cancel(self) -> bool:
        """
        Request cancellation at the next chunk boundary.

        Returns:
            True if a running batch was signalled, False if nothing is running
        """
        if self._cancel_event is None:
            return False
        self._cancel_event.set()
        logger.info("Batch cancellation requested", extra={"event": "session.cancel.requested"})
        return True

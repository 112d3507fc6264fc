"""Background search runner for non-Qt callers."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from kingside.core.enums import Color
from kingside.core.position import Position
from kingside.engine.negamax import NegamaxEngine
from kingside.engine.search import SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class SearchWorker:
    """Runs one search at a time on a dedicated thread.

    The worker searches a private snapshot of the submitted position, so the
    caller may keep playing on its own copy meanwhile.  :meth:`poll` and
    :attr:`progress` never block.  Submitting while a search runs cancels it
    and queues the new one behind it.
    """

    __slots__ = ("_cancel_event", "_engine", "_executor", "_future", "_limits")

    def __init__(self, limits: SearchLimits | None = None) -> None:
        self._limits = limits or SearchLimits()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="kingside-search"
        )
        self._cancel_event = threading.Event()
        self._engine: NegamaxEngine | None = None
        self._future: Future[SearchResult] | None = None

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def set_limits(self, limits: SearchLimits) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = limits

    @property
    def busy(self) -> bool:
        return self._future is not None and not self._future.done()

    @property
    def progress(self) -> float:
        return self._engine.progress if self._engine is not None else 0.0

    def submit(
        self,
        position: Position,
        depth: int | None = None,
        side: Color | None = None,
    ) -> Future[SearchResult]:
        if self.busy:
            # The stale search unwinds on its own event and its result is dropped.
            _LOGGER.debug("Cancelling stale search before resubmitting")
            self._cancel_event.set()
        snapshot = position.copy()
        search_depth = self._limits.max_depth if depth is None else depth
        self._cancel_event = threading.Event()
        self._engine = NegamaxEngine()
        _LOGGER.debug("Submitting search at depth %d", search_depth)
        self._future = self._executor.submit(
            self._engine.best_move,
            snapshot,
            search_depth,
            side,
            self._cancel_event.is_set,
        )
        return self._future

    def poll(self) -> SearchResult | None:
        """Finished result, or ``None`` while searching or idle.

        A result is handed out once; errors raised by the search propagate.
        """
        future = self._future
        if future is None or not future.done():
            return None
        self._future = None
        return future.result()

    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> SearchWorker:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

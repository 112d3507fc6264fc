"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from kingside.core.position import Position
from kingside.engine.negamax import NegamaxEngine
from kingside.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand."""

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)
    progress_changed = pyqtSignal(int, float)

    def __init__(self, *, max_depth: int = 2) -> None:
        super().__init__()
        self._engine = NegamaxEngine()
        self._limits = SearchLimits(max_depth=max_depth)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                position_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
                on_progress=lambda value: self.progress_changed.emit(
                    request_id, value
                ),
            )
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_limits(self, max_depth: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth)

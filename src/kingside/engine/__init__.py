"""Engine package: material negamax search and its threaded runners.

The Qt bridge lives in :mod:`kingside.engine.qt_bridge` and is imported on
demand so the core engine works without a Qt installation loaded.
"""

from kingside.engine.evaluation import MATE_SCORE, PIECE_VALUES, evaluate
from kingside.engine.negamax import NegamaxEngine, best_move
from kingside.engine.search import (
    CancelCheck,
    IEngine,
    ProgressCallback,
    SearchLimits,
    SearchResult,
)
from kingside.engine.worker import SearchWorker

__all__ = [
    "MATE_SCORE",
    "PIECE_VALUES",
    "CancelCheck",
    "IEngine",
    "NegamaxEngine",
    "ProgressCallback",
    "SearchLimits",
    "SearchResult",
    "SearchWorker",
    "best_move",
    "evaluate",
]

"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from kingside.core.move import Move
    from kingside.core.position import Position

CancelCheck = Callable[[], bool]
ProgressCallback = Callable[[float], None]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``max_depth`` counts the plies searched beyond the candidate move itself:
    0 scores every legal move by the material balance right after it, or by
    the mate or stalemate score when the reply side has no legal move.
    """

    max_depth: int = 2


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int
    cancelled: bool = False


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult: ...

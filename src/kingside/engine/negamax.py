"""Fixed-depth negamax search with alpha-beta pruning."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kingside.core.enums import Color
from kingside.core.move import Move
from kingside.core.moveset import compute_legal_moves, has_legal_move
from kingside.core.piece import code_type
from kingside.core.position import Position
from kingside.engine.evaluation import MATE_SCORE, PIECE_VALUES, evaluate
from kingside.engine.search import (
    CancelCheck,
    IEngine,
    ProgressCallback,
    SearchLimits,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000


def _never_cancelled() -> bool:
    return False


class NegamaxEngine(IEngine):
    """Material-only searcher over cloned positions.

    Every node works on its own copy of the position, so the caller's
    position is never touched and the engine keeps no undo stack.

    ``progress`` runs from 0.0 to 1.0 as root moves are completed and may be
    read from another thread while a search is running.
    """

    __slots__ = (
        "_cancel_check",
        "_cancelled",
        "_nodes",
        "_progress",
        "on_progress",
    )

    def __init__(self, on_progress: ProgressCallback | None = None) -> None:
        self._nodes = 0
        self._progress = 0.0
        self._cancelled = False
        self._cancel_check: CancelCheck = _never_cancelled
        self.on_progress = on_progress

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def nodes(self) -> int:
        return self._nodes

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult:
        if on_progress is not None:
            self.on_progress = on_progress
        return self.best_move(
            position, limits.max_depth, position.side_to_move, is_cancelled
        )

    def best_move(
        self,
        position: Position,
        depth: int,
        side: Color | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Pick the best move for *side* looking *depth* plies past each candidate.

        Ties keep the first candidate in search order.  A cancelled search
        returns the best move among the candidates it finished, flagged with
        ``cancelled=True``.
        """
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")

        side = position.side_to_move if side is None else side
        self._nodes = 0
        self._cancelled = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._set_progress(0.0)

        root = position.copy()
        root.side_to_move = side
        moves = compute_legal_moves(root, side)
        if moves.is_empty:
            score = -MATE_SCORE if root.is_in_check(side) else 0
            self._set_progress(1.0)
            _LOGGER.debug("No legal move for %s (score %d)", side, score)
            return SearchResult(None, score, depth, 0)

        ordered = self._order_moves(root, moves.moves())
        best: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        for index, move in enumerate(ordered):
            if self._should_stop():
                break
            child = root.copy()
            child.apply_move(move.from_sq, move.to_sq)
            score = -self._negamax(child, depth, side.opposite, -_INF_SCORE, -alpha, 1)
            if self._cancelled:
                # A child cut short by cancellation has no trustworthy score.
                break
            if score > best_score:
                best, best_score = move, score
            alpha = max(alpha, score)
            self._set_progress((index + 1) / len(ordered))

        if best is None:
            best = ordered[0]
            child = root.copy()
            child.apply_move(best.from_sq, best.to_sq)
            best_score = evaluate(child, side)

        _LOGGER.debug(
            "Search for %s finished: best=%s score=%d depth=%d nodes=%d cancelled=%s",
            side,
            best,
            best_score,
            depth,
            self._nodes,
            self._cancelled,
        )
        return SearchResult(best, best_score, depth, self._nodes, self._cancelled)

    def root_scores(
        self, position: Position, depth: int, side: Color | None = None
    ) -> dict[Move, int]:
        """Exact score of every legal move for *side*, without root pruning."""
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")
        side = position.side_to_move if side is None else side
        self._nodes = 0
        self._cancelled = False
        self._cancel_check = _never_cancelled

        root = position.copy()
        root.side_to_move = side
        scores: dict[Move, int] = {}
        for move in compute_legal_moves(root, side).moves():
            child = root.copy()
            child.apply_move(move.from_sq, move.to_sq)
            scores[move] = -self._negamax(
                child, depth, side.opposite, -_INF_SCORE, _INF_SCORE, 1
            )
        return scores

    # -- Internals ----------------------------------------------------------

    def _negamax(
        self,
        position: Position,
        depth: int,
        side: Color,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._nodes += 1
        if self._should_stop():
            return evaluate(position, side)

        if depth <= 0:
            # A mated or stalemated leaf keeps its terminal score.
            if not has_legal_move(position, side):
                return self._terminal_score(position, side, ply)
            return evaluate(position, side)

        moves = compute_legal_moves(position, side)
        if moves.is_empty:
            return self._terminal_score(position, side, ply)

        best = -_INF_SCORE
        for move in self._order_moves(position, moves.moves()):
            child = position.copy()
            child.apply_move(move.from_sq, move.to_sq)
            score = -self._negamax(
                child, depth - 1, side.opposite, -beta, -alpha, ply + 1
            )
            if self._cancelled:
                return max(best, score)
            if score > best:
                best = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best

    @staticmethod
    def _terminal_score(position: Position, side: Color, ply: int) -> int:
        if position.is_in_check(side):
            # Prefer the quickest mate and the slowest loss.
            return -MATE_SCORE + ply
        return 0

    @staticmethod
    def _order_moves(position: Position, moves: Iterable[Move]) -> list[Move]:
        """Captures first, most valuable victim then least valuable attacker."""
        board = position.board

        def capture_key(move: Move) -> int:
            victim = board.code_at(move.to_sq)
            if not victim:
                return 0
            attacker = board.code_at(move.from_sq)
            return (
                PIECE_VALUES[code_type(victim)] * 10
                - PIECE_VALUES[code_type(attacker)]
                + _INF_SCORE
            )

        return sorted(moves, key=capture_key, reverse=True)

    def _should_stop(self) -> bool:
        if not self._cancelled and self._cancel_check():
            self._cancelled = True
        return self._cancelled

    def _set_progress(self, value: float) -> None:
        self._progress = value
        if self.on_progress is not None:
            self.on_progress(value)


def best_move(
    position: Position, depth: int, side: Color | None = None
) -> tuple[Move | None, int]:
    """Convenience wrapper returning ``(move, score)`` for *side*."""
    result = NegamaxEngine().best_move(position, depth, side)
    return result.best_move, result.score

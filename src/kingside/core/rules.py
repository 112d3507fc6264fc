"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kingside.core.enums import Color, GameResult
from kingside.core.moveset import MoveSet, compute_legal_moves

if TYPE_CHECKING:
    from kingside.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Only checkmate and stalemate end a game; move-count and repetition draws
    are not part of the rule set.
    """

    @staticmethod
    def is_in_check(position: Position, side: Color | None = None) -> bool:
        color = position.side_to_move if side is None else side
        return position.is_in_check(color)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return compute_legal_moves(position, position.side_to_move).is_empty

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return compute_legal_moves(position, position.side_to_move).is_empty

    @staticmethod
    def game_result(position: Position, moves: MoveSet | None = None) -> GameResult:
        """Classify *position* for its side to move.

        *moves* may be passed when the caller already holds the legal move
        table for the side to move, saving a second legality pass.
        """
        side = position.side_to_move
        if moves is None:
            moves = compute_legal_moves(position, side)
        if not moves.is_empty:
            return GameResult.RUNNING
        if position.is_in_check(side):
            return GameResult.win_for(side.opposite)
        return GameResult.DRAW  # stalemate

"""Static material evaluation."""

from __future__ import annotations

from typing import Final

from kingside.core.enums import Color, PieceType
from kingside.core.piece import code_color, code_type
from kingside.core.position import Position

PIECE_VALUES: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

# Larger than any reachable material swing.
MATE_SCORE: Final = 100_000


def evaluate(position: Position, side: Color) -> int:
    """Material balance from *side*'s point of view."""
    board = position.board
    score = 0
    for sq in range(64):
        code = board.code_at(sq)
        if not code:
            continue
        value = PIECE_VALUES[code_type(code)]
        score += value if code_color(code) == side else -value
    return score

"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from kingside.core import STARTING_FEN, compute_legal_moves, position_from_fen

    pos = position_from_fen(STARTING_FEN)
    for move in compute_legal_moves(pos, pos.side_to_move).moves():
        print(move)
"""

from kingside.core.board import Board
from kingside.core.enums import CastlingRights, Color, GameResult, PieceType
from kingside.core.errors import (
    EmptySquareError,
    FenCastleError,
    FenEnPassantError,
    FenError,
    FenMoveCountError,
    FenPiecesError,
    FenTrailingDataError,
    FenTurnError,
    InvalidPieceError,
    MissingKingError,
    PreconditionError,
)
from kingside.core.move import Move
from kingside.core.moveset import MoveSet, compute_legal_moves
from kingside.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from kingside.core.piece import Piece, decode_piece, encode_piece
from kingside.core.position import Position
from kingside.core.rules import Rules
from kingside.core.types import (
    Square,
    SquareMask,
    file_of,
    iter_squares,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "SquareMask",
    "file_of",
    "iter_squares",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveSet",
    "Piece",
    "Position",
    "Rules",
    "compute_legal_moves",
    "decode_piece",
    "encode_piece",
    # Errors
    "EmptySquareError",
    "FenCastleError",
    "FenEnPassantError",
    "FenError",
    "FenMoveCountError",
    "FenPiecesError",
    "FenTrailingDataError",
    "FenTurnError",
    "InvalidPieceError",
    "MissingKingError",
    "PreconditionError",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]

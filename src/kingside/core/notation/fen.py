"""FEN parsing and serialization.

Each malformed field raises its own :class:`~kingside.core.errors.FenError`
subclass so callers can tell the user which part of the description is wrong.
"""

from __future__ import annotations

from kingside.core.board import Board
from kingside.core.enums import CastlingRights, Color
from kingside.core.errors import (
    FenCastleError,
    FenEnPassantError,
    FenMoveCountError,
    FenPiecesError,
    FenTrailingDataError,
    FenTurnError,
)
from kingside.core.move_generator import pawn_direction
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

_FIELD_COUNT = 6


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not parts:
        raise FenPiecesError(f"Empty FEN: {fen!r}", fen)

    board = _parse_placement(parts[0], fen)

    # 2. Side to move
    if len(parts) < 2:
        raise FenTurnError(f"Missing FEN side-to-move field: {fen!r}", fen)
    if parts[1] == "w":
        side = Color.WHITE
    elif parts[1] == "b":
        side = Color.BLACK
    else:
        raise FenTurnError(f"Invalid FEN side-to-move field: {parts[1]!r}", fen)

    # 3. Castling
    if len(parts) < 3:
        raise FenCastleError(f"Missing FEN castling field: {fen!r}", fen)
    castling = _parse_castling(parts[2], fen)

    # 4. En passant
    if len(parts) < 4:
        raise FenEnPassantError(f"Missing FEN en-passant field: {fen!r}", fen)
    en_passant = _parse_en_passant(parts[3], side, fen)

    # 5-6. Clocks
    if len(parts) < _FIELD_COUNT:
        raise FenMoveCountError(f"Missing FEN move counters: {fen!r}", fen)
    halfmove = _parse_count(parts[4], "halfmove clock", 0, fen)
    fullmove = _parse_count(parts[5], "fullmove number", 1, fen)

    if len(parts) > _FIELD_COUNT:
        raise FenTrailingDataError(
            f"Unexpected data after move counters: {' '.join(parts[6:])!r}", fen
        )

    return Position(board, side, castling, en_passant, halfmove, fullmove)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenPiecesError(f"Invalid FEN board (must contain 8 ranks): {fen!r}", fen)
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isascii() and ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenPiecesError(f"Invalid FEN digit {ch!r}: {fen!r}", fen)
                file += step
            elif ch.isascii() and ch.isalpha():
                if file >= 8:
                    raise FenPiecesError(f"Invalid FEN rank width: {fen!r}", fen)
                # Unknown letters are a precondition failure, not a FenError.
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            else:
                raise FenPiecesError(f"Invalid FEN character {ch!r}: {fen!r}", fen)
            if file > 8:
                raise FenPiecesError(f"Invalid FEN rank width: {fen!r}", fen)
        if file != 8:
            raise FenPiecesError(f"Invalid FEN rank width: {fen!r}", fen)
    return board


def _parse_castling(field: str, fen: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if field == "-":
        return castling
    seen: set[str] = set()
    for ch in field:
        right = _CASTLING_CHARS.get(ch)
        if right is None or ch in seen:
            raise FenCastleError(f"Invalid FEN castling field: {field!r}", fen)
        seen.add(ch)
        castling |= right
    return castling


def _parse_en_passant(field: str, side: Color, fen: str) -> Square | None:
    if field == "-":
        return None
    try:
        skipped = parse_square(field)
    except ValueError:
        raise FenEnPassantError(
            f"Invalid FEN en-passant square: {field!r}", fen
        ) from None
    # The pawn that double-pushed belongs to the side that just moved.
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(skipped) != expected_rank:
        raise FenEnPassantError(
            f"Invalid FEN en-passant square for side-to-move: {field!r}", fen
        )
    return skipped + pawn_direction(side.opposite)


def _parse_count(field: str, name: str, minimum: int, fen: str) -> int:
    if not (field.isascii() and field.isdigit()):
        raise FenMoveCountError(f"Invalid FEN {name}: {field!r}", fen)
    value = int(field)
    if value < minimum:
        raise FenMoveCountError(f"Invalid FEN {name}: {field!r}", fen)
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant: FEN names the skipped square, behind the pushed pawn.
    ep_str = "-"
    if pos.en_passant is not None:
        pusher = pos.side_to_move.opposite
        ep_str = square_name(pos.en_passant - pawn_direction(pusher))

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )

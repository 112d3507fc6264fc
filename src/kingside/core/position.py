"""Position: complete game state with in-place move application."""

from __future__ import annotations

from collections.abc import Mapping

from kingside.core.board import Board
from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.errors import EmptySquareError
from kingside.core.move_generator import (
    KING_HOME,
    ROOK_CORNERS,
    castle_side_for,
    pawn_direction,
    pawn_last_rank,
    pseudo_legal_mask,
)
from kingside.core.piece import Piece
from kingside.core.types import Square, SquareMask, file_of, rank_of

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_KING_RIGHTS: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_BOTH,
    CastlingRights.BLACK_BOTH,
)


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    ``en_passant`` holds the square of the pawn that has just made a double
    push (not the square it skipped).  It is only meaningful for the ply that
    immediately follows that push and is cleared by any other move.

    A position is a small value: :meth:`copy` duplicates a 64-byte board and a
    handful of scalars, so legality tests and the search clone freely instead
    of undoing moves.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def pseudo_legal_moves(
        self, sq: Square, from_castling_check: bool = False
    ) -> SquareMask:
        """Destination mask for the piece on *sq* (may leave its king in check).

        Raises :class:`EmptySquareError` when *sq* is vacant; callers are
        expected to check occupancy first.
        """
        return pseudo_legal_mask(self, sq, from_castling_check)

    def attack_map(self, color: Color) -> dict[Square, SquareMask]:
        """Squares covered by each piece of *color*, castling excluded."""
        return {
            sq: pseudo_legal_mask(self, sq, True)
            for sq in self.board.all_pieces(color)
        }

    @staticmethod
    def is_square_threatened(
        sq: Square, opponent_moves: Mapping[Square, SquareMask]
    ) -> bool:
        """Whether any mask in *opponent_moves* contains *sq*."""
        bit = 1 << sq
        return any(mask & bit for mask in opponent_moves.values())

    def is_attacked(self, sq: Square, by_color: Color) -> bool:
        """Whether *sq* is covered by *by_color*; stops at the first attacker."""
        bit = 1 << sq
        for from_sq in self.board.all_pieces(by_color):
            if pseudo_legal_mask(self, from_sq, True) & bit:
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        return self.is_attacked(self.king_square(color), color.opposite)

    def is_check_after(self, from_sq: Square, to_sq: Square, side: Color) -> bool:
        """Would *side*'s king be attacked after playing ``from_sq → to_sq``?"""
        after = self.copy()
        after.apply_move(from_sq, to_sq)
        return after.is_in_check(side)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType = PieceType.QUEEN,
    ) -> Piece | None:
        """Play ``from_sq → to_sq`` in place and return the captured piece.

        The move is not validated against the legal move table; that is the
        caller's job.  Castling is recognised by a two-file king move from its
        home square, en passant by a diagonal pawn move onto the square behind
        the en-passant target.
        """
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise EmptySquareError(f"No piece on square {from_sq}")
        color = piece.color
        promotes = (
            piece.piece_type == PieceType.PAWN
            and rank_of(to_sq) == pawn_last_rank(color)
        )
        if promotes and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion.name}")

        captured = board[to_sq]
        next_en_passant: Square | None = None

        if piece.piece_type == PieceType.PAWN:
            direction = pawn_direction(color)
            ep = self.en_passant
            if (
                ep is not None
                and captured is None
                and to_sq == ep + direction
                and file_of(from_sq) != file_of(to_sq)
            ):
                captured = board[ep]
                board[ep] = None
            elif to_sq - from_sq == 2 * direction:
                next_en_passant = to_sq

        board.move_piece(from_sq, to_sq)

        if promotes:
            board[to_sq] = Piece(color, promotion)

        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~_KING_RIGHTS[int(color)]
            if from_sq == KING_HOME[int(color)]:
                side = castle_side_for(color, to_sq)
                if side is not None:
                    board.move_piece(side.rook_from, side.rook_to)

        for sq in (from_sq, to_sq):
            if sq in ROOK_CORNERS:
                next_castling &= ~ROOK_CORNERS[sq]
        self.castling = next_castling

        self.en_passant = next_en_passant

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if color == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = color.opposite

        return captured

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"

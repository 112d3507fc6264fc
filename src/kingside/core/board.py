"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from kingside.core.enums import Color, PieceType
from kingside.core.errors import MissingKingError
from kingside.core.piece import EMPTY, Piece, code_color, decode_piece, encode_piece
from kingside.core.types import Square, make_square

_KING_CODES = (
    encode_piece(Piece(Color.WHITE, PieceType.KING)),
    encode_piece(Piece(Color.BLACK, PieceType.KING)),
)


class Board:
    """64 piece codes in a ``bytearray`` plus a king-square cache.

    Copying a board is a single ``bytearray`` copy, which keeps the
    clone-per-candidate legality test and search-node cloning affordable.
    """

    __slots__ = ("_cells", "_king_squares")

    def __init__(self) -> None:
        self._cells = bytearray(64)
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return decode_piece(self._cells[sq])

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_code = self._cells[sq]
        new_code = EMPTY if piece is None else encode_piece(piece)
        if old_code == new_code:
            return

        if old_code in _KING_CODES:
            color_idx = int(code_color(old_code))
            if self._king_squares[color_idx] == sq:
                self._king_squares[color_idx] = None

        self._cells[sq] = new_code

        if new_code in _KING_CODES:
            self._king_squares[int(code_color(new_code))] = sq

    def code_at(self, sq: Square) -> int:
        """Raw piece code stored on *sq* (``EMPTY`` when vacant)."""
        return self._cells[sq]

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] == EMPTY

    def move_piece(self, from_sq: Square, to_sq: Square) -> None:
        """Relocate whatever stands on *from_sq*, overwriting *to_sq*."""
        piece = self[from_sq]
        self[from_sq] = None
        self[to_sq] = piece

    # -- Query helpers ------------------------------------------------------

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        cells = self._cells
        return [
            sq
            for sq in range(64)
            if cells[sq] != EMPTY and code_color(cells[sq]) == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise MissingKingError(f"No {color.name} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[int(color)] is not None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._cells = bytearray(64)
        self._king_squares = [None, None]

    def to_bytes(self) -> bytes:
        """Snapshot of the 64 piece codes."""
        return bytes(self._cells)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        back_rank = [
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        ]
        for f, pt in enumerate(back_rank):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

"""Piece value object and the compact one-byte piece codec.

A piece code packs the piece type into the low three bits (1-6, see
:class:`PieceType`) and the side into bit 3 (set for black).  Code ``0`` is
reserved for an empty square, which lets a whole board live in a 64-byte
``bytearray``.
"""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import Color, PieceType
from kingside.core.errors import InvalidPieceError

EMPTY = 0
_TYPE_MASK = 0b0111
_SIDE_BIT = 0b1000

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise InvalidPieceError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def code(self) -> int:
        """Compact one-byte encoding of this piece."""
        return encode_piece(self)


# ── Codec ─────────────────────────────────────────────────────────────────


def encode_piece(piece: Piece) -> int:
    """Pack *piece* into its one-byte code (never ``EMPTY``)."""
    side = _SIDE_BIT if piece.color == Color.BLACK else 0
    return side | int(piece.piece_type)


def _build_decode_table() -> tuple[Piece | None, ...]:
    table: list[Piece | None] = [None] * 16
    for color in Color:
        for ptype in PieceType:
            piece = Piece(color, ptype)
            table[encode_piece(piece)] = piece
    return tuple(table)


# Pieces are immutable, so decoding hands out shared instances.
_DECODE: tuple[Piece | None, ...] = _build_decode_table()


def decode_piece(code: int) -> Piece | None:
    """Unpack a piece code; ``EMPTY`` decodes to ``None``."""
    if code == EMPTY:
        return None
    if not 0 < code < 16 or _DECODE[code] is None:
        raise InvalidPieceError(f"Invalid piece code: {code!r}")
    return _DECODE[code]


def code_color(code: int) -> Color:
    """Side of a non-empty piece code."""
    return Color.BLACK if code & _SIDE_BIT else Color.WHITE


def code_type(code: int) -> PieceType:
    """Piece type of a non-empty piece code."""
    return PieceType(code & _TYPE_MASK)

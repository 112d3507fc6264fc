"""Exception hierarchy for the core layer.

Two families live here:

* :class:`FenError` and its subclasses describe malformed external input.
  They are recoverable: the caller reports the problem and no game starts.
* :class:`PreconditionError` and its subclasses signal a programming bug
  upstream (querying an empty square, a hand-built board without a king).
  Library code never catches them.
"""

from __future__ import annotations


class FenError(ValueError):
    """Base exception for malformed FEN input."""

    section = "fen"

    def __init__(self, message: str, fen: str | None = None) -> None:
        super().__init__(message)
        self.fen = fen


class FenPiecesError(FenError):
    """Piece-placement field is malformed (bad rank count, width, or symbol)."""

    section = "pieces"


class FenTurnError(FenError):
    """Side-to-move field is missing or not ``w``/``b``."""

    section = "turn"


class FenCastleError(FenError):
    """Castling field is missing or contains an unknown/duplicate letter."""

    section = "castle"


class FenEnPassantError(FenError):
    """En-passant field is missing, not a square, or on an impossible rank."""

    section = "en_passant"


class FenMoveCountError(FenError):
    """Halfmove clock or fullmove number is missing or not a valid count."""

    section = "move_count"


class FenTrailingDataError(FenError):
    """Extra fields after the fullmove number."""

    section = "trailing"


class PreconditionError(RuntimeError):
    """A caller broke an invariant the core relies on."""


class EmptySquareError(PreconditionError):
    """Move generation or application was requested for an empty square."""


class MissingKingError(PreconditionError):
    """A position without a king for one side was used for check detection."""


class InvalidPieceError(PreconditionError):
    """An unknown piece letter or piece code reached the codec."""

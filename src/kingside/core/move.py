"""Move value object (coordinate-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import PieceType
from kingside.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable ``(from, to)`` pair with an optional promotion choice."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def squares(self) -> tuple[Square, Square]:
        return (self.from_sq, self.to_sq)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse ``e2e4`` / ``e7e8q`` style text."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid move text: {text!r}")
        promotion = None
        if len(text) == 5:
            promotion = _PROMO_TYPES.get(text[4])
            if promotion is None:
                raise ValueError(f"Invalid promotion piece: {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:4]), promotion)

"""Legal move table: per-square destination masks for one side."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from kingside.core.enums import Color
from kingside.core.move import Move
from kingside.core.position import Position
from kingside.core.types import Square, SquareMask, iter_squares


class MoveSet(Mapping[Square, SquareMask]):
    """Read-only mapping ``from square -> legal destination mask``.

    Only squares with at least one legal destination appear as keys.  The
    table is rebuilt from scratch after every ply; it never tracks changes.

    Attributes:
        side: Color whose moves the table describes.
        pseudo_count: Number of destinations before the self-check filter.
        legal_count: Number of destinations that survived the filter.
    """

    __slots__ = ("side", "_masks", "pseudo_count", "legal_count")

    def __init__(
        self,
        side: Color,
        masks: dict[Square, SquareMask] | None = None,
        pseudo_count: int = 0,
        legal_count: int | None = None,
    ) -> None:
        self.side = side
        self._masks = masks or {}
        self.pseudo_count = pseudo_count
        if legal_count is None:
            legal_count = sum(mask.bit_count() for mask in self._masks.values())
        self.legal_count = legal_count

    # -- Mapping protocol ---------------------------------------------------

    def __getitem__(self, sq: Square) -> SquareMask:
        return self._masks[sq]

    def __iter__(self) -> Iterator[Square]:
        return iter(self._masks)

    def __len__(self) -> int:
        return len(self._masks)

    # -- Convenience --------------------------------------------------------

    def destinations(self, sq: Square) -> list[Square]:
        """Legal destinations from *sq* (empty if *sq* has none)."""
        return list(iter_squares(self._masks.get(sq, 0)))

    def contains(self, from_sq: Square, to_sq: Square) -> bool:
        return bool(self._masks.get(from_sq, 0) & (1 << to_sq))

    def moves(self) -> Iterator[Move]:
        """Every legal move as a :class:`Move`, ordered by origin square."""
        for from_sq in sorted(self._masks):
            for to_sq in iter_squares(self._masks[from_sq]):
                yield Move(from_sq, to_sq)

    @property
    def is_empty(self) -> bool:
        return self.legal_count == 0

    def __repr__(self) -> str:
        return (
            f"MoveSet(side={self.side}, squares={len(self._masks)}, "
            f"legal={self.legal_count}, pseudo={self.pseudo_count})"
        )


def compute_legal_moves(position: Position, side: Color) -> MoveSet:
    """Build the legal move table for *side* in *position*."""
    masks: dict[Square, SquareMask] = {}
    pseudo_count = 0
    legal_count = 0

    for from_sq in position.board.all_pieces(side):
        pseudo = position.pseudo_legal_moves(from_sq)
        pseudo_count += pseudo.bit_count()

        legal = 0
        for to_sq in iter_squares(pseudo):
            if not position.is_check_after(from_sq, to_sq, side):
                legal |= 1 << to_sq
        if legal:
            masks[from_sq] = legal
            legal_count += legal.bit_count()

    return MoveSet(side, masks, pseudo_count, legal_count)


def has_legal_move(position: Position, side: Color) -> bool:
    """Whether *side* has at least one legal move; stops at the first one."""
    for from_sq in position.board.all_pieces(side):
        for to_sq in iter_squares(position.pseudo_legal_moves(from_sq)):
            if not position.is_check_after(from_sq, to_sq, side):
                return True
    return False

"""Pseudo-legal destination masks for every piece type.

All generators return an ``int`` bitmask of destination squares.  The
``from_castling_check`` flag switches a generator into *threat* mode, used
when scanning the opponent's coverage: castling destinations are skipped (so
the king's castling test never recurses into itself) and pawns report both
diagonal squares whether or not anything stands there.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.errors import EmptySquareError
from kingside.core.piece import Piece, code_color, code_type
from kingside.core.types import Square, SquareMask, file_of, make_square, rank_of

if TYPE_CHECKING:
    from kingside.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Per side: push direction and the rank a double push starts from.
_PAWN_DIRECTION: tuple[int, int] = (8, -8)
_PAWN_START_RANK: tuple[int, int] = (1, 6)
_PAWN_LAST_RANK: tuple[int, int] = (7, 0)


def pawn_direction(color: Color) -> int:
    """Square offset of a single pawn push for *color* (+8 white, −8 black)."""
    return _PAWN_DIRECTION[int(color)]


def pawn_last_rank(color: Color) -> int:
    """Rank on which a *color* pawn promotes."""
    return _PAWN_LAST_RANK[int(color)]


# -- Precomputed lookup tables ---------------------------------------------


def _build_step_masks(offsets: tuple[tuple[int, int], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        mask = 0
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                mask |= 1 << make_square(af, ar)
        masks.append(mask)
    return tuple(masks)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attacks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    per_color: list[tuple[int, ...]] = []
    for color in Color:
        direction = pawn_direction(color)
        masks: list[int] = []
        for sq in range(64):
            mask = 0
            ahead = sq + direction
            if 0 <= ahead < 64:
                if file_of(sq) > 0:
                    mask |= 1 << (ahead - 1)
                if file_of(sq) < 7:
                    mask |= 1 << (ahead + 1)
            masks.append(mask)
        per_color.append(tuple(masks))
    return (per_color[0], per_color[1])


_KNIGHT_MASKS = _build_step_masks(KNIGHT_OFFSETS)
_KING_MASKS = _build_step_masks(KING_OFFSETS)
_PAWN_ATTACKS = _build_pawn_attacks()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Castling geometry -------------------------------------------------------


class _CastleSide:
    """Squares involved in one castling option for one color."""

    __slots__ = ("right", "rook_from", "rook_to", "king_to", "between", "path")

    def __init__(self, right: CastlingRights, home: Square, step: int) -> None:
        self.right = right
        self.king_to = home + 2 * step
        self.rook_from = home + 3 * step if step > 0 else home - 4
        self.rook_to = home + step
        # Squares that must be empty: everything strictly between king and rook.
        lo, hi = sorted((home, self.rook_from))
        self.between = tuple(range(lo + 1, hi))
        # Squares the king stands on or crosses: none may be attacked.
        self.path = (home, home + step, home + 2 * step)


KING_HOME: tuple[Square, Square] = (make_square(4, 0), make_square(4, 7))

CASTLE_SIDES: tuple[tuple[_CastleSide, _CastleSide], ...] = (
    (
        _CastleSide(CastlingRights.WHITE_KINGSIDE, KING_HOME[0], 1),
        _CastleSide(CastlingRights.WHITE_QUEENSIDE, KING_HOME[0], -1),
    ),
    (
        _CastleSide(CastlingRights.BLACK_KINGSIDE, KING_HOME[1], 1),
        _CastleSide(CastlingRights.BLACK_QUEENSIDE, KING_HOME[1], -1),
    ),
)

# Rook home corner -> the right that rook carries.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    side.rook_from: side.right for sides in CASTLE_SIDES for side in sides
}


def castle_side_for(color: Color, king_to: Square) -> _CastleSide | None:
    """Castling option whose king destination is *king_to*, if any."""
    for side in CASTLE_SIDES[int(color)]:
        if side.king_to == king_to:
            return side
    return None


# -- Piece-specific generators ------------------------------------------------


def _sliding_mask(
    position: Position,
    sq: Square,
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
) -> SquareMask:
    board = position.board
    mask = 0
    for ray in rays:
        for to_sq in ray:
            code = board.code_at(to_sq)
            if not code:
                mask |= 1 << to_sq
                continue
            if code_color(code) != color:
                mask |= 1 << to_sq
            break
    return mask


def _step_mask(position: Position, targets: SquareMask, color: Color) -> SquareMask:
    board = position.board
    mask = targets
    rest = targets
    while rest:
        lsb = rest & -rest
        code = board.code_at(lsb.bit_length() - 1)
        if code and code_color(code) == color:
            mask ^= lsb
        rest ^= lsb
    return mask


def _pawn_mask(
    position: Position, sq: Square, color: Color, from_castling_check: bool
) -> SquareMask:
    attacks = _PAWN_ATTACKS[int(color)][sq]
    if from_castling_check:
        return attacks

    board = position.board
    direction = pawn_direction(color)
    mask = 0

    one_step = sq + direction
    if 0 <= one_step < 64 and board.is_empty(one_step):
        mask |= 1 << one_step
        if rank_of(sq) == _PAWN_START_RANK[int(color)]:
            two_step = one_step + direction
            if board.is_empty(two_step):
                mask |= 1 << two_step

    rest = attacks
    while rest:
        lsb = rest & -rest
        code = board.code_at(lsb.bit_length() - 1)
        if code and code_color(code) != color:
            mask |= lsb
        rest ^= lsb

    ep = position.en_passant
    if (
        ep is not None
        and rank_of(ep) == rank_of(sq)
        and abs(file_of(ep) - file_of(sq)) == 1
    ):
        target = ep + direction
        victim = board[ep]
        if victim == Piece(color.opposite, PieceType.PAWN) and board.is_empty(target):
            mask |= 1 << target
    return mask


def _castling_mask(position: Position, king_sq: Square, color: Color) -> SquareMask:
    if king_sq != KING_HOME[int(color)]:
        return 0
    rights = position.castling
    board = position.board
    rook = Piece(color, PieceType.ROOK)
    opponent = color.opposite
    threats: dict[Square, SquareMask] | None = None

    mask = 0
    for side in CASTLE_SIDES[int(color)]:
        if not rights & side.right:
            continue
        if board[side.rook_from] != rook:
            continue
        if any(not board.is_empty(s) for s in side.between):
            continue
        if threats is None:
            threats = position.attack_map(opponent)
        if any(position.is_square_threatened(s, threats) for s in side.path):
            continue
        mask |= 1 << side.king_to
    return mask


def _knight(position: Position, sq: Square, color: Color, _flag: bool) -> SquareMask:
    return _step_mask(position, _KNIGHT_MASKS[sq], color)


def _bishop(position: Position, sq: Square, color: Color, _flag: bool) -> SquareMask:
    return _sliding_mask(position, sq, color, _BISHOP_RAYS[sq])


def _rook(position: Position, sq: Square, color: Color, _flag: bool) -> SquareMask:
    return _sliding_mask(position, sq, color, _ROOK_RAYS[sq])


def _queen(position: Position, sq: Square, color: Color, _flag: bool) -> SquareMask:
    return _sliding_mask(position, sq, color, _QUEEN_RAYS[sq])


def _king(
    position: Position, sq: Square, color: Color, from_castling_check: bool
) -> SquareMask:
    mask = _step_mask(position, _KING_MASKS[sq], color)
    if not from_castling_check:
        mask |= _castling_mask(position, sq, color)
    return mask


_GENERATORS: dict[
    PieceType, Callable[[Position, Square, Color, bool], SquareMask]
] = {
    PieceType.PAWN: _pawn_mask,
    PieceType.KNIGHT: _knight,
    PieceType.BISHOP: _bishop,
    PieceType.ROOK: _rook,
    PieceType.QUEEN: _queen,
    PieceType.KING: _king,
}


def pseudo_legal_mask(
    position: Position, sq: Square, from_castling_check: bool = False
) -> SquareMask:
    """Destinations of the piece on *sq*, ignoring whether its king is left in check."""
    code = position.board.code_at(sq)
    if not code:
        raise EmptySquareError(f"No piece on square {sq}")
    generate = _GENERATORS[code_type(code)]
    return generate(position, sq, code_color(code), from_castling_check)

"""GameSession: the authoritative state machine of a single game.

The session owns one long-lived :class:`Position` and mutates it in place.
After every accepted move it rebuilds the legal move table for the side now
to move, refreshes both kings' check flags and classifies the game.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from kingside.core.enums import Color, GameResult, PieceType
from kingside.core.move import Move
from kingside.core.move_generator import pawn_last_rank
from kingside.core.moveset import MoveSet, compute_legal_moves
from kingside.core.notation import position_from_fen
from kingside.core.piece import Piece
from kingside.core.position import Position
from kingside.core.types import Square, rank_of

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MoveRecord:
    """One accepted move and the state it produced."""

    move: Move
    mover: Color
    piece: Piece
    captured: Piece | None
    gives_check: bool
    result: GameResult


MoveCallback = Callable[[MoveRecord], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


class GameSession:
    """Validates and applies moves for both sides of one game.

    Calls to :meth:`make_move` must come from a single thread; searches work
    on :meth:`snapshot` copies and never see the live position.
    """

    __slots__ = (
        "_position",
        "_moves",
        "_result",
        "_in_check",
        "_last_move",
        "_captured",
        "_history",
        "events",
    )

    def __init__(self, position: Position | None = None) -> None:
        self._position = position if position is not None else Position()
        self._last_move: tuple[Square, Square] | None = None
        self._captured: list[Piece] = []
        self._history: list[MoveRecord] = []
        self.events = SessionEvents()
        self._moves = compute_legal_moves(self._position, self._position.side_to_move)
        self._in_check = self._compute_checks()
        self._result = self._classify()

    @classmethod
    def from_fen(cls, fen: str) -> GameSession:
        """Start a session from a FEN string (raises ``FenError`` subclasses)."""
        return cls(position_from_fen(fen))

    # ── Read surface ─────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def turn(self) -> Color:
        return self._position.side_to_move

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._result.is_terminal

    @property
    def legal_moves(self) -> MoveSet:
        return self._moves

    @property
    def last_move(self) -> tuple[Square, Square] | None:
        return self._last_move

    @property
    def captured_pieces(self) -> tuple[Piece, ...]:
        return tuple(self._captured)

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def in_check(self, color: Color) -> bool:
        return self._in_check[int(color)]

    def piece_at(self, sq: Square) -> Piece | None:
        return self._position.piece_at(sq)

    def snapshot(self) -> Position:
        """Independent copy of the current position."""
        return self._position.copy()

    # ── Mutation ─────────────────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType = PieceType.QUEEN,
    ) -> MoveRecord | None:
        """Apply ``from_sq → to_sq`` if legal for the side to move.

        Returns the resulting :class:`MoveRecord`, or ``None`` when the move
        is rejected; a rejected request leaves the session untouched.
        """
        if self.is_game_over:
            _LOGGER.debug(
                "Rejected %d->%d: game is over (%s)",
                from_sq,
                to_sq,
                self._result.name,
            )
            return None
        if not self._moves.contains(from_sq, to_sq):
            _LOGGER.debug(
                "Rejected illegal move %d->%d for %s", from_sq, to_sq, self.turn
            )
            return None

        position = self._position
        mover = position.side_to_move
        piece = position.piece_at(from_sq)
        assert piece is not None  # guaranteed by the legal move table
        promoted = piece.piece_type == PieceType.PAWN and rank_of(to_sq) == (
            pawn_last_rank(mover)
        )

        captured = position.apply_move(from_sq, to_sq, promotion)
        if captured is not None:
            self._captured.append(captured)
        self._last_move = (from_sq, to_sq)

        self._moves = compute_legal_moves(position, position.side_to_move)
        self._in_check = self._compute_checks()
        self._result = self._classify()

        record = MoveRecord(
            move=Move(from_sq, to_sq, promotion if promoted else None),
            mover=mover,
            piece=piece,
            captured=captured,
            gives_check=self._in_check[int(mover.opposite)],
            result=self._result,
        )
        self._history.append(record)
        _LOGGER.debug("Applied %s for %s", record.move, mover)

        for cb in self.events.on_move:
            cb(record)
        if self._result.is_terminal:
            _LOGGER.info("Game over: %s", self._result.name)
            for cb in self.events.on_game_over:
                cb(self._result)
        return record

    # ── Internals ────────────────────────────────────────────────────────

    def _compute_checks(self) -> tuple[bool, bool]:
        position = self._position
        flags: list[bool] = []
        for color in Color:
            threats = position.attack_map(color.opposite)
            flags.append(
                position.is_square_threatened(position.king_square(color), threats)
            )
        return (flags[0], flags[1])

    def _classify(self) -> GameResult:
        if not self._moves.is_empty:
            return GameResult.RUNNING
        side = self._position.side_to_move
        if self._in_check[int(side)]:
            return GameResult.win_for(side.opposite)
        return GameResult.DRAW

"""Tests for the GameSession state machine."""

import pytest

from kingside.core.enums import Color, GameResult, PieceType
from kingside.core.errors import FenError
from kingside.core.notation import position_to_fen
from kingside.core.piece import Piece
from kingside.core.types import (
    B8,
    C4,
    C6,
    D1,
    D8,
    E2,
    E4,
    E5,
    E7,
    E8,
    F1,
    F2,
    F3,
    F6,
    F7,
    G2,
    G4,
    G8,
    H4,
    H5,
)
from kingside.game.session import GameSession, MoveRecord

SCHOLARS_MATE = [
    (E2, E4),
    (E7, E5),
    (F1, C4),
    (B8, C6),
    (D1, H5),
    (G8, F6),
    (H5, F7),
]
FOOLS_MATE = [(F2, F3), (E7, E5), (G2, G4), (D8, H4)]


def _play(session: GameSession, moves: list[tuple[int, int]]) -> None:
    for from_sq, to_sq in moves:
        assert session.make_move(from_sq, to_sq) is not None


class TestSessionStart:
    def test_initial_state(self) -> None:
        session = GameSession()
        assert session.turn == Color.WHITE
        assert session.result == GameResult.RUNNING
        assert session.legal_moves.legal_count == 20
        assert session.last_move is None
        assert session.captured_pieces == ()
        assert not session.in_check(Color.WHITE)

    def test_terminal_fen_starts_over(self) -> None:
        session = GameSession.from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert session.result == GameResult.DRAW
        assert session.is_game_over

    def test_bad_fen_raises(self) -> None:
        with pytest.raises(FenError):
            GameSession.from_fen("not a fen")


class TestMakeMove:
    def test_double_push(self) -> None:
        session = GameSession()
        record = session.make_move(E2, E4)
        assert isinstance(record, MoveRecord)
        assert session.piece_at(E2) is None
        assert session.piece_at(E4) == Piece(Color.WHITE, PieceType.PAWN)
        assert session.position.en_passant == E4
        assert session.turn == Color.BLACK
        assert session.last_move == (E2, E4)
        assert session.legal_moves.side == Color.BLACK

    def test_rejected_move_leaves_state_untouched(self) -> None:
        session = GameSession()
        before = position_to_fen(session.position)
        assert session.make_move(E2, E5) is None
        assert session.make_move(E7, E5) is None  # wrong side
        assert session.make_move(E4, E5) is None  # empty square
        assert position_to_fen(session.position) == before
        assert session.history == ()
        assert session.turn == Color.WHITE

    def test_fools_mate(self) -> None:
        session = GameSession()
        _play(session, FOOLS_MATE)
        assert session.result == GameResult.BLACK_WINS
        assert session.in_check(Color.WHITE)
        assert session.legal_moves.is_empty

    def test_scholars_mate(self) -> None:
        session = GameSession()
        _play(session, SCHOLARS_MATE)
        assert session.result == GameResult.WHITE_WINS
        assert session.in_check(Color.BLACK)
        assert session.captured_pieces == (Piece(Color.BLACK, PieceType.PAWN),)
        last = session.history[-1]
        assert last.gives_check
        assert last.result == GameResult.WHITE_WINS
        assert len(session.history) == 7

    def test_rejected_after_game_over(self) -> None:
        session = GameSession()
        _play(session, FOOLS_MATE)
        before = position_to_fen(session.position)
        assert session.make_move(E2, E4) is None
        assert position_to_fen(session.position) == before

    def test_stalemate_is_draw(self) -> None:
        session = GameSession.from_fen("7k/8/6K1/8/8/8/8/5Q2 w - - 0 1")
        assert session.make_move(F1, F7) is not None
        assert session.result == GameResult.DRAW
        assert not session.in_check(Color.BLACK)

    def test_check_flags(self) -> None:
        session = GameSession()
        _play(session, [(E2, E4), (F7, F6), (D1, H5)])
        assert session.in_check(Color.BLACK)
        assert not session.in_check(Color.WHITE)
        assert session.result == GameResult.RUNNING

    def test_promotion_choice(self) -> None:
        session = GameSession.from_fen("k7/4P3/8/8/8/8/8/7K w - - 0 1")
        record = session.make_move(E7, E8, PieceType.KNIGHT)
        assert record is not None
        assert record.move.promotion == PieceType.KNIGHT
        assert session.piece_at(E8) == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_promotion_choice_ignored_on_plain_move(self) -> None:
        session = GameSession()
        record = session.make_move(E2, E4, PieceType.KING)
        assert record is not None
        assert record.move.promotion is None
        assert session.piece_at(E4) == Piece(Color.WHITE, PieceType.PAWN)

    def test_snapshot_is_independent(self) -> None:
        session = GameSession()
        snapshot = session.snapshot()
        snapshot.apply_move(E2, E4)
        assert session.piece_at(E2) is not None


class TestSessionEvents:
    def test_listeners_receive_moves_and_result(self) -> None:
        session = GameSession()
        records: list[MoveRecord] = []
        results: list[GameResult] = []
        session.events.on_move.append(records.append)
        session.events.on_game_over.append(results.append)

        _play(session, FOOLS_MATE)

        assert [r.move.squares for r in records] == FOOLS_MATE
        assert records[0].mover == Color.WHITE
        assert records[-1].piece == Piece(Color.BLACK, PieceType.QUEEN)
        assert results == [GameResult.BLACK_WINS]

    def test_rejected_move_emits_nothing(self) -> None:
        session = GameSession()
        records: list[MoveRecord] = []
        session.events.on_move.append(records.append)
        session.make_move(E2, E5)
        assert records == []

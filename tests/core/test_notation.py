"""Tests for FEN parsing and serialization."""

import pytest

from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.errors import (
    FenCastleError,
    FenEnPassantError,
    FenError,
    FenMoveCountError,
    FenPiecesError,
    FenTrailingDataError,
    FenTurnError,
    InvalidPieceError,
)
from kingside.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from kingside.core.piece import Piece
from kingside.core.types import D5, E1, E4, E8

ROUND_TRIP_FENS = [
    STARTING_FEN,
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
    "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w Kq d6 0 3",
    "7k/5Q2/6K1/8/8/8/8/8 b - - 12 48",
]


class TestFenParsing:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    @pytest.mark.parametrize("fen", ROUND_TRIP_FENS)
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_en_passant_maps_to_pushed_pawn(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert pos.en_passant == E4

    def test_black_en_passant(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3"
        )
        assert pos.en_passant == D5

    def test_counters(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 12 48")
        assert pos.halfmove_clock == 12
        assert pos.fullmove_number == 48


class TestFenErrors:
    @pytest.mark.parametrize(
        ("fen", "error"),
        [
            ("", FenPiecesError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1", FenPiecesError),
            ("rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", FenPiecesError),
            ("rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", FenPiecesError),
            ("rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", FenPiecesError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN? w KQkq - 0 1", FenPiecesError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", FenTurnError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1", FenTurnError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w", FenCastleError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkx - 0 1", FenCastleError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KKq - 0 1", FenCastleError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq", FenEnPassantError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1", FenEnPassantError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1", FenEnPassantError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -", FenMoveCountError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0", FenMoveCountError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1", FenMoveCountError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0", FenMoveCountError),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a 1", FenMoveCountError),
            (STARTING_FEN + " extra", FenTrailingDataError),
        ],
    )
    def test_section_errors(self, fen: str, error: type[FenError]) -> None:
        with pytest.raises(error) as info:
            position_from_fen(fen)
        assert isinstance(info.value, ValueError)
        assert info.value.section == error.section
        assert info.value.fen == fen

    def test_unknown_piece_letter_is_precondition_error(self) -> None:
        with pytest.raises(InvalidPieceError):
            position_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1")

    def test_sections_are_distinct(self) -> None:
        sections = {
            cls.section
            for cls in (
                FenPiecesError,
                FenTurnError,
                FenCastleError,
                FenEnPassantError,
                FenMoveCountError,
                FenTrailingDataError,
            )
        }
        assert len(sections) == 6

"""Tests for Board storage and the king-square cache."""

import pytest

from kingside.core.board import Board
from kingside.core.enums import Color, PieceType
from kingside.core.errors import MissingKingError
from kingside.core.piece import Piece
from kingside.core.types import D1, E1, E2, E4, E8, F1


class TestBoard:
    def test_initial_layout(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[D1] == Piece(Color.WHITE, PieceType.QUEEN)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board[E4] is None
        assert len(board.all_pieces(Color.WHITE)) == 16
        assert len(board.all_pieces(Color.BLACK)) == 16

    def test_king_cache(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_king_cache_follows_moves(self) -> None:
        board = Board.initial()
        board[F1] = None
        board.move_piece(E1, F1)
        assert board.king_square(Color.WHITE) == F1
        assert board[E1] is None

    def test_removed_king_raises(self) -> None:
        board = Board.initial()
        board[E8] = None
        assert not board.has_king(Color.BLACK)
        with pytest.raises(MissingKingError):
            board.king_square(Color.BLACK)

    def test_overwriting_king_clears_cache(self) -> None:
        board = Board.initial()
        board[E1] = Piece(Color.BLACK, PieceType.QUEEN)
        assert not board.has_king(Color.WHITE)

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone.move_piece(E2, E4)
        assert board[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[E4] is None
        assert clone != board

    def test_bytes_snapshot(self) -> None:
        raw = Board.initial().to_bytes()
        assert len(raw) == 64
        assert raw[E4] == 0
        assert raw[E1] == Piece(Color.WHITE, PieceType.KING).code

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert board.all_pieces(Color.WHITE) == []
        assert not board.has_king(Color.WHITE)

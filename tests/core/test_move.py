"""Tests for the Move value object."""

import pytest

from kingside.core.enums import PieceType
from kingside.core.move import Move
from kingside.core.types import E2, E4, E7, E8


class TestMove:
    def test_str(self) -> None:
        assert str(Move(E2, E4)) == "e2e4"
        assert str(Move(E7, E8, PieceType.KNIGHT)) == "e7e8n"

    def test_from_uci(self) -> None:
        assert Move.from_uci("e2e4") == Move(E2, E4)
        assert Move.from_uci("e7e8q") == Move(E7, E8, PieceType.QUEEN)

    @pytest.mark.parametrize("text", ["e2", "e2e9", "e7e8k", "e2e4qq"])
    def test_from_uci_rejects_bad_text(self, text: str) -> None:
        with pytest.raises(ValueError):
            Move.from_uci(text)

    def test_squares(self) -> None:
        assert Move(E2, E4).squares == (E2, E4)

"""GameController: drives a GameSession with two players."""

from __future__ import annotations

import logging

from kingside.core.enums import Color, PieceType
from kingside.core.move import Move
from kingside.core.types import Square
from kingside.game.player import IPlayer
from kingside.game.session import GameSession, MoveRecord

_LOGGER = logging.getLogger(__name__)


class GameController:
    """Orchestrates one game: routes moves from players into the session.

    Human moves arrive through :meth:`submit_move`; CPU and remote moves are
    collected by :meth:`tick`, which the host calls from its own loop.
    All methods must be called from a single thread.
    """

    __slots__ = ("_session", "_players", "_awaiting")

    def __init__(self) -> None:
        self._session = GameSession()
        self._players: dict[Color, IPlayer] = {}
        self._awaiting = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._session.turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(
        self, white: IPlayer, black: IPlayer, fen: str | None = None
    ) -> GameSession:
        """Start a new game; *fen* errors propagate before any state changes."""
        session = GameSession.from_fen(fen) if fen is not None else GameSession()
        for player in self._players.values():
            player.cancel()
            if player is not white and player is not black:
                player.close()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._session = session
        self._awaiting = False
        self._prompt_current_player()
        return session

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType = PieceType.QUEEN,
    ) -> MoveRecord | None:
        """Play a move for the human whose turn it is."""
        player = self.current_player
        if player is None or not player.is_human:
            _LOGGER.debug(
                "Rejected %d->%d: side to move is not human", from_sq, to_sq
            )
            return None
        return self._play(Move(from_sq, to_sq, promotion), player)

    def tick(self) -> MoveRecord | None:
        """Collect and apply a ready move from a non-human player."""
        player = self.current_player
        if player is None or player.is_human or self._session.is_game_over:
            return None
        move = player.poll()
        if move is None:
            return None
        record = self._play(move, player)
        if record is None:
            _LOGGER.warning("Move %s from %s player was rejected", move, player.color)
            self._awaiting = False
            self._prompt_current_player()
        return record

    def close(self) -> None:
        for player in self._players.values():
            player.close()

    # ── Internals ────────────────────────────────────────────────────────

    def _play(self, move: Move, player: IPlayer) -> MoveRecord | None:
        promotion = move.promotion or PieceType.QUEEN
        record = self._session.make_move(move.from_sq, move.to_sq, promotion)
        if record is None:
            return None
        self._awaiting = False
        opponent = self._players.get(player.color.opposite)
        if opponent is not None:
            opponent.notify_move(record.move)
        self._prompt_current_player()
        return record

    def _prompt_current_player(self) -> None:
        if self._session.is_game_over or self._awaiting:
            return
        player = self.current_player
        if player is None:
            return
        self._awaiting = True
        player.request_move(self._session.snapshot())

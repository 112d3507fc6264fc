"""Game layer: session state machine, players and controller."""

from kingside.game.controller import GameController
from kingside.game.player import CpuPlayer, HumanPlayer, IPlayer, RemotePlayer
from kingside.game.session import GameSession, MoveRecord, SessionEvents

__all__ = [
    "CpuPlayer",
    "GameController",
    "GameSession",
    "HumanPlayer",
    "IPlayer",
    "MoveRecord",
    "RemotePlayer",
    "SessionEvents",
]

"""Player kinds: local human, CPU search and remote peer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING

from kingside.core.enums import Color
from kingside.core.move import Move
from kingside.engine.search import SearchLimits
from kingside.engine.worker import SearchWorker

if TYPE_CHECKING:
    from kingside.core.position import Position
    from kingside.core.types import Square

_LOGGER = logging.getLogger(__name__)

SendCallback = Callable[["Square", "Square"], None]


class IPlayer(ABC):
    """Interface for a game participant."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (moves arrive through the controller).
        """

    @abstractmethod
    def poll(self) -> Move | None:
        """Move chosen since the last request, or ``None`` if not ready."""

    def notify_move(self, move: Move) -> None:  # noqa: B027
        """Called with every move the opponent plays."""

    def cancel(self) -> None:  # noqa: B027
        """Abort an ongoing move computation."""

    def close(self) -> None:  # noqa: B027
        """Release resources held by the player."""


class HumanPlayer(IPlayer):
    """A local participant whose moves come from ``submit_move``."""

    __slots__ = ("_color",)

    def __init__(self, color: Color) -> None:
        self._color = color

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def poll(self) -> Move | None:
        return None


class CpuPlayer(IPlayer):
    """Chooses moves with a background negamax search.

    Args:
        color: Side the CPU plays.
        depth: Plies searched beyond each candidate move.
    """

    __slots__ = ("_color", "_worker")

    def __init__(self, color: Color, depth: int = SearchLimits().max_depth) -> None:
        self._color = color
        self._worker = SearchWorker(SearchLimits(max_depth=depth))

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_human(self) -> bool:
        return False

    @property
    def depth(self) -> int:
        return self._worker.limits.max_depth

    @property
    def thinking(self) -> bool:
        return self._worker.busy

    @property
    def progress(self) -> float:
        """Fraction of root moves explored by the running search."""
        return self._worker.progress

    def request_move(self, position: Position) -> None:
        self._worker.submit(position, side=self._color)

    def poll(self) -> Move | None:
        result = self._worker.poll()
        if result is None:
            return None
        if result.best_move is None:
            _LOGGER.debug(
                "CPU %s found no move (score %d)", self._color, result.score
            )
        return result.best_move

    def cancel(self) -> None:
        self._worker.cancel()

    def close(self) -> None:
        self._worker.shutdown(wait=False)


class RemotePlayer(IPlayer):
    """A peer on the other end of a transport.

    *send* receives every ``(from, to)`` pair the local side plays; moves
    from the peer are fed in with :meth:`receive`.
    """

    __slots__ = ("_color", "_send", "_incoming")

    def __init__(self, color: Color, send: SendCallback) -> None:
        self._color = color
        self._send = send
        self._incoming: deque[Move] = deque()

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_human(self) -> bool:
        return False

    def receive(self, from_sq: Square, to_sq: Square) -> None:
        self._incoming.append(Move(from_sq, to_sq))

    def request_move(self, position: Position) -> None:
        pass  # the peer moves on its own schedule

    def poll(self) -> Move | None:
        return self._incoming.popleft() if self._incoming else None

    def notify_move(self, move: Move) -> None:
        self._send(move.from_sq, move.to_sq)

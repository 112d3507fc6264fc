"""Tests for the background search worker."""

from kingside.core.move import Move
from kingside.core.notation import position_from_fen
from kingside.core.types import D1, D5
from kingside.engine.search import SearchLimits
from kingside.engine.worker import SearchWorker

QUEEN_HANGS = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestSearchWorker:
    def test_future_delivers_result(self) -> None:
        with SearchWorker(SearchLimits(max_depth=0)) as worker:
            future = worker.submit(position_from_fen(QUEEN_HANGS))
            result = future.result(timeout=30)
            assert result.best_move == Move(D1, D5)
            assert worker.poll() is result
            assert worker.poll() is None

    def test_poll_when_idle(self) -> None:
        with SearchWorker() as worker:
            assert worker.poll() is None
            assert worker.progress == 0.0
            assert not worker.busy

    def test_submitted_position_is_copied(self) -> None:
        pos = position_from_fen(QUEEN_HANGS)
        with SearchWorker(SearchLimits(max_depth=1)) as worker:
            future = worker.submit(pos)
            pos.apply_move(D1, D5)
            assert future.result(timeout=30).best_move == Move(D1, D5)

    def test_cancel(self) -> None:
        with SearchWorker(SearchLimits(max_depth=4)) as worker:
            future = worker.submit(position_from_fen(KIWIPETE))
            worker.cancel()
            result = future.result(timeout=60)
            assert result.cancelled
            assert result.best_move is not None

    def test_resubmit_while_busy_replaces_stale_search(self) -> None:
        with SearchWorker(SearchLimits(max_depth=4)) as worker:
            stale = worker.submit(position_from_fen(KIWIPETE))
            fresh = worker.submit(position_from_fen(QUEEN_HANGS), depth=0)

            assert stale.result(timeout=60).cancelled
            result = fresh.result(timeout=30)
            assert not result.cancelled
            assert result.best_move == Move(D1, D5)
            assert worker.poll() is result

    def test_set_limits(self) -> None:
        with SearchWorker() as worker:
            worker.set_limits(SearchLimits(max_depth=0))
            assert worker.limits.max_depth == 0
            result = worker.submit(position_from_fen(QUEEN_HANGS)).result(timeout=30)
            assert result.depth == 0

"""
エンジン呼び出し側の監視

持ち時間 + 猶予 の間に応答がなければ、ランダムな合法手で代替し、
ワーカーを破棄して次のリクエストで作り直す
"""

import logging
import random
import threading
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from gomoku_mcts.config import EngineConfig
from gomoku_mcts.game.board import GomokuBoard
from .errors import EngineUnavailableError
from .schemas import EngineRequest, EngineResponse, MovePayload
from .worker import EngineWorker, handle_request

logger = logging.getLogger(__name__)


@dataclass
class MoveDecision:
    """
    確定した着手

    Attributes:
        response: エンジンの応答（代替時はランダム手の応答）
        fallback: ランダム手で代替したか
    """
    response: EngineResponse
    fallback: bool


def random_fallback(request: EngineRequest, rng: random.Random) -> EngineResponse:
    """
    合法手から一様ランダムに選んだ代替応答

    空の盤面では中央、満杯の盤面ではmove=None
    """
    board = GomokuBoard.from_list(request.board)
    moves = board.get_legal_moves()

    if moves:
        move = moves[rng.randrange(len(moves))]
    elif board.is_empty():
        move = board.center()
    else:
        move = None

    return EngineResponse(
        move=MovePayload(row=move.row, col=move.col) if move is not None else None,
        simulations_run=0,
        win_rate=0.0,
        root_visits=0,
    )


class EngineSupervisor:
    """
    エンジンワーカーの監視

    - 1リクエストずつ直列に処理
    - リクエストIDで遅延応答を識別して捨てる
    - 応答しなかったワーカーは再利用しない
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        handler: Optional[Callable[[dict], dict]] = None,
    ):
        """
        Args:
            config: エンジン設定
            handler: ワーカー内のリクエスト処理関数（テスト用に差し替え可能）
        """
        self.config = config or EngineConfig()
        self.handler = handler or partial(handle_request, seed=self.config.seed)
        self.rng = random.Random(self.config.seed)
        self.worker: Optional[EngineWorker] = None
        self.failures = 0
        self._next_request_id = 0
        self._lock = threading.Lock()

    def __enter__(self) -> "EngineSupervisor":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _ensure_worker(self) -> EngineWorker:
        """生きているワーカーを返す（なければ作成）"""
        if self.worker is not None and self.worker.is_alive():
            return self.worker

        if self.worker is not None:
            self._discard_worker()

        worker = EngineWorker(
            handler=self.handler,
            start_method=self.config.start_method,
        )
        worker.start(timeout=self.config.startup_timeout_s)
        self.worker = worker
        return worker

    def _discard_worker(self):
        if self.worker is not None:
            logger.info("discarding engine worker (pid=%s)", self.worker.pid)
            self.worker.terminate()
            self.worker = None

    def start(self):
        """ワーカーを事前に起動する"""
        with self._lock:
            self._ensure_worker()

    def get_move(self, request: EngineRequest) -> MoveDecision:
        """
        エンジンに着手を問い合わせる

        Args:
            request: 探索リクエスト

        Returns:
            MoveDecision: 確定した着手
        """
        with self._lock:
            self._next_request_id += 1
            request_id = self._next_request_id
            timeout = (request.search_budget_ms + self.config.grace_ms) / 1000.0

            try:
                worker = self._ensure_worker()
                worker.submit(request_id, request.model_dump())
            except (EngineUnavailableError, BrokenPipeError, OSError) as e:
                logger.error("engine worker unavailable: %s", e)
                return self._fail(request)

            payload = worker.wait_for(request_id, timeout)
            if payload is None:
                logger.warning(
                    "engine did not respond within %.2fs (request %d)",
                    timeout, request_id,
                )
                return self._fail(request)

            return MoveDecision(
                response=EngineResponse.model_validate(payload),
                fallback=False,
            )

    def _fail(self, request: EngineRequest) -> MoveDecision:
        """ワーカーを破棄し、ランダムな合法手で代替"""
        self.failures += 1
        self._discard_worker()
        return MoveDecision(
            response=random_fallback(request, self.rng),
            fallback=True,
        )

    def close(self):
        """ワーカーを終了"""
        with self._lock:
            if self.worker is not None:
                self.worker.stop()
                self.worker = None

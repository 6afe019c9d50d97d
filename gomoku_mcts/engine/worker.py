"""
探索エンジンワーカー

探索は対話スレッドから切り離し、独立したプロセスで実行する。
ワーカーは1リクエストにつき1レスポンスを返し、異常終了した場合は何も返さない。
"""

import logging
import multiprocessing
import time
from typing import Callable, Optional

from gomoku_mcts.game.board import GomokuBoard
from gomoku_mcts.mcts.mcts import MCTS
from .errors import EngineUnavailableError
from .schemas import EngineRequest, EngineResponse, MovePayload

logger = logging.getLogger(__name__)


def find_best_move(
    request: EngineRequest,
    seed: Optional[int] = None,
    max_iterations: Optional[int] = None,
) -> EngineResponse:
    """
    リクエストの盤面に対して最善手を探索

    - 空の盤面: 近傍に石がなく合法手がないため、探索せず中央を返す
    - 満杯の盤面: 引き分けとして move=None を返す

    Args:
        request: 探索リクエスト
        seed: 乱数シード
        max_iterations: 反復回数の上限（テスト・評価用）

    Returns:
        EngineResponse: 探索結果
    """
    board = GomokuBoard.from_list(request.board)
    player = request.player
    if player is None:
        player = board.infer_player_to_move()

    if board.is_empty():
        center = board.center()
        return EngineResponse(
            move=MovePayload(row=center.row, col=center.col),
            simulations_run=0,
            win_rate=0.0,
            root_visits=0,
        )

    mcts = MCTS(player=player, seed=seed)
    result = mcts.search(
        board,
        budget_ms=request.search_budget_ms,
        max_iterations=max_iterations,
    )

    move = None
    if result.move is not None:
        move = MovePayload(row=result.move.row, col=result.move.col)

    return EngineResponse(
        move=move,
        simulations_run=result.simulations_run,
        win_rate=result.win_rate,
        root_visits=result.root_visits,
        elapsed_ms=result.elapsed_ms,
    )


def handle_request(payload: dict, seed: Optional[int] = None) -> dict:
    """ワーカープロセス内のリクエスト処理（dict -> dict）"""
    request = EngineRequest.model_validate(payload)
    return find_best_move(request, seed=seed).model_dump()


def _worker_main(conn, handler: Callable[[dict], dict]):
    """
    ワーカープロセスのメインループ

    メッセージ形式:
        受信: (request_id, payload) / None で終了
        送信: ("ready", None, None) / ("result", request_id, response)
    """
    conn.send(("ready", None, None))
    while True:
        message = conn.recv()
        if message is None:
            break
        request_id, payload = message
        # 例外はそのまま伝播させ、プロセスごと終了する（応答なし）
        response = handler(payload)
        conn.send(("result", request_id, response))
    conn.close()


class EngineWorker:
    """
    探索エンジンのワーカープロセス

    プロセスは使い捨て。応答がなかったワーカーは再利用せず破棄する
    """

    def __init__(
        self,
        handler: Callable[[dict], dict] = handle_request,
        start_method: str = "spawn",
    ):
        """
        Args:
            handler: リクエスト処理関数（pickle可能なトップレベル関数）
            start_method: multiprocessingの起動方式
        """
        self.handler = handler
        self.start_method = start_method
        self.process = None
        self.conn = None

    def start(self, timeout: float = 30.0):
        """
        プロセスを起動し、準備完了を待つ

        Args:
            timeout: 起動待ちの上限（秒）

        Raises:
            EngineUnavailableError: 時間内に準備完了しなかった場合
        """
        ctx = multiprocessing.get_context(self.start_method)
        parent_conn, child_conn = ctx.Pipe()
        self.process = ctx.Process(
            target=_worker_main,
            args=(child_conn, self.handler),
            daemon=True,
        )
        self.process.start()
        child_conn.close()
        self.conn = parent_conn

        ready = False
        if parent_conn.poll(timeout):
            try:
                ready = parent_conn.recv()[0] == "ready"
            except EOFError:
                ready = False

        if not ready:
            self.terminate()
            raise EngineUnavailableError(
                f"engine worker did not become ready within {timeout:.1f}s"
            )
        logger.debug("engine worker started (pid=%s)", self.process.pid)

    def is_alive(self) -> bool:
        return self.process is not None and self.process.is_alive()

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process is not None else None

    def submit(self, request_id: int, payload: dict):
        """リクエストを送信"""
        self.conn.send((request_id, payload))

    def wait_for(self, request_id: int, timeout: float) -> Optional[dict]:
        """
        指定IDのレスポンスを待つ

        古いIDのレスポンス（遅れて届いた応答）は読み捨てる

        Args:
            request_id: 待つリクエストID
            timeout: 待ち時間の上限（秒）

        Returns:
            Optional[dict]: レスポンス。タイムアウトまたはワーカー終了ならNone
        """
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not self.conn.poll(remaining):
                return None
            try:
                _, response_id, response = self.conn.recv()
            except EOFError:
                # ワーカーが応答せずに終了した
                return None
            if response_id != request_id:
                logger.debug("discarding stale response for request %s", response_id)
                continue
            return response

    def stop(self, timeout: float = 1.0):
        """終了メッセージを送って正常終了させる"""
        if self.conn is not None and self.is_alive():
            try:
                self.conn.send(None)
            except (BrokenPipeError, OSError):
                logger.debug("engine worker pipe already closed")
            else:
                self.process.join(timeout=timeout)
        self.terminate()

    def terminate(self):
        """プロセスを終了し、接続を閉じる"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
        if self.process is not None:
            if self.process.is_alive():
                self.process.terminate()
                self.process.join(timeout=1.0)
                if self.process.is_alive():
                    self.process.kill()
                    self.process.join(timeout=1.0)
            self.process = None

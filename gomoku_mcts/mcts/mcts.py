"""
モンテカルロ木探索 (Monte Carlo Tree Search)

UCT方式のMCTS実装:
- UCT式による選択
- 未展開の手を1つずつ展開
- 一様ランダムなプレイアウト
- 持ち時間（壁時計）による打ち切り
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from gomoku_mcts.game.board import GomokuBoard, Move
from .node import MCTSNode
from .rollout import rollout
from .time_manager import TimeManager

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    探索結果

    Attributes:
        move: 選択した手（合法手がなければNone）
        simulations_run: 完了した反復回数
        win_rate: 選択した子ノードの勝率（未訪問なら0）
        root_visits: ルートノードの訪問回数
        elapsed_ms: 探索時間（ミリ秒）
    """
    move: Optional[Move]
    simulations_run: int
    win_rate: float
    root_visits: int
    elapsed_ms: float = 0.0


class MCTS:
    """
    モンテカルロ木探索

    1回の反復:
    1. Select: 未展開の手がなく子を持つ間、UCT値最大の子へ下降
    2. Expand: 未展開の手を1つランダムに選んで子ノードを作成
    3. Rollout: ランダムプレイアウトで終局まで打つ
    4. Backpropagate: 結果をルートまで伝播

    報酬は探索を行うプレイヤー（player）視点で固定し、
    各ノードの手番によって反転させない
    """

    def __init__(self, player: int, seed: Optional[int] = None):
        """
        Args:
            player (int): 探索を行う（着手する）プレイヤー
            seed (int, optional): 乱数シード
        """
        self.player = player
        self.rng = random.Random(seed)

    def search(
        self,
        board: GomokuBoard,
        budget_ms: int,
        max_iterations: Optional[int] = None,
    ) -> SearchResult:
        """
        持ち時間内でMCTS探索を実行し、最も訪問された手を返す

        締め切りは反復の合間にのみ確認する。最低1回は反復を行う。

        Args:
            board (GomokuBoard): 実際の盤面（変更しない）
            budget_ms (int): 持ち時間（ミリ秒）
            max_iterations (int, optional): 反復回数の上限

        Returns:
            SearchResult: 探索結果
        """
        timer = TimeManager(budget_ms)

        # ルートノードの作成（実盤面のコピーを所有する）
        root = MCTSNode(board.copy(), self.player)

        if root.is_fully_expanded():
            # 合法手がない（満杯の盤面など）
            return SearchResult(
                move=None,
                simulations_run=0,
                win_rate=0.0,
                root_visits=0,
                elapsed_ms=timer.elapsed_ms(),
            )

        iterations = 0
        while max_iterations is None or iterations < max_iterations:
            self._run_iteration(root)
            iterations += 1
            if timer.expired():
                break

        best = root.best_child()
        if best is None:
            # 1度も展開できなかった場合はランダムな合法手
            move = root.untried_moves[self.rng.randrange(len(root.untried_moves))]
            win_rate = 0.0
        else:
            move = best.move
            win_rate = best.get_win_rate()

        result = SearchResult(
            move=move,
            simulations_run=iterations,
            win_rate=win_rate,
            root_visits=root.visit_count,
            elapsed_ms=timer.elapsed_ms(),
        )
        logger.debug(
            "search finished: move=%s iterations=%d win_rate=%.3f elapsed=%.1fms",
            tuple(move), iterations, win_rate, result.elapsed_ms,
        )
        return result

    def _run_iteration(self, root: MCTSNode):
        """
        1回の反復を実行

        Select -> Expand -> Rollout -> Backpropagate のサイクル
        """
        # 各反復で独立した作業用盤面
        board = root.board.copy()

        # 1. Select
        node = self._select(root, board)

        # 2. Expand
        if not node.is_fully_expanded():
            node = self._expand(node, board)

        # 3. Rollout
        winner = rollout(board, node.player, node.move, self.rng)

        # 4. Backpropagate
        reward = 1 if winner == self.player else 0
        self._backpropagate(node, reward)

    def _select(self, node: MCTSNode, board: GomokuBoard) -> MCTSNode:
        """
        UCT値に従ってリーフまで下降

        木は変更せず、選んだ手を作業用盤面に順に適用する
        """
        while node.is_fully_expanded() and not node.is_leaf():
            child = node.select_child()
            board.place(child.move, node.player)
            node = child
        return node

    def _expand(self, node: MCTSNode, board: GomokuBoard) -> MCTSNode:
        """未展開の手を一様ランダムに1つ選んで子ノードを作成"""
        move = node.untried_moves[self.rng.randrange(len(node.untried_moves))]
        board.place(move, node.player)
        return node.expand(move, board.copy())

    def _backpropagate(self, node: Optional[MCTSNode], reward: int):
        """報酬をルートまで伝播（ルートを含む）"""
        while node is not None:
            node.update(reward)
            node = node.parent

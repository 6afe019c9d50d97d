"""
五目並べプレイヤークラス

評価用のプレイヤーを実装:
- RandomPlayer: 近傍の合法手からランダムに着手
- MCTSPlayer: MCTSベースのAI
"""

import random
from abc import ABC, abstractmethod
from typing import Optional

from gomoku_mcts.game.board import GomokuBoard, Move
from gomoku_mcts.mcts.mcts import MCTS


class Player(ABC):
    """
    プレイヤーの基底クラス
    """

    def __init__(self, name: str):
        """
        Args:
            name: プレイヤー名
        """
        self.name = name

    @abstractmethod
    def get_action(self, board: GomokuBoard, player: int) -> Optional[Move]:
        """
        着手を選択

        Args:
            board: 現在の盤面
            player: 着手するプレイヤー (1 or -1)

        Returns:
            Optional[Move]: 着手位置。打てる手がなければNone
        """
        pass

    def reset(self):
        """ゲーム開始時の初期化（必要に応じてオーバーライド）"""
        pass


class RandomPlayer(Player):
    """
    ランダムプレイヤー

    合法手の中からランダムに選択。空の盤面では中央に打つ
    """

    def __init__(self, name: str = "Random", seed: Optional[int] = None):
        super().__init__(name)
        self.rng = random.Random(seed)

    def get_action(self, board: GomokuBoard, player: int) -> Optional[Move]:
        """ランダムに着手を選択"""
        if board.is_empty():
            return board.center()

        legal_moves = board.get_legal_moves()
        if len(legal_moves) == 0:
            return None

        return self.rng.choice(legal_moves)


class MCTSPlayer(Player):
    """
    MCTSベースのAIプレイヤー

    持ち時間または反復回数を指定して探索する
    """

    def __init__(
        self,
        budget_ms: int = 1000,
        max_iterations: Optional[int] = None,
        seed: Optional[int] = None,
        name: str = "MCTS-AI",
    ):
        """
        Args:
            budget_ms: 1手あたりの持ち時間（ミリ秒）
            max_iterations: 1手あたりの反復回数の上限
            seed: 乱数シード
            name: プレイヤー名
        """
        super().__init__(name)
        self.budget_ms = budget_ms
        self.max_iterations = max_iterations
        self.seed = seed
        self.last_result = None

    def get_action(self, board: GomokuBoard, player: int) -> Optional[Move]:
        """MCTSで最良の手を選択"""
        if board.is_empty():
            return board.center()

        # 探索木は毎手作り直す
        mcts = MCTS(player=player, seed=self.seed)
        self.last_result = mcts.search(
            board,
            budget_ms=self.budget_ms,
            max_iterations=self.max_iterations,
        )
        return self.last_result.move

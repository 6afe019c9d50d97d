"""
MCTSノード定義

UCT方式のMCTSで使用する木構造のノードクラス
UCT値計算と統計情報を管理
"""

import math
import weakref
from typing import Dict, List, Optional

from gomoku_mcts.game.board import GomokuBoard, Move, opponent

# UCT式の探索定数（固定）
EXPLORATION_CONSTANT = math.sqrt(2)


class MCTSNode:
    """
    MCTSの木構造ノード

    各ノードは以下の情報を保持:
    - 盤面のスナップショット（ノードが所有するコピー）
    - このノードから着手するプレイヤー
    - 訪問回数 (N) と勝利数 (W)
    - 未展開の合法手

    UCT式:
        W(s,a) / N(s,a) + C * sqrt(ln N(s) / N(s,a))

    親への参照は弱参照で保持し、子→親の強参照による循環を作らない
    """

    def __init__(
        self,
        board: GomokuBoard,
        player: int,
        move: Optional[Move] = None,
        parent: Optional['MCTSNode'] = None,
    ):
        """
        Args:
            board (GomokuBoard): このノードの盤面（呼び出し側で用意したコピー）
            player (int): このノードから着手するプレイヤー
            move (Move, optional): 親からこのノードに至った着手
            parent (MCTSNode, optional): 親ノード
        """
        self.board = board
        self.player = player
        self.move = move
        self._parent = weakref.ref(parent) if parent is not None else None

        # 統計情報
        self.visit_count = 0  # N(s,a)
        self.win_count = 0  # W(s,a)

        self.children: List[MCTSNode] = []

        # 直前の着手で勝負がついていれば終端ノード
        self.is_terminal = move is not None and board.is_winning_move(move)
        self.untried_moves: List[Move] = (
            [] if self.is_terminal else board.get_legal_moves()
        )

    @property
    def parent(self) -> Optional['MCTSNode']:
        """親ノード（ルートならNone）"""
        if self._parent is None:
            return None
        return self._parent()

    def is_leaf(self) -> bool:
        """リーフノードかどうか"""
        return len(self.children) == 0

    def is_fully_expanded(self) -> bool:
        """未展開の手が残っていないか"""
        return len(self.untried_moves) == 0

    def get_win_rate(self) -> float:
        """
        勝率 W/N を取得

        Returns:
            float: 勝率。訪問回数が0の場合は0を返す
        """
        if self.visit_count == 0:
            return 0.0
        return self.win_count / self.visit_count

    def uct_score(self, parent_visit_count: int) -> float:
        """
        UCT値を計算

        未訪問ノードは0除算を行わず、明示的に+infとする
        """
        if self.visit_count == 0:
            return math.inf

        exploitation = self.win_count / self.visit_count
        exploration = EXPLORATION_CONSTANT * math.sqrt(
            math.log(parent_visit_count) / self.visit_count
        )
        return exploitation + exploration

    def select_child(self) -> 'MCTSNode':
        """
        UCT値が最大の子ノードを選択

        同点の場合は先に展開された子を優先

        Returns:
            MCTSNode: 選択された子ノード
        """
        if not self.children:
            raise ValueError("Cannot select from a node without children")

        # ln(0) を避ける。子が訪問済みなら親も必ず1以上
        parent_visit_count = max(1, self.visit_count)

        best_score = -math.inf
        best_child = self.children[0]
        for child in self.children:
            score = child.uct_score(parent_visit_count)
            if score > best_score:
                best_score = score
                best_child = child

        return best_child

    def expand(self, move: Move, board: GomokuBoard) -> 'MCTSNode':
        """
        未展開の手から子ノードを1つ作成

        Args:
            move (Move): 展開する手（untried_movesに含まれている必要がある）
            board (GomokuBoard): moveを適用済みの盤面

        Returns:
            MCTSNode: 作成した子ノード
        """
        try:
            self.untried_moves.remove(move)
        except ValueError:
            raise ValueError(f"Move {tuple(move)} is not an untried move") from None

        child = MCTSNode(
            board=board,
            player=opponent(self.player),
            move=move,
            parent=self,
        )
        self.children.append(child)
        return child

    def update(self, reward: int):
        """
        ノードの統計情報を更新（バックプロパゲーション）

        Args:
            reward (int): 1 (勝ち) または 0
        """
        self.visit_count += 1
        self.win_count += reward

    def get_visit_counts(self) -> Dict[Move, int]:
        """
        子ノードの訪問回数を取得

        Returns:
            Dict[Move, int]: {move: visit_count}
        """
        return {child.move: child.visit_count for child in self.children}

    def best_child(self) -> Optional['MCTSNode']:
        """
        訪問回数が最大の子ノード（robust child）

        同数の場合は先に展開された子を優先。子がなければNone
        """
        best = None
        for child in self.children:
            if best is None or child.visit_count > best.visit_count:
                best = child
        return best

    def __repr__(self) -> str:
        """デバッグ用の文字列表現"""
        move = tuple(self.move) if self.move is not None else None
        return (f"MCTSNode(move={move}, "
                f"player={self.player}, "
                f"N={self.visit_count}, "
                f"W={self.win_count}, "
                f"untried={len(self.untried_moves)}, "
                f"children={len(self.children)})")

"""
ランダムプレイアウト

展開したノードの盤面から、合法手を一様ランダムに選んで終局まで打つ。
戦略性は持たず、多数のプレイアウトの平均で局面を評価する。
"""

import random
from typing import List, Optional

from gomoku_mcts.game.board import (
    EMPTY,
    GomokuBoard,
    Move,
    is_winning_move,
    neighbor_table,
    opponent,
)


class _CandidateSet:
    """
    合法手集合の差分管理

    リストと位置インデックスを併用し、追加・削除・一様ランダム選択をO(1)で行う
    """

    def __init__(self, moves: List[Move]):
        self.moves = list(moves)
        self.index = {move: i for i, move in enumerate(self.moves)}

    def __len__(self) -> int:
        return len(self.moves)

    def __contains__(self, move) -> bool:
        return move in self.index

    def add(self, move: Move):
        if move not in self.index:
            self.index[move] = len(self.moves)
            self.moves.append(move)

    def discard(self, move: Move):
        i = self.index.pop(move, None)
        if i is None:
            return
        last = self.moves.pop()
        if i < len(self.moves):
            self.moves[i] = last
            self.index[last] = i

    def choice(self, rng: random.Random) -> Move:
        return self.moves[rng.randrange(len(self.moves))]


def rollout(
    board: GomokuBoard,
    player: int,
    last_move: Optional[Move],
    rng: random.Random,
    max_steps: Optional[int] = None,
) -> Optional[int]:
    """
    ランダムプレイアウトを実行

    Args:
        board: 開始局面（作業用コピー。この関数が書き換える）
        player: 開始局面で着手するプレイヤー
        last_move: 開始局面に至った直前の着手（ルートならNone）
        rng: 乱数生成器
        max_steps: 最大手数。Noneなら盤面のマス数

    Returns:
        Optional[int]: 勝者（最後に勝ち手を打ったプレイヤー）。引き分けならNone
    """
    # 直前の着手で既に勝負がついている
    if last_move is not None and board.is_winning_move(last_move):
        return board.get(last_move)

    if max_steps is None:
        max_steps = board.size * board.size

    grid = board.cells.tolist()
    neighbors = neighbor_table(board.size)
    candidates = _CandidateSet(board.get_legal_moves())
    current = player

    for _ in range(max_steps):
        if len(candidates) == 0:
            break

        move = candidates.choice(rng)
        row, col = move
        grid[row][col] = current
        board.cells[row, col] = current

        if is_winning_move(grid, move):
            return current

        # 着手したマスが抜け、その空き近傍が新たに合法手になる
        candidates.discard(move)
        for cell in neighbors[row][col]:
            if grid[cell.row][cell.col] == EMPTY:
                candidates.add(cell)

        current = opponent(current)

    # 合法手なし、または手数上限で引き分け
    return None

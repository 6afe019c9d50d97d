"""
五目並べ盤面

15x15盤面の状態管理と合法手生成・勝利判定を提供

盤面表現 (numpy int8):
    0 = 空
    1 = プレイヤーA（先手）
    -1 = プレイヤーB（後手）
"""

from functools import lru_cache
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

BOARD_SIZE = 15
WIN_LENGTH = 5

EMPTY = 0
PLAYER_A = 1
PLAYER_B = -1

# 縦・横・斜め2方向
DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))


class Move(NamedTuple):
    """着手座標 (0始まり)"""

    row: int
    col: int


def opponent(player: int) -> int:
    """相手プレイヤーを返す"""
    return -player


@lru_cache(maxsize=None)
def neighbor_table(size: int) -> tuple:
    """
    各マスの8近傍マスの表を作成（盤端でクリップ）

    Args:
        size: 盤面サイズ

    Returns:
        tuple: table[row][col] = ((r, c), ...)
    """
    table = []
    for row in range(size):
        table_row = []
        for col in range(size):
            cells = []
            for r in range(max(0, row - 1), min(size, row + 2)):
                for c in range(max(0, col - 1), min(size, col + 2)):
                    if (r, c) != (row, col):
                        cells.append(Move(r, c))
            table_row.append(tuple(cells))
        table.append(tuple(table_row))
    return tuple(table)


def legal_moves(cells: np.ndarray) -> List[Move]:
    """
    合法手を列挙

    空きマスのうち、8近傍に石が1つ以上あるマスのみを返す（探索空間の枝刈り）。
    順序は行優先で決定的。

    Args:
        cells: (N, N) 盤面配列

    Returns:
        List[Move]: 合法手リスト。空盤面・満杯の盤面では空リスト
    """
    size = cells.shape[0]
    occupied = cells != EMPTY

    # 3x3の膨張で「近傍に石がある」マスを求める
    padded = np.pad(occupied, 1)
    near = np.zeros_like(occupied)
    for dr in range(3):
        for dc in range(3):
            near |= padded[dr:dr + size, dc:dc + size]

    mask = near & ~occupied
    return [Move(int(r), int(c)) for r, c in np.argwhere(mask)]


def count_consecutive(cells: Sequence, row: int, col: int, dr: int, dc: int) -> int:
    """(row, col) から (dr, dc) 方向に同じ石が何個連続するか（起点を含む）"""
    size = len(cells)
    player = cells[row][col]
    count = 0
    while 0 <= row < size and 0 <= col < size and cells[row][col] == player:
        count += 1
        row += dr
        col += dc
    return count


def is_winning_move(cells: Sequence, move: Move) -> bool:
    """
    着手が5連以上を作るかを判定

    moveのマスには判定対象のプレイヤーの石が既に置かれている前提。
    この関数は石を置かない。

    Args:
        cells: (N, N) 盤面（numpy配列またはネストしたリスト）
        move: 判定する着手

    Returns:
        bool: 5連以上ならTrue
    """
    row, col = move
    if cells[row][col] == EMPTY:
        return False

    for dr, dc in DIRECTIONS:
        # 両方向のカウントは起点を二重に数えている
        total = (
            count_consecutive(cells, row, col, dr, dc)
            + count_consecutive(cells, row, col, -dr, -dc)
            - 1
        )
        if total >= WIN_LENGTH:
            return True
    return False


class GomokuBoard:
    """
    五目並べの盤面

    探索中の仮想的な着手は必ずcopy()した盤面に対して行う
    """

    def __init__(self, size: int = BOARD_SIZE, cells: Optional[np.ndarray] = None):
        """
        Args:
            size: 盤面サイズ
            cells: 初期盤面 (size, size)。Noneなら空盤面
        """
        self.size = size
        if cells is None:
            self.cells = np.zeros((size, size), dtype=np.int8)
        else:
            if cells.shape != (size, size):
                raise ValueError(
                    f"Board must be {size}x{size}, got {cells.shape}"
                )
            self.cells = cells.astype(np.int8, copy=True)

    @classmethod
    def from_list(cls, rows: List[List[int]]) -> "GomokuBoard":
        """ネストしたリストから盤面を作成"""
        cells = np.array(rows, dtype=np.int8)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Board must be square, got shape {cells.shape}")
        return cls(size=cells.shape[0], cells=cells)

    def to_list(self) -> List[List[int]]:
        """ネストしたリストに変換（JSON用）"""
        return self.cells.tolist()

    def copy(self) -> "GomokuBoard":
        """盤面の値コピー"""
        return GomokuBoard(self.size, self.cells)

    def place(self, move: Move, player: int):
        """
        石を置く

        Args:
            move: 着手位置
            player: PLAYER_A または PLAYER_B
        """
        row, col = move
        if self.cells[row, col] != EMPTY:
            raise ValueError(f"Cell {tuple(move)} is already occupied")
        self.cells[row, col] = player

    def remove(self, move: Move):
        """石を取り除く"""
        self.cells[move[0], move[1]] = EMPTY

    def get(self, move: Move) -> int:
        return int(self.cells[move[0], move[1]])

    def get_legal_moves(self) -> List[Move]:
        """合法手リスト（近傍枝刈り済み）"""
        return legal_moves(self.cells)

    def is_winning_move(self, move: Move) -> bool:
        """moveに置かれた石が5連を作るか"""
        return is_winning_move(self.cells, move)

    def is_empty(self) -> bool:
        return not self.cells.any()

    def is_full(self) -> bool:
        return bool(np.all(self.cells != EMPTY))

    def count(self, player: int) -> int:
        """指定プレイヤーの石数"""
        return int(np.count_nonzero(self.cells == player))

    def center(self) -> Move:
        """盤面中央"""
        return Move(self.size // 2, self.size // 2)

    def infer_player_to_move(self) -> int:
        """
        石数から手番を推定

        先手はプレイヤーA。石数が同じならA、そうでなければBの手番
        """
        if self.count(PLAYER_A) == self.count(PLAYER_B):
            return PLAYER_A
        return PLAYER_B

    def __eq__(self, other) -> bool:
        if not isinstance(other, GomokuBoard):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        symbols = {EMPTY: ".", PLAYER_A: "X", PLAYER_B: "O"}
        rows = ["".join(symbols[int(v)] for v in row) for row in self.cells]
        return "GomokuBoard(\n  " + "\n  ".join(rows) + "\n)"

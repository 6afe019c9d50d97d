"""盤面のテスト

合法手生成（近傍枝刈り）、勝利判定、盤面のコピーと復元が正しいことを確認する。
"""

import numpy as np
import pytest

from gomoku_mcts.game.board import (
    BOARD_SIZE,
    EMPTY,
    PLAYER_A,
    PLAYER_B,
    GomokuBoard,
    Move,
    is_winning_move,
    legal_moves,
    neighbor_table,
)


def make_board(stones, size=BOARD_SIZE):
    """{(row, col): player} から盤面を作成"""
    board = GomokuBoard(size)
    for (row, col), player in stones.items():
        board.place(Move(row, col), player)
    return board


def random_board(seed, density=0.4):
    """ランダムな盤面（5連の有無は問わない）"""
    rng = np.random.default_rng(seed)
    cells = rng.choice(
        [EMPTY, PLAYER_A, PLAYER_B],
        size=(BOARD_SIZE, BOARD_SIZE),
        p=[1 - density, density / 2, density / 2],
    )
    return GomokuBoard(cells=cells.astype(np.int8))


class TestGomokuBoardInit:
    """初期化テスト"""

    def test_empty_board(self):
        """空の15x15盤面が作成されること"""
        board = GomokuBoard()

        assert board.size == 15
        assert board.cells.shape == (15, 15)
        assert board.cells.dtype == np.int8
        assert board.is_empty()
        assert not board.is_full()

    def test_from_list_round_trip(self):
        """リストとの相互変換"""
        board = make_board({(7, 7): PLAYER_A, (7, 8): PLAYER_B})
        restored = GomokuBoard.from_list(board.to_list())

        assert restored == board
        assert restored.get(Move(7, 8)) == PLAYER_B

    def test_from_list_rejects_non_square(self):
        """正方形でない盤面は拒否"""
        with pytest.raises(ValueError):
            GomokuBoard.from_list([[0] * 15 for _ in range(14)])

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            GomokuBoard(size=15, cells=np.zeros((9, 9), dtype=np.int8))

    def test_place_occupied_raises(self):
        board = make_board({(3, 3): PLAYER_A})
        with pytest.raises(ValueError):
            board.place(Move(3, 3), PLAYER_B)

    def test_infer_player_to_move(self):
        """石数から手番を推定（先手はA）"""
        board = GomokuBoard()
        assert board.infer_player_to_move() == PLAYER_A

        board.place(Move(7, 7), PLAYER_A)
        assert board.infer_player_to_move() == PLAYER_B

        board.place(Move(7, 8), PLAYER_B)
        assert board.infer_player_to_move() == PLAYER_A


class TestLegalMoves:
    """合法手生成テスト"""

    def test_empty_board_has_no_legal_moves(self):
        """空盤面では近傍に石がないため合法手なし"""
        assert GomokuBoard().get_legal_moves() == []

    def test_single_stone_neighbors(self):
        """中央に1石: 8近傍のみ"""
        board = make_board({(7, 7): PLAYER_A})
        moves = board.get_legal_moves()

        expected = [
            Move(r, c)
            for r in range(6, 9)
            for c in range(6, 9)
            if (r, c) != (7, 7)
        ]
        assert moves == expected

    def test_corner_stone_clipped(self):
        """盤端で近傍がクリップされること"""
        board = make_board({(0, 0): PLAYER_B})
        assert board.get_legal_moves() == [Move(0, 1), Move(1, 0), Move(1, 1)]

    def test_row_major_order(self):
        """行優先の決定的な順序"""
        board = make_board({(2, 2): PLAYER_A, (10, 12): PLAYER_B})
        moves = board.get_legal_moves()
        assert moves == sorted(moves)

    def test_full_board_has_no_legal_moves(self):
        cells = np.ones((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        board = GomokuBoard(cells=cells)
        assert board.is_full()
        assert board.get_legal_moves() == []

    @pytest.mark.parametrize("seed", range(10))
    def test_legal_moves_property(self, seed):
        """合法手は空きマスで、かつ近傍に石が1つ以上あること"""
        board = random_board(seed, density=0.1)
        moves = legal_moves(board.cells)
        neighbors = neighbor_table(BOARD_SIZE)

        for move in moves:
            assert board.get(move) == EMPTY
            assert any(board.get(n) != EMPTY for n in neighbors[move.row][move.col])

        # 取りこぼしがないこと
        expected = [
            Move(r, c)
            for r in range(BOARD_SIZE)
            for c in range(BOARD_SIZE)
            if board.cells[r, c] == EMPTY
            and any(board.get(n) != EMPTY for n in neighbors[r][c])
        ]
        assert moves == expected


class TestWinningMove:
    """勝利判定テスト"""

    def test_horizontal_five(self):
        board = make_board({(7, c): PLAYER_A for c in range(3, 8)})
        assert board.is_winning_move(Move(7, 5))
        assert board.is_winning_move(Move(7, 3))

    def test_vertical_five(self):
        board = make_board({(r, 0): PLAYER_B for r in range(10, 15)})
        assert board.is_winning_move(Move(14, 0))

    def test_diagonal_five(self):
        board = make_board({(i, i): PLAYER_A for i in range(5)})
        assert board.is_winning_move(Move(2, 2))

    def test_anti_diagonal_five(self):
        board = make_board({(i, 14 - i): PLAYER_B for i in range(4, 9)})
        assert board.is_winning_move(Move(6, 8))

    def test_four_is_not_win(self):
        board = make_board({(7, c): PLAYER_A for c in range(3, 7)})
        assert not board.is_winning_move(Move(7, 6))

    def test_six_is_win(self):
        """長連も勝ち（禁手なし）"""
        board = make_board({(7, c): PLAYER_A for c in range(2, 8)})
        assert board.is_winning_move(Move(7, 4))

    def test_broken_line_is_not_win(self):
        stones = {(7, c): PLAYER_A for c in (3, 4, 6, 7, 8)}
        stones[(7, 5)] = PLAYER_B
        board = make_board(stones)
        assert not board.is_winning_move(Move(7, 4))
        assert not board.is_winning_move(Move(7, 6))

    def test_empty_cell_is_not_win(self):
        board = make_board({(7, c): PLAYER_A for c in range(3, 7)})
        assert not board.is_winning_move(Move(7, 7))

    def test_works_on_nested_lists(self):
        """numpy配列でもリストでも同じ結果"""
        board = make_board({(r, 3): PLAYER_A for r in range(5, 10)})
        assert is_winning_move(board.to_list(), Move(9, 3))
        assert is_winning_move(board.cells, Move(9, 3))

    @pytest.mark.parametrize("seed", range(8))
    def test_symmetry_under_rotation_and_mirroring(self, seed):
        """180度回転・左右反転・上下反転で判定が変わらないこと"""
        board = random_board(seed, density=0.6)
        n = BOARD_SIZE - 1

        rotated = np.rot90(board.cells, 2)
        flipped_lr = np.fliplr(board.cells)
        flipped_ud = np.flipud(board.cells)

        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                expected = is_winning_move(board.cells, Move(r, c))
                assert is_winning_move(rotated, Move(n - r, n - c)) == expected
                assert is_winning_move(flipped_lr, Move(r, n - c)) == expected
                assert is_winning_move(flipped_ud, Move(n - r, c)) == expected


class TestBoardCopy:
    """コピーと復元のテスト"""

    def test_copy_is_independent(self):
        """コピーへの着手が元の盤面に影響しないこと"""
        board = make_board({(7, 7): PLAYER_A})
        copied = board.copy()
        copied.place(Move(7, 8), PLAYER_B)

        assert board.get(Move(7, 8)) == EMPTY
        assert copied.get(Move(7, 8)) == PLAYER_B

    @pytest.mark.parametrize("seed", range(5))
    def test_place_then_remove_restores_board(self, seed):
        """着手して取り除くと元の盤面と一致すること"""
        board = random_board(seed, density=0.3)
        before = board.copy()

        for move in board.get_legal_moves()[:20]:
            board.place(move, PLAYER_A)
            board.remove(move)
            assert board == before
            assert np.array_equal(board.cells, before.cells)

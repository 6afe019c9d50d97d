"""
評価システムのテストケース

- プレイヤーの動作テスト
- Arena（対戦管理）のテスト
"""

from gomoku_mcts.game.board import PLAYER_A, PLAYER_B, GomokuBoard, Move
from gomoku_mcts.eval.players import RandomPlayer, MCTSPlayer
from gomoku_mcts.eval.arena import Arena, MatchResult, evaluate_player


class TestPlayers:
    """プレイヤークラスのテスト"""

    def test_random_player_first_move_is_center(self):
        """空盤面では中央"""
        player = RandomPlayer(seed=0)
        assert player.get_action(GomokuBoard(), PLAYER_A) == Move(7, 7)

    def test_random_player(self):
        """RandomPlayerの動作テスト"""
        player = RandomPlayer(seed=0)
        board = GomokuBoard()
        board.place(Move(7, 7), PLAYER_A)

        action = player.get_action(board, PLAYER_B)
        assert action in board.get_legal_moves()

    def test_mcts_player(self):
        """MCTSPlayerの動作テスト"""
        player = MCTSPlayer(budget_ms=10_000, max_iterations=30, seed=0)
        board = GomokuBoard()
        board.place(Move(7, 7), PLAYER_A)

        action = player.get_action(board, PLAYER_B)
        assert action in board.get_legal_moves()
        assert player.last_result.simulations_run == 30

    def test_player_multiple_moves(self):
        """複数手での動作テスト"""
        player = RandomPlayer(seed=1)
        board = GomokuBoard()
        color = PLAYER_A

        for _ in range(10):
            action = player.get_action(board, color)
            board.place(action, color)
            color = -color

        assert board.count(PLAYER_A) == 5
        assert board.count(PLAYER_B) == 5


class TestArena:
    """Arenaクラスのテスト"""

    def test_play_single_game(self):
        """1ゲームの実行テスト"""
        arena = Arena(board_size=9, verbose=False)

        player1 = RandomPlayer("Player1", seed=0)
        player2 = RandomPlayer("Player2", seed=1)

        result = arena.play_game(player1, player2)

        assert result.player1_name == "Player1"
        assert result.player2_name == "Player2"
        assert result.winner in [-1, 0, 1]
        assert 0 < result.num_moves <= 81
        assert result.duration >= 0

    def test_winner_made_last_move(self):
        """勝者は最後に着手したプレイヤー（先手A=奇数手目）"""
        arena = Arena(board_size=9, verbose=False)
        for seed in range(5):
            result = arena.play_game(
                RandomPlayer("P1", seed=seed),
                RandomPlayer("P2", seed=seed + 100),
                starting_player=1,
            )
            if result.winner == 1:
                assert result.num_moves % 2 == 1
            elif result.winner == -1:
                assert result.num_moves % 2 == 0

    def test_match_result_text(self):
        """先後と勝者を盤上の色で表す"""
        result = MatchResult("P1", "P2", winner=-1, num_moves=9, duration=0.1, starting_player=-1)
        assert result.winner_name == "P2"
        assert str(result) == "P2 (A) vs P1 (B): P2 made five after 9 moves"

        draw = MatchResult("P1", "P2", winner=0, num_moves=81, duration=0.1)
        assert draw.winner_name is None
        assert str(draw) == "P1 (A) vs P2 (B): board full, draw after 81 moves"


class TestIntegration:
    """統合テスト"""

    def test_evaluate_player(self):
        """evaluate_player関数のテスト"""
        result = evaluate_player(
            player=MCTSPlayer(budget_ms=10_000, max_iterations=20, seed=0),
            opponent=RandomPlayer(seed=0),
            num_games=2,
            verbose=False,
            board_size=9,
        )

        assert 0.0 <= result["win_rate"] <= 1.0
        assert 0.0 <= result["draw_rate"] <= 1.0
        assert result["avg_moves"] > 0
        assert len(result["results"]) == 2

    def test_evaluate_alternates_first_player(self):
        """先手と後手を1局ごとに入れ替える"""
        result = evaluate_player(
            player=RandomPlayer("P1", seed=0),
            opponent=RandomPlayer("P2", seed=1),
            num_games=4,
            verbose=False,
            board_size=9,
        )

        starts = [r.starting_player for r in result["results"]]
        assert starts == [1, -1, 1, -1]
        assert result["avg_moves"] == sum(r.num_moves for r in result["results"]) / 4

"""
対戦管理システム (Arena)

2つのプレイヤーを五目並べで対戦させ、結果を記録する
"""

from dataclasses import dataclass
from typing import Optional
import time

from gomoku_mcts.game.board import BOARD_SIZE, GomokuBoard, PLAYER_A, PLAYER_B
from .players import Player


@dataclass
class MatchResult:
    """
    1局の結果

    winner は player1 から見た値 (1: 勝ち, -1: 負け, 0: 盤面が埋まって引き分け)。
    先手（石の値 1）は starting_player で決まる
    """
    player1_name: str
    player2_name: str
    winner: int
    num_moves: int
    duration: float
    starting_player: int = 1

    @property
    def winner_name(self) -> Optional[str]:
        if self.winner == 1:
            return self.player1_name
        if self.winner == -1:
            return self.player2_name
        return None

    def __str__(self) -> str:
        first, second = self.player1_name, self.player2_name
        if self.starting_player != 1:
            first, second = second, first
        outcome = (
            f"{self.winner_name} made five"
            if self.winner_name is not None
            else "board full, draw"
        )
        return f"{first} (A) vs {second} (B): {outcome} after {self.num_moves} moves"


class Arena:
    """
    対戦管理システム

    盤面サイズを変えられるので、テストでは小さい盤で短く回せる
    """

    def __init__(self, board_size: int = BOARD_SIZE, verbose: bool = True):
        """
        Args:
            board_size: 盤面サイズ
            verbose: 着手ごとの出力を行うか
        """
        self.board_size = board_size
        self.verbose = verbose

    def play_game(
        self,
        player1: Player,
        player2: Player,
        starting_player: int = 1,
    ) -> MatchResult:
        """
        1ゲームを実行

        先手は常にプレイヤーA（石の値 1）

        Args:
            player1: プレイヤー1
            player2: プレイヤー2
            starting_player: 先手 (1: player1, -1: player2)

        Returns:
            MatchResult: 対戦結果
        """
        board = GomokuBoard(self.board_size)

        player1.reset()
        player2.reset()

        if starting_player == 1:
            current_player, next_player = player1, player2
        else:
            current_player, next_player = player2, player1
        current_color = PLAYER_A

        start_time = time.time()
        num_moves = 0
        winner_color = 0

        # ゲームループ
        while True:
            action = current_player.get_action(board, current_color)
            if action is None:
                # 満杯で引き分け
                break

            board.place(action, current_color)
            num_moves += 1

            if self.verbose:
                print(f"{current_player.name} plays: {tuple(action)}")

            if board.is_winning_move(action):
                winner_color = current_color
                break

            if board.is_full():
                break

            # 手番交代
            current_player, next_player = next_player, current_player
            current_color = PLAYER_B if current_color == PLAYER_A else PLAYER_A

        # プレイヤー視点での勝者判定（player1の色）
        player1_color = PLAYER_A if starting_player == 1 else PLAYER_B
        if winner_color == 0:
            winner = 0
        elif winner_color == player1_color:
            winner = 1
        else:
            winner = -1

        result = MatchResult(
            player1_name=player1.name,
            player2_name=player2.name,
            winner=winner,
            num_moves=num_moves,
            duration=time.time() - start_time,
            starting_player=starting_player,
        )

        if self.verbose:
            print(f"\n{result}\n")

        return result


def evaluate_player(
    player: Player,
    opponent: Player,
    num_games: int = 10,
    verbose: bool = True,
    board_size: Optional[int] = None,
) -> dict:
    """
    プレイヤーを評価

    先手と後手を1局ごとに入れ替えて num_games 局対戦させる

    Args:
        player: 評価対象のプレイヤー
        opponent: 対戦相手
        num_games: ゲーム数
        verbose: 詳細な出力
        board_size: 盤面サイズ（Noneなら15）

    Returns:
        dict: 評価結果
            - win_rate: 勝率
            - draw_rate: 引き分け率
            - avg_moves: 平均手数
            - results: 対戦結果リスト
    """
    arena = Arena(board_size=board_size or BOARD_SIZE, verbose=verbose)

    results = []
    wins = draws = total_moves = 0
    for game_idx in range(num_games):
        starting_player = 1 if game_idx % 2 == 0 else -1
        if verbose:
            print(f"--- game {game_idx + 1}/{num_games} ---")

        result = arena.play_game(player, opponent, starting_player)
        results.append(result)
        wins += result.winner == 1
        draws += result.winner == 0
        total_moves += result.num_moves

    win_rate = wins / num_games if num_games > 0 else 0
    draw_rate = draws / num_games if num_games > 0 else 0
    avg_moves = total_moves / num_games if num_games > 0 else 0

    if verbose:
        losses = num_games - wins - draws
        print(
            f"{player.name} vs {opponent.name}: "
            f"{wins}W {losses}L {draws}D over {num_games} games "
            f"(win rate {win_rate * 100:.1f}%, {avg_moves:.1f} moves/game)"
        )

    return {
        "win_rate": win_rate,
        "draw_rate": draw_rate,
        "avg_moves": avg_moves,
        "results": results,
    }

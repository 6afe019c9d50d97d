"""
五目並べゲームロジックモジュール

盤面表現・合法手生成・勝利判定を提供
"""

from .board import (
    BOARD_SIZE,
    WIN_LENGTH,
    EMPTY,
    PLAYER_A,
    PLAYER_B,
    Move,
    GomokuBoard,
    legal_moves,
    is_winning_move,
    opponent,
)

__all__ = [
    "BOARD_SIZE",
    "WIN_LENGTH",
    "EMPTY",
    "PLAYER_A",
    "PLAYER_B",
    "Move",
    "GomokuBoard",
    "legal_moves",
    "is_winning_move",
    "opponent",
]

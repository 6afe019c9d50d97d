"""
Gomoku MCTS

15x15 五目並べ用のモンテカルロ木探索エンジン
"""

__version__ = "0.1.0"

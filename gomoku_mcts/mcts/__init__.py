"""
Monte Carlo Tree Search モジュール

UCT方式のMCTS実装を提供
"""

from .mcts import MCTS, SearchResult
from .node import MCTSNode, EXPLORATION_CONSTANT

__all__ = [
    "MCTS",
    "SearchResult",
    "MCTSNode",
    "EXPLORATION_CONSTANT",
]

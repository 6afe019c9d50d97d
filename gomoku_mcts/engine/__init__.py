"""
探索エンジン境界モジュール

リクエスト/レスポンス契約、ワーカープロセス、呼び出し側の監視を提供
"""

from .errors import EngineError, EngineUnavailableError
from .schemas import (
    EngineRequest,
    EngineResponse,
    MovePayload,
    MoveDecisionResponse,
    EngineConfigResponse,
)
from .supervisor import EngineSupervisor, MoveDecision, random_fallback
from .worker import EngineWorker, find_best_move, handle_request

__all__ = [
    "EngineError",
    "EngineUnavailableError",
    "EngineRequest",
    "EngineResponse",
    "MovePayload",
    "MoveDecisionResponse",
    "EngineConfigResponse",
    "EngineSupervisor",
    "MoveDecision",
    "random_fallback",
    "EngineWorker",
    "find_best_move",
    "handle_request",
]

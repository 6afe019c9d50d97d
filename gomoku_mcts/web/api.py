"""
FastAPI APIエンドポイント

五目並べ探索エンジンのWeb API
"""

from contextlib import asynccontextmanager
from typing import Optional
import asyncio
from concurrent.futures import ThreadPoolExecutor

from fastapi import FastAPI

from gomoku_mcts.config import EngineConfig, load_config
from gomoku_mcts.engine.schemas import (
    EngineConfigResponse,
    EngineRequest,
    MoveDecisionResponse,
)
from gomoku_mcts.engine.supervisor import EngineSupervisor


# エンジン監視（シングルトン）
_supervisor: Optional[EngineSupervisor] = None

# 探索処理用スレッドプール（1リクエストずつ）
_executor = ThreadPoolExecutor(max_workers=1)


def get_supervisor() -> EngineSupervisor:
    """エンジン監視を取得"""
    global _supervisor
    if _supervisor is None:
        _supervisor = EngineSupervisor(load_config().engine)
    return _supervisor


def configure(config: EngineConfig) -> EngineSupervisor:
    """設定を指定してエンジン監視を作り直す"""
    global _supervisor
    if _supervisor is not None:
        _supervisor.close()
    _supervisor = EngineSupervisor(config)
    return _supervisor


@asynccontextmanager
async def lifespan(app: FastAPI):
    """終了時にワーカープロセスを止める"""
    yield
    if _supervisor is not None:
        _supervisor.close()


# FastAPIアプリ
app = FastAPI(
    title="Gomoku MCTS Engine",
    description="五目並べAI（MCTS）のWeb API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/api/health")
async def health():
    """死活確認"""
    return {"status": "ok"}


# === エンジンAPI ===


@app.post("/api/engine/move", response_model=MoveDecisionResponse)
async def request_move(request: EngineRequest):
    """
    盤面に対する着手を探索

    探索はブロッキング処理なので、スレッドプールで実行。
    持ち時間 + 猶予 を過ぎた場合はランダムな合法手が返る（fallback=True）
    """
    supervisor = get_supervisor()

    loop = asyncio.get_event_loop()
    decision = await loop.run_in_executor(_executor, supervisor.get_move, request)

    return MoveDecisionResponse(
        response=decision.response,
        fallback=decision.fallback,
    )


@app.get("/api/engine/config", response_model=EngineConfigResponse)
async def get_engine_config():
    """現在のエンジン設定を取得"""
    config = get_supervisor().config
    return EngineConfigResponse(
        search_budget_ms=config.search_budget_ms,
        grace_ms=config.grace_ms,
    )

"""
Pydanticスキーマ定義

探索エンジンのリクエスト/レスポンスモデル
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from gomoku_mcts.game.board import BOARD_SIZE, EMPTY, PLAYER_A, PLAYER_B

VALID_CELLS = (EMPTY, PLAYER_A, PLAYER_B)

# 持ち時間の上限（10分）
MAX_SEARCH_BUDGET_MS = 600_000


# === リクエストモデル ===


class EngineRequest(BaseModel):
    """着手探索リクエスト"""

    board: List[List[int]] = Field(
        ..., description="15x15盤面 (0=空, 1=プレイヤーA, -1=プレイヤーB)"
    )
    search_budget_ms: int = Field(
        ...,
        ge=0,
        le=MAX_SEARCH_BUDGET_MS,
        description="探索の持ち時間（ミリ秒, 推奨 1000-10000）",
    )
    player: Optional[int] = Field(
        None, description="着手するプレイヤー (1 or -1)。省略時は石数から推定"
    )

    @field_validator("board")
    @classmethod
    def check_board(cls, board: List[List[int]]) -> List[List[int]]:
        if len(board) != BOARD_SIZE:
            raise ValueError(f"board must have {BOARD_SIZE} rows, got {len(board)}")
        for i, row in enumerate(board):
            if len(row) != BOARD_SIZE:
                raise ValueError(
                    f"row {i} must have {BOARD_SIZE} cells, got {len(row)}"
                )
            for value in row:
                if value not in VALID_CELLS:
                    raise ValueError(f"invalid cell value {value} in row {i}")
        return board

    @field_validator("player")
    @classmethod
    def check_player(cls, player: Optional[int]) -> Optional[int]:
        if player is not None and player not in (PLAYER_A, PLAYER_B):
            raise ValueError(f"player must be 1 or -1, got {player}")
        return player


# === レスポンスモデル ===


class MovePayload(BaseModel):
    """着手座標"""

    row: int = Field(..., ge=0, lt=BOARD_SIZE, description="行 (0-14)")
    col: int = Field(..., ge=0, lt=BOARD_SIZE, description="列 (0-14)")


class EngineResponse(BaseModel):
    """着手探索レスポンス"""

    move: Optional[MovePayload] = Field(
        None, description="選択した手。満杯の盤面（引き分け）ではNone"
    )
    simulations_run: int = Field(..., ge=0, description="完了したシミュレーション回数")
    win_rate: float = Field(..., ge=0.0, le=1.0, description="選択した手の勝率")
    root_visits: int = Field(..., ge=0, description="ルートノードの訪問回数")
    elapsed_ms: float = Field(0.0, ge=0.0, description="探索時間（ミリ秒）")


class MoveDecisionResponse(BaseModel):
    """呼び出し側（スーパーバイザ）が確定した着手"""

    response: EngineResponse = Field(..., description="エンジンの応答または代替手")
    fallback: bool = Field(..., description="タイムアウト等でランダム手に置き換えたか")


class EngineConfigResponse(BaseModel):
    """エンジン設定レスポンス"""

    search_budget_ms: int = Field(..., description="既定の持ち時間（ミリ秒）")
    grace_ms: int = Field(..., description="タイムアウト猶予（ミリ秒）")

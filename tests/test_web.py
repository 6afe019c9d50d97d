"""
Web APIテスト

FastAPI TestClient でエンドポイントを確認する（ワーカープロセスは実際に起動）
"""

import pytest
from fastapi.testclient import TestClient

from gomoku_mcts.config import EngineConfig
from gomoku_mcts.web import api


def empty_grid():
    return [[0] * 15 for _ in range(15)]


@pytest.fixture(scope="module")
def client():
    """テスト用クライアント（猶予を長めに取る）"""
    supervisor = api.configure(
        EngineConfig(search_budget_ms=500, grace_ms=5000, startup_timeout_s=60.0, seed=0)
    )
    supervisor.start()
    with TestClient(api.app) as test_client:
        yield test_client
    supervisor.close()


class TestEngineAPI:
    """エンジンAPIテスト"""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_config(self, client):
        response = client.get("/api/engine/config")
        assert response.status_code == 200
        assert response.json() == {"search_budget_ms": 500, "grace_ms": 5000}

    def test_move_on_empty_board(self, client):
        """空盤面では中央"""
        response = client.post(
            "/api/engine/move",
            json={"board": empty_grid(), "search_budget_ms": 100},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["fallback"] is False
        assert data["response"]["move"] == {"row": 7, "col": 7}
        assert data["response"]["simulations_run"] == 0

    def test_move_returns_statistics(self, client):
        grid = empty_grid()
        grid[7][7] = 1
        response = client.post(
            "/api/engine/move",
            json={"board": grid, "search_budget_ms": 100},
        )
        assert response.status_code == 200

        data = response.json()["response"]
        move = (data["move"]["row"], data["move"]["col"])
        assert move != (7, 7)
        assert abs(move[0] - 7) <= 1 and abs(move[1] - 7) <= 1
        assert data["simulations_run"] >= 1
        assert data["root_visits"] == data["simulations_run"]
        assert 0.0 <= data["win_rate"] <= 1.0

    def test_invalid_board_rejected(self, client):
        response = client.post(
            "/api/engine/move",
            json={"board": [[0] * 15 for _ in range(10)], "search_budget_ms": 100},
        )
        assert response.status_code == 422

    def test_negative_budget_rejected(self, client):
        response = client.post(
            "/api/engine/move",
            json={"board": empty_grid(), "search_budget_ms": -1},
        )
        assert response.status_code == 422

    def test_missing_budget_rejected(self, client):
        response = client.post("/api/engine/move", json={"board": empty_grid()})
        assert response.status_code == 422

    def test_oversized_budget_rejected(self, client):
        response = client.post(
            "/api/engine/move",
            json={"board": empty_grid(), "search_budget_ms": 4_000_000_000},
        )
        assert response.status_code == 422


class TestLifespan:
    """アプリ終了時の後始末"""

    def test_shutdown_stops_worker(self):
        supervisor = api.configure(
            EngineConfig(search_budget_ms=100, grace_ms=5000, startup_timeout_s=60.0, seed=0)
        )
        supervisor.start()
        assert supervisor.worker.is_alive()

        with TestClient(api.app) as test_client:
            assert test_client.get("/api/health").status_code == 200

        assert supervisor.worker is None

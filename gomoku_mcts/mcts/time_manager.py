"""探索の持ち時間管理"""

import time


class TimeManager:
    """
    壁時計の締め切り管理

    探索ループは反復の合間にだけexpired()を確認する
    """

    def __init__(self, budget_ms: int):
        if budget_ms < 0:
            raise ValueError(f"search budget must be >= 0 ms, got {budget_ms}")
        self.started = time.perf_counter()
        self.deadline = self.started + budget_ms / 1000.0

    def expired(self) -> bool:
        return time.perf_counter() >= self.deadline

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

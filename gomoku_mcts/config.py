"""
設定ファイル読み込み

YAML設定ファイルからエンジン・サーバー設定を作成する。
記載のないキーは既定値を使う。
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


@dataclass
class EngineConfig:
    """
    探索エンジン設定

    Attributes:
        search_budget_ms: 既定の持ち時間（ミリ秒）
        grace_ms: 呼び出し側タイムアウトの猶予（ミリ秒）
        start_method: ワーカープロセスの起動方式
        startup_timeout_s: ワーカー起動待ちの上限（秒）
        seed: 乱数シード（Noneなら非決定的）
    """
    search_budget_ms: int = 2000
    grace_ms: int = 1000
    start_method: str = "spawn"
    startup_timeout_s: float = 30.0
    seed: Optional[int] = None

    def __post_init__(self):
        if self.search_budget_ms < 0:
            raise ValueError(f"search_budget_ms must be >= 0, got {self.search_budget_ms}")
        if self.grace_ms <= 0:
            raise ValueError(f"grace_ms must be > 0, got {self.grace_ms}")


@dataclass
class ServerConfig:
    """Webサーバー設定"""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def _build(cls, section: Optional[dict]):
    """辞書から既知のキーだけを取り出してdataclassを作成"""
    section = section or {}
    known = {f.name for f in fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**section)


def load_config(config_path=None) -> AppConfig:
    """
    YAML設定ファイルを読み込む

    Args:
        config_path: 設定ファイルのパス。Noneなら configs/default.yaml
            （存在しなければ既定値）

    Returns:
        AppConfig: 設定
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AppConfig()
        config_path = DEFAULT_CONFIG_PATH

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    return AppConfig(
        engine=_build(EngineConfig, config.get('engine')),
        server=_build(ServerConfig, config.get('server')),
    )

"""エンジン関連の例外"""


class EngineError(Exception):
    """エンジン例外の基底クラス"""


class EngineUnavailableError(EngineError):
    """ワーカープロセスが起動しない"""

"""
Webインターフェースモジュール

FastAPIを使った探索エンジンのWeb API
"""

from .api import app, configure, get_supervisor

__all__ = [
    "app",
    "configure",
    "get_supervisor",
]

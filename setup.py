"""パッケージのビルドスクリプト

使用方法:
    pip install -e .
    pip install -e ".[test]"
"""

from setuptools import find_packages, setup

setup(
    name="gomoku-mcts",
    version="0.1.0",
    description="15x15 五目並べ用 MCTS (UCT) 探索エンジン",
    python_requires=">=3.9",
    packages=find_packages(include=["gomoku_mcts", "gomoku_mcts.*"]),
    py_modules=["main", "run_web"],
    install_requires=[
        "numpy",
        "pydantic>=2",
        "fastapi",
        "uvicorn",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)

#!/usr/bin/env python
"""
Webサーバー起動スクリプト

使用方法:
    python run_web.py [--host HOST] [--port PORT] [--config CONFIG]

例:
    python run_web.py
    python run_web.py --port 8080
    python run_web.py --budget 5000
"""

import argparse
import logging
import uvicorn

from gomoku_mcts.config import load_config


def main():
    parser = argparse.ArgumentParser(description="Gomoku MCTS Web Server")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address (default: from config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port number (default: from config)",
    )
    parser.add_argument(
        "--budget",
        type=int,
        default=None,
        help="Default search budget in milliseconds (default: from config)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.budget is not None:
        config.engine.search_budget_ms = args.budget
    host = args.host if args.host is not None else config.server.host
    port = args.port if args.port is not None else config.server.port

    from gomoku_mcts.web.api import app, configure

    # ワーカーを事前に起動
    supervisor = configure(config.engine)
    supervisor.start()
    print(f"Engine worker started (budget={config.engine.search_budget_ms}ms, "
          f"grace={config.engine.grace_ms}ms)")

    print(f"Starting server at http://{host}:{port}")
    print("Press Ctrl+C to stop")

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()

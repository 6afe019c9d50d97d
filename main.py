"""
Gomoku MCTS - CLIエントリポイント

着手探索・評価用のコマンドラインインターフェース
"""

import argparse
import json
import logging
import sys

from gomoku_mcts.config import load_config


def move_command(args):
    """
    着手探索コマンド

    盤面JSON（15x15のリスト、または {"board": ...}）を読み込み、
    エンジンの応答をJSONで出力する

    Args:
        args: argparseの引数
    """
    from pydantic import ValidationError

    from gomoku_mcts.engine.schemas import EngineRequest
    from gomoku_mcts.engine.worker import find_best_move

    config = load_config(args.config)

    if args.board == "-":
        data = json.load(sys.stdin)
    else:
        with open(args.board, 'r', encoding='utf-8') as f:
            data = json.load(f)

    if isinstance(data, list):
        data = {"board": data}
    if args.budget is not None:
        data["search_budget_ms"] = args.budget
    data.setdefault("search_budget_ms", config.engine.search_budget_ms)
    if args.player is not None:
        data["player"] = args.player

    try:
        request = EngineRequest.model_validate(data)
    except ValidationError as e:
        print(f"Invalid request:\n{e}", file=sys.stderr)
        sys.exit(2)

    response = find_best_move(request, seed=config.engine.seed)
    print(json.dumps(response.model_dump(), indent=2))


def eval_command(args):
    """
    評価コマンド（MCTS vs ランダム）

    Args:
        args: argparseの引数
    """
    from gomoku_mcts.eval.players import RandomPlayer, MCTSPlayer
    from gomoku_mcts.eval.arena import evaluate_player

    print("=" * 70)
    print("MCTS Evaluation")
    print("=" * 70)
    print(f"Games: {args.games}")
    print(f"Budget per move: {args.budget} ms")

    ai_player = MCTSPlayer(
        budget_ms=args.budget,
        max_iterations=args.iterations,
        seed=args.seed,
        name=f"MCTS-{args.budget}ms",
    )
    opponent = RandomPlayer(name="Random", seed=args.seed)

    eval_result = evaluate_player(
        player=ai_player,
        opponent=opponent,
        num_games=args.games,
        verbose=args.verbose,
    )

    print(f"\nResult vs {opponent.name}:")
    print(f"  Win Rate: {eval_result['win_rate'] * 100:.1f}%")
    print(f"  Draw Rate: {eval_result['draw_rate'] * 100:.1f}%")
    print(f"  Avg Moves: {eval_result['avg_moves']:.1f}")
    print("\n" + "=" * 70)


def main():
    """メインエントリポイント"""
    parser = argparse.ArgumentParser(description="Gomoku MCTS - CLI")
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file (default: configs/default.yaml)'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Move コマンド
    move_parser = subparsers.add_parser('move', help='Search a move for a board')
    move_parser.add_argument(
        '--board',
        type=str,
        required=True,
        help='Path to board JSON file ("-" for stdin)'
    )
    move_parser.add_argument(
        '--budget',
        type=int,
        default=None,
        help='Search budget in milliseconds (default: from config)'
    )
    move_parser.add_argument(
        '--player',
        type=int,
        choices=[1, -1],
        default=None,
        help='Player to move (default: inferred from stone counts)'
    )
    move_parser.set_defaults(func=move_command)

    # Eval コマンド
    eval_parser = subparsers.add_parser('eval', help='Evaluate MCTS against a random player')
    eval_parser.add_argument(
        '--games',
        type=int,
        default=10,
        help='Number of games (default: 10)'
    )
    eval_parser.add_argument(
        '--budget',
        type=int,
        default=1000,
        help='Search budget per move in milliseconds (default: 1000)'
    )
    eval_parser.add_argument(
        '--iterations',
        type=int,
        default=None,
        help='Maximum MCTS iterations per move (default: unlimited)'
    )
    eval_parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed'
    )
    eval_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show detailed game progress'
    )
    eval_parser.set_defaults(func=eval_command)

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

import argparse
import logging
import random
import time

import chess

from minimax_bot.config import STRATEGIES, load_config
from minimax_bot.engine import MinimaxEngine
from minimax_bot.timing import Clock, elapsed_ms_since


def setup_logging(level: str):
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def parse_move(board: chess.Board, text: str) -> chess.Move:
    """Parse a move typed as UCI (e2e4) or SAN (e4, Nf3, O-O).

    Raises ValueError if the text is not a legal move in the position.
    """
    text = text.strip().rstrip(",;")
    if not text:
        raise ValueError("empty move")
    try:
        move = chess.Move.from_uci(text)
    except ValueError:
        move = None
    if move is not None:
        if move not in board.legal_moves:
            raise ValueError(f"illegal move: {text}")
        return move
    # parse_san raises a ValueError subclass for both bad syntax and illegal moves.
    return board.parse_san(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play chess against the minimax engine.")
    parser.add_argument("--color", choices=("white", "black"), default="white", help="the side you play")
    parser.add_argument("--depth", type=int, help="fixed search depth (disables adaptive depth)")
    parser.add_argument("--strategy", choices=STRATEGIES, help="search strategy")
    parser.add_argument("--budget-ms", type=float, help="engine thinking budget for the whole game")
    parser.add_argument("--config", help="path to a TOML config file")
    parser.add_argument("--seed", type=int, help="seed for tie-breaking between equal moves")
    parser.add_argument("--fen", help="start from this position instead of the initial one")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, WARNING); overrides the config file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level)

    engine = MinimaxEngine(depth=args.depth, strategy=args.strategy, config=config,
                           rng=random.Random(args.seed))
    human = chess.WHITE if args.color == "white" else chess.BLACK
    board = chess.Board(args.fen) if args.fen else chess.Board()
    engine_spent_ms = 0.0

    print("Welcome to Chess Bot CLI. Enter moves in UCI (e2e4) or SAN (e4). Type 'quit' to exit.")
    print(board)
    while not board.is_game_over():
        if board.turn == human:
            user = input("Your move: ").strip()
            if user.lower() in ("quit", "exit"):
                print("Goodbye")
                return
            try:
                board.push(parse_move(board, user))
            except ValueError as e:
                print(f"{e}. Try again.")
                continue
        else:
            print("Engine thinking...")
            clock = Clock(engine_spent_ms, args.budget_ms) if args.budget_ms else None
            start = time.monotonic()
            result = engine.analyse(board, clock=clock)
            engine_spent_ms += elapsed_ms_since(start)
            board.push(result.move)
            print(f"Engine plays: {result.move} (score {result.score}, depth {result.depth})")
        print(board)
    print("Game over:", board.result())


if __name__ == "__main__":
    main()

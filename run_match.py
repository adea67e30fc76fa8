import argparse
import random

from minimax_bot.baseline import GreedyBot
from minimax_bot.cli import setup_logging
from minimax_bot.config import STRATEGIES, load_config
from minimax_bot.engine import MinimaxEngine
from minimax_bot.match import run_match


def make_player(name: str, depth, config, seed):
    """'greedy' or a search strategy name."""
    rng = random.Random(seed)
    if name == 'greedy':
        return GreedyBot(rng=rng)
    return MinimaxEngine(depth=depth, strategy=name, config=config, rng=rng)


def main():
    parser = argparse.ArgumentParser(description='Play engine-vs-engine games and report the tally')
    choices = ('greedy',) + STRATEGIES
    parser.add_argument('--a', default='pruned', choices=choices, help='player A')
    parser.add_argument('--b', default='greedy', choices=choices, help='player B')
    parser.add_argument('--games', type=int, default=2, help='number of games (colours alternate)')
    parser.add_argument('--depth', type=int, default=None, help='fixed search depth for engine players')
    parser.add_argument('--max-plies', type=int, default=200, help='stop a game after this many plies')
    parser.add_argument('--budget-ms', type=float, default=None, help='per-game thinking budget per side')
    parser.add_argument('--fen', default=None, help='start position for every game')
    parser.add_argument('--config', default=None, help='path to a TOML config file')
    parser.add_argument('--seed', type=int, default=None, help='seed for random tie-breaks')
    parser.add_argument('--log-level', default=None, help='logging level; overrides the config file')
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level)
    seed_b = None if args.seed is None else args.seed + 1
    player_a = make_player(args.a, args.depth, config, args.seed)
    player_b = make_player(args.b, args.depth, config, seed_b)

    result = run_match(player_a, player_b, games=args.games, max_plies=args.max_plies,
                       budget_ms=args.budget_ms, start_fen=args.fen)
    for n, game in enumerate(result.games, 1):
        print(f'Game {n}: {game.result} ({game.termination}, {game.plies} plies)')
    print(result.summary())


if __name__ == '__main__':
    main()

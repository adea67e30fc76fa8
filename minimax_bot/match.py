"""Engine-vs-engine games.

A player is anything with ``choose_move(board, legal_moves=None, clock=None)``:
``MinimaxEngine`` and ``GreedyBot`` both qualify.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import chess

from minimax_bot.timing import Clock, elapsed_ms_since

logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a player returns a move that is not legal in the position."""


@dataclass
class GameRecord:
    start_fen: str
    moves: List[chess.Move] = field(default_factory=list)
    result: str = "*"
    termination: str = "MAX_PLIES"

    @property
    def plies(self) -> int:
        return len(self.moves)


@dataclass
class MatchResult:
    wins_a: int = 0
    wins_b: int = 0
    draws: int = 0
    unfinished: int = 0
    games: List[GameRecord] = field(default_factory=list)

    def summary(self) -> str:
        return (f"A {self.wins_a} - B {self.wins_b}, draws {self.draws}, "
                f"unfinished {self.unfinished} ({len(self.games)} games)")


def play_game(white, black, board: Optional[chess.Board] = None, max_plies: int = 200,
              budget_ms: Optional[float] = None) -> GameRecord:
    """Play one game from ``board`` (the standard start by default).

    With ``budget_ms`` set, each player is handed a clock of its own cumulative
    thinking time against that per-game budget.
    """
    board = board.copy() if board is not None else chess.Board()
    record = GameRecord(start_fen=board.fen())
    spent = {chess.WHITE: 0.0, chess.BLACK: 0.0}

    while record.plies < max_plies:
        outcome = board.outcome(claim_draw=True)
        if outcome is not None:
            record.result = outcome.result()
            record.termination = outcome.termination.name
            break
        side = board.turn
        player = white if side == chess.WHITE else black
        clock = Clock(spent[side], budget_ms) if budget_ms is not None else None

        start = time.monotonic()
        move = player.choose_move(board, clock=clock)
        spent[side] += elapsed_ms_since(start)

        if move not in board.legal_moves:
            raise IllegalMoveError(f"{type(player).__name__} played {move} in {board.fen()}")
        board.push(move)
        record.moves.append(move)

    logger.info("Game over after %d plies: %s (%s)", record.plies, record.result, record.termination)
    return record


def run_match(player_a, player_b, games: int = 2, max_plies: int = 200,
              budget_ms: Optional[float] = None, start_fen: Optional[str] = None) -> MatchResult:
    """Play ``games`` games, alternating colours, A taking white first."""
    result = MatchResult()
    for n in range(games):
        a_is_white = n % 2 == 0
        white, black = (player_a, player_b) if a_is_white else (player_b, player_a)
        board = chess.Board(start_fen) if start_fen else None
        record = play_game(white, black, board=board, max_plies=max_plies, budget_ms=budget_ms)
        result.games.append(record)

        if record.result == "1/2-1/2":
            result.draws += 1
        elif record.result == "*":
            result.unfinished += 1
        elif (record.result == "1-0") == a_is_white:
            result.wins_a += 1
        else:
            result.wins_b += 1
        logger.info("Game %d/%d: %s", n + 1, games, result.summary())
    return result

import copy
import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import chess

from minimax_bot.config import Config, STRATEGY_MINIMAX, STRATEGY_PRUNED
from minimax_bot.oracle import PositionOracle
from minimax_bot.timing import Clock, choose_depth

logger = logging.getLogger(__name__)


class NoLegalMovesError(ValueError):
    """Raised when a move is requested for a position with no legal moves."""


@dataclass(frozen=True)
class SearchResult:
    move: chess.Move
    score: float
    depth: int
    best_moves: Tuple[chess.Move, ...]
    scores: Dict[chess.Move, float]
    nodes: int


class MinimaxEngine:
    """A minimax engine with alpha-beta pruning.

    - evaluate: material count from a fixed perspective, checkmate as +/-inf
    - rank_moves / candidate_moves: optional top/bottom-K pre-selection
    - search: alternating max/min recursion with the perspective never flipped
    - analyse / choose_move: root driver, ties broken at random

    The board is mutated in place through the oracle and is always restored
    before any method returns.
    """

    def __init__(self, depth: Optional[int] = None, strategy: Optional[str] = None,
                 config: Optional[Config] = None, oracle: Optional[PositionOracle] = None,
                 rng: Optional[random.Random] = None):
        cfg = copy.deepcopy(config) if config is not None else Config()
        if depth is not None:
            cfg.search.depth = depth
            cfg.search.adaptive_depth = False
        if strategy is not None:
            cfg.search.strategy = strategy
        self.config = cfg.validate()
        self.oracle = oracle or PositionOracle()
        self.rng = rng or random.Random()
        self.piece_values = {
            pt: self.config.eval.piece_values[chess.piece_name(pt).upper()]
            for pt in chess.PIECE_TYPES
        }
        self.nodes = 0
        self.last_result: Optional[SearchResult] = None

    def evaluate(self, board: chess.Board, color: chess.Color) -> float:
        """Material of the opponent minus material of ``color``.

        A checkmated position scores -inf when ``color`` is the side to move
        (and therefore mated), +inf otherwise.

        The material sign is deliberate: every max and min layer of ``search``
        scores leaves with this same ``color``, so flipping it here alone would
        change which moves the engine prefers.
        """
        if self.oracle.is_checkmate(board):
            return -math.inf if self.oracle.side_to_move(board) == color else math.inf
        score = 0.0
        for piece in self.oracle.pieces(board):
            value = self.piece_values[piece.piece_type]
            if piece.color != color:
                score += value
            else:
                score -= value
        return score

    def rank_moves(self, board: chess.Board, moves: Sequence[chess.Move],
                   color: chess.Color) -> List[chess.Move]:
        """Order moves by their one-ply evaluation, best first. Ties keep input order."""
        scored = []
        for move in moves:
            with self.oracle.applied(board, move):
                scored.append((self.evaluate(board, color), move))
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [move for _, move in scored]

    def candidate_moves(self, board: chess.Board, moves: Sequence[chess.Move],
                        color: chess.Color) -> List[chess.Move]:
        """The top-K and bottom-K ranked moves, or every move when there are at most 2K."""
        k = self.config.search.prune_k
        ranked = self.rank_moves(board, moves, color)
        if len(ranked) <= 2 * k:
            return ranked
        return ranked[:k] + ranked[-k:]

    def search(self, board: chess.Board, color: chess.Color, depth_remaining: int,
               alpha: float = -math.inf, beta: float = math.inf, maximizing: bool = False) -> float:
        """Score the current position for ``color`` looking ``depth_remaining`` plies ahead."""
        self.nodes += 1
        if depth_remaining <= 1:
            return self.evaluate(board, color)
        moves = self.oracle.legal_moves(board)
        if not moves:
            # Stalemate reaches here as well as mate; both are scored statically.
            return self.evaluate(board, color)

        strategy = self.config.search.strategy
        if strategy == STRATEGY_PRUNED:
            moves = self.candidate_moves(board, moves, color)
        use_window = strategy != STRATEGY_MINIMAX

        if maximizing:
            best = -math.inf
            for move in moves:
                with self.oracle.applied(board, move):
                    score = self.search(board, color, depth_remaining - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, score)
                if use_window and beta <= alpha:
                    break
            return best

        best = math.inf
        for move in moves:
            with self.oracle.applied(board, move):
                score = self.search(board, color, depth_remaining - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if use_window and beta <= alpha:
                break
        return best

    def select_depth(self, clock: Optional[Clock] = None) -> int:
        s = self.config.search
        if s.adaptive_depth and clock is not None:
            return choose_depth(clock.elapsed_ms, clock.budget_ms, s)
        return s.depth

    def analyse(self, board: chess.Board, legal_moves: Optional[Sequence[chess.Move]] = None,
                clock: Optional[Clock] = None) -> SearchResult:
        """Score every root move and pick one of the best at random."""
        moves = list(self.oracle.legal_moves(board) if legal_moves is None else legal_moves)
        if not moves:
            raise NoLegalMovesError(f"no legal move available in {board.fen()}")

        depth = self.select_depth(clock)
        color = self.oracle.side_to_move(board)
        self.nodes = 0
        best_score = -math.inf
        best_moves: List[chess.Move] = []
        scores: Dict[chess.Move, float] = {}

        for move in moves:
            # Each root move gets the full window so its score is exact.
            with self.oracle.applied(board, move):
                score = self.search(board, color, depth - 1, -math.inf, math.inf, maximizing=False)
            scores[move] = score
            logger.debug("root move %s scored %s", move, score)
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        chosen = self.rng.choice(best_moves)
        result = SearchResult(move=chosen, score=best_score, depth=depth,
                              best_moves=tuple(best_moves), scores=scores, nodes=self.nodes)
        self.last_result = result
        logger.info("Best move %s score %s depth %d (%d tied, %d nodes)",
                    chosen, best_score, depth, len(best_moves), self.nodes)
        return result

    def choose_move(self, board: chess.Board, legal_moves: Optional[Sequence[chess.Move]] = None,
                    clock: Optional[Clock] = None) -> chess.Move:
        """Return the move to play. Raises NoLegalMovesError on a terminal position."""
        return self.analyse(board, legal_moves, clock).move

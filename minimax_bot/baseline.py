"""A greedy sparring opponent.

Plays mate in one when it sees it, otherwise captures the most valuable piece
it can, otherwise plays a random legal move. Used as the reference opponent in
engine matches.
"""

import logging
import random
from typing import Optional, Sequence

import chess

from minimax_bot.engine import NoLegalMovesError
from minimax_bot.oracle import PositionOracle
from minimax_bot.timing import Clock

logger = logging.getLogger(__name__)

CAPTURE_VALUES = {
    chess.PAWN: 100,
    chess.KNIGHT: 300,
    chess.BISHOP: 300,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 10000,
}


class GreedyBot:
    def __init__(self, oracle: Optional[PositionOracle] = None, rng: Optional[random.Random] = None):
        self.oracle = oracle or PositionOracle()
        self.rng = rng or random.Random()

    def gives_mate(self, board: chess.Board, move: chess.Move) -> bool:
        with self.oracle.applied(board, move):
            return self.oracle.is_checkmate(board)

    def capture_value(self, board: chess.Board, move: chess.Move) -> int:
        if board.is_en_passant(move):
            return CAPTURE_VALUES[chess.PAWN]
        victim = board.piece_at(move.to_square)
        if victim is None or victim.color == board.turn:
            return 0
        return CAPTURE_VALUES[victim.piece_type]

    def choose_move(self, board: chess.Board, legal_moves: Optional[Sequence[chess.Move]] = None,
                    clock: Optional[Clock] = None) -> chess.Move:
        moves = list(self.oracle.legal_moves(board) if legal_moves is None else legal_moves)
        if not moves:
            raise NoLegalMovesError(f"no legal move available in {board.fen()}")

        move_to_play = self.rng.choice(moves)
        highest = 0
        for move in moves:
            if self.gives_mate(board, move):
                logger.debug("mate in one: %s", move)
                return move
            value = self.capture_value(board, move)
            if value > highest:
                move_to_play = move
                highest = value
        return move_to_play

"""Position oracle: the rules-engine seam between the search and python-chess.

The engine never touches ``chess.Board`` internals directly. Everything it
needs (legal moves, make/unmake, checkmate, side to move, piece listing) goes
through a ``PositionOracle`` so that tests can substitute a recording oracle.
"""

from contextlib import contextmanager
from typing import Iterator, List

import chess


class PositionOracle:
    """Thin adapter over ``chess.Board``.

    The board is mutated in place. Callers must pair every ``apply`` with an
    ``undo`` of the same move in reverse order; ``applied`` does that for them.
    """

    def legal_moves(self, board: chess.Board) -> List[chess.Move]:
        return list(board.legal_moves)

    def apply(self, board: chess.Board, move: chess.Move) -> None:
        board.push(move)

    def undo(self, board: chess.Board, move: chess.Move) -> None:
        popped = board.pop()
        if popped != move:
            # Put it back so the caller's stack is not corrupted further.
            board.push(popped)
            raise RuntimeError(f"undo out of order: expected {move}, top of stack is {popped}")

    @contextmanager
    def applied(self, board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
        """Apply ``move`` for the duration of the block, undoing it on every exit path."""
        self.apply(board, move)
        try:
            yield board
        finally:
            self.undo(board, move)

    def is_checkmate(self, board: chess.Board) -> bool:
        return board.is_checkmate()

    def side_to_move(self, board: chess.Board) -> chess.Color:
        return board.turn

    def pieces(self, board: chess.Board) -> Iterator[chess.Piece]:
        return iter(board.piece_map().values())

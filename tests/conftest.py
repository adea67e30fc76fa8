import chess
import pytest

from minimax_bot.oracle import PositionOracle


class SpyOracle(PositionOracle):
    """Records every apply/undo and checks they nest properly."""

    def __init__(self):
        self.stack = []
        self.applied_moves = []
        self.max_depth = 0
        self.checkmate_calls = 0
        self.fail_after = None

    def apply(self, board, move):
        assert move in board.legal_moves, f"{move} is not legal in {board.fen()}"
        self.applied_moves.append((board.fen(), move))
        super().apply(board, move)
        self.stack.append(move)
        self.max_depth = max(self.max_depth, len(self.stack))

    def undo(self, board, move):
        assert self.stack and self.stack[-1] == move, "undo does not match the last apply"
        self.stack.pop()
        super().undo(board, move)

    def is_checkmate(self, board):
        self.checkmate_calls += 1
        if self.fail_after is not None and self.checkmate_calls > self.fail_after:
            raise RuntimeError("oracle failure")
        return super().is_checkmate(board)


class RecordingRandom:
    """Stands in for random.Random; remembers what it was asked to choose from."""

    def __init__(self):
        self.choices = []

    def choice(self, seq):
        self.choices.append(list(seq))
        return seq[-1]


@pytest.fixture
def spy():
    return SpyOracle()


@pytest.fixture
def recording_rng():
    return RecordingRandom()


@pytest.fixture
def start_board():
    return chess.Board()


@pytest.fixture
def spy_factory():
    return SpyOracle

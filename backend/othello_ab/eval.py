from typing import TYPE_CHECKING

from .config import DEFAULT_CONFIG, EngineConfig

if TYPE_CHECKING:
    from .board import Board

class Evaluator:
    """Hand-tuned static evaluation, always from the side to move.

    Corners weigh ten legal moves and a thousand disks: a corner disk can
    never be flipped. Raw material is held against the mover until the
    end-game threshold is reached, after which it counts normally.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def evaluate(self, board: 'Board') -> int:
        """Evaluate position for the side to move (positive = good for it)"""
        return self.disk_term(board) + self.mobility_term(board) + self.corner_term(board)

    def is_endgame(self, board: 'Board') -> bool:
        return board.disk_count >= self.config.endgame_threshold

    def disk_term(self, board: 'Board') -> int:
        score = board.disk_balance() * self.config.disk_multiplier
        if not self.is_endgame(board):
            score = -score
        return score

    def mobility_term(self, board: 'Board') -> int:
        return len(board.legal_moves()) * self.config.move_multiplier

    def corner_term(self, board: 'Board') -> int:
        own, opp = board.to_move, board.to_move.opponent()
        score = 0
        for corner in board.corners():
            cell = board.get_field(corner)
            if cell is own:
                score += self.config.corner_multiplier
            elif cell is opp:
                score -= self.config.corner_multiplier
        return score

import logging
from typing import NamedTuple, Optional

from .board import Board, Position, INVALID_POSITION
from .config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)

# Constants
INF = float('inf')

class SearchResult(NamedTuple):
    position: Position
    value: int

class SearchEngine:
    """Fixed-depth alpha-beta minimax over copied boards.

    Leaves are scored by Board.evaluate() of the copied board, so the
    perspective of the score alternates every ply together with the
    maximizing flag. A node whose side to move has no legal move is a
    leaf; passes are left to the caller.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.nodes = 0

    def best_move(self, board: Board, depth: Optional[int] = None) -> SearchResult:
        """Top-level search. Returns INVALID_POSITION when the side to move must pass."""
        if depth is None:
            depth = self.config.search_depth
        self.nodes = 0
        result = self.alphabeta(board, depth, -INF, INF, True)
        logger.debug("depth %d: move %s value %s nodes %d",
                     depth, tuple(result.position), result.value, self.nodes)
        return result

    def alphabeta(self, board: Board, depth: int, alpha: float, beta: float,
                  maximizing: bool) -> SearchResult:
        self.nodes += 1
        if depth == 0:
            return SearchResult(INVALID_POSITION, board.evaluate())
        legal_moves = board.legal_moves()
        if not legal_moves:
            return SearchResult(INVALID_POSITION, board.evaluate())

        best_move = INVALID_POSITION
        if maximizing:
            best_score = -INF
            for move in legal_moves:
                new_board = board.copy()
                new_board.apply_move(move)
                score = self.alphabeta(new_board, depth - 1, alpha, beta, False).value
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
                if beta < alpha:
                    break
        else:
            best_score = INF
            for move in legal_moves:
                new_board = board.copy()
                new_board.apply_move(move)
                score = self.alphabeta(new_board, depth - 1, alpha, beta, True).value
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)
                if beta < alpha:
                    break
        return SearchResult(best_move, best_score)

    def minimax(self, board: Board, depth: int, maximizing: bool) -> SearchResult:
        """Same tree walk as alphabeta() without pruning"""
        self.nodes += 1
        legal_moves = board.legal_moves() if depth > 0 else []
        if not legal_moves:
            return SearchResult(INVALID_POSITION, board.evaluate())

        best_move = INVALID_POSITION
        best_score = -INF if maximizing else INF
        for move in legal_moves:
            new_board = board.copy()
            new_board.apply_move(move)
            score = self.minimax(new_board, depth - 1, not maximizing).value
            if (maximizing and score > best_score) or (not maximizing and score < best_score):
                best_score = score
                best_move = move
        return SearchResult(best_move, best_score)

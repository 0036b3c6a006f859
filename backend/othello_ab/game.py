import logging
from typing import List, NamedTuple, Optional

from .board import Board, Cell, Position, INVALID_POSITION
from .config import DEFAULT_CONFIG, EngineConfig
from .search import SearchEngine

logger = logging.getLogger(__name__)

COLUMNS = "abcdefghijklmnopqrstuvwxyz"

class NotationError(ValueError):
    pass

class StalemateError(RuntimeError):
    """Search reported no move although the side to move has one."""

def to_notation(position: Position) -> str:
    """Position(3, 2) -> 'd3': column letter for x, 1-based number for y"""
    return f"{COLUMNS[position.x]}{position.y + 1}"

def from_notation(text: str, size: int = DEFAULT_CONFIG.board_size) -> Position:
    token = text.strip().lower()
    if len(token) < 2 or token[0] not in COLUMNS[:size] or not token[1:].isdigit():
        raise NotationError(f"Invalid square: {text!r}")
    position = Position(COLUMNS.index(token[0]), int(token[1:]) - 1)
    if not position.is_valid(size):
        raise NotationError(f"Square off the board: {text!r}")
    return position

class GameRecord(NamedTuple):
    moves: List[Optional[Position]]  # None marks a pass
    board: Board
    winner: Optional[Cell]

class SelfPlayGame:
    """Engine against itself until both sides have to pass in a row"""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG, depth: Optional[int] = None):
        self.config = config
        self.depth = config.search_depth if depth is None else depth
        if self.depth < 1:
            raise ValueError("self-play needs a search depth of at least 1")
        self.board = Board(config)
        self.engine = SearchEngine(config)
        self.moves: List[Optional[Position]] = []

    def step(self) -> Optional[Position]:
        """Play one ply for the side to move; returns None on a pass"""
        result = self.engine.best_move(self.board, self.depth)
        if result.position == INVALID_POSITION:
            if self.board.legal_moves():
                raise StalemateError(
                    f"search found no move for {self.board.to_move.name} at depth {self.depth}"
                )
            logger.info("%s passes", self.board.to_move.name)
            self.board.change_side()
            self.moves.append(None)
            return None
        logger.debug("%s plays %s (value %d)",
                     self.board.to_move.name, to_notation(result.position), result.value)
        self.board.apply_move(result.position)
        self.moves.append(result.position)
        return result.position

    def play(self) -> GameRecord:
        passes = 0
        while passes < 2:
            logger.info("MOVE #%d. BALANCE: %d\n%s",
                        len(self.moves), self.board.disk_balance(), self.board)
            if self.step() is None:
                passes += 1
            else:
                passes = 0
        black, white = self.board.count()
        logger.info("Game over: black %d, white %d", black, white)
        return GameRecord(self.moves, self.board, self.board.winner())

from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, EngineConfig
from .eval import Evaluator

class Cell(Enum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def opponent(self) -> 'Cell':
        if self is Cell.BLACK:
            return Cell.WHITE
        if self is Cell.WHITE:
            return Cell.BLACK
        return Cell.EMPTY

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

_SYMBOLS = {Cell.EMPTY: "#", Cell.BLACK: "B", Cell.WHITE: "W"}
_FROM_SYMBOL = {v: k for k, v in _SYMBOLS.items()}

class Position(NamedTuple):
    x: int
    y: int

    def is_valid(self, size: int = DEFAULT_CONFIG.board_size) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

# "No position": returned when there is no move to play
INVALID_POSITION = Position(-1, -1)

DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]

class Board:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.size = config.board_size
        self.grid = [[Cell.EMPTY for _ in range(self.size)] for _ in range(self.size)]
        self.to_move = Cell.BLACK  # Black moves first
        self.evaluator = Evaluator(config)

        # Standard starting position around the centre
        lo, hi = self.size // 2 - 1, self.size // 2
        self.grid[lo][lo] = Cell.WHITE
        self.grid[hi][hi] = Cell.WHITE
        self.grid[lo][hi] = Cell.BLACK
        self.grid[hi][lo] = Cell.BLACK
        self.disk_count = 4

    @classmethod
    def from_rows(cls, rows: Sequence[str], to_move: Cell = Cell.BLACK,
                  config: EngineConfig = DEFAULT_CONFIG) -> 'Board':
        """Build a board from strings of '#', 'B' and 'W'; row index is x."""
        board = cls(config)
        if len(rows) != board.size or any(len(row) != board.size for row in rows):
            raise ValueError(f"expected {board.size} rows of {board.size} cells")
        bad = set("".join(rows)) - set(_FROM_SYMBOL)
        if bad:
            raise ValueError(f"unknown cell symbols: {''.join(sorted(bad))!r}")
        board.grid = [[_FROM_SYMBOL[ch] for ch in row] for row in rows]
        board.disk_count = sum(1 for row in board.grid for cell in row if cell is not Cell.EMPTY)
        board.to_move = to_move
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of the board"""
        new_board = Board.__new__(Board)
        new_board.config = self.config
        new_board.evaluator = self.evaluator
        new_board.size = self.size
        new_board.grid = [row[:] for row in self.grid]
        new_board.to_move = self.to_move
        new_board.disk_count = self.disk_count
        return new_board

    def get_field(self, position: Position) -> Cell:
        return self.grid[position.x][position.y]

    def corners(self) -> List[Position]:
        last = self.size - 1
        return [Position(0, 0), Position(0, last), Position(last, 0), Position(last, last)]

    def _find_endpoint(self, position: Position, dx: int, dy: int, color: Cell) -> Position:
        """Nearest disk of `color` beyond at least one opposing disk, or INVALID_POSITION"""
        x, y = position.x + dx, position.y + dy
        seen_opponent = False
        while 0 <= x < self.size and 0 <= y < self.size:
            cell = self.grid[x][y]
            if cell is color:
                return Position(x, y) if seen_opponent else INVALID_POSITION
            if cell is Cell.EMPTY:
                return INVALID_POSITION
            seen_opponent = True
            x += dx
            y += dy
        return INVALID_POSITION

    def _is_legal_for(self, position: Position, color: Cell) -> bool:
        if not position.is_valid(self.size) or self.get_field(position) is not Cell.EMPTY:
            return False
        for dx, dy in DIRECTIONS:
            if self._find_endpoint(position, dx, dy, color) != INVALID_POSITION:
                return True
        return False

    def is_legal_move(self, position: Position) -> bool:
        """Check if the side to move may place a disk at `position`"""
        return self._is_legal_for(position, self.to_move)

    def legal_moves(self) -> List[Position]:
        """Legal moves for the side to move, ascending x then ascending y"""
        moves = []
        for x in range(self.size):
            for y in range(self.size):
                position = Position(x, y)
                if self.is_legal_move(position):
                    moves.append(position)
        return moves

    def has_moves(self, color: Cell) -> bool:
        return any(self._is_legal_for(Position(x, y), color)
                   for x in range(self.size) for y in range(self.size))

    def apply_move(self, position: Position, change_side: bool = True) -> List[Position]:
        """Place a disk for the side to move and flip every sandwiched line.

        Legality is not re-checked; callers pass moves taken from
        legal_moves() or already validated elsewhere. Returns the flipped
        positions.
        """
        color = self.to_move
        flipped = []
        for dx, dy in DIRECTIONS:
            end = self._find_endpoint(position, dx, dy, color)
            if end == INVALID_POSITION:
                continue
            x, y = position.x + dx, position.y + dy
            while (x, y) != end:
                self.grid[x][y] = color
                flipped.append(Position(x, y))
                x += dx
                y += dy
        self.grid[position.x][position.y] = color
        self.disk_count += 1
        if change_side:
            self.change_side()
        return flipped

    def change_side(self):
        self.to_move = self.to_move.opponent()

    def evaluate(self) -> int:
        """Static score of the position for the side to move"""
        return self.evaluator.evaluate(self)

    def disk_balance(self) -> int:
        """Own disks minus opposing disks, for the side to move"""
        own, opp = self.to_move, self.to_move.opponent()
        balance = 0
        for row in self.grid:
            for cell in row:
                if cell is own:
                    balance += 1
                elif cell is opp:
                    balance -= 1
        return balance

    def count(self) -> Tuple[int, int]:
        """Return (black_count, white_count)"""
        black_count = sum(1 for row in self.grid for cell in row if cell is Cell.BLACK)
        white_count = sum(1 for row in self.grid for cell in row if cell is Cell.WHITE)
        return black_count, white_count

    def is_full(self) -> bool:
        return self.disk_count >= self.size * self.size

    def is_game_over(self) -> bool:
        """Board full, or neither side has a legal move"""
        if self.is_full():
            return True
        return not self.has_moves(Cell.BLACK) and not self.has_moves(Cell.WHITE)

    def winner(self) -> Optional[Cell]:
        """Cell.BLACK or Cell.WHITE, or None for a draw or a game in progress"""
        if not self.is_game_over():
            return None
        black_count, white_count = self.count()
        if black_count > white_count:
            return Cell.BLACK
        if white_count > black_count:
            return Cell.WHITE
        return None

    def rows(self) -> List[str]:
        return ["".join(cell.symbol for cell in row) for row in self.grid]

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid and self.to_move is other.to_move

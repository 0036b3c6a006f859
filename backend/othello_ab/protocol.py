"""
Line protocol for playing against another process.

Inbound, one command per line:

    color black|white   which side this engine plays
    move <square>       the opponent played <square>, e.g. "move d3"
    go                  it is this engine's turn
    quit                end of session

Replies to "go" are "move <square>" or "pass". Opponent moves are
applied without toggling the side to move; "go" is the turn signal.
"""

import logging
import sys
from typing import Optional, TextIO

from .board import Board, Cell, INVALID_POSITION
from .config import DEFAULT_CONFIG, EngineConfig
from .game import NotationError, StalemateError, from_notation, to_notation
from .search import SearchEngine

logger = logging.getLogger(__name__)

COLORS = {"black": Cell.BLACK, "white": Cell.WHITE}

class ProtocolError(Exception):
    pass

class PipePlayer:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG, depth: Optional[int] = None,
                 infile: Optional[TextIO] = None, outfile: Optional[TextIO] = None):
        self.config = config
        self.depth = config.search_depth if depth is None else depth
        if self.depth < 1:
            raise ValueError("the pipe player needs a search depth of at least 1")
        self.board = Board(config)
        self.engine = SearchEngine(config)
        self.color: Optional[Cell] = None
        self.infile = infile if infile is not None else sys.stdin
        self.outfile = outfile if outfile is not None else sys.stdout

    def _send(self, line: str):
        self.outfile.write(line + "\n")
        self.outfile.flush()

    def handle(self, line: str) -> bool:
        """Process one inbound line; returns False when the session ends"""
        tokens = line.split()
        if not tokens:
            return True
        command, args = tokens[0].lower(), tokens[1:]

        if command == "quit":
            return False
        if command == "color":
            if len(args) != 1 or args[0].lower() not in COLORS:
                raise ProtocolError(f"Bad handshake: {line!r}")
            self.color = COLORS[args[0].lower()]
            logger.info("playing %s", self.color.name)
            return True
        if self.color is None:
            raise ProtocolError(f"{command!r} before color handshake")
        if command == "move":
            self._opponent_move(args, line)
        elif command == "go":
            self._our_move()
        else:
            raise ProtocolError(f"Unknown command: {line!r}")
        return True

    def _opponent_move(self, args, line: str):
        if len(args) != 1:
            raise ProtocolError(f"Bad move line: {line!r}")
        try:
            position = from_notation(args[0], self.board.size)
        except NotationError as e:
            raise ProtocolError(str(e)) from e
        if self.board.to_move is self.color:
            self.board.change_side()
        if not self.board.is_legal_move(position):
            raise ProtocolError(f"Illegal opponent move: {args[0]}")
        self.board.apply_move(position, change_side=False)
        logger.info("opponent played %s, balance %d", args[0], -self.board.disk_balance())

    def _our_move(self):
        if self.board.to_move is not self.color:
            self.board.change_side()
        result = self.engine.best_move(self.board, self.depth)
        if result.position == INVALID_POSITION:
            if self.board.legal_moves():
                raise StalemateError(f"search found no move at depth {self.depth}")
            self.board.change_side()
            self._send("pass")
            return
        self.board.apply_move(result.position)
        square = to_notation(result.position)
        logger.info("played %s (value %d), balance %d", square, result.value,
                    -self.board.disk_balance())
        self._send(f"move {square}")

    def run(self) -> Board:
        for line in self.infile:
            if not self.handle(line):
                break
        return self.board

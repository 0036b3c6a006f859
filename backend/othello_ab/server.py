import logging
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .board import Board, Cell, Position, INVALID_POSITION
from .config import DEFAULT_CONFIG, EngineConfig
from .game import to_notation
from .search import SearchEngine

logger = logging.getLogger(__name__)

app = FastAPI(title="Othello Alpha-Beta Engine")

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for local dev
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Game state
config = DEFAULT_CONFIG
game_board = Board(config)
move_history: List[Tuple[Optional[Position], Cell]] = []  # (move or None for pass, color)
search_engine = SearchEngine(config)

def configure(new_config: EngineConfig = DEFAULT_CONFIG):
    """Swap the engine settings and start a fresh game"""
    global config, game_board, move_history, search_engine

    config = new_config
    game_board = Board(config)
    move_history = []
    search_engine = SearchEngine(config)

class MoveRequest(BaseModel):
    x: int
    y: int

class UndoRequest(BaseModel):
    plies: int = Field(gt=0)

class MoveModel(BaseModel):
    x: int
    y: int
    square: str

class GameState(BaseModel):
    rows: List[str]
    to_move: str
    black: int
    white: int
    legal: List[MoveModel]
    balance: int
    game_over: bool
    winner: Optional[str]
    last_move: Optional[MoveModel] = None

def _move_model(position: Position) -> MoveModel:
    return MoveModel(x=position.x, y=position.y, square=to_notation(position))

def _last_played_move() -> Optional[Position]:
    """Return the most recent non-pass move from history."""
    for mv, _ in reversed(move_history):
        if mv is not None:
            return mv
    return None

def board_to_state(board: Board) -> GameState:
    """Convert Board to GameState"""
    black_count, white_count = board.count()
    last_mv = _last_played_move()
    winner = board.winner()
    return GameState(
        rows=board.rows(),
        to_move=board.to_move.name.lower(),
        black=black_count,
        white=white_count,
        legal=[_move_model(m) for m in board.legal_moves()],
        balance=board.disk_balance(),
        game_over=board.is_game_over(),
        winner=winner.name.lower() if winner else None,
        last_move=_move_model(last_mv) if last_mv else None,
    )

@app.post("/new")
async def new_game():
    """Start a new game"""
    global game_board, move_history

    game_board = Board(config)
    move_history = []
    return board_to_state(game_board)

@app.get("/state")
async def get_state():
    """Get current game state"""
    return board_to_state(game_board)

@app.post("/move")
async def make_move(move: MoveRequest):
    """Commit a human move"""
    position = Position(move.x, move.y)
    if not game_board.is_legal_move(position):
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Invalid move",
                "requested": {"x": move.x, "y": move.y},
                "to_move": game_board.to_move.name.lower(),
            },
        )

    color_played = game_board.to_move
    game_board.apply_move(position)
    move_history.append((position, color_played))
    return board_to_state(game_board)

@app.post("/ai_move")
async def ai_move(depth: Optional[int] = None):
    """AI plays for the side to move"""
    if game_board.is_game_over():
        raise HTTPException(status_code=400, detail="Game is over")
    if depth is None:
        depth = config.search_depth
    if depth < 1:
        raise HTTPException(status_code=400, detail="depth must be at least 1")

    ai_color = game_board.to_move
    if not game_board.legal_moves():
        # Pass
        game_board.change_side()
        move_history.append((None, ai_color))
        logger.info("ai %s passes", ai_color.name.lower())
        return board_to_state(game_board)

    result = search_engine.best_move(game_board, depth)
    if result.position == INVALID_POSITION:
        raise HTTPException(status_code=500, detail=f"search found no move at depth {depth}")
    game_board.apply_move(result.position)
    move_history.append((result.position, ai_color))
    logger.info("ai %s: %s value %d", ai_color.name.lower(), to_notation(result.position), result.value)
    return board_to_state(game_board)

@app.post("/undo")
async def undo_moves(request: UndoRequest):
    """Undo last N plies"""
    global game_board, move_history

    if request.plies > len(move_history):
        raise HTTPException(status_code=400, detail="Invalid number of plies")

    # Reconstruct board from history
    game_board = Board(config)
    move_history = move_history[:-request.plies]

    for move, color_played in move_history:
        game_board.to_move = color_played
        if move is not None:
            game_board.apply_move(move)
        else:
            game_board.change_side()

    return board_to_state(game_board)

@app.post("/pass")
async def pass_move():
    """Perform a pass if no legal moves exist"""
    if game_board.legal_moves():
        raise HTTPException(status_code=400, detail="Legal moves available")

    move_history.append((None, game_board.to_move))
    game_board.change_side()
    return board_to_state(game_board)

@app.get("/info")
async def get_info():
    """Get engine information"""
    return {
        "engine": "Fixed-depth Alpha-Beta",
        "search_depth": config.search_depth,
        "board_size": config.board_size,
        "endgame_threshold": config.endgame_threshold,
        "weights": {
            "disk": config.disk_multiplier,
            "move": config.move_multiplier,
            "corner": config.corner_multiplier,
        },
    }

"""Game module for the falling-block engine.

Exports the engine core and supporting classes:
- GameGrid: Board representation, collision test and line clearing
- Piece: Tetromino with its four precomputed rotation states
- TetrominoType: Enum of piece types (values double as cell tags)
- ScoringRules: Per-lock and line-clear scoring
- BlockEngine: Session state machine (spawn, move, rotate, tick, drop)
"""

from .grid import BOARD_HEIGHT, BOARD_WIDTH, GameGrid
from .pieces import EMPTY, Piece, TetrominoType, random_piece, rotate_cw, rotation_states, shape_of
from .rules import ScoringRules
from .core import (
    CCW,
    CW,
    Action,
    BlockEngine,
    EngineSnapshot,
    EngineStateError,
    GameConfig,
    GameState,
    LockResult,
)

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "GameGrid",
    "EMPTY",
    "Piece",
    "TetrominoType",
    "random_piece",
    "rotate_cw",
    "rotation_states",
    "shape_of",
    "ScoringRules",
    "CW",
    "CCW",
    "Action",
    "BlockEngine",
    "EngineSnapshot",
    "EngineStateError",
    "GameConfig",
    "GameState",
    "LockResult",
]

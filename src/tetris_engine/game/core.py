from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional, Tuple, Union

import numpy as np

from .grid import GameGrid
from .pieces import Piece, random_piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)

CW = 1
CCW = -1


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class EngineStateError(RuntimeError):
    """Raised when the driver issues a command the session cannot take (e.g. before start)."""


@dataclass
class GameConfig:
    init_delay_ms: int = 1000
    min_delay_ms: int = 100
    delay_decrement_ms: int = 50
    delay_decrement_interval: int = 10
    spawn_y: int = 0
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class LockResult:
    lines_cleared: int
    points: int
    game_over: bool = False
    new_high_score: bool = False


@dataclass(frozen=True, eq=False)
class EngineSnapshot:
    board: np.ndarray
    piece: Optional[Piece]
    position: Tuple[int, int]
    score: int
    high_score: int
    delay_ms: int
    piece_count: int
    started: bool
    paused: bool
    game_over: bool


class BlockEngine:
    """State machine for one falling-block session.

    NOT_STARTED -> RUNNING <-> PAUSED, RUNNING -> GAME_OVER, and back to RUNNING
    through ``start()``/``restart()``. The engine does not own a timer: the
    driver calls ``tick()`` every ``delay_ms`` and re-reads the delay after each
    spawn.

    Not thread-safe. All calls against one instance must be serialized by the
    driver.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        high_score: int = 0,
        piece_factory: Optional[Callable[[], Piece]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.piece_factory = piece_factory or (lambda: random_piece(self.rng))
        self.grid = GameGrid()
        self.state = GameState.NOT_STARTED
        self.score = 0
        self.high_score = max(0, int(high_score))
        self.new_high_score = False
        self.piece_count = 0
        self.delay_ms = self.config.init_delay_ms
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0

    # -- state flags -------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.state in (GameState.RUNNING, GameState.PAUSED)

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def _require_session(self) -> None:
        if self.state is GameState.NOT_STARTED:
            raise EngineStateError("engine has not been started")

    def _accepting_commands(self) -> bool:
        self._require_session()
        return self.state is GameState.RUNNING

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> bool:
        if self.started:
            return False
        self.grid.reset()
        self.score = 0
        self.new_high_score = False
        self.piece_count = 0
        self.delay_ms = self.config.init_delay_ms
        self.current_piece = None
        self.state = GameState.RUNNING
        logger.info("Game started (delay %d ms, high score %d)", self.delay_ms, self.high_score)
        self.spawn_piece()
        return True

    def restart(self) -> None:
        self.state = GameState.NOT_STARTED
        self.start()

    def pause(self) -> bool:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
        return self.paused

    def resume(self) -> bool:
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
        return self.paused

    def toggle_pause(self) -> bool:
        if self.paused:
            return self.resume()
        return self.pause()

    # -- spawning ----------------------------------------------------------

    def spawn_piece(self) -> bool:
        """Bring in the next piece. Returns False when it does not fit (game over)."""
        self._require_session()
        if self.game_over:
            return False
        piece = self.piece_factory()
        x = self.grid.width // 2 - piece.width // 2
        y = self.config.spawn_y
        self.current_piece = piece
        self.current_x = x
        self.current_y = y
        if not self.grid.can_place(piece.cells_at(x, y)):
            self._end_game()
            return False

        self.piece_count += 1
        if self.piece_count % self.config.delay_decrement_interval == 0 and self.delay_ms > self.config.min_delay_ms:
            self.delay_ms = max(self.config.min_delay_ms, self.delay_ms - self.config.delay_decrement_ms)
            logger.debug("Piece %d: delay now %d ms", self.piece_count, self.delay_ms)
        return True

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_high_score = True
            logger.info("Game over with new high score %d", self.score)
        else:
            logger.info("Game over with score %d (high score %d)", self.score, self.high_score)

    # -- movement ----------------------------------------------------------

    def _fits(self, piece: Piece, x: int, y: int) -> bool:
        return self.grid.can_place(piece.cells_at(x, y))

    def move(self, dx: int) -> bool:
        if dx not in (-1, 1):
            raise ValueError(f"dx must be -1 or 1, got {dx}")
        if not self._accepting_commands():
            return False
        assert self.current_piece is not None
        new_x = self.current_x + dx
        if self._fits(self.current_piece, new_x, self.current_y):
            self.current_x = new_x
            return True
        return False

    def move_left(self) -> bool:
        return self.move(-1)

    def move_right(self) -> bool:
        return self.move(1)

    def rotate(self, direction: int = CW) -> bool:
        if direction not in (CW, CCW):
            raise ValueError(f"direction must be CW or CCW, got {direction}")
        if not self._accepting_commands():
            return False
        assert self.current_piece is not None
        if direction == CW:
            rotated = self.current_piece.rotated_cw()
        else:
            rotated = self.current_piece.rotated_ccw()
        # No kicks: the rotated shape must fit at the current anchor
        if self._fits(rotated, self.current_x, self.current_y):
            self.current_piece = rotated
            return True
        return False

    def rotate_cw(self) -> bool:
        return self.rotate(CW)

    def rotate_ccw(self) -> bool:
        return self.rotate(CCW)

    # -- gravity -----------------------------------------------------------

    def tick(self) -> Optional[LockResult]:
        """One gravity step. Returns the lock outcome when the piece landed, else None."""
        if not self._accepting_commands():
            return None
        assert self.current_piece is not None
        if self._fits(self.current_piece, self.current_x, self.current_y + 1):
            self.current_y += 1
            return None
        return self._lock_piece()

    def soft_drop(self) -> Optional[LockResult]:
        return self.tick()

    def hard_drop(self) -> Optional[LockResult]:
        if not self._accepting_commands():
            return None
        assert self.current_piece is not None
        new_y = self.current_y
        while self._fits(self.current_piece, self.current_x, new_y + 1):
            new_y += 1
        if new_y == self.current_y:
            return None
        self.current_y = new_y
        return self._lock_piece()

    def _lock_piece(self) -> LockResult:
        piece = self.current_piece
        assert piece is not None
        self.grid.place(piece.cells_at(self.current_x, self.current_y), int(piece.kind))
        lines = self.grid.clear_full_lines()
        points = self.rules.score_for_lock(lines)
        self.score += points
        logger.debug(
            "Locked %s at (%d, %d): %d lines, +%d points",
            piece.kind.name, self.current_x, self.current_y, lines, points,
        )
        spawned = self.spawn_piece()
        return LockResult(
            lines_cleared=lines,
            points=points,
            game_over=not spawned,
            new_high_score=(not spawned) and self.new_high_score,
        )

    def apply(self, action: Action) -> Union[bool, LockResult, None]:
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE_CW:
            return self.rotate_cw()
        if action == Action.ROTATE_CCW:
            return self.rotate_ccw()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return None

    # -- read-only views ---------------------------------------------------

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            board=self.grid.clone_state(),
            piece=self.current_piece,
            position=(self.current_x, self.current_y),
            score=self.score,
            high_score=self.high_score,
            delay_ms=self.delay_ms,
            piece_count=self.piece_count,
            started=self.started,
            paused=self.paused,
            game_over=self.game_over,
        )

    def get_state(self) -> np.ndarray:
        # Board copy with the falling piece overlaid as negative tags
        state = self.grid.clone_state()
        if self.current_piece is not None and self.started:
            value = -int(self.current_piece.kind)
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if self.grid.is_inside(x, y):
                    state[y, x] = value
        return state

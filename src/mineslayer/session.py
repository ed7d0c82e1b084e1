"""
Tick-driven session around a Mineslayer board.

Owns exactly one Board and applies queued tile updates followed by a
single propagation step per tick, tracking whether a redraw is needed.
Rendering and input devices stay outside; callers feed positions in and
read display values out.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Deque, Optional, Tuple

from .board import Board, BoardConfig
from .tile import TileDisplay

logger = logging.getLogger(__name__)


# ============================================================================
# Tile Updates
# ============================================================================

class TileUpdateType(Enum):
    """Kinds of player action a session understands."""

    REVEALED = auto()
    FLAG_PLACED = auto()


@dataclass(frozen=True)
class TileUpdate:
    """
    A pending player action.

    Attributes:
        position: (x, y) position, already clamped to the board.
        update_type: What the player asked for.
    """

    position: Tuple[int, int]
    update_type: TileUpdateType


FlagHandler = Callable[[Board, int, int], bool]


def ignore_flag(board: Board, x: int, y: int) -> bool:
    """Default flag handler: defer to the board's no-op hook."""
    return board.flag(x, y)


# ============================================================================
# Session
# ============================================================================

class GameSession:
    """
    Single owner of a board for one game loop.

    Each ``tick`` drains the update queue in order, then advances the
    flood fill by one step, so large reveals spread over several ticks.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        flag_handler: FlagHandler = ignore_flag,
    ) -> None:
        """
        Start a session with a freshly generated board.

        Args:
            config: Board configuration (default: 20x20 with 40 mines).
            rng: Random source shared by every board this session builds.
            flag_handler: Called for flag updates; returns True if it
                changed anything worth redrawing.
        """
        self.config = config or BoardConfig()
        self._rng = rng or random.Random()
        self._flag_handler = flag_handler
        self._pending: Deque[TileUpdate] = deque()
        self.board = Board(self.config, rng=self._rng)
        self.needs_redraw = True
        self.ticks = 0

    # ========================================================================
    # Input
    # ========================================================================

    def clamp_position(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp an arbitrary position onto the board."""
        x = min(max(x, 0), self.config.width - 1)
        y = min(max(y, 0), self.config.height - 1)
        return x, y

    def queue_reveal(self, x: int, y: int) -> TileUpdate:
        """Queue a reveal at the clamped position."""
        return self._queue(x, y, TileUpdateType.REVEALED)

    def queue_flag(self, x: int, y: int) -> TileUpdate:
        """Queue a flag action at the clamped position."""
        return self._queue(x, y, TileUpdateType.FLAG_PLACED)

    def _queue(self, x: int, y: int, update_type: TileUpdateType) -> TileUpdate:
        update = TileUpdate(self.clamp_position(x, y), update_type)
        self._pending.append(update)
        return update

    @property
    def pending_updates(self) -> int:
        return len(self._pending)

    # ========================================================================
    # Game Loop
    # ========================================================================

    def tick(self) -> bool:
        """
        Advance the session by one frame.

        Returns:
            True if the board changed since the last ``mark_drawn``.
        """
        self.ticks += 1
        if self._apply_updates():
            self.needs_redraw = True
        if self.board.propagate_step():
            self.needs_redraw = True
        return self.needs_redraw

    def _apply_updates(self) -> bool:
        """Apply every queued update in arrival order."""
        changed = False
        while self._pending:
            update = self._pending.popleft()
            x, y = update.position
            if update.update_type == TileUpdateType.REVEALED:
                self.board.reveal(x, y)
                changed = True
            elif self._flag_handler(self.board, x, y):
                changed = True
        return changed

    def run_until_settled(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until the board is settled and no updates are pending.

        Args:
            max_ticks: Upper bound on ticks (default: one per tile, which
                always suffices).

        Returns:
            Number of ticks performed.
        """
        if max_ticks is None:
            max_ticks = self.config.total_tiles + 1
        performed = 0
        while performed < max_ticks and (
            self._pending or not self.board.is_settled
        ):
            self.tick()
            performed += 1
        return performed

    def mark_drawn(self) -> None:
        """Record that the current state has been drawn."""
        self.needs_redraw = False

    def reset(self) -> None:
        """Discard the board and start over with the same configuration."""
        logger.debug("Resetting session after %d ticks", self.ticks)
        self.board = Board(self.config, rng=self._rng)
        self._pending.clear()
        self.needs_redraw = True
        self.ticks = 0

    # ========================================================================
    # Queries
    # ========================================================================

    def get(self, x: int, y: int) -> TileDisplay:
        """Get the display value at a position on the current board."""
        return self.board.get(x, y)

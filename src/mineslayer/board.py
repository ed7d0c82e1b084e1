"""
Board module for Mineslayer.

Implements mine placement, neighbor counting, the visibility overlay and
its level-by-level flood fill through empty tiles.
"""
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .tile import EMPTY, MINE, Tile, TileDisplay

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Offsets of the 8 surrounding positions
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (0, -1),
    (-1, 0),
    (1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

Grid = List[List[Tile]]


@dataclass
class BoardConfig:
    """
    Configuration for a Mineslayer board.

    Attributes:
        width: Number of columns (x axis).
        height: Number of rows (y axis).
        mine_count: Total mines to place.
    """

    width: int = 20
    height: int = 20
    mine_count: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_tiles(self) -> int:
        return self.width * self.height


# Preset board sizes
DEFAULT = BoardConfig(20, 20, 40)
LARGE = BoardConfig(40, 40, 120)


# ============================================================================
# Generation
# ============================================================================

def neighbor_positions(
    x: int, y: int, width: int, height: int
) -> List[Tuple[int, int]]:
    """
    Get the in-bounds positions surrounding ``(x, y)``.

    Args:
        x: Column of center position.
        y: Row of center position.
        width: Board width.
        height: Board height.

    Returns:
        List of (x, y) tuples, at most 8.
    """
    positions = []
    for delta_x, delta_y in NEIGHBOR_OFFSETS:
        new_x = x + delta_x
        new_y = y + delta_y
        if 0 <= new_x < width and 0 <= new_y < height:
            positions.append((new_x, new_y))
    return positions


def _place_mines(tiles: Grid, mine_count: int, rng: random.Random) -> None:
    """Place mines by picking random positions until enough are new."""
    width = len(tiles)
    height = len(tiles[0])
    mines_left = mine_count
    while mines_left > 0:
        x = rng.randrange(width)
        y = rng.randrange(height)
        if tiles[x][y] == EMPTY:
            tiles[x][y] = MINE
            mines_left -= 1


def _count_neighbors(tiles: Grid, x: int, y: int) -> None:
    """Turn an empty tile into a neighbor tile if it borders mines."""
    width = len(tiles)
    height = len(tiles[0])
    count = 0
    for neighbor_x, neighbor_y in neighbor_positions(x, y, width, height):
        if tiles[neighbor_x][neighbor_y].is_mine:
            count += 1
    if count > 0 and tiles[x][y] == EMPTY:
        tiles[x][y] = Tile.neighbor(count)


def generate_tiles(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Build a fresh grid of tiles indexed ``[x][y]``.

    Mines are placed by rejection sampling, so ``mine_count`` must be
    below ``width * height``; ``BoardConfig`` enforces that.

    Args:
        width: Number of columns.
        height: Number of rows.
        mine_count: Mines to place.
        rng: Random source (default: a fresh unseeded ``random.Random``).

    Returns:
        Column-major grid of tiles.
    """
    if mine_count >= width * height:
        raise ValueError(
            f"Cannot place {mine_count} mines on a {width}x{height} board"
        )
    rng = rng or random.Random()

    tiles = [[EMPTY for _ in range(height)] for _ in range(width)]
    _place_mines(tiles, mine_count, rng)
    _annotate(tiles)

    logger.debug(
        "Generated %dx%d board with %d mines", width, height, mine_count
    )
    return tiles


def layout_tiles(
    width: int, height: int, mines: Iterable[Tuple[int, int]]
) -> Grid:
    """
    Build a grid with mines at fixed positions.

    Args:
        width: Number of columns.
        height: Number of rows.
        mines: (x, y) positions of mines; duplicates are ignored.

    Returns:
        Column-major grid of tiles.

    Raises:
        IndexError: If a mine lies outside the board.
    """
    tiles = [[EMPTY for _ in range(height)] for _ in range(width)]
    for x, y in mines:
        if not (0 <= x < width and 0 <= y < height):
            raise IndexError(
                f"Mine ({x}, {y}) is outside the {width}x{height} board"
            )
        tiles[x][y] = MINE
    _annotate(tiles)
    return tiles


def _annotate(tiles: Grid) -> None:
    """Derive neighbor counts for every tile."""
    for x in range(len(tiles)):
        for y in range(len(tiles[0])):
            _count_neighbors(tiles, x, y)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Mineslayer game board.

    Holds the generated tiles and the visibility overlay. Visibility is the
    only mutable state: ``reveal`` sets a single position and
    ``propagate_step`` spreads visibility one hop through empty tiles.
    A board is never cleared; build a new one to start over.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Generate a new board.

        Args:
            config: Board configuration (default: 20x20 with 40 mines).
            seed: Seed for a fresh random source, ignored if ``rng`` given.
            rng: Random source used for mine placement.
        """
        self.config = config or BoardConfig()
        if rng is None:
            rng = random.Random(seed)

        grid = generate_tiles(
            self.config.width, self.config.height, self.config.mine_count, rng
        )
        self._load(grid)

    def _load(self, grid: Grid) -> None:
        """Adopt a generated grid and start with everything hidden."""
        self._tiles: Tuple[Tuple[Tile, ...], ...] = tuple(
            tuple(column) for column in grid
        )
        self._empty_mask = np.array(
            [[tile.is_empty for tile in column] for column in grid],
            dtype=bool,
        )
        self._visibility = np.zeros(
            (self.config.width, self.config.height), dtype=bool
        )

    @classmethod
    def from_mine_count(
        cls, mine_count: int, rng: Optional[random.Random] = None
    ) -> "Board":
        """Build a board of the default size with the given mine count."""
        config = BoardConfig(DEFAULT.width, DEFAULT.height, mine_count)
        return cls(config, rng=rng)

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Tuple[int, int]]
    ) -> "Board":
        """
        Build a board with mines at known positions.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (x, y) positions of mines.

        Returns:
            Board with all tiles hidden.
        """
        positions = set(mines)
        config = BoardConfig(width, height, len(positions))
        board = cls.__new__(cls)
        board.config = config
        board._load(layout_tiles(width, height, positions))
        return board

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _check_position(self, x: int, y: int) -> None:
        if not self.is_valid_position(x, y):
            raise IndexError(
                f"Position ({x}, {y}) is outside the "
                f"{self.config.width}x{self.config.height} board"
            )

    def _reachable_empty(self) -> np.ndarray:
        """Mask of empty tiles 4-adjacent to a visible empty tile."""
        sources = self._visibility & self._empty_mask
        reached = np.zeros_like(sources)
        reached[1:, :] |= sources[:-1, :]
        reached[:-1, :] |= sources[1:, :]
        reached[:, 1:] |= sources[:, :-1]
        reached[:, :-1] |= sources[:, 1:]
        return reached & self._empty_mask

    # ========================================================================
    # Visibility (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> None:
        """
        Make the tile at ``(x, y)`` visible.

        Applies to any tile, mines included, and never propagates by
        itself; call ``propagate_step`` or ``settle`` afterwards.

        Raises:
            IndexError: If the position is outside the board.
        """
        self._check_position(x, y)
        self._visibility[x, y] = True
        logger.debug("Revealed (%d, %d): %r", x, y, self._tiles[x][y])

    def propagate_step(self) -> bool:
        """
        Spread visibility one hop through empty tiles.

        Every hidden empty tile that has a visible empty tile among its
        4-connected neighbors becomes visible. The new overlay is computed
        entirely from the previous one, so one call advances the flood by
        exactly one level.

        Returns:
            True if any tile became visible.
        """
        visible = self._visibility
        updated = visible | self._reachable_empty()
        changed = not np.array_equal(updated, visible)
        self._visibility = updated
        return changed

    def settle(self) -> int:
        """
        Propagate until visibility stops changing.

        Returns:
            Number of steps that changed the overlay.
        """
        steps = 0
        while self.propagate_step():
            steps += 1
        if steps:
            logger.debug("Visibility settled after %d steps", steps)
        return steps

    def reveal_and_settle(self, x: int, y: int) -> int:
        """Reveal a tile and flood until stable. Returns the step count."""
        self.reveal(x, y)
        return self.settle()

    def flag(self, x: int, y: int) -> bool:
        """
        Flag placement hook.

        Boards carry no flag state; orchestrators that want flags keep them
        on their side. Validates the position and changes nothing.

        Returns:
            False, since nothing was changed.
        """
        self._check_position(x, y)
        return False

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def tiles(self) -> Tuple[Tuple[Tile, ...], ...]:
        """Immutable grid of tiles indexed ``[x][y]``."""
        return self._tiles

    @property
    def visibility(self) -> np.ndarray:
        """Copy of the visibility overlay indexed ``[x, y]``."""
        return self._visibility.copy()

    @property
    def visible_count(self) -> int:
        """Number of visible tiles."""
        return int(self._visibility.sum())

    @property
    def is_settled(self) -> bool:
        """Check if another propagation step would change nothing."""
        return not np.any(self._reachable_empty() & ~self._visibility)

    def tile_at(self, x: int, y: int) -> Tile:
        """Get tile content at position, ignoring visibility."""
        self._check_position(x, y)
        return self._tiles[x][y]

    def get(self, x: int, y: int) -> TileDisplay:
        """
        Get the display value at a position.

        Raises:
            IndexError: If the position is outside the board.
        """
        self._check_position(x, y)
        return TileDisplay(bool(self._visibility[x, y]), self._tiles[x][y])

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Get positions of all mines."""
        positions = []
        for x in range(self.config.width):
            for y in range(self.config.height):
                if self._tiles[x][y].is_mine:
                    positions.append((x, y))
        return positions

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array indexed ``[x, y]`` where:
                -1 = hidden
                0 = revealed empty
                1-8 = revealed neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.config.width, self.config.height), dtype=np.int8)
        for x in range(self.config.width):
            for y in range(self.config.height):
                obs[x, y] = self.get(x, y).to_observation()
        return obs

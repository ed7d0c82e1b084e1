"""
Tile module for the Mineslayer board.

Represents the immutable content of a single board position (empty,
neighbor count, or mine) and the transient display value that pairs
that content with its visibility.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

Color = Tuple[int, int, int]

MAX_NEIGHBORS = 8

HIDDEN_COLOR: Color = (128, 128, 128)
EMPTY_COLOR: Color = (230, 230, 230)
MINE_COLOR: Color = (200, 30, 30)

# Indexed by neighbor count - 1
NEIGHBOR_COLORS: Tuple[Color, ...] = (
    (200, 220, 255),
    (200, 240, 200),
    (255, 210, 200),
    (190, 190, 240),
    (230, 190, 170),
    (190, 230, 230),
    (210, 210, 210),
    (170, 170, 170),
)

MINE_LABEL = "*"


class TileKind(Enum):
    """The three shapes a tile can take."""

    EMPTY = auto()
    NEIGHBOR = auto()
    MINE = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Content of a single board position.

    Tiles are value objects and never change after generation. Build them
    through ``Tile.empty()``, ``Tile.neighbor(count)`` and ``Tile.mine()``.

    Attributes:
        kind: Which of the three shapes this tile is.
        count: Adjacent mine count; 1-8 for neighbors, 0 otherwise.
    """

    kind: TileKind = TileKind.EMPTY
    count: int = 0

    def __post_init__(self) -> None:
        """Reject counts that do not match the tile kind."""
        if self.kind == TileKind.NEIGHBOR:
            if not 1 <= self.count <= MAX_NEIGHBORS:
                raise ValueError(
                    f"Neighbor count must be in [1, {MAX_NEIGHBORS}], "
                    f"got {self.count}"
                )
        elif self.count != 0:
            raise ValueError(f"{self.kind.name} tile cannot carry a count")

    @classmethod
    def empty(cls) -> "Tile":
        return EMPTY

    @classmethod
    def neighbor(cls, count: int) -> "Tile":
        return cls(TileKind.NEIGHBOR, count)

    @classmethod
    def mine(cls) -> "Tile":
        return MINE

    @property
    def is_empty(self) -> bool:
        """Check if tile has no adjacent mines."""
        return self.kind == TileKind.EMPTY

    @property
    def is_neighbor(self) -> bool:
        """Check if tile borders at least one mine."""
        return self.kind == TileKind.NEIGHBOR

    @property
    def is_mine(self) -> bool:
        """Check if tile is a mine."""
        return self.kind == TileKind.MINE

    def __repr__(self) -> str:
        if self.kind == TileKind.NEIGHBOR:
            return f"Neighbor({self.count})"
        return self.kind.name.capitalize()


EMPTY = Tile(TileKind.EMPTY)
MINE = Tile(TileKind.MINE)


# ============================================================================
# Display Value
# ============================================================================

@dataclass(frozen=True)
class TileDisplay:
    """
    Read-only pairing of a tile with its visibility.

    Returned by ``Board.get``; the board never stores these. While hidden,
    every tile shares the same color and label so nothing leaks.

    Attributes:
        visible: Whether the tile has been revealed.
        tile: The underlying tile content.
    """

    visible: bool
    tile: Tile

    @property
    def color(self) -> Color:
        """RGB color a renderer should paint this tile with."""
        if not self.visible:
            return HIDDEN_COLOR
        if self.tile.is_mine:
            return MINE_COLOR
        if self.tile.is_neighbor:
            return NEIGHBOR_COLORS[self.tile.count - 1]
        return EMPTY_COLOR

    @property
    def label(self) -> str:
        """Text a renderer should draw on this tile."""
        if not self.visible:
            return ""
        if self.tile.is_mine:
            return MINE_LABEL
        if self.tile.is_neighbor:
            return str(self.tile.count)
        return ""

    def to_observation(self) -> int:
        """
        Convert display value to a compact integer.

        Returns:
            -1: Hidden tile
            0: Revealed empty tile
            1-8: Revealed neighbor with adjacent mine count
            9: Revealed mine
        """
        if not self.visible:
            return -1
        if self.tile.is_mine:
            return 9
        return self.tile.count

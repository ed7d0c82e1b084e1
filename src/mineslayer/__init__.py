"""
Mineslayer board core.

Provides mine placement, neighbor counting, visibility flood fill and a
tick-driven session that owns a board.
"""
from .tile import Tile, TileDisplay, TileKind, EMPTY, MINE
from .board import (
    Board,
    BoardConfig,
    DEFAULT,
    LARGE,
    generate_tiles,
    layout_tiles,
    neighbor_positions,
)
from .session import GameSession, TileUpdate, TileUpdateType

__all__ = [
    "Tile",
    "TileDisplay",
    "TileKind",
    "EMPTY",
    "MINE",
    "Board",
    "BoardConfig",
    "DEFAULT",
    "LARGE",
    "generate_tiles",
    "layout_tiles",
    "neighbor_positions",
    "GameSession",
    "TileUpdate",
    "TileUpdateType",
]

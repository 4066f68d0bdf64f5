"""Grid addressing and direction helpers for the bounded vault grid."""

from enum import IntFlag
from typing import Tuple, Dict, List

# Grid extends from -RADIUS to +RADIUS on both axes
RADIUS = 200
GRID_SIZE = RADIUS * 2 + 1

ORIGIN = (0, 0)


class PathFlag(IntFlag):
    """Passages leading out of a room, one bit per direction."""
    NONE = 0
    SOUTH = 0x1
    EAST = 0x2
    NORTH = 0x4
    WEST = 0x8
    ALL = 0xF


# Screen coordinates: y grows downwards
DIRECTION_VECTORS: Dict[PathFlag, Tuple[int, int]] = {
    PathFlag.SOUTH: (0, 1),
    PathFlag.EAST: (1, 0),
    PathFlag.NORTH: (0, -1),
    PathFlag.WEST: (-1, 0),
}

# Order used by discovery and the router
CARDINALS: List[PathFlag] = [PathFlag.SOUTH, PathFlag.EAST, PathFlag.NORTH, PathFlag.WEST]

OPPOSITES: Dict[PathFlag, PathFlag] = {
    PathFlag.SOUTH: PathFlag.NORTH,
    PathFlag.EAST: PathFlag.WEST,
    PathFlag.NORTH: PathFlag.SOUTH,
    PathFlag.WEST: PathFlag.EAST,
}


def in_bounds(x: int, y: int) -> bool:
    return abs(x) <= RADIUS and abs(y) <= RADIUS


def room_id(x: int, y: int) -> int:
    """Map an in-bounds coordinate to its dense scalar id.

    The caller must check in_bounds first; ids for coordinates outside the
    grid collide with valid ones.
    """
    return (x + RADIUS) + (y + RADIUS) * GRID_SIZE


def opposite(direction: PathFlag) -> PathFlag:
    return OPPOSITES[direction]


def step(position: Tuple[int, int], direction: PathFlag) -> Tuple[int, int]:
    """Return the coordinate one room away in the given direction."""
    dx, dy = DIRECTION_VECTORS[direction]
    return position[0] + dx, position[1] + dy


def edge_mask(x: int, y: int) -> PathFlag:
    """Return the directions not blocked by the grid edge at (x, y).

    Rooms on the outermost ring cannot open toward the outside of the grid.
    """
    mask = PathFlag.ALL
    if y == RADIUS:
        mask &= ~PathFlag.SOUTH
    if x == RADIUS:
        mask &= ~PathFlag.EAST
    if y == -RADIUS:
        mask &= ~PathFlag.NORTH
    if x == -RADIUS:
        mask &= ~PathFlag.WEST
    return mask

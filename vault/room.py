"""Room record stored in the vault map."""

from enum import IntFlag
from typing import Tuple

from .grid import PathFlag


class RoomFlag(IntFlag):
    """User annotations on a room. Only one is set at a time."""
    NONE = 0
    PORTAL = 0x1
    AVOID = 0x2
    IMPORTANT_1 = 0x4
    IMPORTANT_2 = 0x8


class Room:
    """A single room of the vault, discovered or visited."""
    def __init__(self, position: Tuple[int, int], paths: PathFlag = PathFlag.ALL,
                 flags: RoomFlag = RoomFlag.NONE, visited: bool = False):
        self.position = position
        self.paths = PathFlag(paths)
        self.flags = RoomFlag(flags)
        self.visited = visited

    def __repr__(self):
        return f"Room({self.position}, paths={int(self.paths):#x}, flags={self.flags.name}, visited={self.visited})"

    @property
    def is_portal(self) -> bool:
        return self.flags == RoomFlag.PORTAL

    @property
    def is_avoided(self) -> bool:
        return bool(self.flags & RoomFlag.AVOID)

    def has_passage(self, direction: PathFlag) -> bool:
        return bool(self.paths & direction)

    def toggle_passage(self, direction: PathFlag):
        self.paths ^= direction

"""Vault package.

Map state (grid addressing, rooms, discovery, move history) and the router
that finds the way back to the portal room.
"""

from .grid import PathFlag, ORIGIN, RADIUS
from .room import Room, RoomFlag
from .vault_map import VaultMap
from .history import PathHistory, HistoryEntry
from .session import Session

__all__ = ["PathFlag", "ORIGIN", "RADIUS", "Room", "RoomFlag", "VaultMap",
           "PathHistory", "HistoryEntry", "Session"]

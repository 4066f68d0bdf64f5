from typing import Optional, List, Tuple

from .grid import ORIGIN, PathFlag, in_bounds, step, opposite
from .room import Room, RoomFlag
from .vault_map import VaultMap
from .history import PathHistory, HISTORY_CAPACITY
from . import pathfinding


class Session:
    """Mapping session: discovered rooms, recent moves, player position and route home.

    Every command runs to completion, route included, before returning.
    Rejected commands return False and leave the state untouched.
    """
    def __init__(self, history_capacity: int = HISTORY_CAPACITY,
                 max_route_length: int = pathfinding.MAX_ROUTE_LENGTH):
        self.vault_map = VaultMap()
        self.history = PathHistory(history_capacity)
        self.max_route_length = max_route_length
        self.origin = ORIGIN
        self.position = ORIGIN
        self.picking_direction = True
        self.route: List[Tuple[int, int]] = []

    # --- Read access ---
    @property
    def current_room(self) -> Optional[Room]:
        return self.vault_map.get_room(self.position)

    def rooms(self) -> List[Room]:
        return self.vault_map.get_rooms()

    def route_positions(self) -> List[Tuple[int, int]]:
        return pathfinding.route_positions(self.route, self.origin)

    # --- Lifecycle ---
    def initialize_map(self, entry_passages: PathFlag) -> bool:
        """Place the portal room with the passage the player left through."""
        if not self.picking_direction:
            return False
        self.vault_map.add_room(self.origin, entry_passages, RoomFlag.PORTAL)
        self.vault_map.add_surrounding(self.origin)
        self.picking_direction = False
        return True

    def reset_map(self):
        self.vault_map.clear()
        self.history.reset()
        self.position = self.origin
        self.route = []
        self.picking_direction = True

    def update_route(self):
        self.route = pathfinding.find_route(self.vault_map, self.position, self.origin, self.max_route_length)

    # --- Commands ---
    def move_player(self, direction: PathFlag) -> bool:
        """Step into the neighbouring room if the current room has a passage that way."""
        if self.picking_direction:
            return False
        target = step(self.position, direction)
        if not in_bounds(*target):
            return False
        room = self.current_room
        if room is None or not room.has_passage(direction):
            return False

        self.position = target
        self.history.push(target, opposite(direction))
        self.vault_map.add_room(target, PathFlag.ALL, RoomFlag.NONE, visited=False)
        self.vault_map.get_room(target).visited = True
        self.vault_map.add_surrounding(target)
        self.update_route()
        return True

    def toggle_room_link(self, direction: PathFlag) -> bool:
        """Open or close the passage between the current room and its neighbour."""
        if self.picking_direction:
            return False
        target = step(self.position, direction)
        if not in_bounds(*target):
            return False
        room = self.current_room
        if room is None:
            return False
        neighbor = self.vault_map.get_room(target)
        if neighbor is None:
            if room.is_portal:
                return False
            self.vault_map.add_room(target, PathFlag.ALL, RoomFlag.NONE, visited=False)
            neighbor = self.vault_map.get_room(target)

        if not self.vault_map.toggle_link(room, neighbor, direction):
            return False
        self.update_route()
        return True

    def toggle_annotation(self, kind: RoomFlag) -> bool:
        """Mark the current room with kind, or clear it if already marked."""
        if self.picking_direction or kind in (RoomFlag.NONE, RoomFlag.PORTAL):
            return False
        room = self.current_room
        if room is None or room.is_portal:
            return False
        was_avoided = room.is_avoided
        room.flags = RoomFlag.NONE if room.flags == kind else kind
        if was_avoided or room.is_avoided:
            self.update_route()
        return True

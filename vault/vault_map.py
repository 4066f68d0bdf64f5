from typing import Optional, List, Tuple, Dict, Iterator

from .grid import PathFlag, CARDINALS, in_bounds, room_id, opposite, step, edge_mask
from .room import Room, RoomFlag

# Offsets of the eight rooms around a position, row by row
SURROUNDING_OFFSETS = [(-1, -1), (0, -1), (1, -1),
                       (-1, 0), (1, 0),
                       (-1, 1), (0, 1), (1, 1)]


class VaultMap:
    """Sparse table of discovered rooms keyed by their grid id."""
    def __init__(self):
        self.rooms: Dict[int, Room] = {}

    def __len__(self):
        return len(self.rooms)

    def __contains__(self, position: Tuple[int, int]) -> bool:
        return in_bounds(*position) and room_id(*position) in self.rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(self.rooms.values())

    def get_rooms(self) -> List[Room]:
        """Return a snapshot list of all known rooms."""
        return list(self.rooms.values())

    def get_room(self, position: Tuple[int, int]) -> Optional[Room]:
        if not in_bounds(*position):
            return None
        return self.rooms.get(room_id(*position))

    def clear(self):
        self.rooms.clear()

    # --- Discovery ---
    def add_room(self, position: Tuple[int, int], paths: PathFlag, flags: RoomFlag = RoomFlag.NONE,
                 visited: bool = True) -> bool:
        """Insert a room if none exists at position. Existing rooms are left untouched.

        Returns:
            True if a new room was created
        """
        key = room_id(*position)
        if key in self.rooms:
            return False
        self.rooms[key] = Room(position, paths, flags, visited)
        return True

    def add_surrounding(self, position: Tuple[int, int]):
        """Discover the eight rooms around position.

        Rooms seen for the first time start with every passage open except the
        ones blocked by the grid edge. Cardinal neighbours also inherit the
        mover's own wall: if the mover has no passage toward a neighbour, the
        neighbour has none back. Rooms already on the map are only ever narrowed.
        """
        mover = self.get_room(position)
        paths = mover.paths if mover else PathFlag.ALL
        x, y = position

        for dx, dy in SURROUNDING_OFFSETS:
            nx, ny = x + dx, y + dy
            if not in_bounds(nx, ny):
                continue

            open_mask = edge_mask(nx, ny)
            if not (dx and dy):
                open_mask &= self._facing_mask(paths, dx, dy)

            neighbor = self.rooms.get(room_id(nx, ny))
            if neighbor is not None:
                neighbor.paths &= open_mask
            else:
                self.rooms[room_id(nx, ny)] = Room((nx, ny), open_mask, RoomFlag.NONE, visited=False)

    @staticmethod
    def _facing_mask(paths: PathFlag, dx: int, dy: int) -> PathFlag:
        """Mask for a cardinal neighbour at offset (dx, dy) from a room with the given paths.

        Only the neighbour's passage pointing back at the mover is constrained;
        it stays open when the mover declares the matching passage.
        """
        mask = PathFlag.NONE
        for direction in CARDINALS:
            back = step((dx, dy), direction) == (0, 0)
            if not back or paths & opposite(direction):
                mask |= direction
        return mask

    # --- Manual edits ---
    def toggle_link(self, room: Room, neighbor: Room, direction: PathFlag) -> bool:
        """Flip the passage between two adjacent rooms.

        Args:
            room: Room the passage leaves from
            neighbor: Room on the other side of the passage
            direction: Direction from room to neighbor

        Returns:
            False if either room is the portal (its passages are fixed)
        """
        if room.is_portal or neighbor.is_portal:
            return False
        room.toggle_passage(direction)
        if neighbor is not room:
            neighbor.toggle_passage(opposite(direction))
        return True

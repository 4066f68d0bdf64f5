"""Route finding from the player back to the portal room."""

import heapq
from dataclasses import dataclass, field
from itertools import count
from typing import Tuple, List, Optional

from .grid import ORIGIN, CARDINALS, DIRECTION_VECTORS, PathFlag, in_bounds, opposite, step
from .room import Room

# Initial limit on route length, tightened once the portal is reached
MAX_ROUTE_LENGTH = 64

# Heuristic multipliers for entering a room
AVOID_SCALE = 5.0
UNVISITED_SCALE = 1.5
UNDISCOVERED_SCALE = 3.0
VISITED_SCALE = 1.0


@dataclass
class SearchNode:
    position: Tuple[int, int]
    parent_dirs: List[Tuple[int, int]] = field(default_factory=list)
    path_length: int = 0
    heuristic: int = 0


def squared_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def edge_cost_scale(room: Optional[Room]) -> float:
    """Return the heuristic multiplier for stepping into a room.

    Undiscovered rooms are riskier than discovered but unvisited ones, and
    rooms marked avoid are the most expensive. Nothing is ever blocked.
    """
    if room is None:
        return UNDISCOVERED_SCALE
    if room.is_avoided:
        return AVOID_SCALE
    if not room.visited:
        return UNVISITED_SCALE
    return VISITED_SCALE


def _offset(position: Tuple[int, int], vector: Tuple[int, int]) -> Tuple[int, int]:
    return position[0] + vector[0], position[1] + vector[1]


def find_route(vault_map, start: Tuple[int, int], goal: Tuple[int, int] = ORIGIN,
               max_length: int = MAX_ROUTE_LENGTH) -> List[Tuple[int, int]]:
    """Best-first search over the known map from start to goal.

    Undiscovered rooms are assumed fully open. The queue is ordered by a
    scaled squared distance to the goal; the search keeps running after the
    goal is first reached, but nothing longer than that first route is expanded.

    Args:
        vault_map: VaultMap holding the discovered rooms
        start: Player position
        goal: Target position, the portal room by default
        max_length: Longest route considered before the goal is found

    Returns:
        Unit vectors leading from the goal back toward start, one per step.
        Empty if start is the goal or no route exists.
    """
    if start == goal:
        return []

    nodes = {start: SearchNode(start, [], 0, squared_distance(start, goal))}
    order = count()
    pq = [(nodes[start].heuristic, next(order), start)]
    bound = max_length

    while pq:
        _, _, position = heapq.heappop(pq)
        node = nodes[position]
        if node.path_length + 1 > bound:
            continue

        room = vault_map.get_room(position)
        paths = room.paths if room is not None else PathFlag.ALL

        for direction in CARDINALS:
            if not paths & direction:
                continue
            next_pos = step(position, direction)
            if not in_bounds(*next_pos):
                continue

            back = DIRECTION_VECTORS[opposite(direction)]
            existing = nodes.get(next_pos)
            if existing is not None:
                # Another way in; only worth remembering if it comes from closer to start
                if node.path_length < existing.path_length:
                    existing.parent_dirs.append(back)
                continue

            scale = edge_cost_scale(vault_map.get_room(next_pos))
            heuristic = int(squared_distance(next_pos, goal) * scale)
            nodes[next_pos] = SearchNode(next_pos, [back], node.path_length + 1, heuristic)
            heapq.heappush(pq, (heuristic, next(order), next_pos))

            if next_pos == goal:
                bound = node.path_length + 1

    goal_node = nodes.get(goal)
    if goal_node is None:
        return []

    route = []
    position = goal
    node = goal_node
    while node.path_length != 0:
        best = node.parent_dirs[0]
        for candidate in node.parent_dirs:
            if nodes[_offset(position, candidate)].path_length < nodes[_offset(position, best)].path_length:
                best = candidate
        route.append(best)
        position = _offset(position, best)
        node = nodes[position]
    return route


def route_positions(route: List[Tuple[int, int]], origin: Tuple[int, int] = ORIGIN) -> List[Tuple[int, int]]:
    """Expand a route into the rooms it passes through, starting at origin."""
    positions = [origin]
    for vector in route:
        positions.append(_offset(positions[-1], vector))
    return positions

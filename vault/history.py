"""Short trail of the player's most recent moves."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional, Tuple

from .grid import PathFlag

HISTORY_CAPACITY = 10


@dataclass(frozen=True)
class HistoryEntry:
    position: Tuple[int, int]
    arrived_from: PathFlag  # direction pointing back to the previous room


class PathHistory:
    """Fixed-size ring of moves. Once full, each push drops the oldest entry."""
    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self.capacity = capacity
        self._entries: Deque[HistoryEntry] = deque(maxlen=capacity)

    def __len__(self):
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        """Iterate from oldest to newest."""
        return iter(self._entries)

    def push(self, position: Tuple[int, int], arrived_from: PathFlag):
        self._entries.append(HistoryEntry(position, arrived_from))

    def reset(self):
        self._entries.clear()

    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

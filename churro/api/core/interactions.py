from collections import deque
from typing import Iterable, Iterator, List

from churro.api.services.models import InteractionEvent

# Number of recent interactions kept and shown to the model
INTERACTION_HISTORY_LIMIT = 10


class InteractionBuffer:
    """Fixed-capacity FIFO of interaction events; the oldest is dropped when full."""

    def __init__(self, capacity: int = INTERACTION_HISTORY_LIMIT):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._events = deque(maxlen=capacity)

    @classmethod
    def from_events(cls, events: Iterable[InteractionEvent], capacity: int = INTERACTION_HISTORY_LIMIT) -> "InteractionBuffer":
        buffer = cls(capacity)
        for event in events:
            buffer.push(event)
        return buffer

    def push(self, event: InteractionEvent) -> None:
        self._events.append(event)

    def to_list(self) -> List[InteractionEvent]:
        return list(self._events)

    def __len__(self):
        return len(self._events)

    def __iter__(self) -> Iterator[InteractionEvent]:
        return iter(self._events)

"""
Discrete notifications emitted by the simulation core.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from .config import config


class EventType(Enum):
    FUEL_DEPLETED = 'fuel_depleted'
    COLLISION = 'collision'
    DESTROYED = 'destroyed'
    VICTORY = 'victory'
    ROUND_STARTED = 'round_started'


@dataclass(frozen=True)
class Event:
    """
    One logged notification.

    Attributes
    ----------
    id : int
        Monotonically increasing identifier, unique per session
    time : float
        Session clock reading when the event was logged [s]
    type : EventType
        What happened
    round_id : int
        Round the event belongs to
    data : dict
        Event-specific details (speeds, planet index, planet count...)
    """
    id: int
    time: float
    type: EventType
    round_id: int
    data: Dict[str, Any] = field(default_factory=dict)

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "time": self.time,
            "type": self.type.value,
            "round_id": self.round_id,
            "data": dict(self.data),
        }


class EventLog:
    """
    Event history with incremental reads.

    Only the newest ``max_history`` events are kept (default
    ``config.MAX_EVENT_HISTORY``); ids keep counting past dropped events.
    """

    def __init__(self, max_history: Optional[int] = None) -> None:
        if max_history is None:
            max_history = config.MAX_EVENT_HISTORY
        self.events: Deque[Event] = deque(maxlen=max(int(max_history), 1))
        self._next_event_id = 1

    def emit(self, time_s: float, type_: EventType, round_id: int,
             data: Dict[str, Any] = None) -> Event:
        ev = Event(
            id=self._next_event_id,
            time=time_s,
            type=type_,
            round_id=round_id,
            data=data or {},
        )
        self._next_event_id += 1
        self.events.append(ev)
        return ev

    def since(self, last_event_id: int) -> List[Event]:
        # newest first, stopping at the first id already seen
        newer = []
        for ev in reversed(self.events):
            if ev.id <= last_event_id:
                break
            newer.append(ev)
        newer.reverse()
        return newer

    def of_type(self, type_: EventType) -> List[Event]:
        return [ev for ev in self.events if ev.type == type_]

    @property
    def last_id(self) -> int:
        return self._next_event_id - 1

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

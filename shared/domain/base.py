"""
Base Domain Classes

Building blocks shared by the slot and booking domains:
- Entity: Objects with unique identity
- ValueObject: Immutable objects compared by value
- Aggregate: Consistency boundaries that record domain events
- DomainEvent: Something that happened, published after commit
"""

from abc import ABC
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """
    Base class for all entities

    Two entities are equal if their IDs are equal.
    """
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and compared by their attributes.
    """
    pass


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Base class for aggregate roots

    Events recorded here are handed to the unit of work, which publishes
    them only once the surrounding transaction has committed.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Copy of the events recorded since the last clear"""
        return self._events.copy()


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Subclasses add their payload as extra dataclass fields.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: UUID = None

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def payload(self) -> dict:
        """Subclass fields only, rendered as strings where not JSON-native"""
        base_names = {f.name for f in fields(DomainEvent)}
        data = asdict(self)
        return {
            name: value if isinstance(value, (int, float, bool, str, list, type(None))) else str(value)
            for name, value in data.items()
            if name not in base_names
        }

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.event_type,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
            **self.payload(),
        }

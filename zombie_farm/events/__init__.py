"""Farm domain events and the bus that publishes them."""

from zombie_farm.events.domain_events import (
    ContainmentChangedEvent,
    MoodChangedEvent,
    ShelterChangedEvent,
    ZombieDecayedEvent,
    ZombieFedEvent,
    ZombiePettedEvent,
    ZombiePlantedEvent,
    ZombieRaisedEvent,
)
from zombie_farm.events.event_bus import EventBus

__all__ = [
    "ContainmentChangedEvent",
    "EventBus",
    "MoodChangedEvent",
    "ShelterChangedEvent",
    "ZombieDecayedEvent",
    "ZombieFedEvent",
    "ZombiePettedEvent",
    "ZombiePlantedEvent",
    "ZombieRaisedEvent",
]

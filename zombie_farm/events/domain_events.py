"""Domain events emitted by farm transitions.

Events are frozen dataclasses describing a fact that already happened. The
engine returns them alongside each new snapshot and, when a bus is
attached, publishes them; it never reads them back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

from zombie_farm.enums import QualityTier, ZombieMood, ZombieType


@dataclass(frozen=True)
class ZombiePlantedEvent:
    """A seed went into a plot.

    Attributes:
        plot_id: Plot that is now occupied
        zombie_id: ID of the growing zombie
        zombie_type: Type derived from the seed
        seed: Resource consumed
        at: Planting time
    """

    plot_id: str
    zombie_id: str
    zombie_type: ZombieType
    seed: str
    at: float


@dataclass(frozen=True)
class ZombieRaisedEvent:
    """A ready zombie left its plot and became autonomous."""

    plot_id: str
    zombie_id: str
    zombie_type: ZombieType
    quality: QualityTier
    max_hp: int
    at: float


@dataclass(frozen=True)
class ZombieDecayedEvent:
    """One or more neglected days were applied to a zombie.

    Attributes:
        zombie_id: ID of the zombie
        days: Neglected days applied in this evaluation
        condition_before: Condition fraction before the days were applied
        condition_after: Condition fraction afterwards
        happiness_before: Happiness before
        happiness_after: Happiness afterwards
        hit_floor: True if condition is now at its quality floor
        at: Evaluation time
    """

    zombie_id: str
    days: int
    condition_before: float
    condition_after: float
    happiness_before: float
    happiness_after: float
    hit_floor: bool
    at: float


@dataclass(frozen=True)
class ZombieFedEvent:
    zombie_id: str
    happiness_gained: float
    new_happiness: float
    consumed: Dict[str, Decimal] = field(default_factory=dict)
    at: float = 0.0


@dataclass(frozen=True)
class ZombiePettedEvent:
    zombie_id: str
    happiness_gained: float
    new_happiness: float
    at: float = 0.0


@dataclass(frozen=True)
class MoodChangedEvent:
    """Happiness crossed a mood threshold."""

    zombie_id: str
    old_mood: ZombieMood
    new_mood: ZombieMood
    happiness: float
    at: float


@dataclass(frozen=True)
class ContainmentChangedEvent:
    zombie_id: str
    contained: bool
    at: float


@dataclass(frozen=True)
class ShelterChangedEvent:
    zombie_id: str
    sheltered: bool
    at: float

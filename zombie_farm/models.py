"""Domain model for the zombie farm.

Every value here is a frozen dataclass. Transitions never modify an object
in place; they build replacements with ``dataclasses.replace`` and new
dicts, so a snapshot handed to the engine is never changed by it.

Plots are a two-case variant: an ``EmptyPlot`` has no occupant and no care
level, an ``OccupiedPlot`` always has both. Code that needs the occupant
must narrow with ``isinstance`` first.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from zombie_farm.enums import (
    QualityTier,
    ZombieMood,
    ZombieStatus,
    ZombieTier,
    ZombieType,
)
from zombie_farm.exceptions import PlotNotFoundError, ZombieNotFoundError

Timestamp = float  # seconds since the epoch


@dataclass(frozen=True)
class Coordinates:
    x: float
    y: float


@dataclass(frozen=True)
class GrowthAnchor:
    """Everything the growth calculator needs to know about a planting.

    Attributes:
        planted_at: When the seed went into the ground
        zombie_type: Determines the growth curve
        boosted_time: Seconds shaved off the growth time at planting
    """

    planted_at: Timestamp
    zombie_type: ZombieType
    boosted_time: float = 0.0


@dataclass(frozen=True)
class GrowingZombie:
    """A zombie still in the ground.

    Its stage is never stored; it is always recomputed from ``buried_at``.
    """

    id: str
    zombie_type: ZombieType
    buried_at: Timestamp
    happiness: float = 50
    boosted_time: float = 0.0

    @property
    def anchor(self) -> GrowthAnchor:
        return GrowthAnchor(self.buried_at, self.zombie_type, self.boosted_time)


@dataclass(frozen=True)
class EmptyPlot:
    id: str
    coordinates: Optional[Coordinates] = None

    @property
    def is_placed(self) -> bool:
        return self.coordinates is not None


@dataclass(frozen=True)
class OccupiedPlot:
    id: str
    coordinates: Coordinates
    zombie: GrowingZombie
    care_level: float = 50

    def __post_init__(self) -> None:
        if not 0 <= self.care_level <= 100:
            raise ValueError(f"care_level must be in [0, 100], got {self.care_level}")

    @property
    def is_placed(self) -> bool:
        return True

    def vacate(self) -> EmptyPlot:
        return EmptyPlot(self.id, self.coordinates)


Plot = Union[EmptyPlot, OccupiedPlot]


@dataclass(frozen=True)
class DecayState:
    """Care bookkeeping for a raised zombie.

    Attributes:
        last_evaluated_at: Start of the first day not yet applied
        last_fed_at: Time of the most recent feeding, if any
        last_pet_at: Time of the most recent petting, if any
        condition: Remaining fraction of full condition, 0.0 to 1.0 (1.0 is the
            0-100 wellbeing scale at 100). Never below the quality floor.
        sheltered: Whether the zombie decays at the sheltered rate
        contained: Whether decay and happiness loss are paused
    """

    last_evaluated_at: Timestamp
    last_fed_at: Optional[Timestamp] = None
    last_pet_at: Optional[Timestamp] = None
    condition: float = 1.0
    sheltered: bool = False
    contained: bool = False

    @property
    def decay_amount(self) -> float:
        """Fraction of full condition lost so far."""
        return 1.0 - self.condition


@dataclass(frozen=True)
class StatBlock:
    """Combat stats a zombie had when it was raised, before any decay."""

    max_hp: int
    attack: int
    defense: int


@dataclass(frozen=True)
class RaisedZombie:
    """An autonomous zombie walking around the farm."""

    id: str
    zombie_type: ZombieType
    tier: ZombieTier
    quality: QualityTier
    planted_at: Timestamp
    matured_at: Timestamp
    harvested_at: Timestamp
    position: Coordinates
    target_position: Coordinates
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    speed: int
    decay: DecayState
    happiness: float = 50
    level: int = 1
    experience: int = 0
    permanent_injuries: FrozenSet[str] = frozenset()
    battle_scars: int = 0
    combat_refusal_chance: float = 0.0
    status: ZombieStatus = ZombieStatus.WANDERING
    mood: ZombieMood = ZombieMood.HAPPY
    is_wandering: bool = True
    mutations: Dict[str, float] = field(default_factory=dict)
    raised_stats: Optional[StatBlock] = None

    def __post_init__(self) -> None:
        if self.current_hp > self.max_hp:
            raise ValueError(
                f"Zombie {self.id}: current_hp {self.current_hp} exceeds max_hp {self.max_hp}"
            )
        if not 0 <= self.happiness <= 100:
            raise ValueError(f"Zombie {self.id}: happiness {self.happiness} out of range")
        if not 0.0 <= self.combat_refusal_chance <= 1.0:
            raise ValueError(f"Zombie {self.id}: combat_refusal_chance out of range")
        if self.decay.contained and (self.status is ZombieStatus.WANDERING or self.is_wandering):
            raise ValueError(f"Zombie {self.id}: a contained zombie cannot be wandering")

    @property
    def mutation_count(self) -> int:
        return len(self.mutations)

    @property
    def peak_stats(self) -> StatBlock:
        """Undecayed stats; zombies built without them treat current stats as peak."""
        if self.raised_stats is not None:
            return self.raised_stats
        return StatBlock(self.max_hp, self.attack, self.defense)

    @property
    def condition(self) -> float:
        return self.decay.condition

    @property
    def contained(self) -> bool:
        return self.decay.contained

    def with_decay(self, **changes: Any) -> "RaisedZombie":
        return replace(self, decay=replace(self.decay, **changes))


@dataclass(frozen=True)
class Caretaker:
    """Progression record of the player tending the farm."""

    experience: int = 0


@dataclass(frozen=True)
class FarmSnapshot:
    """Read-only view of the farm state the engine is allowed to touch."""

    plots: Dict[str, Plot] = field(default_factory=dict)
    zombies: Dict[str, RaisedZombie] = field(default_factory=dict)
    inventory: Dict[str, Decimal] = field(default_factory=dict)
    caretaker: Optional[Caretaker] = None
    activity: Dict[str, int] = field(default_factory=dict)

    def get_plot(self, plot_id: str) -> Plot:
        plot = self.plots.get(plot_id)
        if plot is None:
            raise PlotNotFoundError(plot_id)
        return plot

    def get_zombie(self, zombie_id: str) -> RaisedZombie:
        zombie = self.zombies.get(zombie_id)
        if zombie is None:
            raise ZombieNotFoundError(zombie_id)
        return zombie

    def with_plot(self, plot: Plot) -> "FarmSnapshot":
        return replace(self, plots={**self.plots, plot.id: plot})

    def with_zombie(self, zombie: RaisedZombie) -> "FarmSnapshot":
        return replace(self, zombies={**self.zombies, zombie.id: zombie})

    def with_zombies(self, zombies: Dict[str, RaisedZombie]) -> "FarmSnapshot":
        return replace(self, zombies={**self.zombies, **zombies})

    def with_inventory(self, inventory: Dict[str, Decimal]) -> "FarmSnapshot":
        return replace(self, inventory=dict(inventory))

    def with_activity(self, name: str, amount: int = 1) -> "FarmSnapshot":
        activity = dict(self.activity)
        activity[name] = activity.get(name, 0) + amount
        return replace(self, activity=activity)

    def with_experience(self, amount: int) -> "FarmSnapshot":
        """Grant caretaker experience; a farm without a caretaker is unchanged."""
        if self.caretaker is None:
            return self
        return replace(
            self, caretaker=Caretaker(experience=self.caretaker.experience + amount)
        )


@dataclass(frozen=True)
class TransitionOutcome:
    """A new snapshot plus the events describing what changed.

    Attributes:
        snapshot: The farm after the transition
        events: Domain events, in the order they happened
        details: Transition-specific extras (e.g. {"fed": [...], "skipped": [...]})
    """

    snapshot: FarmSnapshot
    events: Tuple[object, ...] = ()
    details: Dict[str, Any] = field(default_factory=dict)

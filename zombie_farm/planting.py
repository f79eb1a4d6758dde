"""Planting: put a zombie seed into an empty, placed plot."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from zombie_farm import inventory
from zombie_farm.config.zombies import (
    ACTIVITY_ZOMBIE_SPAWNED,
    INITIAL_CARE_LEVEL,
    INITIAL_GROWING_HAPPINESS,
    SEED_TO_ZOMBIE,
    SEEDS_PER_PLANTING,
)
from zombie_farm.enums import ZombieType
from zombie_farm.events.domain_events import ZombiePlantedEvent
from zombie_farm.exceptions import (
    PlotNotPlacedError,
    PlotOccupiedError,
    UnknownResourceError,
)
from zombie_farm.growth import growth_spec
from zombie_farm.models import (
    Coordinates,
    FarmSnapshot,
    GrowingZombie,
    OccupiedPlot,
    Timestamp,
    TransitionOutcome,
)

logger = logging.getLogger(__name__)


def seed_type(seed: str) -> ZombieType:
    """Zombie type grown from ``seed``.

    Raises:
        UnknownResourceError: if ``seed`` is not a zombie seed
    """
    zombie_type = SEED_TO_ZOMBIE.get(seed)
    if zombie_type is None:
        raise UnknownResourceError(seed)
    return zombie_type


def growth_boost_multiplier(snapshot: FarmSnapshot, coordinates: Optional[Coordinates]) -> float:
    """Multiplier applied to the base growth time of a new planting.

    Boost sources (caretaker skills, nearby buildings) are not modelled yet,
    so every planting grows at the base rate.
    """
    return 1.0


def plant(
    snapshot: FarmSnapshot,
    plot_id: str,
    seed: str,
    zombie_id: str,
    now: Timestamp,
) -> TransitionOutcome:
    """Plant ``seed`` in ``plot_id`` as a new growing zombie ``zombie_id``.

    Raises:
        PlotNotFoundError: no such plot
        PlotNotPlacedError: the plot has no coordinates yet
        PlotOccupiedError: something is already growing there
        UnknownResourceError: ``seed`` is not a zombie seed
        InsufficientResourceError: fewer than one ``seed`` in the inventory
    """
    plot = snapshot.get_plot(plot_id)
    if plot.coordinates is None:
        raise PlotNotPlacedError(plot_id)
    if isinstance(plot, OccupiedPlot):
        raise PlotOccupiedError(plot_id)

    zombie_type = seed_type(seed)
    costs = {seed: Decimal(SEEDS_PER_PLANTING)}
    updated_inventory = inventory.consume(snapshot.inventory, costs)

    base_growth_time = growth_spec(zombie_type).growth_time
    adjusted_growth_time = base_growth_time * growth_boost_multiplier(snapshot, plot.coordinates)
    growing = GrowingZombie(
        id=zombie_id,
        zombie_type=zombie_type,
        buried_at=now,
        happiness=INITIAL_GROWING_HAPPINESS,
        boosted_time=base_growth_time - adjusted_growth_time,
    )
    occupied = OccupiedPlot(
        id=plot.id,
        coordinates=plot.coordinates,
        zombie=growing,
        care_level=INITIAL_CARE_LEVEL,
    )

    updated = (
        snapshot.with_plot(occupied)
        .with_inventory(updated_inventory)
        .with_activity(ACTIVITY_ZOMBIE_SPAWNED)
    )
    logger.info(f"Planted {seed} in plot {plot_id} as {zombie_type.value} {zombie_id}")
    event = ZombiePlantedEvent(
        plot_id=plot_id, zombie_id=zombie_id, zombie_type=zombie_type, seed=seed, at=now
    )
    return TransitionOutcome(updated, (event,))

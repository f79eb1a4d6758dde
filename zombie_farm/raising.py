"""Raising: turn a fully grown zombie into an autonomous farm resident.

This is the moment the care a zombie received in the ground pays off.
Happiness and the plot's care level scale the base stats of its type:

    happiness_multiplier = 1 + (happiness - 50) / 100    # 0.5x .. 1.5x
    care_multiplier      = 1 + (care_level - 50) / 100   # 0.5x .. 1.5x

    max_hp  = floor(base_hp * happiness_multiplier * care_multiplier)
    attack  = floor(base_attack * happiness_multiplier)
    defense = floor(base_defense * care_multiplier)
    speed   = base_speed

The only non-deterministic part is the first wander target, a point within
``wander_radius`` of the plot on each axis.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.config.zombies import ACTIVITY_ZOMBIE_RAISED
from zombie_farm.enums import GrowthStage, ZombieMood, ZombieStatus
from zombie_farm.events.domain_events import ZombieRaisedEvent
from zombie_farm.exceptions import DuplicateZombieError, NotReadyError, PlotEmptyError
from zombie_farm.growth import growth_spec, growth_stage
from zombie_farm.models import (
    Coordinates,
    DecayState,
    FarmSnapshot,
    OccupiedPlot,
    RaisedZombie,
    StatBlock,
    Timestamp,
    TransitionOutcome,
)
from zombie_farm.quality import calculate_quality

logger = logging.getLogger(__name__)


def happiness_multiplier(happiness: float) -> float:
    return 1 + (happiness - 50) / 100


def care_multiplier(care_level: Optional[float]) -> float:
    if care_level is None:
        return 1.0
    return 1 + (care_level - 50) / 100


def floor_stat(value: float) -> int:
    """Floor a derived stat, ignoring binary float error below 1e-9."""
    return math.floor(round(value, 9))


def wander_target(
    position: Coordinates,
    radius: float,
    rng: Optional[random.Random] = None,
) -> Coordinates:
    rng = rng or random
    return Coordinates(
        x=position.x + rng.uniform(-radius, radius),
        y=position.y + rng.uniform(-radius, radius),
    )


def raise_zombie(
    snapshot: FarmSnapshot,
    plot_id: str,
    now: Timestamp,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> TransitionOutcome:
    """Raise the zombie growing in ``plot_id``.

    Raises:
        PlotNotFoundError: no such plot
        PlotEmptyError: nothing is growing in the plot
        NotReadyError: the occupant has not reached READY_TO_HARVEST at ``now``
        DuplicateZombieError: a raised zombie already uses the occupant's id
    """
    config = config or EngineConfig()
    plot = snapshot.get_plot(plot_id)
    if not isinstance(plot, OccupiedPlot):
        raise PlotEmptyError(plot_id)

    growing = plot.zombie
    stage = growth_stage(growing.anchor, now)
    if stage is not GrowthStage.READY_TO_HARVEST:
        raise NotReadyError(plot_id, stage)
    if growing.id in snapshot.zombies:
        raise DuplicateZombieError(growing.id)

    spec = growth_spec(growing.zombie_type)
    base = spec.base_stats
    hm = happiness_multiplier(growing.happiness)
    cm = care_multiplier(plot.care_level)
    max_hp = floor_stat(base.hp * hm * cm)
    attack = floor_stat(base.attack * hm)
    defense = floor_stat(base.defense * cm)

    zombie = RaisedZombie(
        id=growing.id,
        zombie_type=growing.zombie_type,
        tier=spec.tier,
        quality=calculate_quality(growing.happiness, plot.care_level, config),
        planted_at=growing.buried_at,
        matured_at=now,
        harvested_at=now,
        position=plot.coordinates,
        target_position=wander_target(plot.coordinates, config.raising.wander_radius, rng),
        max_hp=max_hp,
        current_hp=max_hp,
        attack=attack,
        defense=defense,
        speed=base.speed,
        decay=DecayState(last_evaluated_at=now),
        happiness=growing.happiness,
        status=ZombieStatus.WANDERING,
        mood=ZombieMood.HAPPY,
        is_wandering=True,
        raised_stats=StatBlock(max_hp, attack, defense),
    )

    updated = (
        snapshot.with_zombie(zombie)
        .with_plot(plot.vacate())
        .with_experience(config.raising.experience_reward)
        .with_activity(ACTIVITY_ZOMBIE_RAISED)
    )
    logger.info(
        f"Raised {zombie.zombie_type.value} {zombie.id} from plot {plot_id} "
        f"(quality={zombie.quality.value}, max_hp={zombie.max_hp})"
    )
    event = ZombieRaisedEvent(
        plot_id=plot_id,
        zombie_id=zombie.id,
        zombie_type=zombie.zombie_type,
        quality=zombie.quality,
        max_hp=zombie.max_hp,
        at=now,
    )
    return TransitionOutcome(updated, (event,))

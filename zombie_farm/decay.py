"""Decay and happiness engine for raised zombies.

Time passes in whole days counted from ``DecayState.last_evaluated_at``.
Day ``k`` covers ``[anchor + (k-1)*DAY, anchor + k*DAY)``; it is a
neglected day unless the zombie was fed during it. Each neglected day, in
order:

    rate      = base_rate(quality) * type_modifier * happiness_multiplier(happiness) * shelter
    condition = max(floor(quality), condition * (1 - rate))
    happiness = max(0, happiness - daily_happiness_decay)

Max HP, attack and defense follow condition: each is the raise-time value
scaled by condition, floored, and held at or above the type base stat times
the quality floor. Current HP is clamped to the new max HP.

``evaluate`` applies every whole day elapsed since the anchor, at most
``max_offline_days`` of them, and moves the anchor forward by all whole
days. Because the catch-up pass runs the same per-day step as online
evaluation, one pass over N days gives exactly the result of N single-day
passes. Contained zombies are frozen: nothing is applied and nothing
accrues.

Feeding, petting, sheltering and containment first settle any pending days
at the current settings, then apply their change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, Mapping, Optional, Tuple

from zombie_farm import inventory
from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.config.happiness import HAPPINESS_MAX, HAPPINESS_MIN
from zombie_farm.enums import QualityTier, ZombieMood, ZombieStatus, ZombieType
from zombie_farm.events.domain_events import (
    ContainmentChangedEvent,
    MoodChangedEvent,
    ShelterChangedEvent,
    ZombieDecayedEvent,
    ZombieFedEvent,
    ZombiePettedEvent,
)
from zombie_farm.exceptions import (
    InvalidStateError,
    OnCooldownError,
    UnknownTypeError,
    ZombieContainedError,
)
from zombie_farm.growth import growth_spec
from zombie_farm.models import RaisedZombie, StatBlock, Timestamp
from zombie_farm.raising import floor_stat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZombieEvaluation:
    """Updated zombie plus the events produced while updating it."""

    zombie: RaisedZombie
    events: Tuple[object, ...] = ()


@dataclass(frozen=True)
class FeedOutcome:
    zombie: RaisedZombie
    inventory: Dict[str, Decimal]
    consumed: Dict[str, Decimal]
    events: Tuple[object, ...] = ()


# ---------------------------------------------------------------------------
# Rates and thresholds
# ---------------------------------------------------------------------------


def decay_rate(quality: QualityTier, config: Optional[EngineConfig] = None) -> float:
    """Base fraction of condition lost per neglected day for ``quality``."""
    config = config or EngineConfig()
    rate = config.decay.rates.get(quality)
    if rate is None:
        raise UnknownTypeError(quality, "no decay rate configured")
    return rate


def decay_floor(quality: QualityTier, config: Optional[EngineConfig] = None) -> float:
    """Lowest condition ``quality`` can decay to."""
    config = config or EngineConfig()
    floor = config.decay.floors.get(quality)
    if floor is None:
        raise UnknownTypeError(quality, "no decay floor configured")
    return floor


def happiness_decay_multiplier(happiness: float, config: Optional[EngineConfig] = None) -> float:
    """Scale applied to the base rate; happier zombies decay more slowly."""
    config = config or EngineConfig()
    for threshold, multiplier in config.happiness.decay_multiplier_bands:
        if happiness >= threshold:
            return multiplier
    return config.happiness.decay_multiplier_default


def decay_type_modifier(zombie_type: ZombieType) -> float:
    """Per-type stability factor; 1.0 decays at the plain quality rate."""
    return growth_spec(zombie_type).decay_modifier


def effective_decay_rate(
    quality: QualityTier,
    happiness: float,
    sheltered: bool,
    config: Optional[EngineConfig] = None,
    zombie_type: Optional[ZombieType] = None,
) -> float:
    config = config or EngineConfig()
    rate = decay_rate(quality, config) * happiness_decay_multiplier(happiness, config)
    if zombie_type is not None:
        rate *= decay_type_modifier(zombie_type)
    if sheltered:
        rate *= 1.0 - config.decay.shelter_reduction
    return rate


def clamp_happiness(happiness: float) -> float:
    return max(HAPPINESS_MIN, min(HAPPINESS_MAX, happiness))


def mood_for(happiness: float, config: Optional[EngineConfig] = None) -> ZombieMood:
    config = config or EngineConfig()
    if happiness < config.happiness.unhappy_below:
        return ZombieMood.UNHAPPY
    if happiness >= config.happiness.happy_at:
        return ZombieMood.HAPPY
    return ZombieMood.NEUTRAL


def days_since_fed(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> Optional[int]:
    """Whole days since the last feeding, or None if never fed."""
    config = config or EngineConfig()
    if zombie.decay.last_fed_at is None:
        return None
    return int((now - zombie.decay.last_fed_at) // config.decay.day_seconds)


def feeding_cost(zombie: RaisedZombie, config: Optional[EngineConfig] = None) -> Dict[str, Decimal]:
    config = config or EngineConfig()
    costs = config.feeding.costs.get(zombie.tier)
    if costs is None:
        raise UnknownTypeError(zombie.tier, "no feeding cost configured")
    return dict(costs)


def feed_cooldown_remaining(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> float:
    config = config or EngineConfig()
    last_fed_at = zombie.decay.last_fed_at
    if last_fed_at is None:
        return 0.0
    return max(config.feeding.cooldown - (now - last_fed_at), 0.0)


def pet_cooldown_remaining(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> float:
    config = config or EngineConfig()
    last_pet_at = zombie.decay.last_pet_at
    if last_pet_at is None:
        return 0.0
    return max(config.happiness.petting_cooldown - (now - last_pet_at), 0.0)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def decayed_stats(
    zombie: RaisedZombie, condition: float, config: Optional[EngineConfig] = None
) -> StatBlock:
    """Combat stats at ``condition``, derived from the undecayed stats.

    Each stat is ``floor(peak * condition)`` but never below
    ``floor(type base stat * quality floor)`` and never above its peak.
    """
    base = growth_spec(zombie.zombie_type).base_stats
    floor = decay_floor(zombie.quality, config)
    peak = zombie.peak_stats

    def scale(peak_value: int, base_value: int) -> int:
        decayed = max(floor_stat(peak_value * condition), floor_stat(base_value * floor))
        return min(peak_value, decayed)

    return StatBlock(
        max_hp=scale(peak.max_hp, base.hp),
        attack=scale(peak.attack, base.attack),
        defense=scale(peak.defense, base.defense),
    )


def _with_condition(
    zombie: RaisedZombie, condition: float, config: EngineConfig
) -> RaisedZombie:
    stats = decayed_stats(zombie, condition, config)
    return replace(
        zombie,
        decay=replace(zombie.decay, condition=condition),
        max_hp=stats.max_hp,
        current_hp=min(zombie.current_hp, stats.max_hp),
        attack=stats.attack,
        defense=stats.defense,
        raised_stats=zombie.peak_stats,
    )


def _fed_during(last_fed_at: Optional[Timestamp], start: Timestamp, end: Timestamp) -> bool:
    return last_fed_at is not None and start <= last_fed_at < end


def _with_happiness(
    zombie: RaisedZombie, happiness: float, now: Timestamp, config: EngineConfig
) -> Tuple[RaisedZombie, Tuple[object, ...]]:
    new_mood = mood_for(happiness, config)
    updated = replace(zombie, happiness=happiness, mood=new_mood)
    if new_mood is zombie.mood:
        return updated, ()
    event = MoodChangedEvent(
        zombie_id=zombie.id,
        old_mood=zombie.mood,
        new_mood=new_mood,
        happiness=happiness,
        at=now,
    )
    return updated, (event,)


def evaluate(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> ZombieEvaluation:
    """Apply every whole day elapsed since the zombie was last evaluated.

    Raises:
        ValueError: if ``now`` is earlier than the last evaluation
    """
    config = config or EngineConfig()
    state = zombie.decay
    if state.contained:
        return ZombieEvaluation(zombie)

    elapsed = now - state.last_evaluated_at
    if elapsed < 0:
        raise ValueError(
            f"Zombie {zombie.id}: cannot evaluate at {now}, "
            f"already evaluated up to {state.last_evaluated_at}"
        )

    day = config.decay.day_seconds
    whole_days = int(elapsed // day)
    if whole_days == 0:
        return ZombieEvaluation(zombie)
    applied_days = min(whole_days, config.decay.max_offline_days)
    if applied_days < whole_days:
        logger.debug(
            f"Zombie {zombie.id}: {whole_days} days elapsed, catch-up capped at {applied_days}"
        )

    floor = decay_floor(zombie.quality, config)
    condition = state.condition
    happiness = zombie.happiness
    neglected_days = 0
    for k in range(applied_days):
        day_start = state.last_evaluated_at + k * day
        if _fed_during(state.last_fed_at, day_start, day_start + day):
            continue
        rate = effective_decay_rate(
            zombie.quality, happiness, state.sheltered, config, zombie.zombie_type
        )
        condition = max(floor, condition * (1.0 - rate))
        happiness = clamp_happiness(happiness - config.happiness.daily_decay)
        neglected_days += 1

    updated = zombie.with_decay(last_evaluated_at=state.last_evaluated_at + whole_days * day)
    if neglected_days == 0:
        return ZombieEvaluation(updated)
    updated = _with_condition(updated, condition, config)

    updated, mood_events = _with_happiness(updated, happiness, now, config)
    logger.debug(
        f"Zombie {zombie.id}: {neglected_days} neglected days, "
        f"condition {state.condition:.4f} -> {condition:.4f}, "
        f"happiness {zombie.happiness} -> {happiness}"
    )
    decayed = ZombieDecayedEvent(
        zombie_id=zombie.id,
        days=neglected_days,
        condition_before=state.condition,
        condition_after=condition,
        happiness_before=zombie.happiness,
        happiness_after=happiness,
        hit_floor=condition <= floor,
        at=now,
    )
    return ZombieEvaluation(updated, (decayed,) + mood_events)


# ---------------------------------------------------------------------------
# Care actions
# ---------------------------------------------------------------------------


def feed(
    zombie: RaisedZombie,
    current_inventory: Mapping[str, Decimal],
    now: Timestamp,
    config: Optional[EngineConfig] = None,
) -> FeedOutcome:
    """Feed a zombie: reset its neglect clock and raise its happiness.

    Raises:
        ZombieContainedError: the zombie is in containment
        OnCooldownError: fed less than one cooldown ago
        InsufficientResourceError: the inventory cannot cover the cost
    """
    config = config or EngineConfig()
    if zombie.contained:
        raise ZombieContainedError(zombie.id, "feed")
    remaining = feed_cooldown_remaining(zombie, now, config)
    if remaining > 0:
        raise OnCooldownError(zombie.id, "feed", remaining)

    settled = evaluate(zombie, now, config)
    cost = feeding_cost(zombie, config)
    updated_inventory = inventory.consume(current_inventory, cost)

    fed = settled.zombie.with_decay(last_fed_at=now)
    # never below the happiness the zombie had before it was fed
    new_happiness = max(
        zombie.happiness, clamp_happiness(fed.happiness + config.happiness.feeding_boost)
    )
    fed, mood_events = _with_happiness(fed, new_happiness, now, config)
    event = ZombieFedEvent(
        zombie_id=zombie.id,
        happiness_gained=new_happiness - settled.zombie.happiness,
        new_happiness=new_happiness,
        consumed=cost,
        at=now,
    )
    return FeedOutcome(
        zombie=fed,
        inventory=updated_inventory,
        consumed=cost,
        events=settled.events + (event,) + mood_events,
    )


def pet(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> ZombieEvaluation:
    """Pet a zombie for a small happiness boost.

    Raises:
        ZombieContainedError: the zombie is in containment
        OnCooldownError: pet less than one cooldown ago
    """
    config = config or EngineConfig()
    if zombie.contained:
        raise ZombieContainedError(zombie.id, "pet")
    remaining = pet_cooldown_remaining(zombie, now, config)
    if remaining > 0:
        raise OnCooldownError(zombie.id, "pet", remaining)

    settled = evaluate(zombie, now, config)
    petted = settled.zombie.with_decay(last_pet_at=now)
    new_happiness = clamp_happiness(petted.happiness + config.happiness.petting_boost)
    petted, mood_events = _with_happiness(petted, new_happiness, now, config)
    event = ZombiePettedEvent(
        zombie_id=zombie.id,
        happiness_gained=new_happiness - settled.zombie.happiness,
        new_happiness=new_happiness,
        at=now,
    )
    return ZombieEvaluation(petted, settled.events + (event,) + mood_events)


def set_sheltered(
    zombie: RaisedZombie,
    sheltered: bool,
    now: Timestamp,
    config: Optional[EngineConfig] = None,
) -> ZombieEvaluation:
    """Move a zombie in or out of shelter, settling days at the old setting first."""
    settled = evaluate(zombie, now, config)
    if settled.zombie.decay.sheltered == sheltered:
        return settled
    updated = settled.zombie.with_decay(sheltered=sheltered)
    event = ShelterChangedEvent(zombie_id=zombie.id, sheltered=sheltered, at=now)
    return ZombieEvaluation(updated, settled.events + (event,))


def contain(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> ZombieEvaluation:
    """Put a zombie in storage, pausing all decay until it is released.

    Raises:
        InvalidStateError: the zombie is already contained
    """
    if zombie.contained:
        raise InvalidStateError(f"Zombie {zombie.id} is already contained")
    settled = evaluate(zombie, now, config)
    updated = replace(
        settled.zombie,
        decay=replace(settled.zombie.decay, contained=True),
        status=ZombieStatus.IDLE,
        is_wandering=False,
    )
    event = ContainmentChangedEvent(zombie_id=zombie.id, contained=True, at=now)
    return ZombieEvaluation(updated, settled.events + (event,))


def release(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> ZombieEvaluation:
    """Let a contained zombie out. Time spent contained never accrues.

    Raises:
        InvalidStateError: the zombie is not contained
        ValueError: if ``now`` is earlier than the last evaluation
    """
    if not zombie.contained:
        raise InvalidStateError(f"Zombie {zombie.id} is not contained")
    if now < zombie.decay.last_evaluated_at:
        raise ValueError(
            f"Zombie {zombie.id}: cannot release at {now}, "
            f"already evaluated up to {zombie.decay.last_evaluated_at}"
        )
    updated = replace(
        zombie,
        decay=replace(zombie.decay, contained=False, last_evaluated_at=now),
        status=ZombieStatus.WANDERING,
        is_wandering=True,
    )
    event = ContainmentChangedEvent(zombie_id=zombie.id, contained=False, at=now)
    return ZombieEvaluation(updated, (event,))

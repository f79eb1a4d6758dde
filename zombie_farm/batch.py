"""Batch evaluation across the whole raised-zombie collection.

This is the entry point for the host's scheduler (day rollover, login,
server tick). Each zombie is evaluated on its own; no zombie's outcome
depends on another's, so the order of the loop is irrelevant. The input
snapshot is never modified, and the host commits the returned snapshot as a
whole or not at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from zombie_farm import decay, inventory
from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.config.zombies import ACTIVITY_ZOMBIE_FED
from zombie_farm.exceptions import FarmError
from zombie_farm.models import FarmSnapshot, RaisedZombie, Timestamp, TransitionOutcome
from zombie_farm.result import Result, try_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchFeedResult:
    """Outcome of feeding a prioritized set of zombies.

    Attributes:
        snapshot: Farm after all successful feedings
        fed: IDs fed, in feeding order
        skipped: (id, reason) for zombies that could not be fed
        consumed: Total resources spent
        events: Events from settling and feeding, in order
    """

    snapshot: FarmSnapshot
    fed: Tuple[str, ...] = ()
    skipped: Tuple[Tuple[str, str], ...] = ()
    consumed: Dict[str, Decimal] = field(default_factory=dict)
    events: Tuple[object, ...] = ()


def evaluate_farm(
    snapshot: FarmSnapshot, now: Timestamp, config: Optional[EngineConfig] = None
) -> TransitionOutcome:
    """Evaluate decay for every non-contained zombie at ``now``."""
    config = config or EngineConfig()
    updated: Dict[str, RaisedZombie] = {}
    events: List[object] = []
    skipped = 0
    for zombie_id in sorted(snapshot.zombies):
        zombie = snapshot.zombies[zombie_id]
        if zombie.contained:
            skipped += 1
            continue
        evaluation = decay.evaluate(zombie, now, config)
        if evaluation.zombie is not zombie:
            updated[zombie_id] = evaluation.zombie
        events.extend(evaluation.events)

    logger.debug(
        f"Evaluated {len(snapshot.zombies) - skipped} zombies at {now} "
        f"({skipped} contained, {len(events)} events)"
    )
    return TransitionOutcome(snapshot.with_zombies(updated), tuple(events))


def feeding_urgency(
    zombie: RaisedZombie, now: Timestamp, config: Optional[EngineConfig] = None
) -> float:
    """How badly a zombie needs feeding; higher is more urgent.

    Days without food dominate, then low happiness, then accrued decay.
    Zombies that were never fed count the days since they were raised.
    """
    config = config or EngineConfig()
    days = decay.days_since_fed(zombie, now, config)
    if days is None:
        days = int(max(now - zombie.harvested_at, 0.0) // config.decay.day_seconds)
    return days * 10 + (100 - zombie.happiness) / 10 + zombie.decay.decay_amount * 100


def _settled_queue(
    snapshot: FarmSnapshot,
    now: Timestamp,
    config: EngineConfig,
    zombie_ids: Optional[Iterable[str]],
) -> List[Tuple[RaisedZombie, decay.ZombieEvaluation]]:
    """(stored zombie, settled evaluation) pairs, most urgent first."""
    if zombie_ids is None:
        candidates = [snapshot.zombies[zombie_id] for zombie_id in sorted(snapshot.zombies)]
    else:
        candidates = [snapshot.get_zombie(zombie_id) for zombie_id in zombie_ids]

    pairs = [
        (zombie, decay.evaluate(zombie, now, config))
        for zombie in candidates
        if not zombie.contained and decay.feed_cooldown_remaining(zombie, now, config) == 0
    ]
    return sorted(
        pairs, key=lambda pair: (-feeding_urgency(pair[1].zombie, now, config), pair[1].zombie.id)
    )


def feeding_queue(
    snapshot: FarmSnapshot,
    now: Timestamp,
    config: Optional[EngineConfig] = None,
    zombie_ids: Optional[Iterable[str]] = None,
) -> List[RaisedZombie]:
    """Zombies that can be fed now, most urgent first (ties broken by id).

    Urgency is scored after settling pending days, and the returned zombies
    are the settled ones. Contained zombies and zombies still on feeding
    cooldown are left out.

    Raises:
        ZombieNotFoundError: if ``zombie_ids`` names an unknown zombie
    """
    config = config or EngineConfig()
    queue = _settled_queue(snapshot, now, config, zombie_ids)
    return [evaluation.zombie for _, evaluation in queue]


def feed_by_priority(
    snapshot: FarmSnapshot,
    now: Timestamp,
    config: Optional[EngineConfig] = None,
    zombie_ids: Optional[Iterable[str]] = None,
) -> BatchFeedResult:
    """Feed the most urgent zombies first until the inventory runs out.

    Every candidate is settled before ranking. A zombie whose cost cannot be
    covered is skipped, keeping its settled state, and feeding continues
    with the rest of the queue, so cheaper zombies further down still eat.
    """
    config = config or EngineConfig()
    queue = _settled_queue(snapshot, now, config, zombie_ids)

    current_inventory = dict(snapshot.inventory)
    updated: Dict[str, RaisedZombie] = {}
    fed: List[str] = []
    skipped: List[Tuple[str, str]] = []
    consumed: Dict[str, Decimal] = {}
    events: List[object] = []

    for zombie, settled in queue:
        outcome: Result[decay.FeedOutcome, FarmError] = try_result(
            lambda: decay.feed(zombie, current_inventory, now, config), FarmError
        )
        if outcome.is_err():
            logger.warning(f"Skipped feeding zombie {zombie.id}: {outcome.error}")
            skipped.append((zombie.id, str(outcome.error)))
            if settled.zombie is not zombie:
                updated[zombie.id] = settled.zombie
            events.extend(settled.events)
            continue

        result = outcome.unwrap()
        current_inventory = result.inventory
        updated[zombie.id] = result.zombie
        consumed = inventory.add_costs(consumed, result.consumed)
        fed.append(zombie.id)
        events.extend(result.events)

    new_snapshot = snapshot.with_zombies(updated).with_inventory(current_inventory)
    if fed:
        new_snapshot = new_snapshot.with_activity(ACTIVITY_ZOMBIE_FED, len(fed))
    logger.info(f"Priority feeding fed {len(fed)} zombies, skipped {len(skipped)}")
    return BatchFeedResult(
        snapshot=new_snapshot,
        fed=tuple(fed),
        skipped=tuple(skipped),
        consumed=consumed,
        events=tuple(events),
    )

"""Action dispatcher for the farm engine.

``FarmEngine`` is the single entry point a host needs: it accepts an action
(a model from ``zombie_farm.actions`` or a raw dict), routes it to the
matching transition and returns a ``TransitionOutcome``. The engine keeps
no farm state between calls; the host passes the current snapshot in and
commits the returned one.

Events produced by a transition are published to the optional ``EventBus``
after the transition succeeds. A failed transition raises and publishes
nothing.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Dict, Mapping, Optional, Union

from zombie_farm import batch, decay, planting, raising
from zombie_farm.actions import (
    ContainAction,
    EvaluateDecayAction,
    FarmAction,
    FeedAction,
    FeedPriorityAction,
    PetAction,
    PlantAction,
    RaiseAction,
    ReleaseAction,
    ShelterAction,
    parse_action,
)
from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.config.zombies import ACTIVITY_ZOMBIE_FED
from zombie_farm.events.event_bus import EventBus
from zombie_farm.models import FarmSnapshot, Timestamp, TransitionOutcome

logger = logging.getLogger(__name__)


class FarmEngine:
    """Routes farm actions to pure transitions.

    Args:
        config: Tuning tables; validated on construction
        event_bus: Receives every event of a successful transition
        clock: Source of ``now`` for actions without a timestamp
        rng: Randomness for wander targets; pass a seeded ``Random`` for replay
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.config.validate()
        self.event_bus = event_bus
        self._clock = clock
        self._rng = rng

        self._handlers: Dict[str, Callable[[FarmSnapshot, Any, Timestamp], TransitionOutcome]] = {
            "plant": self._handle_plant,
            "raise": self._handle_raise,
            "feed": self._handle_feed,
            "pet": self._handle_pet,
            "evaluateDecay": self._handle_evaluate_decay,
            "contain": self._handle_contain,
            "release": self._handle_release,
            "shelter": self._handle_shelter,
            "feedPriority": self._handle_feed_priority,
        }

    def dispatch(
        self, snapshot: FarmSnapshot, action: Union[FarmAction, Mapping[str, Any]]
    ) -> TransitionOutcome:
        """Apply ``action`` to ``snapshot`` and return the outcome.

        Raises:
            InvalidActionError: the payload does not describe a known action
            FarmError: the transition was rejected (see the transition modules)
        """
        parsed = parse_action(action)
        now = self._resolve_now(parsed)
        handler = self._handlers[parsed.type]

        logger.debug(f"Dispatching {parsed.type} at {now}")
        outcome = handler(snapshot, parsed, now)

        if self.event_bus is not None:
            self.event_bus.emit_all(outcome.events)
        return outcome

    def _resolve_now(self, action: FarmAction) -> Timestamp:
        if isinstance(action, EvaluateDecayAction) and action.now is not None:
            return action.now
        if action.timestamp is not None:
            return action.timestamp
        return self._clock()

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _handle_plant(
        self, snapshot: FarmSnapshot, action: PlantAction, now: Timestamp
    ) -> TransitionOutcome:
        return planting.plant(snapshot, action.plot_id, action.resource, action.new_entity_id, now)

    def _handle_raise(
        self, snapshot: FarmSnapshot, action: RaiseAction, now: Timestamp
    ) -> TransitionOutcome:
        return raising.raise_zombie(snapshot, action.plot_id, now, self.config, self._rng)

    def _handle_feed(
        self, snapshot: FarmSnapshot, action: FeedAction, now: Timestamp
    ) -> TransitionOutcome:
        zombie = snapshot.get_zombie(action.entity_id)
        result = decay.feed(zombie, snapshot.inventory, now, self.config)
        updated = (
            snapshot.with_zombie(result.zombie)
            .with_inventory(result.inventory)
            .with_activity(ACTIVITY_ZOMBIE_FED)
        )
        logger.info(f"Fed zombie {zombie.id} (happiness {result.zombie.happiness})")
        return TransitionOutcome(updated, result.events, {"consumed": result.consumed})

    def _handle_pet(
        self, snapshot: FarmSnapshot, action: PetAction, now: Timestamp
    ) -> TransitionOutcome:
        zombie = snapshot.get_zombie(action.entity_id)
        result = decay.pet(zombie, now, self.config)
        return TransitionOutcome(snapshot.with_zombie(result.zombie), result.events)

    def _handle_evaluate_decay(
        self, snapshot: FarmSnapshot, action: EvaluateDecayAction, now: Timestamp
    ) -> TransitionOutcome:
        return batch.evaluate_farm(snapshot, now, self.config)

    def _handle_contain(
        self, snapshot: FarmSnapshot, action: ContainAction, now: Timestamp
    ) -> TransitionOutcome:
        zombie = snapshot.get_zombie(action.entity_id)
        result = decay.contain(zombie, now, self.config)
        logger.info(f"Contained zombie {zombie.id}")
        return TransitionOutcome(snapshot.with_zombie(result.zombie), result.events)

    def _handle_release(
        self, snapshot: FarmSnapshot, action: ReleaseAction, now: Timestamp
    ) -> TransitionOutcome:
        zombie = snapshot.get_zombie(action.entity_id)
        result = decay.release(zombie, now, self.config)
        logger.info(f"Released zombie {zombie.id}")
        return TransitionOutcome(snapshot.with_zombie(result.zombie), result.events)

    def _handle_shelter(
        self, snapshot: FarmSnapshot, action: ShelterAction, now: Timestamp
    ) -> TransitionOutcome:
        zombie = snapshot.get_zombie(action.entity_id)
        result = decay.set_sheltered(zombie, action.sheltered, now, self.config)
        return TransitionOutcome(snapshot.with_zombie(result.zombie), result.events)

    def _handle_feed_priority(
        self, snapshot: FarmSnapshot, action: FeedPriorityAction, now: Timestamp
    ) -> TransitionOutcome:
        result = batch.feed_by_priority(snapshot, now, self.config, action.entity_ids)
        details = {
            "fed": list(result.fed),
            "skipped": [{"id": zombie_id, "reason": reason} for zombie_id, reason in result.skipped],
            "consumed": result.consumed,
        }
        return TransitionOutcome(result.snapshot, result.events, details)

"""Lifecycle, growth and decay engine for farm-raised zombies.

The package is pure simulation logic with no persistence or UI. Key modules:

- planting / growth / raising: seed to autonomous zombie
- decay: daily condition decay, happiness, feeding, petting, containment
- batch: whole-farm evaluation and priority feeding
- engine: ``FarmEngine`` routing action payloads to the transitions above
- serializers: snapshot <-> plain dict for the host's save layer

Use direct imports from the submodules for anything not listed in ``__all__``.
"""

from zombie_farm.actions import parse_action
from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.engine import FarmEngine
from zombie_farm.events.event_bus import EventBus
from zombie_farm.exceptions import FarmError
from zombie_farm.models import FarmSnapshot, TransitionOutcome
from zombie_farm.serializers import SnapshotSerializer

__all__ = [
    "EngineConfig",
    "EventBus",
    "FarmEngine",
    "FarmError",
    "FarmSnapshot",
    "SnapshotSerializer",
    "TransitionOutcome",
    "parse_action",
]

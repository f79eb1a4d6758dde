"""Growth stage calculation.

Stages are a pure function of the planting anchor and ``now``. Nothing about
a growing zombie's stage is cached between calls, so a plot checked after a
week offline gives the same answer as one checked every second.
"""

from __future__ import annotations

from typing import List

from zombie_farm.config.zombies import STAGE_THRESHOLDS, ZOMBIE_GROWTH, GrowthSpec
from zombie_farm.enums import GrowthStage, ZombieType
from zombie_farm.exceptions import UnknownTypeError
from zombie_farm.models import FarmSnapshot, GrowthAnchor, OccupiedPlot, Plot, Timestamp

# Stage reached once progress meets the matching entry of STAGE_THRESHOLDS
_STAGES_BY_THRESHOLD = (
    GrowthStage.BONE_SPROUT,
    GrowthStage.RISING_CORPSE,
    GrowthStage.HALF_RISEN,
    GrowthStage.READY_TO_HARVEST,
)


def growth_spec(zombie_type: ZombieType) -> GrowthSpec:
    """Look up the growth curve and base stats for a type.

    Raises:
        UnknownTypeError: if the type has no configured growth curve
    """
    spec = ZOMBIE_GROWTH.get(zombie_type)
    if spec is None:
        raise UnknownTypeError(zombie_type, "no growth curve configured")
    return spec


def effective_growth_time(anchor: GrowthAnchor) -> float:
    spec = growth_spec(anchor.zombie_type)
    return max(spec.growth_time - anchor.boosted_time, 0.0)


def growth_progress(anchor: GrowthAnchor, now: Timestamp) -> float:
    """Fraction of the growth time elapsed, clamped to [0, 1]."""
    growth_time = effective_growth_time(anchor)
    if growth_time <= 0:
        return 1.0
    elapsed = now - anchor.planted_at
    return min(max(elapsed / growth_time, 0.0), 1.0)


def growth_stage(anchor: GrowthAnchor, now: Timestamp) -> GrowthStage:
    progress = growth_progress(anchor, now)
    stage = GrowthStage.GRAVE_MOUND
    for threshold, candidate in zip(STAGE_THRESHOLDS, _STAGES_BY_THRESHOLD):
        if progress >= threshold:
            stage = candidate
    return stage


def stage_of(
    planted_at: Timestamp,
    zombie_type: ZombieType,
    now: Timestamp,
    boosted_time: float = 0.0,
) -> GrowthStage:
    """Growth stage of a zombie of ``zombie_type`` planted at ``planted_at``.

    Monotonic in ``now`` and saturating at READY_TO_HARVEST.

    Raises:
        UnknownTypeError: if the type has no configured growth curve
    """
    return growth_stage(GrowthAnchor(planted_at, zombie_type, boosted_time), now)


def time_until_ready(anchor: GrowthAnchor, now: Timestamp) -> float:
    """Seconds until READY_TO_HARVEST; zero once reached."""
    ready_at = anchor.planted_at + effective_growth_time(anchor)
    return max(ready_at - now, 0.0)


def is_ready(plot: Plot, now: Timestamp) -> bool:
    if not isinstance(plot, OccupiedPlot):
        return False
    return growth_stage(plot.zombie.anchor, now) is GrowthStage.READY_TO_HARVEST


def ready_plot_ids(snapshot: FarmSnapshot, now: Timestamp) -> List[str]:
    """IDs of plots holding a zombie that can be raised at ``now``."""
    return sorted(plot_id for plot_id, plot in snapshot.plots.items() if is_ready(plot, now))

"""Engine configuration dataclasses.

Defaults come from the constant modules in this package. Hosts that need
different tuning build an ``EngineConfig`` directly or apply flat dotted
overrides:

    config = EngineConfig.from_overrides({"decay.shelter_reduction": 0.2})
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Dict, Mapping, Tuple

from zombie_farm.config import decay as decay_constants
from zombie_farm.config import happiness as happiness_constants
from zombie_farm.config import zombies as zombie_constants
from zombie_farm.enums import QualityTier, ZombieTier
from zombie_farm.exceptions import ConfigurationError


def _feed_costs() -> Dict[ZombieTier, Dict[str, Decimal]]:
    return {
        tier: {name: Decimal(amount) for name, amount in costs.items()}
        for tier, costs in decay_constants.FEED_COSTS.items()
    }


@dataclass
class DecayConfig:
    """Condition decay tuning."""

    rates: Dict[QualityTier, float] = field(
        default_factory=lambda: dict(decay_constants.QUALITY_DECAY_RATES)
    )
    floors: Dict[QualityTier, float] = field(
        default_factory=lambda: dict(decay_constants.QUALITY_DECAY_FLOORS)
    )
    shelter_reduction: float = decay_constants.SHELTER_DECAY_REDUCTION
    max_offline_days: int = decay_constants.OFFLINE_PROGRESS_MAX_DAYS
    day_seconds: float = decay_constants.SECONDS_PER_DAY


@dataclass
class HappinessConfig:
    """Happiness, mood and petting tuning."""

    daily_decay: int = happiness_constants.DAILY_HAPPINESS_DECAY
    feeding_boost: int = happiness_constants.FEEDING_BOOST
    petting_boost: int = happiness_constants.PETTING_BOOST
    petting_cooldown: float = happiness_constants.PETTING_COOLDOWN_SECONDS
    unhappy_below: int = happiness_constants.UNHAPPY_BELOW
    happy_at: int = happiness_constants.HAPPY_AT
    decay_multiplier_bands: Tuple[Tuple[int, float], ...] = happiness_constants.DECAY_MULTIPLIER_BANDS
    decay_multiplier_default: float = happiness_constants.DECAY_MULTIPLIER_FLOOR_BAND


@dataclass
class FeedingConfig:
    """Feeding cost and cooldown."""

    cooldown: float = decay_constants.FEED_COOLDOWN_SECONDS
    costs: Dict[ZombieTier, Dict[str, Decimal]] = field(default_factory=_feed_costs)


@dataclass
class RaisingConfig:
    """Raise-time derivation tuning."""

    wander_radius: float = zombie_constants.WANDER_RADIUS
    experience_reward: int = zombie_constants.RAISE_EXPERIENCE
    quality_thresholds: Tuple[Tuple[float, QualityTier], ...] = (
        decay_constants.QUALITY_SCORE_THRESHOLDS
    )


@dataclass
class EngineConfig:
    """Aggregate configuration read by every transition."""

    decay: DecayConfig = field(default_factory=DecayConfig)
    happiness: HappinessConfig = field(default_factory=HappinessConfig)
    feeding: FeedingConfig = field(default_factory=FeedingConfig)
    raising: RaisingConfig = field(default_factory=RaisingConfig)

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from ``{"section.attribute": value}`` overrides.

        Raises:
            ConfigurationError: unknown section/attribute or an invalid result
        """
        config = cls()
        section_names = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            section_name, _, attribute = key.partition(".")
            if section_name not in section_names or not attribute:
                raise ConfigurationError(f"Unknown configuration key {key!r}")
            section = getattr(config, section_name)
            if attribute not in {f.name for f in fields(section)}:
                raise ConfigurationError(f"Unknown configuration key {key!r}")
            setattr(section, attribute, value)
        config.validate()
        return config

    def validate(self) -> None:
        """Check ranges and table completeness.

        Raises:
            ConfigurationError: describing the first problem found
        """
        decay = self.decay
        for tier in QualityTier:
            if tier not in decay.rates or tier not in decay.floors:
                raise ConfigurationError(f"Missing decay rate or floor for {tier.value}")
            if not 0.0 < decay.rates[tier] < 1.0:
                raise ConfigurationError(f"Decay rate for {tier.value} must be in (0, 1)")
            if not 0.0 < decay.floors[tier] < 1.0:
                raise ConfigurationError(f"Decay floor for {tier.value} must be in (0, 1)")
        if not 0.0 <= decay.shelter_reduction < 1.0:
            raise ConfigurationError("shelter_reduction must be in [0, 1)")
        if decay.max_offline_days < 1:
            raise ConfigurationError("max_offline_days must be at least 1")
        if decay.day_seconds <= 0:
            raise ConfigurationError("day_seconds must be positive")

        happiness = self.happiness
        if happiness.unhappy_below > happiness.happy_at:
            raise ConfigurationError("unhappy_below must not exceed happy_at")
        previous_threshold = None
        previous_multiplier = 0.0
        for threshold, multiplier in happiness.decay_multiplier_bands:
            if previous_threshold is not None and threshold >= previous_threshold:
                raise ConfigurationError("decay_multiplier_bands must be in descending order")
            if not previous_multiplier <= multiplier <= 1.0:
                raise ConfigurationError(
                    "decay multipliers must be non-decreasing as happiness drops and at most 1.0"
                )
            previous_threshold = threshold
            previous_multiplier = multiplier
        if not previous_multiplier <= happiness.decay_multiplier_default <= 1.0:
            raise ConfigurationError("decay_multiplier_default must be the largest multiplier")

        for tier in ZombieTier:
            if tier not in self.feeding.costs:
                raise ConfigurationError(f"Missing feeding cost for {tier.value}")

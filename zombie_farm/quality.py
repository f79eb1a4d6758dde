"""Quality tier assignment at raise time."""

from __future__ import annotations

from typing import Optional

from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.enums import QualityTier


def quality_score(happiness: float, care_level: Optional[float]) -> float:
    """Mean of happiness and care level; an unknown care level counts as neutral."""
    care = 50.0 if care_level is None else care_level
    return (happiness + care) / 2


def calculate_quality(
    happiness: float,
    care_level: Optional[float],
    config: Optional[EngineConfig] = None,
) -> QualityTier:
    """Pick the quality tier earned by the care a zombie received while growing."""
    config = config or EngineConfig()
    score = quality_score(happiness, care_level)
    for threshold, tier in config.raising.quality_thresholds:
        if score >= threshold:
            return tier
    return QualityTier.BRONZE

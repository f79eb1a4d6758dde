"""Configuration package for the zombie farm engine.

Constant tables live in ``zombies``, ``decay`` and ``happiness``; the
``EngineConfig`` dataclass in ``engine_config`` bundles the tunable values
and is what the transitions actually read.
"""

from zombie_farm.config.engine_config import (
    DecayConfig,
    EngineConfig,
    FeedingConfig,
    HappinessConfig,
    RaisingConfig,
)

__all__ = [
    "DecayConfig",
    "EngineConfig",
    "FeedingConfig",
    "HappinessConfig",
    "RaisingConfig",
]

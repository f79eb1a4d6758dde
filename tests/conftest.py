"""Pytest configuration and fixtures for zombie farm tests."""

import random
from decimal import Decimal

import pytest

from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.enums import QualityTier, ZombieMood, ZombieTier, ZombieType
from zombie_farm.models import (
    Caretaker,
    Coordinates,
    DecayState,
    EmptyPlot,
    FarmSnapshot,
    RaisedZombie,
)


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def make_zombie():
    """Factory for raised zombies with sensible defaults.

    Keyword arguments override RaisedZombie fields; ``decay`` may be given
    as a dict of DecayState fields.
    """

    def _make(zombie_id="z1", decay=None, **overrides):
        state = {"last_evaluated_at": 0.0}
        if decay:
            state.update(decay)
        fields = {
            "id": zombie_id,
            "zombie_type": ZombieType.NORMAL,
            "tier": ZombieTier.GREEN,
            "quality": QualityTier.SILVER,
            "planted_at": 0.0,
            "matured_at": 0.0,
            "harvested_at": 0.0,
            "position": Coordinates(0, 0),
            "target_position": Coordinates(1, 1),
            "max_hp": 100,
            "current_hp": 100,
            "attack": 10,
            "defense": 5,
            "speed": 3,
            "decay": DecayState(**state),
            "happiness": 50,
            "mood": ZombieMood.NEUTRAL,
        }
        fields.update(overrides)
        return RaisedZombie(**fields)

    return _make


@pytest.fixture
def farm():
    """Snapshot with one placed plot, one unplaced plot and some resources."""
    return FarmSnapshot(
        plots={
            "p1": EmptyPlot("p1", Coordinates(10, 20)),
            "p2": EmptyPlot("p2"),
        },
        inventory={
            "Dark Seed": Decimal(2),
            "Rotten Meat": Decimal(5),
            "Brains": Decimal(1),
        },
        caretaker=Caretaker(experience=0),
    )

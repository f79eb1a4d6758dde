"""Zombie type, growth and seed configuration constants."""

from dataclasses import dataclass

from zombie_farm.enums import ZombieTier, ZombieType


@dataclass(frozen=True)
class BaseStats:
    hp: int
    attack: int
    defense: int
    speed: int


@dataclass(frozen=True)
class GrowthSpec:
    growth_time: float  # seconds from burial to READY_TO_HARVEST
    decay_modifier: float  # scales the quality decay rate; below 1.0 is more stable
    tier: ZombieTier
    base_stats: BaseStats


ZOMBIE_GROWTH = {
    ZombieType.NORMAL: GrowthSpec(2 * 60, 1.0, ZombieTier.GREEN, BaseStats(100, 10, 5, 3)),
    ZombieType.HEADLESS: GrowthSpec(5 * 60, 0.8, ZombieTier.GREEN, BaseStats(150, 8, 10, 2)),
    ZombieType.ZOMBIE_GIRL: GrowthSpec(5 * 60, 1.2, ZombieTier.GREEN, BaseStats(80, 15, 3, 5)),
    ZombieType.MINI: GrowthSpec(3 * 60, 1.2, ZombieTier.GREEN, BaseStats(60, 12, 4, 7)),
    ZombieType.PUMPKIN_HEAD: GrowthSpec(10 * 60, 0.9, ZombieTier.BLUE, BaseStats(120, 18, 8, 4)),
    ZombieType.GARDENER: GrowthSpec(10 * 60, 0.9, ZombieTier.BLUE, BaseStats(100, 10, 6, 3)),
    ZombieType.CRAZY: GrowthSpec(10 * 60, 1.5, ZombieTier.BLUE, BaseStats(90, 20, 2, 6)),
    ZombieType.MONSTER: GrowthSpec(30 * 60, 0.6, ZombieTier.RED, BaseStats(200, 25, 15, 4)),
    ZombieType.CUPID: GrowthSpec(20 * 60, 0.8, ZombieTier.RED, BaseStats(150, 22, 10, 5)),
    ZombieType.MAD: GrowthSpec(20 * 60, 1.0, ZombieTier.RED, BaseStats(180, 30, 5, 3)),
    ZombieType.ZOMBIE_KING: GrowthSpec(60 * 60, 0.5, ZombieTier.RED, BaseStats(300, 35, 20, 2)),
}

# Progress fractions at which each non-initial stage begins
STAGE_THRESHOLDS = (0.25, 0.50, 0.75, 1.0)

SEED_TO_ZOMBIE = {
    "Dark Seed": ZombieType.NORMAL,
    "Shambler Seed": ZombieType.NORMAL,
    "Headless Seed": ZombieType.HEADLESS,
    "Mini Seed": ZombieType.MINI,
    "Runner Seed": ZombieType.ZOMBIE_GIRL,
    "Pumpkin Head Seed": ZombieType.PUMPKIN_HEAD,
    "Gardener Seed": ZombieType.GARDENER,
    "Crazy Seed": ZombieType.CRAZY,
    "Monster Seed": ZombieType.MONSTER,
    "Cupid Seed": ZombieType.CUPID,
    "Mad Seed": ZombieType.MAD,
    "King Seed": ZombieType.ZOMBIE_KING,
}

# Planting
INITIAL_GROWING_HAPPINESS = 50
INITIAL_CARE_LEVEL = 50
SEEDS_PER_PLANTING = 1

# Raising
RAISE_EXPERIENCE = 10  # Caretaker XP per raised zombie
WANDER_RADIUS = 10.0  # Max per-axis offset of the first wander target

# Activity counter names
ACTIVITY_ZOMBIE_SPAWNED = "Zombie Spawned"
ACTIVITY_ZOMBIE_RAISED = "Zombie Raised"
ACTIVITY_ZOMBIE_FED = "Zombie Fed"

"""Enumerations shared by the model, configuration and engine modules."""

from enum import Enum


class ZombieType(Enum):
    # Green tier (basic)
    NORMAL = "Normal Zombie"
    HEADLESS = "Headless Zombie"
    ZOMBIE_GIRL = "Zombie Girl"
    MINI = "Mini Zombie"

    # Blue tier (advanced)
    PUMPKIN_HEAD = "Pumpkin Head Zombie"
    GARDENER = "Gardener Zombie"
    CRAZY = "Crazy Zombie"

    # Red tier (elite)
    MONSTER = "Monster Zombie"
    CUPID = "Cupid Zombie"
    MAD = "Mad Zombie"
    ZOMBIE_KING = "Zombie King"


class ZombieTier(Enum):
    GREEN = "green"
    BLUE = "blue"
    RED = "red"


class GrowthStage(Enum):
    """Growth stages in planting order. READY_TO_HARVEST is terminal."""

    GRAVE_MOUND = "grave_mound"
    BONE_SPROUT = "bone_sprout"
    RISING_CORPSE = "rising_corpse"
    HALF_RISEN = "half_risen"
    READY_TO_HARVEST = "ready"

    @property
    def order(self) -> int:
        return _STAGE_ORDER.index(self)


_STAGE_ORDER = list(GrowthStage)


class QualityTier(Enum):
    """Quality assigned at raise time. Higher tiers decay faster."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    DIAMOND = "diamond"


class ZombieStatus(Enum):
    IDLE = "idle"
    WANDERING = "wandering"
    IN_COMBAT = "in_combat"
    INJURED = "injured"
    DEAD = "dead"


class ZombieMood(Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    UNHAPPY = "unhappy"

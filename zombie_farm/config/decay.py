"""Decay system configuration constants."""

from zombie_farm.enums import QualityTier, ZombieTier

SECONDS_PER_DAY = 24 * 60 * 60

# Fraction of condition lost per neglected day. Higher quality is less stable.
QUALITY_DECAY_RATES = {
    QualityTier.BRONZE: 0.01,
    QualityTier.SILVER: 0.015,
    QualityTier.GOLD: 0.02,
    QualityTier.DIAMOND: 0.03,
}

# Minimum condition (fraction of full) a zombie can decay to
QUALITY_DECAY_FLOORS = {
    QualityTier.BRONZE: 0.5,
    QualityTier.SILVER: 0.6,
    QualityTier.GOLD: 0.7,
    QualityTier.DIAMOND: 0.9,
}

SHELTER_DECAY_REDUCTION = 0.5  # Sheltered zombies lose half as much per day
OFFLINE_PROGRESS_MAX_DAYS = 7  # Catch-up never applies more days than this

# Quality at raise time, scored on the mean of happiness and care level.
# Checked from the top; anything below the last threshold is BRONZE.
QUALITY_SCORE_THRESHOLDS = (
    (90.0, QualityTier.DIAMOND),
    (75.0, QualityTier.GOLD),
    (60.0, QualityTier.SILVER),
)

# Feeding
FEED_COOLDOWN_SECONDS = SECONDS_PER_DAY
FEED_COSTS = {
    ZombieTier.GREEN: {"Rotten Meat": 1},
    ZombieTier.BLUE: {"Rotten Meat": 2},
    ZombieTier.RED: {"Brains": 1},
}

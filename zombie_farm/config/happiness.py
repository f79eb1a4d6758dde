"""Happiness system configuration constants."""

HAPPINESS_MIN = 0
HAPPINESS_MAX = 100

DAILY_HAPPINESS_DECAY = 5  # Lost per neglected day
FEEDING_BOOST = 10
PETTING_BOOST = 5
PETTING_COOLDOWN_SECONDS = 24 * 60 * 60

# Mood buckets
UNHAPPY_BELOW = 30  # happiness < this -> UNHAPPY
HAPPY_AT = 70  # happiness >= this -> HAPPY

# Happiness -> decay-rate multiplier bands, checked from the top.
# Happy zombies decay more slowly; nothing ever exceeds 1.0.
DECAY_MULTIPLIER_BANDS = (
    (90, 0.5),
    (60, 0.75),
    (30, 0.9),
)
DECAY_MULTIPLIER_FLOOR_BAND = 1.0

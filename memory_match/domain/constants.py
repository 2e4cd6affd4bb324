"""
Shared Domain Constants.

Reference defaults for a memory game session.
All timing values are in milliseconds for consistency.
"""

# =============================================================================
# Grid
# =============================================================================
# Reference grid: 6 columns x 6 rows = 36 cards = 18 pairs

DEFAULT_PAIR_COUNT = 18
CARDS_PER_PAIR = 2


# =============================================================================
# Timing (milliseconds)
# =============================================================================

EVALUATION_DELAY_MS = 500  # How long a revealed pair stays up before resolving


# =============================================================================
# Scoring
# =============================================================================

MATCH_REWARD = 20  # Points added per matched pair
SCOREBOARD_CAPACITY = 5  # Top-N scores kept for the records view


# =============================================================================
# Images
# =============================================================================

# Reference image pool, one key per animal picture
DEFAULT_IMAGE_KEYS = (
    "bee",
    "lion",
    "owl",
    "cat",
    "bear",
    "bird",
    "cow",
    "crocodile",
    "dog",
    "donkey",
    "elephant",
    "hedgehog",
    "monkey",
    "sheep",
    "stork",
    "seagull",
    "squirrel",
    "toucan",
)

"""
Game configuration and constants.
"""

# Orchard piles, in die-face order
PILE_NAMES = ["Red", "Green", "Blue", "Yellow"]
INITIAL_PILE_SIZE = 4  # apples per orchard at the start

# Game mechanics
ROLL_FACES = 6  # four colours, basket, bird
MAX_GUARD_POSITION = 255  # bird position is an 8-bit counter

# Difficulty presets: label -> bird starting distance from the orchard
DIFFICULTIES = {
    "easy": 6,
    "normal": 5,
    "hard": 4,
}

# Estimator settings
TRIAL_COUNT = 1_000_000_000
DEFAULT_CHUNK_SIZE = 250_000  # trials per worker task
ROLL_BLOCK_SIZE = 8192  # die faces drawn per numpy call

# Colors for plotting
COLOR_MAP = {
    "easy": "#4daf4a",    # green
    "normal": "#ff7f00",  # orange
    "hard": "#e41a1c",    # red
}

# UI Settings
UI_TRIAL_COUNT = 100_000
UI_MAX_TRIAL_COUNT = 10_000_000
CONFIDENCE_LEVEL = 0.95

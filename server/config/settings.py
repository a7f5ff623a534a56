# server/config/settings.py
"""Game configuration constants and settings."""

import os

# World settings
WORLD_SIZE = 7000
HALF_WORLD = WORLD_SIZE / 2

# Simulation settings
TICK_RATE = 60  # physics steps per second
BROADCAST_RATE = 20  # snapshots per second

# Player settings
START_MASS = 40
MAX_CELLS = 16
DEFAULT_PLAYER_NAME = "Anon"
IMPULSE_DAMPING = 0.88

# Food settings
FOOD_AMOUNT = 2800
FOOD_VARIANTS = [
    {"mass": 1, "color": "#7bc8ff"},
    {"mass": 2, "color": "#ffdf6b"},
    {"mass": 4, "color": "#ff7bbd"},
]

# Virus settings
VIRUS_AMOUNT = 70
VIRUS_MAX_AMOUNT = VIRUS_AMOUNT * 2
VIRUS_BASE_MASS = 100
VIRUS_COLOR = "#42b72a"
VIRUS_EAT_FACTOR = 1.3
VIRUS_REWARD = 1.6  # multiplier of virus mass when eaten
VIRUS_SHOOT_THRESHOLD = 30
VIRUS_SHOOT_DISTANCE = 30
VIRUS_POP_BASE_PARTS = 8
VIRUS_POP_MASS_PER_PART = 80
VIRUS_POP_KEEP_RATIO = 0.35

# Ejection settings
EJECT_MASS = 12
EJECT_MARGIN = 5
EJECT_SPEED = 30
EJECTED_DAMPING = 0.95

# Split settings
SPLIT_MIN_MASS = 30
SPLIT_IMPULSE = 7.5
SPLIT_RECOIL = 0.4
FRAGMENT_IMPULSE = 3.5
RECOMBINE_DELAY = 7.0  # seconds
MERGE_IMPULSE = 0.6
MERGE_RANGE_FACTOR = 0.2

# Combat and decay
PREDATION_FACTOR = 1.12
DECAY_START = 150
DECAY_RATE = 0.0015

LEADERBOARD_SIZE = 10
MAX_NAME_LENGTH = 32

# Server settings
HOST = os.getenv("ARENA_HOST", "0.0.0.0")
PORT = int(os.getenv("ARENA_PORT", "8000"))
LOG_LEVEL = os.getenv("ARENA_LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = os.getenv("ARENA_ALLOWED_ORIGINS", "*").split(",")


def get_game_config():
    """Get the public game configuration as a dictionary."""
    return {
        "worldSize": WORLD_SIZE,
        "tickRate": TICK_RATE,
        "broadcastRate": BROADCAST_RATE,
        "startMass": START_MASS,
        "maxCells": MAX_CELLS,
        "foodAmount": FOOD_AMOUNT,
        "foodVariants": FOOD_VARIANTS,
        "virusAmount": VIRUS_AMOUNT,
        "virusMass": VIRUS_BASE_MASS,
        "virusColor": VIRUS_COLOR,
        "virusShootThreshold": VIRUS_SHOOT_THRESHOLD,
        "ejectMass": EJECT_MASS,
        "splitMinMass": SPLIT_MIN_MASS,
        "recombineDelay": RECOMBINE_DELAY,
        "decayStart": DECAY_START,
        "decayRate": DECAY_RATE,
    }

"""Configuration constants for the box-pushing puzzle."""

import os

LEVELS_DIR = os.environ.get("BOXPUSHER_LEVELS_DIR", "levels")  # Where level*.txt live
LEVEL_GLOB = "level*.txt"     # Level files are played in sorted name order
DATA_DIR = os.environ.get("DATA_DIR", ".")  # Persistent data directory
PLAYER_HISTORY_NAME = "player_history.txt"
LEVEL_STATS_NAME = "stats_level.txt"
PLAYER_HISTORY_FILE = os.path.join(DATA_DIR, PLAYER_HISTORY_NAME)
LEVEL_STATS_FILE = os.path.join(DATA_DIR, LEVEL_STATS_NAME)
FIELD_DELIMITER = "|"         # Separator between fields of a persisted record
ANONYMOUS_NAME = "Anonymous"  # Used when the player gives no name
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

"""
Constants for the Matchday lineup engine.

This module contains configuration constants used throughout the application,
including the environment-driven gateway settings.
"""
import os

# Lineup shape
MAX_SUBSTITUTES = 10
SUBSTITUTE_KEY_PREFIX = "Sub"

# Picker grouping order used when listing roster players
POSITION_CATEGORY_ORDER = ["Goalkeeper", "Defender", "Midfielder", "Forward"]

# Stat keys understood by the remote stats collaborator
STAT_GAMES_PLAYED = "gamesPlayed"
STAT_GOAL = "goal"
STAT_ASSIST = "assist"
STAT_YELLOW_CARD = "yellowCard"
STAT_RED_CARD = "redCard"

# Remote gateway
GATEWAY_URL = os.getenv("MATCHDAY_GATEWAY_URL", "http://127.0.0.1:8080")
GATEWAY_TIMEOUT = float(os.getenv("GATEWAY_TIMEOUT", 10))
PARTICIPATION_TIMEOUT = float(os.getenv("PARTICIPATION_TIMEOUT", 30))
PARTICIPATION_MAX_WORKERS = int(os.getenv("PARTICIPATION_MAX_WORKERS", 8))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

"""
Drink Tracker configuration.
All settings via environment variables with sensible defaults.
"""

import os

LOG_LEVEL = os.environ.get("DRINK_TRACKER_LOG_LEVEL", "WARNING").upper()

# --- User defaults ---
DEFAULT_WEIGHT_KG = float(os.environ.get("DEFAULT_WEIGHT_KG", "75"))
DEFAULT_SEX = os.environ.get("DEFAULT_SEX", "male").strip().lower()
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 200.0

# --- Chart ---
CHART_INTERVAL_MINUTES = float(os.environ.get("CHART_INTERVAL_MINUTES", "10"))
CHART_HOURS_AHEAD = float(os.environ.get("CHART_HOURS_AHEAD", "12"))

# --- Drink entry ---
MAX_MINUTES_AGO = 24 * 60

# Keeps the session cookie under the 4 KB browser limit.
MAX_DRINKS = int(os.environ.get("MAX_DRINKS", "15"))

"""
Drink tracker: Widmark-based BAC estimation, drink presets, session and graph.
Use from project root: python -m drink_tracker
"""

from drink_tracker.drinks import (
    ETHANOL_DENSITY,
    STANDARD_UNIT_GRAMS,
    Drink,
    UserProfile,
    alcohol_grams,
    standard_units,
)
from drink_tracker.calculations import (
    ELIMINATION_RATE,
    SOBER_THRESHOLD,
    BacPoint,
    bac_at,
    bac_series,
    chart_window,
    initial_bac,
    sober_time,
    sober_time_sampled,
)
from drink_tracker.catalog import drink_from_preset, list_presets, make_drink
from drink_tracker.session import Session
from drink_tracker.status import LEGAL_LIMIT_PROFESSIONAL, LEGAL_LIMIT_REGULAR, bac_status

__all__ = [
    "Drink",
    "UserProfile",
    "BacPoint",
    "Session",
    "alcohol_grams",
    "standard_units",
    "initial_bac",
    "bac_at",
    "bac_series",
    "chart_window",
    "sober_time",
    "sober_time_sampled",
    "make_drink",
    "drink_from_preset",
    "list_presets",
    "bac_status",
    "ETHANOL_DENSITY",
    "STANDARD_UNIT_GRAMS",
    "ELIMINATION_RATE",
    "SOBER_THRESHOLD",
    "LEGAL_LIMIT_REGULAR",
    "LEGAL_LIMIT_PROFESSIONAL",
]

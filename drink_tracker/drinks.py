"""Drink and user profile definitions plus alcohol content helpers.

Finnish standard drink (annos) = 12 g ethanol.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

# Finnish standard drink in grams of pure ethanol.
STANDARD_UNIT_GRAMS = 12.0

# Ethanol density (g/mL) for volume x ABV -> grams.
ETHANOL_DENSITY = 0.789

SEXES = ("male", "female")


def _positive(value: float) -> bool:
    """True for finite numbers above zero. NaN and inf are rejected."""
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class UserProfile:
    """Who is drinking. Weight <= 0 is allowed and yields a BAC of zero."""

    sex: str = "male"
    weight_kg: float = 75.0

    def __post_init__(self):
        if self.sex not in SEXES:
            raise ValueError(f"sex must be one of {SEXES}, got {self.sex!r}")


@dataclass(frozen=True)
class Drink:
    """A single logged drink. Immutable once created."""

    id: str
    name: str
    volume_ml: float
    abv_percent: float  # e.g. 4.7 for 4.7%
    consumed_at: datetime

    @property
    def alcohol_grams(self) -> float:
        return alcohol_grams(self.volume_ml, self.abv_percent)

    @property
    def standard_units(self) -> float:
        return standard_units(self.volume_ml, self.abv_percent)


def alcohol_grams(volume_ml: float, abv_percent: float) -> float:
    """Convert millilitres and ABV (0 to 100) to grams of ethanol.

    Non-positive or NaN inputs give 0.0 instead of raising.
    """
    if not (_positive(volume_ml) and _positive(abv_percent)):
        if math.isnan(volume_ml) or math.isnan(abv_percent):
            logger.debug("NaN drink input (volume=%r, abv=%r), counting as 0 g", volume_ml, abv_percent)
        return 0.0
    return volume_ml * abv_percent / 100.0 * ETHANOL_DENSITY


def standard_units(volume_ml: float, abv_percent: float) -> float:
    """Number of Finnish standard drinks (12 g each). Informational only."""
    return alcohol_grams(volume_ml, abv_percent) / STANDARD_UNIT_GRAMS

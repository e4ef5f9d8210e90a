"""BAC calculations using Widmark-style rise and linear elimination.

Model:
- Rise: BAC = grams / (r * weight_kg * 10)   (percent, 0.05 == 0.5 per mille)
- r = 0.68 (male), 0.55 (female)
- Elimination: 0.015 BAC percentage points per hour, applied to each drink
  independently; the per-drink remainders are summed.

Every function takes "now" explicitly and never reads the clock.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional, Sequence, Tuple

from drink_tracker.drinks import Drink, UserProfile, alcohol_grams

logger = logging.getLogger(__name__)

# Distribution ratio (Widmark r)
R_MALE = 0.68
R_FEMALE = 0.55

# Elimination rate (% BAC per hour)
ELIMINATION_RATE = 0.015

# BAC at or below this counts as sober.
SOBER_THRESHOLD = 0.001

# Decimal places kept for each sample of a series.
SERIES_PRECISION = 4

SOBER_SEARCH_INTERVAL_MINUTES = 30.0
SOBER_SEARCH_HORIZON_HOURS = 24.0

_ACTIVE_EPSILON = 1e-9


class BacPoint(NamedTuple):
    time: datetime
    bac: float


def distribution_constant(sex: str) -> float:
    return R_MALE if sex == "male" else R_FEMALE


def _has_weight(profile: UserProfile) -> bool:
    return math.isfinite(profile.weight_kg) and profile.weight_kg > 0


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def initial_bac(profile: UserProfile, drink: Drink) -> float:
    """Immediate BAC rise (%) from a single drink, ignoring elimination."""
    if not _has_weight(profile):
        if math.isnan(profile.weight_kg):
            logger.debug("NaN weight, treating BAC as 0")
        return 0.0
    grams = alcohol_grams(drink.volume_ml, drink.abv_percent)
    return grams / (distribution_constant(profile.sex) * profile.weight_kg * 10.0)


def bac_at(profile: UserProfile, drinks: Sequence[Drink], instant: datetime) -> float:
    """BAC (%) at `instant` from all drinks consumed at or before it."""
    if not _has_weight(profile):
        return 0.0
    bac = 0.0
    for drink in drinks:
        if drink.consumed_at > instant:
            continue
        elapsed = _hours_between(drink.consumed_at, instant)
        bac += max(0.0, initial_bac(profile, drink) - ELIMINATION_RATE * elapsed)
    return bac


def bac_series(
    profile: UserProfile,
    drinks: Sequence[Drink],
    start_time: datetime,
    end_time: datetime,
    interval_minutes: float,
) -> List[BacPoint]:
    """Return BacPoint samples from start_time to end_time inclusive for graphing."""
    if not drinks or not _has_weight(profile):
        return []
    if not interval_minutes > 0:
        raise ValueError("interval_minutes must be > 0")
    if end_time < start_time:
        return []

    ordered = sorted(drinks, key=lambda d: d.consumed_at)
    step = timedelta(minutes=interval_minutes)
    points: List[BacPoint] = []
    i = 0
    t = start_time
    while t <= end_time:
        points.append(BacPoint(t, round(bac_at(profile, ordered, t), SERIES_PRECISION)))
        i += 1
        t = start_time + step * i
    return points


def chart_window(
    drinks: Sequence[Drink],
    now: datetime,
    hours_ahead: float = 12.0,
) -> Optional[Tuple[datetime, datetime]]:
    """Default (start, end) for a live chart: first drink (never after now) to now + hours_ahead."""
    if not drinks:
        return None
    start = min(d.consumed_at for d in drinks)
    if start > now:
        start = now
    return start, now + timedelta(hours=hours_ahead)


def _breakpoints(profile: UserProfile, drinks: Sequence[Drink], after: datetime) -> List[datetime]:
    """Instants after `after` where the slope of the BAC curve changes."""
    points = set()
    for drink in drinks:
        rise = initial_bac(profile, drink)
        if rise <= 0:
            continue
        if drink.consumed_at > after:
            points.add(drink.consumed_at)
        gone = drink.consumed_at + timedelta(hours=rise / ELIMINATION_RATE)
        if gone > after:
            points.add(gone)
    return sorted(points)


def _active_drinks(profile: UserProfile, drinks: Sequence[Drink], instant: datetime) -> int:
    count = 0
    for drink in drinks:
        if drink.consumed_at > instant:
            continue
        remaining = initial_bac(profile, drink) - ELIMINATION_RATE * _hours_between(drink.consumed_at, instant)
        # Timestamps are microsecond-rounded, so a drink at its own
        # elimination breakpoint can leave a ~1e-12 remainder.
        if remaining > _ACTIVE_EPSILON:
            count += 1
    return count


def sober_time(
    profile: UserProfile,
    drinks: Sequence[Drink],
    from_instant: datetime,
) -> Optional[datetime]:
    """First instant at or after from_instant where BAC is at or below SOBER_THRESHOLD.

    Returns from_instant itself when BAC is already there. Otherwise the
    segments between breakpoints (a drink consumed, a drink fully eliminated)
    are walked in time order; on each one BAC falls linearly at
    ELIMINATION_RATE per active drink, so the crossing is solved exactly.
    Returns None when there is nothing to project.
    """
    if not drinks or not _has_weight(profile):
        return None

    starts = [from_instant] + _breakpoints(profile, drinks, from_instant)
    for i, t0 in enumerate(starts):
        bac0 = bac_at(profile, drinks, t0)
        if bac0 <= SOBER_THRESHOLD:
            return t0
        slope = ELIMINATION_RATE * _active_drinks(profile, drinks, t0)
        crossing = t0 + timedelta(hours=(bac0 - SOBER_THRESHOLD) / slope)
        # A later drink landing before the crossing starts a new segment.
        if i + 1 == len(starts) or crossing < starts[i + 1]:
            return crossing
    return None


def sober_time_sampled(
    profile: UserProfile,
    drinks: Sequence[Drink],
    from_instant: datetime,
    interval_minutes: float = SOBER_SEARCH_INTERVAL_MINUTES,
    horizon_hours: float = SOBER_SEARCH_HORIZON_HOURS,
) -> Optional[datetime]:
    """First sampled instant at or below SOBER_THRESHOLD, None past the horizon.

    Samples are compared unrounded, the same way sober_time compares them.
    """
    if not drinks or not _has_weight(profile):
        return None
    if not interval_minutes > 0:
        raise ValueError("interval_minutes must be > 0")

    step = timedelta(minutes=interval_minutes)
    end = from_instant + timedelta(hours=horizon_hours)
    i = 0
    t = from_instant
    while t <= end:
        if bac_at(profile, drinks, t) <= SOBER_THRESHOLD:
            return t
        i += 1
        t = from_instant + step * i
    return None

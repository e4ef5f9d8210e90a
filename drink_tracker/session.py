"""
Drinking session: profile plus an append/remove-only drink log.
The calculator gets an immutable snapshot of the log on every call.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from drink_tracker import calculations
from drink_tracker.config import CHART_HOURS_AHEAD, CHART_INTERVAL_MINUTES
from drink_tracker.drinks import Drink, UserProfile

logger = logging.getLogger(__name__)


@dataclass
class Session:
    profile: UserProfile
    _drinks: List[Drink] = field(default_factory=list)

    @property
    def drinks(self) -> Tuple[Drink, ...]:
        """Snapshot in consumption order."""
        return tuple(sorted(self._drinks, key=lambda d: d.consumed_at))

    def add_drink(self, drink: Drink) -> None:
        if any(d.id == drink.id for d in self._drinks):
            raise ValueError(f"duplicate drink id {drink.id!r}")
        self._drinks.append(drink)
        logger.info("Added drink %s (%s, %.1f units)", drink.id, drink.name, drink.standard_units)

    def remove_drink(self, drink_id: str) -> bool:
        before = len(self._drinks)
        self._drinks = [d for d in self._drinks if d.id != drink_id]
        removed = len(self._drinks) != before
        if removed:
            logger.info("Removed drink %s", drink_id)
        return removed

    def clear(self) -> None:
        self._drinks = []
        logger.info("Cleared all drinks")

    @property
    def total_units(self) -> float:
        return sum(d.standard_units for d in self._drinks)

    def bac_now(self, now: datetime) -> float:
        return calculations.bac_at(self.profile, self.drinks, now)

    def series(
        self,
        now: datetime,
        interval_minutes: float = CHART_INTERVAL_MINUTES,
        hours_ahead: float = CHART_HOURS_AHEAD,
    ) -> List[calculations.BacPoint]:
        window = calculations.chart_window(self.drinks, now, hours_ahead=hours_ahead)
        if window is None:
            return []
        start, end = window
        return calculations.bac_series(self.profile, self.drinks, start, end, interval_minutes)

    def sober_time(self, now: datetime) -> Optional[datetime]:
        return calculations.sober_time(self.profile, self.drinks, now)
